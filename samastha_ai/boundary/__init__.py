"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, Gemini API,
browser audio over WebSocket). Provides adapters for the core ports.
"""
