"""Samastha AI: knowledge-grounded assistant backend."""
