"""Google Gemini adapters."""

from samastha_ai.boundary.genai.gemini_client import GeminiClient
from samastha_ai.boundary.genai.live_transport import GeminiLiveTransport

__all__ = ["GeminiClient", "GeminiLiveTransport"]
