"""
Runtime-editable application settings.

Admin-controlled configuration held by the knowledge store. Saved values
are merged over the defaults so newly added fields always exist.

Dependencies: pydantic
System role: Assistant persona and UI toggles
"""

from pydantic import BaseModel, Field

DEFAULT_APP_NAME = "Samastha AI"

DEFAULT_APP_DESCRIPTION = "A multilingual AI assistant for Samastha Kerala Jamiyyathul Ulama."

DEFAULT_SYSTEM_INSTRUCTION = """You are an AI assistant for the public information portal of SAMASTHA KERALA JAMIYYATHUL ULAMA.

Your rules:
1. You must answer ONLY questions about Samastha Kerala Jamiyyathul Ulama, its history, leaders, rulings, and institutions.
2. You must use ONLY the text provided in the context (RAG) or Search Grounding.
3. If the user asks unrelated questions, politely refuse.
4. NEVER hallucinate.
5. ALWAYS reply in the same language the user used.
6. Keep answers concise unless asked for details."""


class PublicAppSettings(BaseModel):
    """Settings safe to return over the API; the admin password is left out."""

    show_text_input: bool = Field(default=True, description="Show the text input box")
    use_live_mode: bool = Field(default=False, description="Use the live duplex voice session")
    app_name: str = Field(default=DEFAULT_APP_NAME, description="Assistant display name")
    app_description: str = Field(default=DEFAULT_APP_DESCRIPTION)
    logo_base64: str | None = Field(default=None, description="Base64 encoded logo image")
    system_instruction: str = Field(default=DEFAULT_SYSTEM_INSTRUCTION)


class AppSettings(PublicAppSettings):
    """Admin-editable assistant settings as stored."""

    admin_password: str = Field(default="rasheequ.designs")

    def public(self) -> PublicAppSettings:
        return PublicAppSettings.model_validate(self.model_dump(exclude={"admin_password"}))

    @classmethod
    def merged(cls, saved: dict | None) -> "AppSettings":
        """Overlay saved values on the defaults, ignoring unknown keys."""
        defaults = cls().model_dump()
        if saved:
            defaults.update({key: value for key, value in saved.items() if key in defaults})
        return cls(**defaults)


class SettingsVersionResponse(BaseModel):
    """Current settings version for change polling."""

    version: int
