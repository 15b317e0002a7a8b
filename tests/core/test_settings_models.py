"""
Test suite for AppSettings merging and message models.
"""

from samastha_ai.models.app_settings import DEFAULT_APP_NAME, AppSettings
from samastha_ai.models.message import Message, MessageRole


class TestAppSettingsMerged:
    """Test suite for AppSettings.merged."""

    def test_missing_values_fall_back_to_defaults(self) -> None:
        settings = AppSettings.merged({"use_live_mode": True})

        assert settings.use_live_mode is True
        assert settings.app_name == DEFAULT_APP_NAME
        assert settings.show_text_input is True

    def test_unknown_keys_are_ignored(self) -> None:
        settings = AppSettings.merged({"retired_flag": 1, "app_name": "Helper"})

        assert settings.app_name == "Helper"
        assert not hasattr(settings, "retired_flag")

    def test_none_returns_defaults(self) -> None:
        assert AppSettings.merged(None) == AppSettings()


class TestMessage:
    """Test suite for Message factories."""

    def test_user_message(self) -> None:
        message = Message.user("Hello", is_audio=True)

        assert message.role == MessageRole.USER
        assert message.is_audio
        assert message.id

    def test_model_message_carries_citations(self) -> None:
        message = Message.model("Answer", citations=("Doc",), language="Detected")

        assert message.role == MessageRole.MODEL
        assert message.citations == ("Doc",)
