from .choices import TextChoice


class Engine(TextChoice):
    """Supported TTS backends."""

    VOICETEXT = "voicetext"
    VOICEVOX = "voicevox"

    @classmethod
    def kind(cls) -> str:
        return "engine"
