"""Discord bot that reads chat messages aloud with per-user VoiceText/VOICEVOX voices."""

from .version import __version__

__all__ = ["__version__"]
