from .base import Base, TimestampMixin
from .engine import Engine
from .options import (
    DEFAULT_OPTIONS,
    Options,
    Preset,
    describe_options,
    dump_options,
    engine_of,
    load_options,
)
from .user_options import UserOptions
from .voice_text import (
    VoiceTextEmotion,
    VoiceTextFormat,
    VoiceTextOptions,
    VoiceTextOptionsBuilder,
    VoiceTextSpeaker,
)
from .voice_vox import VoiceVoxOptions, VoiceVoxOptionsBuilder, VoiceVoxSpeaker

__all__ = [
    "Base",
    "TimestampMixin",
    "UserOptions",
    "Engine",
    "Options",
    "Preset",
    "DEFAULT_OPTIONS",
    "describe_options",
    "dump_options",
    "engine_of",
    "load_options",
    "VoiceTextEmotion",
    "VoiceTextFormat",
    "VoiceTextOptions",
    "VoiceTextOptionsBuilder",
    "VoiceTextSpeaker",
    "VoiceVoxOptions",
    "VoiceVoxOptionsBuilder",
    "VoiceVoxSpeaker",
]
