"""
Turn ``key=value`` command arguments into validated voice options.

Usage:
    from ttsbot.services.option_builder import build_options

    options = build_options(Engine.VOICETEXT, ["speaker=haruka", "pitch=120"])

Unknown keys are ignored so that options meant for the other engine (or
typos) do not block an otherwise valid command.
"""

import math
import re
from typing import Callable, Dict, Iterable, Tuple

from ..domain.errors import OptionParseError, UnrecognizedValueError
from ..models.engine import Engine
from ..models.options import Options
from ..models.voice_text import (
    VoiceTextEmotion,
    VoiceTextFormat,
    VoiceTextOptions,
    VoiceTextOptionsBuilder,
    VoiceTextSpeaker,
)
from ..models.voice_vox import VoiceVoxOptions, VoiceVoxOptionsBuilder, VoiceVoxSpeaker

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def split_token(token: str) -> Tuple[str, str]:
    """Split ``key=value`` at the first ``=``."""
    key, sep, value = token.partition("=")
    if not sep or not key or not value:
        raise OptionParseError(
            f'Each option must be in the form "key=value": {token!r}'
        )
    return key, value


def parse_int(field: str, value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise OptionParseError(f"Bad {field}: {value!r} is not an integer")
    return int(value)


def parse_float(field: str, value: str) -> float:
    if not _FLOAT_RE.fullmatch(value):
        raise OptionParseError(f"Bad {field}: {value!r} is not a number")
    number = float(value)
    # Large exponents overflow to inf
    if not math.isfinite(number):
        raise OptionParseError(f"Bad {field}: {value!r} is out of range")
    return number


def _parse_choice(field: str, choice, value: str):
    try:
        return choice.from_text(value)
    except UnrecognizedValueError as e:
        raise OptionParseError(
            f"Bad {field}: {e}. Expected one of: {', '.join(choice.choices())}"
        ) from e


_VOICE_TEXT_SETTERS: Dict[str, Callable[[VoiceTextOptionsBuilder, str], object]] = {
    "speaker": lambda b, v: b.speaker(_parse_choice("speaker", VoiceTextSpeaker, v)),
    "format": lambda b, v: b.format(_parse_choice("format", VoiceTextFormat, v)),
    "emotion": lambda b, v: b.emotion(_parse_choice("emotion", VoiceTextEmotion, v)),
    "emotion_level": lambda b, v: b.emotion_level(parse_int("emotion_level", v)),
    "pitch": lambda b, v: b.pitch(parse_int("pitch", v)),
    "speed": lambda b, v: b.speed(parse_int("speed", v)),
    "volume": lambda b, v: b.volume(parse_int("volume", v)),
}

_VOICE_VOX_SETTERS: Dict[str, Callable[[VoiceVoxOptionsBuilder, str], object]] = {
    "speaker": lambda b, v: b.speaker(_parse_choice("speaker", VoiceVoxSpeaker, v)),
    "pitch": lambda b, v: b.pitch(parse_float("pitch", v)),
    "intonationScale": lambda b, v: b.intonation_scale(
        parse_float("intonationScale", v)
    ),
    "speed": lambda b, v: b.speed(parse_float("speed", v)),
}


def _apply_tokens(builder, setters, tokens: Iterable[str]) -> None:
    for token in tokens:
        key, value = split_token(token)
        setter = setters.get(key)
        if setter is not None:
            setter(builder, value)


def build_voice_text_options(tokens: Iterable[str]) -> VoiceTextOptions:
    """Build VoiceText options from ``key=value`` tokens.

    Raises:
        OptionParseError: A token or value is malformed.
        OptionValidationError: The resulting options break a rule.
    """
    builder = VoiceTextOptionsBuilder()
    _apply_tokens(builder, _VOICE_TEXT_SETTERS, tokens)
    return builder.build()


def build_voice_vox_options(tokens: Iterable[str]) -> VoiceVoxOptions:
    """Build VOICEVOX options from ``key=value`` tokens."""
    builder = VoiceVoxOptionsBuilder()
    _apply_tokens(builder, _VOICE_VOX_SETTERS, tokens)
    return builder.build()


def build_options(engine: Engine, tokens: Iterable[str]) -> Options:
    """Build options for ``engine`` from ``key=value`` tokens."""
    if engine is Engine.VOICETEXT:
        return build_voice_text_options(tokens)
    if engine is Engine.VOICEVOX:
        return build_voice_vox_options(tokens)
    raise ValueError(f"Unsupported engine: {engine!r}")
