"""
Per-user TTS options: the union of the two engine schemas.

Stored form is a JSON object keyed by the variant name:

    {"VoiceTextOptions": {"speaker": "show", "format": "wav", ...}}
    {"VoiceVoxOptions": {"speaker": "四国めたん", "pitch": 0.0, ...}}
"""

import json
from typing import Any, Dict, Type, Union

from .choices import TextChoice
from .engine import Engine
from .voice_text import VoiceTextOptions, VoiceTextOptionsBuilder, VoiceTextSpeaker
from .voice_vox import VoiceVoxOptions

Options = Union[VoiceTextOptions, VoiceVoxOptions]

_VARIANTS: Dict[str, Type[Any]] = {
    "VoiceTextOptions": VoiceTextOptions,
    "VoiceVoxOptions": VoiceVoxOptions,
}

# Used for every user without a stored preference.
DEFAULT_OPTIONS: VoiceTextOptions = (
    VoiceTextOptionsBuilder().speaker(VoiceTextSpeaker.SHOW).build()
)


def engine_of(options: Options) -> Engine:
    """Return the engine a set of options belongs to."""
    if isinstance(options, VoiceTextOptions):
        return Engine.VOICETEXT
    if isinstance(options, VoiceVoxOptions):
        return Engine.VOICEVOX
    raise TypeError(f"Not a TTS options value: {type(options).__name__}")


def dump_options(options: Options) -> str:
    """Encode options to their stored JSON text."""
    engine_of(options)
    payload = {type(options).__name__: options.model_dump(mode="json")}
    return json.dumps(payload, ensure_ascii=False)


def load_options(raw: Union[str, bytes, Dict[str, Any]]) -> Options:
    """Decode stored JSON text (or an already-parsed dict) into options.

    Runs the same validation as the builders.

    Raises:
        ValueError: Malformed JSON, unknown variant, or invalid fields
            (pydantic's ``ValidationError`` is a ``ValueError``).
    """
    data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError("expected an object with exactly one variant key")
    ((variant, fields),) = data.items()
    model = _VARIANTS.get(variant)
    if model is None:
        raise ValueError(f"unknown options variant {variant!r}")
    return model.model_validate(fields)


def describe_options(options: Options) -> str:
    """One-line ``key=value`` summary suitable for chat replies."""
    fields = options.model_dump(exclude_none=True)
    parts = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{engine_of(options)} {parts}"


class Preset(TextChoice):
    """Named shortcuts that resolve to a fixed set of options."""

    TAKUYA = "takuya"
    MUNOU = "munou"

    @classmethod
    def kind(cls) -> str:
        return "preset"

    def to_options(self) -> Options:
        if self is Preset.TAKUYA:
            return VoiceTextOptionsBuilder().speaker(VoiceTextSpeaker.SHOW).build()
        if self is Preset.MUNOU:
            return (
                VoiceTextOptionsBuilder()
                .speaker(VoiceTextSpeaker.SHOW)
                .pitch(150)
                .build()
            )
        raise ValueError(f"Preset {self.value!r} has no options")
