"""VoiceText Web API options.

Options are validated once, when ``VoiceTextOptionsBuilder.build`` runs
(or when a stored row is decoded). Rules are checked in a fixed order and
only the first violation is reported.
"""

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ..domain.errors import OptionValidationError
from .choices import TextChoice
from .engine import Engine


class VoiceTextSpeaker(TextChoice):
    SHOW = "show"
    HARUKA = "haruka"
    HIKARI = "hikari"
    TAKERU = "takeru"
    SANTA = "santa"
    BEAR = "bear"

    @classmethod
    def kind(cls) -> str:
        return "VoiceText speaker"


class VoiceTextFormat(TextChoice):
    WAV = "wav"
    OGG = "ogg"
    MP3 = "mp3"

    @classmethod
    def kind(cls) -> str:
        return "VoiceText format"


class VoiceTextEmotion(TextChoice):
    HAPPINESS = "happiness"
    ANGER = "anger"
    SADNESS = "sadness"

    @classmethod
    def kind(cls) -> str:
        return "VoiceText emotion"


EMOTION_SPEAKER_MESSAGE = (
    "emotion can be used when speaker is haruka, hikari, takeru santa, or bear"
)

# (field, low, high) in the order they are checked
_RANGES = (
    ("emotion_level", 1, 4),
    ("pitch", 50, 200),
    ("speed", 50, 400),
    ("volume", 50, 200),
)


class VoiceTextOptions(BaseModel):
    """Immutable VoiceText voice configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    engine: ClassVar[Engine] = Engine.VOICETEXT

    speaker: VoiceTextSpeaker
    format: VoiceTextFormat = VoiceTextFormat.WAV
    emotion: Optional[VoiceTextEmotion] = None
    emotion_level: int = 2
    pitch: int = 100
    speed: int = 100
    volume: int = 100

    @model_validator(mode="after")
    def check_rules(self) -> "VoiceTextOptions":
        if self.emotion is not None and self.speaker == VoiceTextSpeaker.SHOW:
            raise ValueError(EMOTION_SPEAKER_MESSAGE)
        for field, low, high in _RANGES:
            value = getattr(self, field)
            if value < low or value > high:
                raise ValueError(f"Bad {field}, must be {low} <= {field} <= {high}")
        return self


def first_error_message(exc: ValidationError) -> str:
    """Return the message of the first error pydantic collected.

    Messages raised from our own validators are returned without
    pydantic's "Value error, " prefix.
    """
    error = exc.errors()[0]
    original = error.get("ctx", {}).get("error")
    if isinstance(original, ValueError):
        return str(original)
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


class VoiceTextOptionsBuilder:
    """Accumulates VoiceText fields and validates them in ``build``.

    Usage:
        options = (
            VoiceTextOptionsBuilder()
            .speaker(VoiceTextSpeaker.HARUKA)
            .emotion(VoiceTextEmotion.HAPPINESS)
            .pitch(120)
            .build()
        )
    """

    def __init__(self) -> None:
        self._fields: dict = {}

    def speaker(self, value: VoiceTextSpeaker) -> "VoiceTextOptionsBuilder":
        self._fields["speaker"] = value
        return self

    def format(self, value: VoiceTextFormat) -> "VoiceTextOptionsBuilder":
        self._fields["format"] = value
        return self

    def emotion(self, value: Optional[VoiceTextEmotion]) -> "VoiceTextOptionsBuilder":
        self._fields["emotion"] = value
        return self

    def emotion_level(self, value: int) -> "VoiceTextOptionsBuilder":
        self._fields["emotion_level"] = value
        return self

    def pitch(self, value: int) -> "VoiceTextOptionsBuilder":
        self._fields["pitch"] = value
        return self

    def speed(self, value: int) -> "VoiceTextOptionsBuilder":
        self._fields["speed"] = value
        return self

    def volume(self, value: int) -> "VoiceTextOptionsBuilder":
        self._fields["volume"] = value
        return self

    def build(self) -> VoiceTextOptions:
        """Apply defaults, run validation and return the options.

        Raises:
            OptionValidationError: ``speaker`` is unset or a rule fails.
        """
        if "speaker" not in self._fields:
            raise OptionValidationError("`speaker` must be initialized")
        try:
            return VoiceTextOptions(**self._fields)
        except ValidationError as e:
            raise OptionValidationError(first_error_message(e)) from e
