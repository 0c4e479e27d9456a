"""VOICEVOX (su-shiki web API) options.

Only ``speaker`` is required. Pitch, intonation scale and speed are passed
through to the API unchecked.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..domain.errors import OptionValidationError, UnrecognizedValueError
from .choices import TextChoice
from .engine import Engine
from .voice_text import first_error_message


class VoiceVoxSpeaker(TextChoice):
    """VOICEVOX character/style, displayed by its Japanese name.

    Each member also carries ``speaker_id``, the value the API expects.
    """

    SHIKOKU_METAN = ("四国めたん", 2)
    SHIKOKU_METAN_AMAAMA = ("四国めたんあまあま", 0)
    SHIKOKU_METAN_TSUNTSUN = ("四国めたんツンツン", 6)
    SHIKOKU_METAN_SEXY = ("四国めたんセクシー", 4)
    ZUNDAMON = ("ずんだもん", 3)
    ZUNDAMON_AMAAMA = ("ずんだもんあまあま", 1)
    ZUNDAMON_TSUNTSUN = ("ずんだもんツンツン", 7)
    ZUNDAMON_SEXY = ("ずんだもんセクシー", 5)
    KASUKABE_TSUMUGI = ("春日部つむぎ", 8)
    AMEHARE_HAU = ("雨晴はう", 10)
    NAMINE_RITSU = ("波音リツ", 9)
    KURONO_TAKEHIRO = ("玄野武宏", 11)
    SHIRAKAMI_KOTARO = ("白上虎太郎", 12)
    AOYAMA_RYUSEI = ("青山龍星", 13)
    MEIMEI_HIMARI = ("冥鳴ひまり", 14)
    KYUSHU_SORA = ("九州そら", 16)
    KYUSHU_SORA_AMAAMA = ("九州そらあまあま", 15)
    KYUSHU_SORA_TSUNTSUN = ("九州そらツンツン", 18)
    KYUSHU_SORA_SEXY = ("九州そらセクシー", 17)
    KYUSHU_SORA_WHISPER = ("九州そらささやき", 19)

    def __new__(cls, display_name: str, speaker_id: int):
        member = str.__new__(cls, display_name)
        member._value_ = display_name
        member.speaker_id = speaker_id
        return member

    @classmethod
    def kind(cls) -> str:
        return "VOICEVOX speaker"

    @classmethod
    def from_id(cls, speaker_id: int) -> "VoiceVoxSpeaker":
        for member in cls:
            if member.speaker_id == speaker_id:
                return member
        raise UnrecognizedValueError(cls.kind(), str(speaker_id))


class VoiceVoxOptions(BaseModel):
    """Immutable VOICEVOX voice configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    engine: ClassVar[Engine] = Engine.VOICEVOX

    speaker: VoiceVoxSpeaker
    pitch: float = 0.0
    intonation_scale: float = 1.0
    speed: float = 1.0


class VoiceVoxOptionsBuilder:
    """Accumulates VOICEVOX fields; ``build`` applies defaults."""

    def __init__(self) -> None:
        self._fields: dict = {}

    def speaker(self, value: VoiceVoxSpeaker) -> "VoiceVoxOptionsBuilder":
        self._fields["speaker"] = value
        return self

    def pitch(self, value: float) -> "VoiceVoxOptionsBuilder":
        self._fields["pitch"] = value
        return self

    def intonation_scale(self, value: float) -> "VoiceVoxOptionsBuilder":
        self._fields["intonation_scale"] = value
        return self

    def speed(self, value: float) -> "VoiceVoxOptionsBuilder":
        self._fields["speed"] = value
        return self

    def build(self) -> VoiceVoxOptions:
        if "speaker" not in self._fields:
            raise OptionValidationError("`speaker` must be initialized")
        try:
            return VoiceVoxOptions(**self._fields)
        except ValidationError as e:
            raise OptionValidationError(first_error_message(e)) from e
