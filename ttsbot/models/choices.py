"""Text-convertible enumerations used for voice options and commands."""

from enum import Enum
from typing import List, Tuple

from ..domain.errors import UnrecognizedValueError


def _name_forms(name: str) -> Tuple[str, str]:
    """``SHIKOKU_METAN`` matches ``shikoku_metan`` and ``ShikokuMetan``."""
    folded = name.casefold()
    return folded, folded.replace("_", "")


class TextChoice(str, Enum):
    """A ``str`` enum whose value is its canonical text.

    ``str(member)`` gives the canonical text and ``from_text`` parses it
    back. Values must match exactly; member names are also accepted in any
    case, with or without their underscores, so rows written with PascalCase
    names (``"Show"``, ``"Mp3"``) still decode.
    """

    def __str__(self) -> str:
        return self.value

    @classmethod
    def kind(cls) -> str:
        """Human-readable name used in error messages."""
        return cls.__name__

    @classmethod
    def choices(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_text(cls, text: str):
        try:
            return cls(text)
        except ValueError:
            raise UnrecognizedValueError(cls.kind(), text) from None

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        folded = value.casefold()
        for member in cls:
            if folded in _name_forms(member.name):
                return member
        return None
