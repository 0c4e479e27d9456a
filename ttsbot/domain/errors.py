"""
Typed domain errors for the TTS bot.

Callers distinguish between problems the user can fix (a malformed
``key=value`` token, an out-of-range pitch) and problems they cannot
(the database is down, the speech API timed out), and map each to an
appropriate reply.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Voice options
# ---------------------------------------------------------------------------


class OptionError(DomainError):
    """Base class for errors the user caused while configuring a voice.

    The message is meant to be shown to the user verbatim.
    """


class OptionParseError(OptionError):
    """A ``key=value`` token or one of its values could not be parsed."""


class UnrecognizedValueError(OptionParseError):
    """Text did not match any member of a choice enumeration."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unrecognized {kind}: {value!r}")


class OptionValidationError(OptionError):
    """A range or cross-field rule was violated when building options."""


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StorageError(DomainError):
    """The options database could not be read from or written to."""


class StorageConnectionError(StorageError):
    """The options database is unreachable."""


class OptionDecodeError(StorageError):
    """A stored options row could not be decoded."""

    def __init__(self, user_id: int, reason: str) -> None:
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Stored options for user {user_id} are invalid: {reason}")


class StorageWriteError(StorageError):
    """Persisting a user's options failed."""

    def __init__(self, user_id: int, reason: str) -> None:
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Failed to save options for user {user_id}: {reason}")


# ---------------------------------------------------------------------------
# Speech synthesis
# ---------------------------------------------------------------------------


class SynthesisFailure(DomainError):
    """TTS provider returned an error or could not be reached."""

    def __init__(self, engine: str, reason: str) -> None:
        self.engine = engine
        self.reason = reason
        super().__init__(f"{engine} synthesis failed: {reason}")
