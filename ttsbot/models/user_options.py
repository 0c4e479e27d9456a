"""Per-user voice options row.

One row per Discord user; ``options`` holds the JSON produced by
``ttsbot.models.options.dump_options``.
"""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class UserOptions(Base, TimestampMixin):
    """Stored TTS preference for a single user."""

    __tablename__ = "options"

    # Discord snowflakes are unsigned 64-bit but stay below 2**63 in practice.
    user_id: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False
    )
    options: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<UserOptions(user_id={self.user_id}, options={self.options})>"
