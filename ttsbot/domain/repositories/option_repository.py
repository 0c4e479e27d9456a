"""OptionRepository protocol: the per-user options persistence contract."""

from typing import Dict, Protocol, runtime_checkable

from ...models.options import Options


@runtime_checkable
class OptionRepository(Protocol):
    """Repository interface for stored voice options."""

    async def load_all(self) -> Dict[int, Options]:
        """Load every stored preference.

        Returns:
            Mapping of user ID to decoded options.

        Raises:
            OptionDecodeError: A stored row could not be decoded.
            StorageConnectionError: The backing store is unreachable.
        """
        ...

    async def upsert(self, user_id: int, options: Options) -> None:
        """Insert or fully replace the options stored for a user.

        Args:
            user_id: The Discord user ID.
            options: The options to persist.

        Raises:
            StorageWriteError: The write did not complete.
        """
        ...
