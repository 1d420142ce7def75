from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..types.record import Record


class RecordSource(ABC):
    """Fetches a set of records, optionally scoped to a parent id."""

    @abstractmethod
    async def fetch(self, scope_id: Optional[Any] = None) -> List[Record]:
        """
        Fetch records.

        Args:
            scope_id: Id of the row whose children are requested, or None for
                the root set.

        Raises:
            NetworkError: the source could not be reached or refused the request.
            DecodeError: the response could not be turned into records.
        """

    async def aclose(self) -> None:
        """Release any resources held by the source."""
