"""
HttpRecordSource - fetch records from a JSON HTTP endpoint.
"""
import logging
from typing import Any, List, Optional

import httpx

from ..config import DEFAULT_API_URL
from ..errors import DecodeError, NetworkError
from ..types.record import Record
from .base import RecordSource

logger = logging.getLogger(__name__)


class HttpRecordSource(RecordSource):
    """
    GETs a JSON array of records. Scoped fetches pass the parent id as a
    query parameter (``?parentId=<id>`` by default).
    """

    def __init__(
        self,
        url: str = DEFAULT_API_URL,
        scope_param: str = "parentId",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.scope_param = scope_param
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch(self, scope_id: Optional[Any] = None) -> List[Record]:
        params = {} if scope_id is None else {self.scope_param: scope_id}
        logger.debug("GET %s params=%s", self.url, params)

        try:
            response = await self.client.get(self.url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"{self.url} answered {e.response.status_code}", scope_id=scope_id
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Error fetching data from {self.url}: {e}", scope_id=scope_id)

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Response from {self.url} is not valid JSON: {e}", scope_id=scope_id)

        if not isinstance(payload, list):
            raise DecodeError(
                f"Expected a JSON array of records, got {type(payload).__name__}", scope_id=scope_id
            )

        return [Record.from_dict(item) for item in payload]

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
