"""
Table fetchers for the static JSON data store.

The generator engine only needs "fetch or fail": given a logical table name,
return the parsed JSON document, or raise DataUnavailable. The HTTP transport
is an httpx.AsyncClient which callers (and tests) may supply themselves, e.g.
with an httpx.MockTransport.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from gmtools.config.logging import get_logger
from gmtools.config.settings import DataSettings

logger = get_logger(__name__)


class DataUnavailable(Exception):
    """
    A reference table could not be retrieved or parsed.

    This is a hard failure: the generation call that needed the table is
    aborted and the error propagates to the caller. It is never turned into
    a soft ``{"error": ...}`` result.
    """

    def __init__(self, table: str, message: str, cause: Exception | None = None):
        super().__init__(f"Failed to fetch {table}: {message}")
        self.table = table
        self.cause = cause


class TableFetcher(ABC):
    """
    Abstract source of reference tables.

    Implementations must return a freshly parsed document on every call and
    must raise DataUnavailable for any retrieval or parse failure.
    """

    @abstractmethod
    async def fetch(self, table: str) -> Any:
        """
        Fetch and parse one table document.

        Args:
            table: Logical table name, e.g. "encounters" or "plot_hooks"

        Returns:
            The parsed JSON document

        Raises:
            DataUnavailable: If the table cannot be retrieved or parsed
        """
        pass

    async def initialize(self) -> None:
        """Acquire any resources the fetcher needs (no-op by default)."""

    async def shutdown(self) -> None:
        """Release resources acquired by initialize() (no-op by default)."""

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, *_args):
        await self.shutdown()
        return None


class HttpTableFetcher(TableFetcher):
    """
    Fetches ``<base_url><table><file_suffix>`` over HTTP(S).

    Args:
        settings: Data store location and timeout
        client: Optional pre-built httpx client. A client passed in is owned
                by the caller and is not closed on shutdown.
    """

    def __init__(self, settings: DataSettings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    def url_for(self, table: str) -> str:
        """Build the document URL for a table name."""
        base = self._settings.base_url
        if not base.endswith("/"):
            base += "/"
        return f"{base}{table}{self._settings.file_suffix}"

    async def initialize(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
            self._owns_client = True

    async def shutdown(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, table: str) -> Any:
        if self._client is None:
            raise RuntimeError("Table fetcher not initialized")

        url = self.url_for(table)
        logger.debug(f"Fetching table {table!r} from {url}")

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Request for table {table!r} failed: {e}")
            raise DataUnavailable(table, f"request failed: {e}", cause=e) from e

        if not response.is_success:
            logger.warning(f"Table {table!r} returned HTTP {response.status_code}")
            raise DataUnavailable(
                table, f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
            )

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Table {table!r} is not valid JSON: {e}")
            raise DataUnavailable(table, f"invalid JSON: {e}", cause=e) from e
