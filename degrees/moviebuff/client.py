"""
Moviebuff data client for fetching person and movie records on demand.

Uses a shared requests session against Moviebuff's public JSON host.
Every failure is mapped onto the fetch errors in degrees.errors so the
search can treat it as a dead end.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import requests

from degrees.config import (
    MOVIEBUFF_BASE_URL,
    MOVIEBUFF_REQUEST_DELAY,
    MOVIEBUFF_TIMEOUT,
    USER_AGENT,
)
from degrees.errors import DecodeError, RecordNotFound, TransportError

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """
    Abstract source of person and movie records.

    Implementations return the decoded record for an identifier, or raise
    RecordNotFound, TransportError or DecodeError.
    """

    @abstractmethod
    def fetch(self, identifier: str) -> dict[str, Any]:
        """
        Fetch the raw record for an identifier.

        Args:
            identifier: Person or movie identifier (e.g. "amitabh-bachchan")

        Returns:
            Decoded JSON object for the record

        Raises:
            RecordNotFound: If the source has no such record
            TransportError: If the source could not be reached
            DecodeError: If the body is not a JSON object
        """
        ...

    def close(self) -> None:
        """Release any held resources. Override if needed."""
        pass


class MoviebuffClient(DataSource):
    """Fetches records from data.moviebuff.com over HTTP."""

    def __init__(
        self,
        base_url: str = MOVIEBUFF_BASE_URL,
        timeout: float = MOVIEBUFF_TIMEOUT,
        rate_limit: float = MOVIEBUFF_REQUEST_DELAY,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Root URL; the identifier is appended as a path segment
            timeout: Per-request timeout in seconds
            rate_limit: Minimum seconds between requests
            session: Session to reuse (a new one is created if omitted)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._rate_limit = rate_limit
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})
        self._last_request_time: float = 0
        self._rate_lock = threading.Lock()
        self._count_lock = threading.Lock()
        self.request_count = 0

    def _wait_for_rate_limit(self) -> None:
        """Ensure we don't exceed rate limits."""
        if self._rate_limit <= 0:
            return
        with self._rate_lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self._rate_limit:
                time.sleep(self._rate_limit - elapsed)
            self._last_request_time = time.time()

    def identifier_to_url(self, identifier: str) -> str:
        """Convert a record identifier to its data URL."""
        return f"{self._base_url}/{quote(identifier, safe='-_./')}"

    def fetch(self, identifier: str) -> dict[str, Any]:
        self._wait_for_rate_limit()

        url = self.identifier_to_url(identifier)
        logger.debug(f"Fetching: {url}")
        with self._count_lock:
            self.request_count += 1

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(identifier, f"Request for '{identifier}' failed: {e}") from e

        if response.status_code == 404:
            raise RecordNotFound(identifier)
        if response.status_code != 200:
            raise TransportError(
                identifier, f"Request for '{identifier}' returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(identifier, f"Invalid JSON for '{identifier}': {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(identifier, f"Record for '{identifier}' is not an object")
        return data

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> MoviebuffClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
