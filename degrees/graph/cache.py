"""
Expansion cache for person and movie records.

Memoizes data source lookups so a record is fetched at most once, both
within a single search and across repeated searches sharing the cache.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, TypeVar

from degrees.errors import FetchError, MovieNotFound, PersonNotFound, RecordNotFound
from degrees.moviebuff.client import DataSource
from degrees.moviebuff.models import Movie, Person

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExpansionCache:
    """
    Thread-safe, append-only store of fetched people and movies.

    Key features:
    - Separate tables for people and movies
    - Failed fetches are never cached, so a later lookup retries
    - One in-flight fetch per identifier; concurrent callers for the
      same identifier wait for it instead of fetching again
    """

    def __init__(self, source: DataSource) -> None:
        self._source = source
        self._people: dict[str, Person] = {}
        self._movies: dict[str, Movie] = {}
        self._lock = threading.Lock()
        self._pending: dict[tuple[str, str], threading.Lock] = {}
        self._hits = 0
        self._misses = 0
        self._failures = 0

    @property
    def source(self) -> DataSource:
        return self._source

    def person(self, identifier: str) -> Person:
        """
        Resolve a person record.

        Raises:
            PersonNotFound: If the source has no such person
            TransportError: If the fetch failed or the record was malformed
        """
        return self._resolve(self._people, "person", identifier, self._load_person)

    def movie(self, identifier: str) -> Movie:
        """
        Resolve a movie record.

        Raises:
            MovieNotFound: If the source has no such movie
            TransportError: If the fetch failed or the record was malformed
        """
        return self._resolve(self._movies, "movie", identifier, self._load_movie)

    def _load_person(self, identifier: str) -> Person:
        try:
            data = self._source.fetch(identifier)
        except RecordNotFound as e:
            raise PersonNotFound(identifier) from e
        return Person.from_dict(data, identifier)

    def _load_movie(self, identifier: str) -> Movie:
        try:
            data = self._source.fetch(identifier)
        except RecordNotFound as e:
            raise MovieNotFound(identifier) from e
        return Movie.from_dict(data, identifier)

    def _lookup(self, table: dict[str, T], identifier: str) -> T | None:
        # Caller holds self._lock
        value = table.get(identifier)
        if value is not None:
            self._hits += 1
        return value

    def _resolve(
        self,
        table: dict[str, T],
        kind: str,
        identifier: str,
        loader: Callable[[str], T],
    ) -> T:
        with self._lock:
            cached = self._lookup(table, identifier)
            if cached is not None:
                return cached
            key_lock = self._pending.setdefault((kind, identifier), threading.Lock())

        with key_lock:
            # Another thread may have filled the entry while we waited
            with self._lock:
                cached = self._lookup(table, identifier)
                if cached is not None:
                    return cached
                self._misses += 1

            logger.debug(f"Cache miss for {kind} '{identifier}'")
            try:
                value = loader(identifier)
            except FetchError:
                with self._lock:
                    self._failures += 1
                    self._pending.pop((kind, identifier), None)
                raise

            with self._lock:
                table.setdefault(identifier, value)
                self._pending.pop((kind, identifier), None)
                return table[identifier]

    def __contains__(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._people or identifier in self._movies

    def stats(self) -> dict[str, int]:
        """Return cache statistics."""
        with self._lock:
            return {
                "people": len(self._people),
                "movies": len(self._movies),
                "hits": self._hits,
                "misses": self._misses,
                "failures": self._failures,
                "pending": len(self._pending),
            }
