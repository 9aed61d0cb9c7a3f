"""
Breadth-first separation search over the lazily fetched Moviebuff graph.

People are nodes and movies are hyperedges joining everyone in their cast
and crew. Nothing is loaded up front: each person is fetched when dequeued
and each of their movies when the person is expanded, all through a shared
ExpansionCache.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field

from degrees.config import (
    DEFAULT_ROLE,
    SEARCH_MAX_DEPTH,
    SEARCH_MAX_EXPANDED,
    SEARCH_TIMEOUT,
    SEARCH_WORKERS,
)
from degrees.errors import (
    DepthExceeded,
    FetchError,
    NoConnection,
    SearchTimeout,
)
from degrees.graph.cache import ExpansionCache
from degrees.graph.path import SeparationResult, build_result
from degrees.moviebuff.client import DataSource, MoviebuffClient
from degrees.moviebuff.models import Movie, Person

logger = logging.getLogger(__name__)


@dataclass
class FrontierNode:
    """
    A queued person together with how the search reached them.

    Attributes:
        url: Person identifier
        path: Alternating person/movie/.../person sequence from the source
        roles: Role pairs for each hop in path, [left0, right0, ...]
        depth: Number of movie hops from the source
    """

    url: str
    path: list[str]
    roles: list[str] = field(default_factory=list)
    depth: int = 0


class SeparationSearch:
    """
    Finds the fewest-movies chain between two people.

    Expansion order is fixed: movies in the order a person lists them,
    participants as cast then crew. The first match found in that order
    is returned, so results are deterministic even when movie fetches run
    in parallel.

    Records that fail to fetch are logged and skipped; a bad record never
    aborts the search.
    """

    def __init__(
        self,
        cache: ExpansionCache | None = None,
        source: DataSource | None = None,
        max_depth: int | None = SEARCH_MAX_DEPTH,
        max_expanded: int | None = SEARCH_MAX_EXPANDED,
        timeout: float | None = SEARCH_TIMEOUT,
        max_workers: int = SEARCH_WORKERS,
    ) -> None:
        """
        Initialize the search.

        Args:
            cache: Cache to share across searches (built from source if omitted)
            source: Data source for a new cache (defaults to MoviebuffClient)
            max_depth: Maximum movie hops to explore (None = unbounded)
            max_expanded: Maximum people to expand per search (None = unbounded)
            timeout: Overall deadline per search in seconds (None = no deadline)
            max_workers: Parallel movie fetches per person (1 = sequential)
        """
        if cache is not None and source is not None:
            raise ValueError("Pass either a cache or a source, not both")
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        for name, bound in (
            ("max_depth", max_depth),
            ("max_expanded", max_expanded),
            ("timeout", timeout),
        ):
            if bound is not None and bound < 0:
                raise ValueError(f"{name} must be >= 0, got {bound}")

        self._owns_source = cache is None and source is None
        if cache is None:
            cache = ExpansionCache(source or MoviebuffClient())
        self._cache = cache
        self._max_depth = max_depth
        self._max_expanded = max_expanded
        self._timeout = timeout
        self._max_workers = max_workers
        self._stats: dict[str, float] = {}

    @property
    def cache(self) -> ExpansionCache:
        return self._cache

    def find(self, source: str, target: str) -> SeparationResult:
        """
        Find the shortest chain of movies between two people.

        Raises:
            NoConnection: If no chain exists in the reachable graph
            DepthExceeded: If a configured depth or expansion bound was hit
            SearchTimeout: If the configured deadline elapsed
        """
        path, roles = self.shortest_path(source, target)
        return build_result(path, roles)

    def shortest_path(self, source: str, target: str) -> tuple[list[str], list[str]]:
        """
        Run the search and return the raw path and role pairs.

        Returns:
            (path, roles) where path alternates person/movie/.../person and
            roles holds a (left, right) role pair per movie hop
        """
        if not source or not target:
            raise ValueError("Source and target identifiers are required")

        if source == target:
            self._stats = {"expanded": 0, "visited": 1, "elapsed_seconds": 0.0}
            return [source], []

        logger.info(f"Searching for a connection from '{source}' to '{target}'")
        start_time = time.monotonic()
        deadline = start_time + self._timeout if self._timeout else None

        queue: deque[FrontierNode] = deque([FrontierNode(url=source, path=[source])])
        visited: set[str] = {source}
        expanded = 0
        pruned = False

        executor = ThreadPoolExecutor(max_workers=self._max_workers) if self._max_workers > 1 else None
        try:
            while queue:
                self._check_deadline(deadline, source, target)
                current = queue.popleft()

                if self._max_depth is not None and current.depth >= self._max_depth:
                    pruned = True
                    continue
                if self._max_expanded is not None and expanded >= self._max_expanded:
                    raise DepthExceeded(source, target, f"{self._max_expanded} expanded people")

                try:
                    person = self._cache.person(current.url)
                except FetchError as e:
                    logger.warning(f"Skipping person '{current.url}': {e}")
                    continue
                expanded += 1

                movies = self._resolve_movies(person, executor, deadline, source, target)

                for ref, movie in zip(person.movies, movies):
                    if movie is None:
                        continue

                    label = movie.name or ref.name or movie.url
                    left_role = ref.role or movie.role_of(person.url) or DEFAULT_ROLE
                    participants = movie.participants

                    # Check for target before growing the frontier
                    for participant in participants:
                        if participant.url == target:
                            path = current.path + [label, target]
                            roles = current.roles + [left_role, participant.role or DEFAULT_ROLE]
                            self._record_stats(expanded, visited, start_time)
                            logger.info(
                                f"Found connection ({current.depth + 1} hops, "
                                f"{expanded} people expanded): {' -> '.join(path)}"
                            )
                            return path, roles

                    for participant in participants:
                        if participant.url in visited:
                            continue
                        visited.add(participant.url)
                        queue.append(
                            FrontierNode(
                                url=participant.url,
                                path=current.path + [label, participant.url],
                                roles=current.roles + [left_role, participant.role or DEFAULT_ROLE],
                                depth=current.depth + 1,
                            )
                        )
        finally:
            if executor is not None:
                executor.shutdown(wait=False, cancel_futures=True)

        self._record_stats(expanded, visited, start_time)
        if pruned:
            logger.warning(
                f"No connection from '{source}' to '{target}' within {self._max_depth} hops "
                f"({expanded} people expanded)"
            )
            raise DepthExceeded(source, target, f"{self._max_depth} hops")

        logger.warning(
            f"No connection from '{source}' to '{target}' ({expanded} people expanded)"
        )
        raise NoConnection(source, target)

    def _fetch_movie(self, identifier: str) -> Movie | None:
        """Resolve a movie, or None if it could not be fetched."""
        try:
            return self._cache.movie(identifier)
        except FetchError as e:
            logger.warning(f"Skipping movie '{identifier}': {e}")
            return None

    def _resolve_movies(
        self,
        person: Person,
        executor: ThreadPoolExecutor | None,
        deadline: float | None,
        source: str,
        target: str,
    ) -> list[Movie | None]:
        """
        Fetch every movie a person worked on.

        The returned list lines up index-for-index with person.movies,
        whatever order the fetches complete in.
        """
        identifiers = [ref.url for ref in person.movies]
        if executor is None or len(identifiers) < 2:
            return [self._fetch_movie(identifier) for identifier in identifiers]

        remaining = None if deadline is None else max(deadline - time.monotonic(), 0)
        try:
            return list(executor.map(self._fetch_movie, identifiers, timeout=remaining))
        except FuturesTimeoutError:
            raise SearchTimeout(source, target, self._timeout) from None

    def _check_deadline(self, deadline: float | None, source: str, target: str) -> None:
        if deadline is not None and time.monotonic() >= deadline:
            logger.warning(f"Search from '{source}' to '{target}' hit its {self._timeout}s deadline")
            raise SearchTimeout(source, target, self._timeout)

    def _record_stats(self, expanded: int, visited: set[str], start_time: float) -> None:
        self._stats = {
            "expanded": expanded,
            "visited": len(visited),
            "elapsed_seconds": round(time.monotonic() - start_time, 3),
        }

    def get_stats(self) -> dict:
        """Return statistics for the most recent search plus cache stats."""
        return {**self._stats, "cache": self._cache.stats()}

    def close(self) -> None:
        """Close the data source if this search created it."""
        if self._owns_source:
            self._cache.source.close()

    def __enter__(self) -> SeparationSearch:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
