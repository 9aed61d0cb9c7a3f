"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Any

import pytest

from degrees.errors import RecordNotFound, TransportError
from degrees.moviebuff.client import DataSource

# A movie is (name, cast, crew); cast and crew are lists of (person, role)
MovieSpec = tuple[str, list[tuple[str, str]], list[tuple[str, str]]]


class InMemorySource(DataSource):
    """
    Data source backed by a dict of records.

    Counts fetches per identifier and can be told to fail or
    slow down for chosen identifiers.
    """

    def __init__(
        self,
        records: dict[str, dict[str, Any]],
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.records = records
        self.failing = set(failing or ())
        self.delays = dict(delays or {})
        self.calls: Counter[str] = Counter()
        self._lock = threading.Lock()

    def fetch(self, identifier: str) -> dict[str, Any]:
        with self._lock:
            self.calls[identifier] += 1
        delay = self.delays.get(identifier)
        if delay:
            time.sleep(delay)
        if identifier in self.failing:
            raise TransportError(identifier, f"Simulated outage for '{identifier}'")
        if identifier not in self.records:
            raise RecordNotFound(identifier)
        return self.records[identifier]

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


def build_records(movies: dict[str, MovieSpec]) -> dict[str, dict[str, Any]]:
    """
    Build person and movie records from a movie table.

    Each person's movie list follows the order movies appear in the table,
    and carries the role they played there (cast role wins over crew).
    """
    records: dict[str, dict[str, Any]] = {}
    people: dict[str, list[dict[str, str]]] = {}

    for url, (name, cast, crew) in movies.items():
        records[url] = {
            "url": url,
            "type": "Movie",
            "name": name,
            "cast": [{"url": p, "name": p.upper(), "role": role} for p, role in cast],
            "crew": [{"url": p, "name": p.upper(), "role": role} for p, role in crew],
        }
        seen: set[str] = set()
        for person, role in cast + crew:
            if person in seen:
                continue
            seen.add(person)
            people.setdefault(person, []).append({"url": url, "name": name, "role": role})

    for person, credits in people.items():
        records[person] = {
            "url": person,
            "type": "Person",
            "name": person.upper(),
            "movies": credits,
        }
    return records


@pytest.fixture
def make_source():
    """Factory for in-memory sources built from a movie table."""

    def _make(movies: dict[str, MovieSpec], **kwargs: Any) -> InMemorySource:
        return InMemorySource(build_records(movies), **kwargs)

    return _make


@pytest.fixture
def example_movies() -> dict[str, MovieSpec]:
    """A acts with B in M1; B acts with C (a detective) in M2."""
    return {
        "m1": ("M1", [("a", "Hero"), ("b", "Sidekick")], []),
        "m2": ("M2", [("b", "Villain"), ("c", "Detective")], []),
    }


@pytest.fixture
def ladder_movies() -> dict[str, MovieSpec]:
    """
    Graph with a 3-hop shortest path a -> d and a 4-hop detour.

        a -m1- b -m2- c -m3- d
        a -m4- x -m5- y -m6- z -m7- d
    """
    return {
        "m4": ("Detour 1", [("a", "Lead"), ("x", "Extra")], []),
        "m5": ("Detour 2", [("x", "Lead"), ("y", "Extra")], []),
        "m6": ("Detour 3", [("y", "Lead"), ("z", "Extra")], []),
        "m7": ("Detour 4", [("z", "Lead"), ("d", "Extra")], []),
        "m1": ("Short 1", [("a", "Lead"), ("b", "Support")], []),
        "m2": ("Short 2", [("b", "Lead"), ("c", "Support")], []),
        "m3": ("Short 3", [("c", "Lead"), ("d", "Support")], []),
    }
