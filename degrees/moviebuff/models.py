"""
Person and movie records as served by Moviebuff.

The same two shapes are used for full records and for references: a person's
``movies`` list holds movie references (name, url, role) and a movie's
``cast``/``crew`` lists hold person references (name, url, role).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from degrees.errors import DecodeError

logger = logging.getLogger(__name__)


def _require_mapping(data: Any, identifier: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(identifier, f"Record for '{identifier}' is not an object")
    return data


def _require_url(data: dict[str, Any], identifier: str) -> str:
    url = data.get("url")
    if not isinstance(url, str) or not url:
        raise DecodeError(identifier, f"Record for '{identifier}' has no url")
    return url


def _list_of(data: dict[str, Any], key: str, identifier: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise DecodeError(identifier, f"Record for '{identifier}' has a non-list '{key}'")
    return value


def _references(data: dict[str, Any], key: str, identifier: str) -> list[dict[str, Any]]:
    """Entries of a reference list, dropping any without a usable url."""
    entries = _list_of(data, key, identifier)
    usable = [
        entry
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("url"), str) and entry["url"]
    ]
    if len(usable) != len(entries):
        logger.debug(
            f"Ignoring {len(entries) - len(usable)} '{key}' entries without a url in '{identifier}'"
        )
    return usable


@dataclass
class Person:
    """
    A film person (actor, director, crew member).

    Attributes:
        url: Moviebuff identifier, also the graph node key
        name: Display name
        type: Record type reported by the source (e.g. "Person")
        role: Role played, only set when listed inside a movie's cast or crew
        movies: Movies this person worked on, each carrying this person's role
    """

    url: str
    name: str = ""
    type: str = ""
    role: str = ""
    movies: list[Movie] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, identifier: str = "") -> Person:
        """Build a person from a decoded JSON record."""
        data = _require_mapping(data, identifier)
        url = _require_url(data, identifier)
        return cls(
            url=url,
            name=data.get("name") or "",
            type=data.get("type") or "",
            role=data.get("role") or "",
            movies=[Movie.from_dict(m, identifier) for m in _references(data, "movies", identifier)],
        )


@dataclass
class Movie:
    """
    A movie connecting everyone in its cast and crew.

    Attributes:
        url: Moviebuff identifier
        name: Display name, used in search paths
        type: Record type reported by the source (e.g. "Movie")
        role: Role of the owning person, only set inside a person's movie list
        cast: Cast members with the role each played
        crew: Crew members with the role each played
    """

    url: str
    name: str = ""
    type: str = ""
    role: str = ""
    cast: list[Person] = field(default_factory=list)
    crew: list[Person] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, identifier: str = "") -> Movie:
        """Build a movie from a decoded JSON record."""
        data = _require_mapping(data, identifier)
        url = _require_url(data, identifier)
        return cls(
            url=url,
            name=data.get("name") or "",
            type=data.get("type") or "",
            role=data.get("role") or "",
            cast=[Person.from_dict(p, identifier) for p in _references(data, "cast", identifier)],
            crew=[Person.from_dict(p, identifier) for p in _references(data, "crew", identifier)],
        )

    @property
    def participants(self) -> list[Person]:
        """Cast followed by crew, in listed order."""
        return self.cast + self.crew

    def role_of(self, url: str) -> str:
        """Role of the given person in this movie, or "" if not listed."""
        for person in self.participants:
            if person.url == url and person.role:
                return person.role
        return ""
