"""
Exceptions raised by the data source and the separation search.

Fetch errors describe a single record that could not be loaded; the search
treats them as dead ends. Search errors are what callers of the search see.
"""

from __future__ import annotations


class DegreesError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


# =============================================================================
# Fetch errors
# =============================================================================


class FetchError(DegreesError):
    """A record could not be loaded from the data source."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message or f"Failed to fetch '{identifier}'")


class RecordNotFound(FetchError):
    """The data source has no record for the identifier."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        super().__init__(identifier, message or f"No record for '{identifier}'")


class PersonNotFound(RecordNotFound):
    """No person record exists for the identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"Person '{identifier}' not found")


class MovieNotFound(RecordNotFound):
    """No movie record exists for the identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f"Movie '{identifier}' not found")


class TransportError(FetchError):
    """The data source was unreachable or returned an error."""


class DecodeError(TransportError):
    """The data source returned a body that is not a valid record."""


# =============================================================================
# Search errors
# =============================================================================


class SearchError(DegreesError):
    """A separation search ended without a path."""

    def __init__(self, source: str, target: str, message: str) -> None:
        self.source = source
        self.target = target
        super().__init__(message)


class NoConnection(SearchError):
    """Every reachable person was expanded without meeting the target."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(source, target, f"No connection found between '{source}' and '{target}'")


class DepthExceeded(SearchError):
    """The search hit its depth or expansion bound before finding the target."""

    def __init__(self, source: str, target: str, limit: str) -> None:
        self.limit = limit
        super().__init__(
            source, target, f"No connection between '{source}' and '{target}' within {limit}"
        )


class SearchTimeout(SearchError):
    """The search deadline elapsed before the target was found."""

    def __init__(self, source: str, target: str, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(
            source, target, f"Search from '{source}' to '{target}' timed out after {seconds:g}s"
        )
