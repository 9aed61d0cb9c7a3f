"""
Moviebuff interaction module.

Provides the record models and the HTTP client used to fetch
person and movie records on demand.
"""

from degrees.moviebuff.client import DataSource, MoviebuffClient
from degrees.moviebuff.models import Movie, Person

__all__ = [
    "DataSource",
    "MoviebuffClient",
    "Movie",
    "Person",
]
