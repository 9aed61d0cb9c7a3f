"""
Moviebuff Degrees of Separation.

Finds the shortest chain of movies connecting two film people by
breadth-first search over Moviebuff's public data, fetching person and
movie records lazily as the search frontier grows.
"""

__version__ = "0.1.0"
