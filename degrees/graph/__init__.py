"""
Graph search module.

Provides the lazily expanded collaboration graph search:
- ExpansionCache: Memoized person/movie lookups
- SeparationSearch: BFS for the fewest-movies chain
- SeparationResult / Hop: Reconstructed chain with roles
"""

from degrees.graph.cache import ExpansionCache
from degrees.graph.path import Hop, SeparationResult, build_result, format_result
from degrees.graph.search import FrontierNode, SeparationSearch

__all__ = [
    "ExpansionCache",
    "FrontierNode",
    "Hop",
    "SeparationResult",
    "SeparationSearch",
    "build_result",
    "format_result",
]
