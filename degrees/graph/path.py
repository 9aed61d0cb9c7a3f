"""
Result dataclasses and path reconstruction for separation searches.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Hop:
    """
    One movie connecting two consecutive people in a chain.

    Attributes:
        number: 1-indexed position of the hop in the chain
        movie: Movie name
        left: Identifier of the person nearer the source
        left_role: Role the left person played in the movie
        right: Identifier of the person nearer the target
        right_role: Role the right person played in the movie
    """

    number: int
    movie: str
    left: str
    left_role: str
    right: str
    right_role: str


@dataclass
class SeparationResult:
    """
    Shortest chain found between two people.

    Attributes:
        source: Starting person identifier
        target: Target person identifier
        degree: Number of movie hops (0 when source == target)
        hops: One entry per movie, in order from source to target
        path: Raw alternating person/movie/.../person sequence
    """

    source: str
    target: str
    degree: int
    hops: list[Hop] = field(default_factory=list)
    path: list[str] = field(default_factory=list)


def build_result(path: list[str], roles: list[str]) -> SeparationResult:
    """
    Assemble a SeparationResult from a search path and its role pairs.

    Args:
        path: Alternating person, movie, person, ..., person sequence
        roles: Two roles per hop, [left0, right0, left1, right1, ...]

    Raises:
        ValueError: If the path or roles are malformed
    """
    if not path or len(path) % 2 == 0:
        raise ValueError(f"Path must alternate person/movie and end on a person: {path!r}")

    degree = (len(path) - 1) // 2
    if len(roles) != 2 * degree:
        raise ValueError(f"Expected {2 * degree} roles for {degree} hops, got {len(roles)}")

    hops = []
    for i in range(0, len(path) - 2, 2):
        k = i // 2
        hops.append(
            Hop(
                number=k + 1,
                movie=path[i + 1],
                left=path[i],
                left_role=roles[2 * k],
                right=path[i + 2],
                right_role=roles[2 * k + 1],
            )
        )

    return SeparationResult(
        source=path[0],
        target=path[-1],
        degree=degree,
        hops=hops,
        path=list(path),
    )


def format_result(result: SeparationResult) -> str:
    """Render a result as the plain-text report printed by the CLI."""
    lines = [f"Degrees of Separation: {result.degree}"]
    for hop in result.hops:
        lines.append("")
        lines.append(f"{hop.number}. Movie: {hop.movie}")
        lines.append(f"{hop.left_role}: {hop.left}")
        lines.append(f"{hop.right_role}: {hop.right}")
    return "\n".join(lines)
