"""
Unit tests for path reconstruction and formatting.
"""

import pytest

from degrees.graph.path import Hop, SeparationResult, build_result, format_result


class TestBuildResult:
    """Turning a raw path into hops."""

    def test_two_hops(self):
        """Should produce one hop per movie with both roles."""
        result = build_result(
            ["a", "M1", "b", "M2", "c"],
            ["Hero", "Sidekick", "Villain", "Detective"],
        )

        assert result.source == "a"
        assert result.target == "c"
        assert result.degree == 2
        assert result.hops == [
            Hop(number=1, movie="M1", left="a", left_role="Hero", right="b", right_role="Sidekick"),
            Hop(number=2, movie="M2", left="b", left_role="Villain", right="c", right_role="Detective"),
        ]

    def test_single_person(self):
        """A lone person is degree 0."""
        result = build_result(["a"], [])

        assert result.degree == 0
        assert result.hops == []
        assert result.source == result.target == "a"

    def test_path_is_copied(self):
        """The result should not alias the caller's list."""
        path = ["a", "M1", "b"]
        result = build_result(path, ["Hero", "Sidekick"])
        path.append("oops")

        assert result.path == ["a", "M1", "b"]

    def test_even_length_path(self):
        """A path ending on a movie is malformed."""
        with pytest.raises(ValueError):
            build_result(["a", "M1"], ["Hero", "Sidekick"])

    def test_empty_path(self):
        """An empty path is malformed."""
        with pytest.raises(ValueError):
            build_result([], [])

    def test_role_count_mismatch(self):
        """Roles must come in pairs per hop."""
        with pytest.raises(ValueError):
            build_result(["a", "M1", "b"], ["Hero"])


class TestFormatResult:
    """Plain-text report."""

    def test_format(self):
        """Should print the degree and each hop with roles."""
        result = build_result(
            ["a", "M1", "b", "M2", "c"],
            ["Hero", "Sidekick", "Villain", "Detective"],
        )

        assert format_result(result) == (
            "Degrees of Separation: 2\n"
            "\n"
            "1. Movie: M1\n"
            "Hero: a\n"
            "Sidekick: b\n"
            "\n"
            "2. Movie: M2\n"
            "Villain: b\n"
            "Detective: c"
        )

    def test_format_degree_zero(self):
        """Degree 0 prints only the header."""
        result = SeparationResult(source="a", target="a", degree=0, path=["a"])

        assert format_result(result) == "Degrees of Separation: 0"
