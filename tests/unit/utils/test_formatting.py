"""Unit tests for console formatting helpers."""

import pytest
from orphanctl.utils.formatting import count_noun


class TestCountNoun:
    """Tests for count_noun."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 files"), (1, "1 file"), (2, "2 files")],
    )
    def test_default_plural(self, count: int, expected: str) -> None:
        """The plural adds an s unless the count is one."""
        assert count_noun(count, "file") == expected

    def test_irregular_plural(self) -> None:
        """An explicit plural replaces the default."""
        assert count_noun(3, "directory", "directories") == "3 directories"
        assert count_noun(1, "directory", "directories") == "1 directory"
