"""Unit tests for Chaikin smoothing."""

import pytest

from particlizer.core.smoothing import chaikin_smooth
from particlizer.domain import Point

ZIGZAG = [Point(0, 0), Point(4, 4), Point(8, 0), Point(12, 4), Point(16, 0)]


class TestChaikinSmooth:
    """Tests for chaikin_smooth."""

    def test_zero_iterations_is_identity(self):
        """Test zero passes return the input points."""
        assert chaikin_smooth(ZIGZAG, 0) == ZIGZAG

    def test_returns_new_list(self):
        """Test the input sequence is not modified."""
        points = list(ZIGZAG)
        result = chaikin_smooth(points, 0)
        result.append(Point(99, 99))
        assert points == ZIGZAG

    def test_single_pass(self):
        """Test one pass cuts every segment at 1/4 and 3/4."""
        result = chaikin_smooth([Point(0, 0), Point(4, 0), Point(4, 8)], 1)
        assert result == [Point(1, 0), Point(3, 0), Point(4, 2), Point(4, 6)]
        assert len(result) == 2 * (3 - 1)

    def test_point_count_recurrence(self):
        """Test each pass maps m points to 2 * (m - 1)."""
        expected = len(ZIGZAG)
        for k in range(1, 5):
            expected = 2 * (expected - 1)
            assert len(chaikin_smooth(ZIGZAG, k)) == expected

    def test_endpoints_not_kept(self):
        """Test the open curve drops the original endpoints."""
        result = chaikin_smooth(ZIGZAG, 1)
        assert result[0] == Point(1, 1)
        assert result[-1] == Point(15, 1)

    def test_short_input(self):
        """Test fewer than 2 points are returned unchanged."""
        assert chaikin_smooth([Point(3, 3)], 3) == [Point(3, 3)]
        assert chaikin_smooth([], 2) == []

    def test_negative_iterations(self):
        """Test negative pass counts are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            chaikin_smooth(ZIGZAG, -1)
