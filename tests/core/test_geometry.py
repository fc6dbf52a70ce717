"""Tests for core.geometry"""

import math

import pytest

from paneldock.core.geometry import Rect


class TestRect:
    """Test Rect"""

    def test_from_min_size_converts_to_float(self):
        rect = Rect.from_min_size(1, 2, 3, 4)
        assert rect == Rect(1.0, 2.0, 3.0, 4.0)
        assert isinstance(rect.x, float)

    def test_from_tuple(self):
        assert Rect.from_tuple((750.0, 50.0, 250.0, 300.0)) == Rect(750.0, 50.0, 250.0, 300.0)

    def test_finite(self):
        assert Rect(0, 0, 10, 10).is_finite()
        assert Rect(-50, -50, 0, 0).is_finite()

    @pytest.mark.parametrize(
        "rect",
        [
            Rect(math.nan, 0, 10, 10),
            Rect(0, math.inf, 10, 10),
            Rect(0, 0, -1, 10),
            Rect(0, 0, 10, -math.inf),
        ],
    )
    def test_not_finite(self, rect):
        assert not rect.is_finite()

    def test_to_dict(self):
        assert Rect(1, 2, 3, 4).to_dict() == {"x": 1, "y": 2, "width": 3, "height": 4}
