"""
单位与旋转换算测试
"""

import pytest

from label_engine.export.units import (
    ZplOrientation,
    dots_per_mm,
    mm_to_dots,
    round_half_up,
    rotation_to_orientation,
    rotation_to_zpl,
)


class TestDotsPerMm:
    """DPI -> 点/毫米"""

    @pytest.mark.parametrize("dpi,expected", [(203, 8), (300, 12), (600, 24), (150, 8), (None, 8)])
    def test_table(self, dpi, expected):
        assert dots_per_mm(dpi) == expected


class TestMmToDots:
    """毫米 -> 打印点"""

    def test_basic(self):
        assert mm_to_dots(10, 8) == 80
        assert mm_to_dots(10, 12) == 120
        assert mm_to_dots(2.5, 24) == 60

    def test_half_rounds_away_from_zero(self):
        assert mm_to_dots(0.3125, 8) == 3
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -3

    def test_just_below_half_rounds_down(self):
        assert round_half_up(0.49999999999999994) == 0
        assert round_half_up(-0.49999999999999994) == 0
        assert round_half_up(1.4999999999999998) == 1

    @pytest.mark.parametrize("value", [None, "5", True, float("nan"), float("inf")])
    def test_non_number_is_zero(self, value):
        assert mm_to_dots(value, 8) == 0


class TestRotation:
    """旋转角 -> 方向码"""

    @pytest.mark.parametrize("degrees,expected", [
        (0, "N"), (44, "N"), (45, "R"), (90, "R"), (134, "R"),
        (135, "I"), (180, "I"), (224, "I"), (225, "B"), (270, "B"),
        (314, "B"), (315, "N"), (-45, "N"), (-90, "B"), (450, "R"), (720, "N"),
        (44.5, "R"), (44.4, "N"),
    ])
    def test_buckets(self, degrees, expected):
        assert rotation_to_zpl(degrees) == expected

    @pytest.mark.parametrize("value", [None, "abc", "90", True, float("nan")])
    def test_non_numeric_is_normal(self, value):
        assert rotation_to_zpl(value) == "N"

    def test_periodic(self):
        for degrees in range(-720, 721, 7):
            assert rotation_to_zpl(degrees) == rotation_to_zpl(degrees + 360)
            assert rotation_to_zpl(degrees) in {"N", "R", "I", "B"}

    def test_orientation_enum(self):
        assert rotation_to_orientation(180) is ZplOrientation.INVERTED_180
