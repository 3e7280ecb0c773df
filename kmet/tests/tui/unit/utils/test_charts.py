"""Tests for bar and sparkline render primitives."""

from __future__ import annotations

import math

import pytest

from kmet.constants.values import SPARK_GLYPHS
from kmet.utils.charts import bar, clamp01, sparkline


class TestClamp01:
    """Tests for clamp01."""

    def test_in_range_value_unchanged(self) -> None:
        assert clamp01(0.25) == 0.25

    def test_out_of_range_values_clamped(self) -> None:
        assert clamp01(-3.0) == 0.0
        assert clamp01(7.5) == 1.0

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_maps_to_zero(self, value: float) -> None:
        assert clamp01(value) == 0.0


class TestBar:
    """Tests for bar()."""

    def test_half_fill(self) -> None:
        assert bar(0.5, 10) == "█" * 5 + " " * 5

    def test_always_exact_width(self) -> None:
        for ratio in (0.0, 0.13, 0.5, 0.99, 1.0, 3.0):
            for width in (1, 6, 17, 40):
                assert len(bar(ratio, width)) == width

    def test_small_positive_ratio_fills_one_cell(self) -> None:
        assert bar(0.01, 10) == "█" + " " * 9

    def test_zero_ratio_is_empty(self) -> None:
        assert bar(0.0, 8) == " " * 8

    def test_ratio_above_one_is_full(self) -> None:
        assert bar(2.0, 4) == "████"

    def test_negative_and_nan_ratios_are_empty(self) -> None:
        assert bar(-1.0, 5) == " " * 5
        assert bar(math.nan, 5) == " " * 5

    def test_non_positive_width_renders_nothing(self) -> None:
        assert bar(0.5, 0) == ""
        assert bar(0.5, -3) == ""


class TestSparkline:
    """Tests for sparkline()."""

    def test_empty_samples(self) -> None:
        assert sparkline([], 8) == ""

    def test_non_positive_width(self) -> None:
        assert sparkline([0.5, 0.6], 0) == ""

    def test_output_length_matches_width(self) -> None:
        samples = [i / 10 for i in range(10)]
        for width in (1, 3, 10, 25):
            assert len(sparkline(samples, width)) == width

    def test_upsampling_repeats_earlier_samples(self) -> None:
        assert sparkline([0.0, 1.0], 4) == "▁▁██"

    def test_downsampling_picks_nearest_earlier_index(self) -> None:
        assert sparkline([0.0, 0.5, 1.0, 1.0], 2) == "▁█"

    def test_values_clamped_to_glyph_range(self) -> None:
        line = sparkline([-5.0, 5.0, math.nan], 3)
        assert line == SPARK_GLYPHS[0] + SPARK_GLYPHS[-1] + SPARK_GLYPHS[0]
