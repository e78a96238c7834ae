"""Tests for the layout engine."""

import logging
import warnings
from collections import namedtuple

import pytest

from xibao.layout import (
    TextScaledWarning,
    block_height,
    compute_global_scale,
    fit_scale,
    layout,
)

Box = namedtuple("Box", ["width", "height"])


class TestFitScale:
    def test_fits(self):
        assert fit_scale(500, 100, 1000, 1000) == 1

    def test_too_wide(self):
        assert fit_scale(2000, 100, 1000, 1000) == 0.5

    def test_too_tall(self):
        assert fit_scale(100, 2000, 1000, 1000) == 0.5

    def test_smaller_of_both(self):
        assert fit_scale(4000, 1250, 1000, 1000) == 0.25
        assert fit_scale(1250, 4000, 1000, 1000) == 0.25

    def test_zero_denominator(self):
        assert fit_scale(0, 0, -5, -5) == 1


class TestBlockHeight:
    def test_spacing_between_lines_only(self):
        assert block_height([100, 100], 16) == 216
        assert block_height([100], 16) == 100

    def test_global_scale(self):
        assert compute_global_scale(216, 1000) == 1
        assert compute_global_scale(2000, 1000) == 0.5
        assert compute_global_scale(0, -1) == 1


class TestLayout:
    def test_two_lines_centered(self):
        placed = layout([Box(500, 100), Box(300, 100)], (1000, 1000), 16)
        assert [p.top for p in placed] == [392, 508]
        assert [p.left for p in placed] == [250, 350]
        assert all(p.global_scale == 1 for p in placed)
        assert not any(p.needs_resample for p in placed)

    def test_wide_line_scaled_before_global(self):
        (p,) = layout([Box(2000, 100)], (1000, 1000))
        assert p.scale == 0.5
        assert (p.real_width, p.real_height) == (1000, 50)
        assert p.global_scale == 1
        assert p.left == 0
        assert p.top == 475
        assert p.needs_resample

    def test_global_shrink(self):
        with pytest.warns(TextScaledWarning, match="0.5000x"):
            placed = layout([Box(600, 992), Box(600, 992)], (1000, 1000), 16)
        assert [p.scale for p in placed] == [1, 1]
        assert [p.global_scale for p in placed] == [0.5, 0.5]
        assert [p.top for p in placed] == [0, 504]
        assert [p.left for p in placed] == [350, 350]
        assert [(p.target_width, p.target_height) for p in placed] == [(300, 496)] * 2

    def test_line_shrunk_twice(self):
        with pytest.warns(TextScaledWarning):
            placed = layout(
                [Box(2000, 1000), Box(1000, 984), Box(10, 484)], (1000, 1000), 16
            )
        first, second, _ = placed
        assert first.scale == 0.5
        assert (first.real_width, first.real_height) == (1000, 500)
        assert second.scale == 1
        assert first.global_scale == second.global_scale == 0.5
        assert first.target_height == 250

    def test_warning_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="xibao.layout"):
            with pytest.warns(TextScaledWarning):
                layout([Box(10, 600), Box(10, 600)], (100, 1000), 16)
        assert "scaled to" in caplog.text

    def test_no_warning_when_fitting(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            layout([Box(10, 10)], (100, 100))

    def test_empty(self):
        assert layout([], (1000, 1000)) == []

    def test_order_and_scale_bounds(self):
        boxes = [Box(w, h) for w, h in [(100, 50), (3000, 80), (700, 2000), (10, 10)]]
        with pytest.warns(TextScaledWarning):
            placed = layout(boxes, (1000, 1000))
        assert len(placed) == len(boxes)
        tops = [p.top for p in placed]
        assert tops == sorted(tops)
        for p in placed:
            assert 0 < p.scale <= 1
            assert 0 < p.global_scale <= 1
