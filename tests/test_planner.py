"""
Unit tests for slidewin.planner.

Scale counting, the window-count upper bound and plan validation.
"""

import itertools

import pytest

from slidewin.errors import InvalidConfiguration
from slidewin.planner import (
    count_scales,
    count_windows,
    plan_scales,
    probe_scales,
    resampled_shape,
    round_half_up,
    scale_factors,
    window_count_upper_bound,
)

IMAGE_SIZES = [64, 100, 125, 127, 128, 200, 243, 256, 300, 512]
WINDOW_SIZES = [16, 27, 32, 50, 64]
RATIOS = [1.25, 1.5, 2.0, 3.0]
MAX_SCALES = [1, 2, 5, 20]


def _valid_configs():
    for rows, cols, win_rows, win_cols, ratio, max_num in itertools.product(
        IMAGE_SIZES, IMAGE_SIZES[::3], WINDOW_SIZES, WINDOW_SIZES[::2], RATIOS, MAX_SCALES
    ):
        if win_rows <= rows and win_cols <= cols:
            yield rows, cols, win_rows, win_cols, ratio, max_num


class TestCountScales:
    def test_example_is_capped_by_max_num_scales(self):
        assert count_scales(256, 256, 64, 64, 2.0, 2) == 2

    def test_exact_power_keeps_last_scale(self):
        # 64 * 2**2 == 256 still fits
        assert count_scales(256, 256, 64, 64, 2.0, 10) == 3

    def test_smaller_dimension_limits_count(self):
        assert count_scales(1000, 130, 64, 64, 2.0, 10) == 2

    def test_window_equal_to_image_gives_one_scale(self):
        assert count_scales(90, 90, 90, 90, 2.0, 5) == 1

    def test_closed_form_matches_iterative_probe(self):
        checked = 0
        for config in _valid_configs():
            assert count_scales(*config) == probe_scales(*config), config
            checked += 1

        assert checked > 1000


class TestScaleFactors:
    def test_scales_are_geometric_from_one(self):
        scales = scale_factors(1.5, 4)

        assert scales[0] == 1.0
        assert scales == (1.0, 1.5, 2.25, 3.375)

    def test_plan_scales_uses_scale_factors(self):
        plan = plan_scales(256, 256, 64, 64, 2.0, 10, 32)

        assert plan.scales == (1.0, 2.0, 4.0)
        assert plan.num_scales == 3


class TestCountWindows:
    def test_counts_positions_including_last(self):
        assert count_windows(256, 64, 32) == 7
        assert count_windows(128, 64, 32) == 3

    def test_window_equal_to_extent(self):
        assert count_windows(64, 64, 32) == 1

    def test_window_larger_than_extent(self):
        assert count_windows(32, 64, 8) == 0


class TestResampledShape:
    def test_halves_image(self):
        assert resampled_shape(256, 200, 2.0) == (128, 100)

    def test_identity_at_scale_one(self):
        assert resampled_shape(301, 457, 1.0) == (301, 457)

    def test_floors_fractional_extent(self):
        assert resampled_shape(301, 457, 2.0) == (150, 228)
        assert resampled_shape(299, 99, 2.0) == (149, 49)
        assert resampled_shape(100, 200, 3.0) == (33, 66)

    def test_resampled_extent_maps_back_inside_image(self):
        for rows in (299, 301, 457):
            for scale in (1.2, 1.5, 1.7, 2.0, 8.0):
                r, _ = resampled_shape(rows, rows, scale)
                assert r * scale <= rows


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(4.5) == 5
        assert round_half_up(2.5) == 3
        assert round_half_up(40.5) == 41

    def test_other_values_round_to_nearest(self):
        assert round_half_up(2.4) == 2
        assert round_half_up(2.6) == 3
        assert round_half_up(0.0) == 0

    def test_returns_int(self):
        assert isinstance(round_half_up(49.5), int)


class TestWindowCountUpperBound:
    def test_example_bound(self):
        assert window_count_upper_bound(256, 256, 64, 64, (1.0, 2.0), 32) == 80

    def test_bound_never_undercounts(self):
        for rows, cols, win_rows, win_cols, ratio, max_num in _valid_configs():
            for stride in (1, 7, 16, 32):
                scales = scale_factors(ratio, count_scales(rows, cols, win_rows, win_cols, ratio, max_num))
                actual = 0
                for scale in scales:
                    r, c = resampled_shape(rows, cols, scale)
                    actual += count_windows(r, win_rows, stride) * count_windows(c, win_cols, stride)

                bound = window_count_upper_bound(rows, cols, win_rows, win_cols, scales, stride)
                assert bound >= actual, (rows, cols, win_rows, win_cols, ratio, max_num, stride)


class TestPlanScales:
    def test_example_plan(self):
        plan = plan_scales(256, 256, 64, 64, 2.0, 2, 32)

        assert plan.num_scales == 2
        assert plan.scales == (1.0, 2.0)
        assert plan.max_windows == 80

    @pytest.mark.parametrize(
        "args",
        [
            (256, 256, 300, 64, 2.0, 2, 32),
            (256, 256, 64, 300, 2.0, 2, 32),
            (256, 256, 64, 64, 1.0, 2, 32),
            (256, 256, 64, 64, 0.5, 2, 32),
            (256, 256, 64, 64, 2.0, 0, 32),
            (256, 256, 64, 64, 2.0, 2, 0),
            (256, 256, 0, 64, 2.0, 2, 32),
            (0, 256, 64, 64, 2.0, 2, 32),
        ],
    )
    def test_invalid_configuration(self, args):
        with pytest.raises(InvalidConfiguration):
            plan_scales(*args)
