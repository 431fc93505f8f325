import math
from dataclasses import dataclass

from slidewin.config import check_window_fits, check_window_params

# keeps exact powers (256 / 64 == 2 ** 2) from losing a scale to log() rounding
_LOG_EPS = 1e-9


@dataclass(frozen=True)
class ScalePlan:
    scales: tuple
    max_windows: int

    @property
    def num_scales(self):
        return len(self.scales)


###############################################################################
# Computes analytically how many scales the sliding window runs over.
# Gives the same answer as probe_scales() without looping.
#
# Parameters:
# image_rows, image_cols (int): size of the original image
# win_rows, win_cols (int): size of the sliding window
# scale_ratio (float): ratio between consecutive scales, > 1
# max_num_scales (int): cap on the number of scales
#
# Returns:
# (int) number of scales, scale 0 included
###############################################################################
def count_scales(image_rows, image_cols, win_rows, win_cols, scale_ratio, max_num_scales):
    log_ratio = math.log(scale_ratio)
    fit_rows = math.floor(math.log(image_rows / win_rows) / log_ratio + _LOG_EPS)
    fit_cols = math.floor(math.log(image_cols / win_cols) / log_ratio + _LOG_EPS)

    return min(min(fit_rows, fit_cols) + 1, max_num_scales)


def probe_scales(image_rows, image_cols, win_rows, win_cols, scale_ratio, max_num_scales):
    num_scales = 0
    scale = 1.0

    while num_scales < max_num_scales and win_rows * scale <= image_rows and win_cols * scale <= image_cols:
        num_scales += 1
        scale *= scale_ratio

    return num_scales


def scale_factors(scale_ratio, num_scales):
    return tuple(math.pow(scale_ratio, s) for s in range(num_scales))


def count_windows(extent, win, stride):
    if win > extent:
        return 0

    return (extent - win) // stride + 1


# halves go up, like C round() on the non-negative values mapped here
def round_half_up(value):
    return int(math.floor(value + 0.5))


# floored so a window flush with the resampled edge maps back inside the image
def resampled_shape(image_rows, image_cols, scale):
    return (int(math.floor(image_rows / scale)), int(math.floor(image_cols / scale)))


###############################################################################
# Upper bound on the total number of sliding windows across all scales.
# Only used to size the output buffer, never for correctness.
#
# Parameters:
# scales (sequence of float): scale factors of the plan
# stride (int): sliding window stride in resampled pixels
#
# Returns:
# (int) number of windows, never less than the true count
###############################################################################
def window_count_upper_bound(image_rows, image_cols, win_rows, win_cols, scales, stride):
    total = 0

    for scale in scales:
        stride_scale = stride * scale
        nsw_rows = math.floor(image_rows / stride_scale) - (win_rows // stride) + 1
        nsw_cols = math.floor(image_cols / stride_scale) - (win_cols // stride) + 1

        # exact without this, kept as margin
        nsw_rows += 1
        nsw_cols += 1

        total += max(nsw_rows, 0) * max(nsw_cols, 0)

    return total


def plan_scales(image_rows, image_cols, win_rows, win_cols, scale_ratio, max_num_scales, stride=1):
    check_window_params(win_rows, win_cols, scale_ratio, max_num_scales, stride)
    check_window_fits(image_rows, image_cols, win_rows, win_cols)

    num_scales = count_scales(image_rows, image_cols, win_rows, win_cols, scale_ratio, max_num_scales)
    scales = scale_factors(scale_ratio, num_scales)
    max_windows = window_count_upper_bound(image_rows, image_cols, win_rows, win_cols, scales, stride)

    return ScalePlan(scales=scales, max_windows=max_windows)
