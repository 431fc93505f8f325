import threading
import time
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np

from slidewin.config import SlidingWindowConfig, check_window_fits, check_window_params
from slidewin.errors import InvalidConfiguration
from slidewin.features import to_feature_vector
from slidewin.helpers import pyramid, resample, sliding_window
from slidewin.planner import ScalePlan, plan_scales, round_half_up, scale_factors, window_count_upper_bound
from slidewin.report import print_plan_summary, print_progress_bar


class WindowRect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Window:
    rect: WindowRect
    scale_index: int
    feature: Optional[np.ndarray] = None


class ResultSet:
    """Sliding windows of one image across all scales, in enumeration order."""

    def __init__(self, windows, scales, extracted):
        self._windows = tuple(windows)
        self.scales = tuple(scales)
        self.extracted = extracted

    def __len__(self):
        return len(self._windows)

    def __iter__(self):
        return iter(self._windows)

    def __getitem__(self, idx):
        return self._windows[idx]

    @property
    def windows(self) -> List[Window]:
        return list(self._windows)

    @property
    def rects(self) -> List[WindowRect]:
        return [w.rect for w in self._windows]

    @property
    def features(self) -> List[np.ndarray]:
        if not self.extracted:
            return []
        return [w.feature for w in self._windows]

    @property
    def scale_indices(self) -> List[int]:
        return [w.scale_index for w in self._windows]

    def scale_of(self, idx):
        return self.scales[self._windows[idx].scale_index]

    def counts_per_scale(self):
        counts = [0] * len(self.scales)
        for w in self._windows:
            counts[w.scale_index] += 1
        return counts

    def as_tuple(self):
        return self.rects, self.features


def _as_image(image):
    image = np.asarray(image)

    if image.ndim not in (2, 3) or image.size == 0:
        raise InvalidConfiguration("Expected a non-empty 2-D or 3-D image, got shape " + str(image.shape) + ".")

    return np.ascontiguousarray(image)


###############################################################################
# Runs the sliding window over one resampled level of the pyramid.
#
# Parameters:
# img_cur (np array): image resampled to this scale
# s (int): index of the scale
# scale (float): factor the image is shrunk by at this scale
# window_size (tuple): (win_rows, win_cols) in resampled pixels
# stride (int): step between windows in resampled pixels
# feature_extractor (callable): called on each resampled window, or None
#
# Yields:
# (Window) in row-major order
###############################################################################
def _scale_windows(img_cur, s, scale, window_size, stride, feature_extractor):
    win_rows, win_cols = window_size

    width = round_half_up(win_cols * scale)
    height = round_half_up(win_rows * scale)

    for (i, j, window) in sliding_window(img_cur, stride, window_size):
        rect = WindowRect(round_half_up(j * scale), round_half_up(i * scale), width, height)

        feature = None
        if feature_extractor is not None:
            feature = to_feature_vector(feature_extractor(window))

        yield Window(rect, s, feature)


def _run_sequential(image, scales, window_size, stride, feature_extractor, debug):
    max_windows = window_count_upper_bound(image.shape[0], image.shape[1], window_size[0], window_size[1],
                                           scales, stride)
    windows = [None] * max_windows
    nslidewins_total = 0

    # each resampled level is dropped once its windows are taken
    for s, (scale, img_cur) in enumerate(pyramid(image, scales)):
        for window in _scale_windows(img_cur, s, scale, window_size, stride, feature_extractor):
            if nslidewins_total < max_windows:
                windows[nslidewins_total] = window
            else:
                windows.append(window)
            nslidewins_total += 1

        if debug:
            print_progress_bar(s + 1, len(scales), prefix='Progress:', suffix='Complete', length=50)

    del windows[nslidewins_total:]
    return windows


def _run_threaded(image, scales, window_size, stride, feature_extractor, workers, debug):
    buffers = [None] * len(scales)
    errors = [None] * len(scales)
    lock = threading.Lock()
    next_scale = [0]
    done = [0]

    def worker():
        while True:
            with lock:
                s = next_scale[0]
                next_scale[0] += 1
            if s >= len(scales):
                return

            try:
                img_cur = resample(image, scales[s])
                buffers[s] = list(_scale_windows(img_cur, s, scales[s], window_size, stride, feature_extractor))
            except Exception as e:
                errors[s] = e

            with lock:
                done[0] += 1
                if debug:
                    print_progress_bar(done[0], len(scales), prefix='Progress:', suffix='Complete', length=50)

    threads = []
    for _ in range(min(workers, len(scales))):
        child_thread = threading.Thread(target=worker)
        child_thread.start()
        threads.append(child_thread)

    for thread in threads:
        thread.join()

    for e in errors:
        if e is not None:
            raise e

    return [w for buf in buffers for w in buf]


###############################################################################
# Generates multiscale sliding windows over an image, and optionally a feature
# vector for each window.
#
# Parameters:
# image (np array): image of shape (rows, cols) or (rows, cols, channels)
# win_rows, win_cols (int): size of the sliding window in resampled pixels
# scale_ratio (float): ratio between consecutive scales
# num_scales (int): number of scales to run, scale 0 being the original image
# stride (int): step between windows in resampled pixels
# feature_extractor (callable): called on each resampled window, None to skip
# workers (int): number of threads the scales are spread over
# debug (bool): print progress and a summary of the scales
#
# Returns:
# (ResultSet): windows in scale, row, column order
###############################################################################
def enumerate_windows(image, win_rows, win_cols, scale_ratio, num_scales, stride, feature_extractor=None,
                      workers=1, debug=False):
    check_window_params(win_rows, win_cols, scale_ratio, num_scales, stride)
    image = _as_image(image)
    check_window_fits(image.shape[0], image.shape[1], win_rows, win_cols)

    if workers < 1:
        raise InvalidConfiguration("Number of workers must be at least 1, got " + str(workers) + ".")

    window_size = (win_rows, win_cols)
    scales = scale_factors(scale_ratio, num_scales)
    start = time.time()

    if workers > 1 and num_scales > 1:
        windows = _run_threaded(image, scales, window_size, stride, feature_extractor, workers, debug)
    else:
        windows = _run_sequential(image, scales, window_size, stride, feature_extractor, debug)

    result = ResultSet(windows, scales, feature_extractor is not None)

    if debug:
        plan = ScalePlan(scales=scales,
                         max_windows=window_count_upper_bound(image.shape[0], image.shape[1], win_rows, win_cols,
                                                              scales, stride))
        print_plan_summary(plan, image.shape, window_size, result.counts_per_scale())
        print("Number of multiscale sliding windows = " + str(len(result)))
        print("Time taken for sliding windows: " + str(time.time() - start))

    return result


def multiscale_sliding_windows(image, win_rows, win_cols, scale_ratio, max_num_scales, stride,
                               feature_extractor=None, workers=1, debug=False):
    image = _as_image(image)
    plan = plan_scales(image.shape[0], image.shape[1], win_rows, win_cols, scale_ratio, max_num_scales, stride)
    result = enumerate_windows(image, win_rows, win_cols, scale_ratio, plan.num_scales, stride,
                               feature_extractor, workers=workers, debug=debug)
    return result.as_tuple()


def sliding_windows(image, config=None, feature_extractor=None):
    if config is None:
        config = SlidingWindowConfig()

    image = _as_image(image)
    config.validate_for(image.shape)
    plan = plan_scales(image.shape[0], image.shape[1], config.win_rows, config.win_cols, config.scale_ratio,
                       config.max_num_scales, config.stride)

    return enumerate_windows(image, config.win_rows, config.win_cols, config.scale_ratio, plan.num_scales,
                             config.stride, feature_extractor, workers=config.workers, debug=config.debug)
