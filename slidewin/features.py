"""Feature extractors for sliding windows.

Any callable that takes a window (a numpy array laid out like the input
image) and returns a sequence of numbers can be handed to the enumerator.
The functions here are reference implementations of that contract.
"""

from typing import Protocol, Sequence, Union

import cv2
import numpy as np

from slidewin.errors import FeatureExtractionError


class FeatureExtractor(Protocol):
    def __call__(self, window: np.ndarray) -> Union[np.ndarray, Sequence[float]]:
        ...


def to_feature_vector(feature) -> np.ndarray:
    if feature is None:
        raise FeatureExtractionError("Feature extractor returned None.")

    return np.asarray(feature, dtype=np.float64).ravel()


def to_gray(window: np.ndarray) -> np.ndarray:
    if window.ndim == 2:
        return window

    channels = window.shape[2]
    if window.dtype == np.float64:
        # cvtColor has no 64-bit float path
        window = window.astype(np.float32)
    if channels == 1:
        return window[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(np.ascontiguousarray(window), cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(np.ascontiguousarray(window), cv2.COLOR_BGRA2GRAY)

    raise ValueError("Unsupported number of channels: " + str(channels))


def _unit_range(gray: np.ndarray) -> np.ndarray:
    if np.issubdtype(gray.dtype, np.integer):
        # shifted by the dtype minimum so signed samples land in [0, 1] too
        info = np.iinfo(gray.dtype)
        return (gray.astype(np.float64) - info.min) / (float(info.max) - info.min)

    # floating point windows are taken as already normalised
    return gray.astype(np.float64)


def _as_uint8(window: np.ndarray) -> np.ndarray:
    if window.dtype != np.uint8:
        window = np.clip(_unit_range(window) * 255.0, 0, 255).astype(np.uint8)

    return np.ascontiguousarray(window)


def extract_raw_pixels(window: np.ndarray) -> np.ndarray:
    """Grayscale intensities in [0, 1], flattened row by row."""
    return _unit_range(to_gray(window)).ravel()


def extract_color_histogram(window: np.ndarray, bins=(8, 8, 8)) -> np.ndarray:
    """L1-normalised HSV histogram of the window.

    Grayscale windows fall back to an intensity histogram of ``bins[0]`` bins.
    """
    if window.ndim == 2 or window.shape[2] == 1:
        gray = _as_uint8(to_gray(window))
        hist = cv2.calcHist([gray], [0], None, [bins[0]], [0, 256])
    else:
        bgr = window[:, :, :3] if window.shape[2] == 4 else window
        hsv = cv2.cvtColor(_as_uint8(bgr), cv2.COLOR_BGR2HSV)
        hist = cv2.calcHist([hsv], [0, 1, 2], None, list(bins), [0, 180, 0, 256, 0, 256])

    hist = hist.astype(np.float64).ravel()
    total = hist.sum()
    if total > 0:
        hist /= total

    return hist
