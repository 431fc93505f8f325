from slidewin.config import SlidingWindowConfig
from slidewin.enumerator import (
    ResultSet,
    Window,
    WindowRect,
    enumerate_windows,
    multiscale_sliding_windows,
    sliding_windows,
)
from slidewin.errors import FeatureExtractionError, InvalidConfiguration, ResampleFailure, SlideWindowError
from slidewin.features import FeatureExtractor, extract_color_histogram, extract_raw_pixels
from slidewin.planner import ScalePlan, plan_scales

__version__ = "0.1.0"

__all__ = [
    "SlidingWindowConfig",
    "ResultSet",
    "Window",
    "WindowRect",
    "enumerate_windows",
    "multiscale_sliding_windows",
    "sliding_windows",
    "FeatureExtractionError",
    "InvalidConfiguration",
    "ResampleFailure",
    "SlideWindowError",
    "FeatureExtractor",
    "extract_color_histogram",
    "extract_raw_pixels",
    "ScalePlan",
    "plan_scales",
]
