import sys
from pathlib import Path

import numpy as np
import pytest

# Add the repository root to sys.path so we can import slidewin
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())


@pytest.fixture
def color_image():
    """256x256 BGR image with distinct content everywhere."""
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(256, 256, 3), dtype=np.uint8)


@pytest.fixture
def gray_image():
    """Horizontal gradient, 120 rows by 200 cols."""
    row = np.linspace(0, 255, 200).astype(np.uint8)
    return np.tile(row, (120, 1))


@pytest.fixture
def pedestrian_frame():
    """Odd-sized frame resembling the original driver's input."""
    rng = np.random.default_rng(11)
    return rng.integers(0, 256, size=(301, 457, 3), dtype=np.uint8)
