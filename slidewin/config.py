from dataclasses import dataclass

from slidewin.errors import InvalidConfiguration

# pedestrian-sized window, two octaves
DEFAULT_WINDOW_SIZE = (90, 90)
DEFAULT_SCALE_RATIO = 2.0
DEFAULT_MAX_NUM_SCALES = 2
DEFAULT_STRIDE = 32


def check_window_params(win_rows, win_cols, scale_ratio, max_num_scales, stride):
    if win_rows <= 0 or win_cols <= 0:
        raise InvalidConfiguration("Window size must be positive, got (" + str(win_rows) + ", " + str(win_cols) + ").")

    if not scale_ratio > 1.0:
        raise InvalidConfiguration("Scale ratio must be greater than 1, got " + str(scale_ratio) + ".")

    if max_num_scales < 1:
        raise InvalidConfiguration("Maximum number of scales must be at least 1, got " + str(max_num_scales) + ".")

    if stride <= 0:
        raise InvalidConfiguration("Stride must be positive, got " + str(stride) + ".")


def check_window_fits(image_rows, image_cols, win_rows, win_cols):
    if image_rows <= 0 or image_cols <= 0:
        raise InvalidConfiguration("Image is empty.")

    if win_rows > image_rows or win_cols > image_cols:
        raise InvalidConfiguration("Window (" + str(win_rows) + ", " + str(win_cols) + ") does not fit image ("
                                   + str(image_rows) + ", " + str(image_cols) + ").")


@dataclass
class SlidingWindowConfig:
    """Parameters of one multiscale sliding-window run."""

    win_rows: int = DEFAULT_WINDOW_SIZE[0]
    win_cols: int = DEFAULT_WINDOW_SIZE[1]
    scale_ratio: float = DEFAULT_SCALE_RATIO
    max_num_scales: int = DEFAULT_MAX_NUM_SCALES
    stride: int = DEFAULT_STRIDE
    workers: int = 1
    debug: bool = False

    def validate(self):
        check_window_params(self.win_rows, self.win_cols, self.scale_ratio, self.max_num_scales, self.stride)

        if self.workers < 1:
            raise InvalidConfiguration("Number of workers must be at least 1, got " + str(self.workers) + ".")

        return self

    def validate_for(self, image_shape):
        self.validate()
        check_window_fits(image_shape[0], image_shape[1], self.win_rows, self.win_cols)
        return self

    @property
    def window_size(self):
        return (self.win_rows, self.win_cols)
