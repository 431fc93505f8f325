# import the necessary packages
import cv2

from slidewin.errors import ResampleFailure
from slidewin.planner import resampled_shape


# resize the image down by scale; larger scales yield smaller images
def resample(image, scale):
    rows, cols = resampled_shape(image.shape[0], image.shape[1], scale)

    if rows <= 0 or cols <= 0:
        raise ResampleFailure("Resampling image of size [" + str(image.shape[1]) + ", " + str(image.shape[0])
                              + "] by 1/" + str(scale) + " yields an empty image.")

    try:
        resized = cv2.resize(image, (cols, rows), interpolation=cv2.INTER_LINEAR)
    except cv2.error as e:
        raise ResampleFailure("Could not resample image by 1/" + str(scale) + ".") from e

    if resized is None or resized.size == 0:
        raise ResampleFailure("Resampling image by 1/" + str(scale) + " produced no pixels.")

    # windows handed to feature extractors are views into this image
    resized.setflags(write=False)
    return resized


# yield every image in the pyramid, one per scale
def pyramid(image, scales):
    for scale in scales:
        yield scale, resample(image, scale)


def sliding_window(image, stride, window_size):
    # slide a window across the image, keeping it fully inside
    win_rows, win_cols = window_size

    for y in range(0, image.shape[0] - win_rows + 1, stride):
        for x in range(0, image.shape[1] - win_cols + 1, stride):
            yield (y, x, image[y:y + win_rows, x:x + win_cols])
