"""Common interface shared by the output sinks.

Every sink takes the image dimensions and a pixel source, a callable that
returns the color of pixel (x, y) with y = 0 at the top. Sinks never see
the scene or the renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

import numpy as np
import numpy.typing as npt

# Callable returning the color of pixel (x, y)
PixelSource = Callable[[int, int], float]

# Names of the available sinks
SinkName = Literal["terminal", "pixmap", "png"]

SINK_NAMES: tuple[str, ...] = ("terminal", "pixmap", "png")


def image_pixel_source(image: npt.NDArray[np.float32]) -> PixelSource:
    """Wrap a (height, width) image array as a pixel source.

    Args:
        image: Array of colors, row 0 at the top.

    Returns:
        A callable mapping (x, y) to image[y, x] as a Python float.
    """

    def pixel(x: int, y: int) -> float:
        return float(image[y, x])

    return pixel


def sample_pixels(width: int, height: int, pixel: PixelSource) -> npt.NDArray[np.float32]:
    """Evaluate a pixel source into a (height, width) float32 array."""
    image = np.empty((height, width), dtype=np.float32)
    for y in range(height):
        for x in range(width):
            image[y, x] = pixel(x, y)
    return image
