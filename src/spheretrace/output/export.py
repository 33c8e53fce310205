"""PNG export for rendered images.

Writes an 8-bit grayscale PNG through Pillow. Unlike the pixel-map sink,
colors are clamped to [0, 1] before quantizing, so bright highlights
saturate to white.

Example:
    >>> from spheretrace.output.export import save_png
    >>> save_png(40, 25, lambda x, y: 0.5, "out.png")
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.output.sink import PixelSource, sample_pixels

DEFAULT_PATH = "out.png"


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a float image to uint8, clamping to [0, 1] first.

    NaN pixels become 0.

    Args:
        image: Array of colors of shape (H, W).

    Returns:
        8-bit image array of the same shape.
    """
    clamped = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
    return (clamped * 255).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | os.PathLike[str],
) -> None:
    """Save a (height, width) color array as a grayscale PNG.

    Args:
        image: Array of colors, row 0 at the top.
        filepath: Output file path (should end in .png).

    Raises:
        OSError: If the file cannot be written.
    """
    # 2D uint8 arrays load as mode "L" (8-bit grayscale)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath, format="PNG")


def save_png(
    width: int,
    height: int,
    pixel: PixelSource,
    filepath: str | os.PathLike[str] = DEFAULT_PATH,
) -> None:
    """Write an image to a grayscale PNG file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        pixel: Returns the color of pixel (x, y), y = 0 at the top.
        filepath: Output file path.

    Raises:
        OSError: If the file cannot be written.
    """
    save_png_from_array(sample_pixels(width, height, pixel), filepath)
