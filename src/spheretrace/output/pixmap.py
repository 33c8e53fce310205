"""Pixel-map sink: plain-text grayscale PGM (P2).

The format is a ``P2`` header line, a ``<width> <height> 255`` line and
then width * height whitespace-separated integers, one image row per line.

Each color is quantized as floor(color * 255) and then truncated to its low
8 bits, so out-of-range colors wrap around instead of saturating (1.2
becomes 50, -0.1 becomes 230). Pass ``clamp=True`` to saturate to [0, 255]
instead. NaN quantizes to 0 in both cases.

Example:
    >>> from spheretrace.output.pixmap import format_pixmap
    >>> format_pixmap(2, 1, lambda x, y: 0.5 * x)
    'P2\\n2 1 255\\n0 127\\n'
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt

from spheretrace.output.sink import PixelSource, sample_pixels

MAX_VALUE = 255

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_PATH = "out.pgm"


def pixmap_header(width: int, height: int) -> str:
    """Get the P2 header for an image of the given size."""
    return f"P2\n{width} {height} {MAX_VALUE}\n"


def quantize(
    image: npt.NDArray[np.floating],
    *,
    clamp: bool = False,
) -> npt.NDArray[np.uint8]:
    """Convert colors to 8-bit pixel values.

    Args:
        image: Array of colors, nominally in [0, 1].
        clamp: Saturate to [0, 255] instead of truncating to 8 bits.

    Returns:
        Array of the same shape with dtype uint8.
    """
    scaled = np.floor(np.asarray(image, dtype=np.float64) * MAX_VALUE)
    if clamp:
        scaled = np.nan_to_num(scaled, nan=0.0)
        return np.clip(scaled, 0, MAX_VALUE).astype(np.uint8)
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=0.0, neginf=0.0)
    return np.bitwise_and(scaled.astype(np.int64), 0xFF).astype(np.uint8)


def format_pixmap(
    width: int,
    height: int,
    pixel: PixelSource,
    *,
    clamp: bool = False,
) -> str:
    """Format an image as a P2 pixel map.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        pixel: Returns the color of pixel (x, y), y = 0 at the top.
        clamp: Saturate instead of truncating out-of-range values.

    Returns:
        The complete file contents.
    """
    values = quantize(sample_pixels(width, height, pixel), clamp=clamp)
    rows = [" ".join(str(v) for v in row) for row in values.tolist()]
    return pixmap_header(width, height) + "".join(row + "\n" for row in rows)


def write_pixmap(
    width: int,
    height: int,
    pixel: PixelSource,
    path: str | os.PathLike[str] = DEFAULT_PATH,
    *,
    clamp: bool = False,
) -> None:
    """Write an image to a P2 pixel-map file.

    The whole image is formatted before the file is opened, then written in
    one go.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        pixel: Returns the color of pixel (x, y), y = 0 at the top.
        path: Output file path.
        clamp: Saturate instead of truncating out-of-range values.

    Raises:
        OSError: If the file cannot be created or written.
    """
    contents = format_pixmap(width, height, pixel, clamp=clamp)
    with open(path, "w", encoding="ascii") as f:
        f.write(contents)
