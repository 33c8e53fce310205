"""Terminal sink: render colors as ASCII art.

Each color is mapped onto an 11-character ramp from dark to bright and
printed twice, since terminal cells are roughly twice as tall as they are
wide. Every row ends with a newline.

Example:
    >>> from spheretrace.output.terminal import format_terminal
    >>> print(format_terminal(4, 2, lambda x, y: x / 4.0), end="")
      ::++##
      ::++##
"""

from __future__ import annotations

import math
import sys
from typing import TextIO

from spheretrace.output.sink import PixelSource

# Characters ordered from darkest to brightest
RAMP = " .:-=+*#%@$"

# Each pixel is printed this many times per row
CHARS_PER_PIXEL = 2

DEFAULT_WIDTH = 40
DEFAULT_HEIGHT = 25


def color_to_symbol(color: float) -> str:
    """Map a color to its ramp character.

    The index is floor(color * 10) clamped to the ramp. NaN maps to the
    darkest character.

    Args:
        color: The pixel color, nominally in [0, 1].

    Returns:
        A single ramp character.
    """
    if math.isnan(color):
        return RAMP[0]
    scaled = color * (len(RAMP) - 1)
    if scaled <= 0.0:
        return RAMP[0]
    if scaled >= len(RAMP) - 1:
        return RAMP[-1]
    return RAMP[int(math.floor(scaled))]


def format_terminal(width: int, height: int, pixel: PixelSource) -> str:
    """Format an image as ASCII art.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        pixel: Returns the color of pixel (x, y), y = 0 at the top.

    Returns:
        The text, one line per image row, each ending in a newline.
    """
    lines = []
    for y in range(height):
        row = "".join(color_to_symbol(pixel(x, y)) * CHARS_PER_PIXEL for x in range(width))
        lines.append(row + "\n")
    return "".join(lines)


def write_terminal(
    width: int,
    height: int,
    pixel: PixelSource,
    stream: TextIO | None = None,
) -> None:
    """Write an image as ASCII art to a text stream.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        pixel: Returns the color of pixel (x, y), y = 0 at the top.
        stream: Destination stream. Defaults to sys.stdout.
    """
    if stream is None:
        stream = sys.stdout
    stream.write(format_terminal(width, height, pixel))
    stream.flush()
