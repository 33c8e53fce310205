"""Output module: sinks that turn per-pixel colors into files or text.

Components:
    sink: The shared pixel-source interface
    terminal: ASCII-art output on an 11-character ramp
    pixmap: Plain-text grayscale PGM (P2) files
    export: Grayscale PNG files via Pillow

Every sink takes ``(width, height, pixel)`` where ``pixel(x, y)`` returns a
color, so sinks are independent of the renderer.

Example:
    >>> from spheretrace.output import image_pixel_source, write_pixmap
    >>> write_pixmap(800, 600, image_pixel_source(image), "out.pgm")
"""

from spheretrace.output.export import image_to_uint8, save_png, save_png_from_array
from spheretrace.output.pixmap import format_pixmap, pixmap_header, quantize, write_pixmap
from spheretrace.output.sink import (
    SINK_NAMES,
    PixelSource,
    SinkName,
    image_pixel_source,
    sample_pixels,
)
from spheretrace.output.terminal import RAMP, color_to_symbol, format_terminal, write_terminal

__all__ = [
    # Sink interface
    "PixelSource",
    "SinkName",
    "SINK_NAMES",
    "image_pixel_source",
    "sample_pixels",
    # Terminal
    "RAMP",
    "color_to_symbol",
    "format_terminal",
    "write_terminal",
    # Pixel map
    "pixmap_header",
    "quantize",
    "format_pixmap",
    "write_pixmap",
    # PNG
    "image_to_uint8",
    "save_png",
    "save_png_from_array",
]
