"""Render the reference scene from the command line.

Usage:
    spheretrace [options]
    python -m spheretrace [options]

Options:
    --sink SINK             terminal, pixmap or png (default: terminal)
    --width WIDTH           Image width in pixels (default: 40 for the
                            terminal, 800 for file sinks)
    --height HEIGHT         Image height in pixels (default: 25 for the
                            terminal, 600 for file sinks)
    --output OUTPUT         Output file path for file sinks
                            (default: out.pgm / out.png)
    --shading MODE          phong or flat (default: phong)
    --background MODE       gradient or constant (default: depends on the
                            shading mode)
    --arch ARCH             Taichi backend, cpu or gpu (default: cpu)
    --quiet                 Suppress progress output
    --verbose               Log scene loads and render timings

Example:
    spheretrace --sink pixmap --output scene.pgm
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import TextIO

import taichi as ti

from spheretrace.output import export, pixmap, terminal
from spheretrace.output.sink import SINK_NAMES, image_pixel_source


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--sink",
        choices=SINK_NAMES,
        default="terminal",
        help="Output sink (default: terminal)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: 40 for terminal, 800 otherwise)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: 25 for terminal, 600 otherwise)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path for file sinks (default: out.pgm / out.png)",
    )
    parser.add_argument(
        "--shading",
        choices=["phong", "flat"],
        default="phong",
        help="Shading mode (default: phong)",
    )
    parser.add_argument(
        "--background",
        choices=["gradient", "constant"],
        default=None,
        help="Background for rays that miss (default: gradient for phong, constant for flat)",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log scene loads and render timings",
    )
    return parser.parse_args(argv)


def default_dimensions(sink: str) -> tuple[int, int]:
    """Get the default (width, height) for a sink."""
    if sink == "terminal":
        return terminal.DEFAULT_WIDTH, terminal.DEFAULT_HEIGHT
    return pixmap.DEFAULT_WIDTH, pixmap.DEFAULT_HEIGHT


def default_output_path(sink: str) -> str | None:
    """Get the default output path for a sink, None for the terminal."""
    if sink == "pixmap":
        return pixmap.DEFAULT_PATH
    if sink == "png":
        return export.DEFAULT_PATH
    return None


def render_reference_scene(
    sink: str = "terminal",
    width: int | None = None,
    height: int | None = None,
    output_path: str | None = None,
    shading: str = "phong",
    background: str | None = None,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> Path | None:
    """Render the reference scene and write it to a sink.

    Taichi must already be initialized.

    Args:
        sink: One of "terminal", "pixmap" or "png".
        width: Image width in pixels. None uses the sink default.
        height: Image height in pixels. None uses the sink default.
        output_path: Output file for file sinks. None uses the sink default.
        shading: Shading mode name ("phong" or "flat").
        background: Background mode name ("gradient" or "constant"), or
            None for the shading mode's default.
        quiet: If True, suppress progress output.
        stream: Destination for the terminal sink. Defaults to sys.stdout.

    Returns:
        Path to the written file, or None for the terminal sink.

    Raises:
        ValueError: If the sink or a mode name is unknown, or the
            dimensions are invalid.
        OSError: If the output file cannot be written.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.core.renderer import RenderSettings, render
    from spheretrace.core.tracer import parse_background_mode, parse_shading_mode
    from spheretrace.scene.manager import load_scene
    from spheretrace.scene.reference import create_reference_scene

    if sink not in SINK_NAMES:
        raise ValueError(f"Unknown sink: {sink}")

    default_width, default_height = default_dimensions(sink)
    settings = RenderSettings(
        width=width if width is not None else default_width,
        height=height if height is not None else default_height,
        shading=parse_shading_mode(shading),
        background=parse_background_mode(background) if background is not None else None,
    )

    # Progress goes to stderr when the image itself is going to stdout
    log_stream = sys.stderr if sink == "terminal" else sys.stdout

    def log(message: str) -> None:
        if not quiet:
            print(message, file=log_stream)

    log(f"Loading reference scene ({settings.width}x{settings.height})...")
    load_scene(create_reference_scene())

    start_time = time.time()
    image = render(settings)
    log(f"Rendered in {time.time() - start_time:.2f}s")

    pixel = image_pixel_source(image)

    if sink == "terminal":
        terminal.write_terminal(settings.width, settings.height, pixel, stream)
        return None

    output_file = Path(output_path if output_path is not None else default_output_path(sink))
    if sink == "pixmap":
        pixmap.write_pixmap(settings.width, settings.height, pixel, output_file)
    else:
        export.save_png(settings.width, settings.height, pixel, output_file)

    log(f"Saved to: {output_file.absolute()}")
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    arch = ti.gpu if args.arch == "gpu" else ti.cpu
    ti.init(arch=arch, fast_math=False)

    try:
        render_reference_scene(
            sink=args.sink,
            width=args.width,
            height=args.height,
            output_path=args.output,
            shading=args.shading,
            background=args.background,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
