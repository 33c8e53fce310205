"""Image renderer: one primary ray per pixel into a scalar color buffer.

The render kernel's outermost loop runs over every pixel, so Taichi
schedules pixels in parallel. Each pixel is independent: it reads the
scene fields (read-only during a pass) and writes only its own buffer
entry. There is no sample accumulation; each pass overwrites the buffer.

Buffer layout is (x, y) with y = 0 the top row, matching the camera.
get_image_numpy() returns the conventional (height, width) array.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.core.renderer import (
    ...     get_image_numpy, render_image, setup_render_target
    ... )
    >>> from spheretrace.scene.manager import load_scene
    >>> from spheretrace.scene.reference import create_reference_scene
    >>>
    >>> load_scene(create_reference_scene())
    >>> setup_render_target(40, 25)
    >>> render_image()
    >>> image = get_image_numpy()  # shape (25, 40)
"""

import logging
import time
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from spheretrace.camera.fixed import get_camera_ray
from spheretrace.core.tracer import (
    BackgroundMode,
    ShadingMode,
    default_background,
    trace,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Render Settings
# =============================================================================


@dataclass
class RenderSettings:
    """Options for a render pass.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        shading: The shading mode.
        background: The background policy. None selects the default for
            the shading mode.
    """

    width: int
    height: int
    shading: ShadingMode = ShadingMode.PHONG
    background: BackgroundMode | None = None

    def resolved_background(self) -> BackgroundMode:
        """Get the background policy, applying the shading mode default."""
        if self.background is None:
            return default_background(self.shading)
        return self.background


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Scalar color per pixel (preallocated to max size)
_color_buffer = ti.field(dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum
            supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Mark the render target as not set up."""
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_pass(width: ti.i32, height: ti.i32, shading: ti.i32, background_mode: ti.i32):
    """Trace the primary ray of every pixel into the color buffer."""
    for x, y in ti.ndrange(width, height):
        ray = get_camera_ray(x, y, width, height)
        _color_buffer[x, y] = trace(ray.origin, ray.direction, shading, background_mode)


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    shading: ti.i32,
    background_mode: ti.i32,
) -> ti.f32:
    """Trace the primary ray of one pixel without touching the buffer."""
    ray = get_camera_ray(x, y, width, height)
    return trace(ray.origin, ray.direction, shading, background_mode)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(
    shading: ShadingMode = ShadingMode.PHONG,
    background: BackgroundMode | None = None,
) -> None:
    """Render the whole image into the color buffer.

    Args:
        shading: The shading mode.
        background: The background policy. None selects the default for
            the shading mode.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    if background is None:
        background = default_background(shading)

    width, height = get_image_dimensions()
    start_time = time.perf_counter()
    _render_pass(width, height, int(shading), int(background))
    ti.sync()
    logger.debug(
        "Rendered %dx%d (%s, %s) in %.3fs",
        width,
        height,
        ShadingMode(shading).name,
        BackgroundMode(background).name,
        time.perf_counter() - start_time,
    )


def render_pixel(
    x: int,
    y: int,
    shading: ShadingMode = ShadingMode.PHONG,
    background: BackgroundMode | None = None,
) -> float:
    """Render a single pixel of the current render target.

    Uses the active image dimensions for the camera mapping. The color
    buffer is not modified.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        shading: The shading mode.
        background: The background policy. None selects the default for
            the shading mode.

    Returns:
        The pixel's scalar color.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    if background is None:
        background = default_background(shading)

    width, height = get_image_dimensions()
    return float(_render_single_pixel(x, y, width, height, int(shading), int(background)))


def render(settings: RenderSettings) -> npt.NDArray[np.float32]:
    """Set up the render target, render, and return the image.

    Args:
        settings: The render options.

    Returns:
        NumPy array of shape (height, width) with the unclamped colors.
    """
    setup_render_target(settings.width, settings.height)
    render_image(settings.shading, settings.resolved_background())
    return get_image_numpy()


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are returned as computed: not clamped, and NaN where the
    geometry was degenerate.

    Returns:
        NumPy array of shape (height, width), row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    full_image = _color_buffer.to_numpy()

    # Active region, transposed from (width, height) to (height, width)
    image = full_image[:width, :height].T

    return np.ascontiguousarray(image, dtype=np.float32)
