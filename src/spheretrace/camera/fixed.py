"""Fixed camera model for primary ray generation.

The camera is not configurable: it sits at (0, 1, 5) looking down -Z with
+Y up. For pixel (x, y) of a width x height grid, where y = 0 is the top
row, the ray direction is

    normalize((x - width / 2, height / 2 - y, -height))

so the image plane is at distance ``height`` from the camera and one pixel
maps to one unit on it. The vertical field of view is therefore fixed at
about 53 degrees regardless of resolution. Reproducing an image exactly
depends on this mapping, so it must not change.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.camera.fixed import get_camera_ray
    >>> @ti.kernel
    ... def render():
    ...     ray = get_camera_ray(20, 12, 40, 25)  # Ray through the centre
"""

import taichi as ti

from spheretrace.core.ray import Ray, make_ray, normalize, vec3

# Camera position in world space
CAMERA_ORIGIN = (0.0, 1.0, 5.0)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position as a vec3."""
    return vec3(
        ti.static(CAMERA_ORIGIN[0]),
        ti.static(CAMERA_ORIGIN[1]),
        ti.static(CAMERA_ORIGIN[2]),
    )


@ti.func
def get_camera_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera origin with a unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    direction = vec3(
        ti.cast(x, ti.f32) - w / 2.0,
        h / 2.0 - ti.cast(y, ti.f32),
        -h,
    )
    return make_ray(get_camera_origin(), normalize(direction))
