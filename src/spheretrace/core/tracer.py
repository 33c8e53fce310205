"""Ray tracer: nearest-hit selection and shading.

Given a ray, the tracer finds the nearest object in the active scene and
returns a scalar color for it. Two shading modes are available:

    PHONG: ambient + per-light diffuse and specular terms with hard
        shadows. Uses the culled sphere intersection (spheres behind the
        ray origin are rejected). Rays that miss use the sky gradient
        1 - direction.y by default.
    FLAT: returns the color of the nearest object with no lighting. Uses
        the unculled sphere intersection. Rays that miss are black by
        default.

Shading model for PHONG at hit point p with normal n, object color c_o:

    c = c_o * AMBIENT_FACTOR
    for each light not blocked from p:
        cos = max(0, dot(l, n))
        c += c_o * c_light * cos * DIFFUSE_FACTOR
           + cos^SPECULAR_EXPONENT * SPECULAR_FACTOR

The result is unclamped; sinks are responsible for clamping or quantizing.

The shadow test scans every object, including the one being shaded, and is
not limited to the distance of the light. A point can therefore be shadowed
by an object lying beyond the light.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.core.tracer import trace_ray
    >>> from spheretrace.scene.manager import load_scene
    >>> from spheretrace.scene.reference import create_reference_scene
    >>> load_scene(create_reference_scene())
    >>> trace_ray((0.0, 1.0, 5.0), (0.0, 0.0, -1.0))
"""

import math
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import dot, normalize, vec3
from spheretrace.scene.intersection import (
    get_light,
    get_object,
    nearest_hit,
    num_lights,
    occluded,
)

# =============================================================================
# Shading Constants
# =============================================================================

AMBIENT_FACTOR = 0.1
DIFFUSE_FACTOR = 0.7
SPECULAR_FACTOR = 0.4
SPECULAR_EXPONENT = 70

# Color returned for missed rays under BackgroundMode.CONSTANT
BACKGROUND_COLOR = 0.0


class ShadingMode(IntEnum):
    """How a hit is turned into a color."""

    PHONG = 0
    FLAT = 1


class BackgroundMode(IntEnum):
    """Color policy for rays that hit nothing."""

    GRADIENT = 0
    CONSTANT = 1


def default_background(shading: ShadingMode) -> BackgroundMode:
    """Get the background policy used with a shading mode by default."""
    if shading == ShadingMode.FLAT:
        return BackgroundMode.CONSTANT
    return BackgroundMode.GRADIENT


def parse_shading_mode(name: str) -> ShadingMode:
    """Look up a ShadingMode by case-insensitive name.

    Raises:
        ValueError: If the name is not a shading mode.
    """
    try:
        return ShadingMode[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown shading mode: {name}") from None


def parse_background_mode(name: str) -> BackgroundMode:
    """Look up a BackgroundMode by case-insensitive name.

    Raises:
        ValueError: If the name is not a background mode.
    """
    try:
        return BackgroundMode[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown background mode: {name}") from None


# =============================================================================
# Tracing Core
# =============================================================================


@ti.func
def background(direction: vec3, mode: ti.i32) -> ti.f32:
    """Color of a ray that hits nothing.

    Args:
        direction: The unit direction of the ray.
        mode: A BackgroundMode value.

    Returns:
        1 - direction.y for GRADIENT (brighter toward the horizon),
        BACKGROUND_COLOR for CONSTANT.
    """
    result = BACKGROUND_COLOR
    if mode == int(BackgroundMode.GRADIENT):
        result = 1.0 - direction.y
    return result


@ti.func
def shade(index: ti.i32, point: vec3) -> ti.f32:
    """Compute the lit color of an object at a surface point.

    Args:
        index: Index of the object that was hit.
        point: The hit point on its surface.

    Returns:
        Ambient plus the diffuse and specular contribution of every light
        that is not blocked from the point.
    """
    sphere = get_object(index)
    normal = normalize(point - sphere.center)

    color = sphere.color * AMBIENT_FACTOR

    for j in range(num_lights[None]):
        light = get_light(j)
        to_light = normalize(light.center - point)

        if occluded(point, to_light) == 0:
            cos_theta = tm.max(0.0, dot(to_light, normal))
            diffuse = cos_theta * DIFFUSE_FACTOR
            specular = (cos_theta**SPECULAR_EXPONENT) * SPECULAR_FACTOR
            color += sphere.color * light.color * diffuse + specular

    return color


@ti.func
def trace(origin: vec3, direction: vec3, shading: ti.i32, background_mode: ti.i32) -> ti.f32:
    """Trace a single ray through the active scene.

    Args:
        origin: The starting point of the ray.
        direction: The unit direction of the ray.
        shading: A ShadingMode value.
        background_mode: A BackgroundMode value.

    Returns:
        The scalar color seen along the ray.
    """
    cull = 1
    if shading == int(ShadingMode.FLAT):
        cull = 0

    hit_record = nearest_hit(origin, direction, cull)

    color = 0.0
    if hit_record.hit == 0:
        color = background(direction, background_mode)
    elif shading == int(ShadingMode.FLAT):
        color = get_object(hit_record.index).color
    else:
        point = origin + direction * hit_record.t
        color = shade(hit_record.index, point)

    return color


@ti.kernel
def _trace_single(
    ox: ti.f32,
    oy: ti.f32,
    oz: ti.f32,
    dx: ti.f32,
    dy: ti.f32,
    dz: ti.f32,
    shading: ti.i32,
    background_mode: ti.i32,
) -> ti.f32:
    """Trace one ray. Used for testing and debugging."""
    return trace(vec3(ox, oy, oz), vec3(dx, dy, dz), shading, background_mode)


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    shading: ShadingMode = ShadingMode.PHONG,
    background: BackgroundMode | None = None,
) -> float:
    """Trace a single ray from Python.

    The direction is used as given; pass a unit vector. For whole images
    use the renderer, which traces all pixels in parallel.

    Args:
        origin: Ray origin as (x, y, z).
        direction: Unit ray direction as (x, y, z).
        shading: The shading mode.
        background: The background policy. None selects the default for
            the shading mode.

    Returns:
        The scalar color seen along the ray.
    """
    if background is None:
        background = default_background(shading)
    return float(
        _trace_single(
            origin[0],
            origin[1],
            origin[2],
            direction[0],
            direction[1],
            direction[2],
            int(shading),
            int(background),
        )
    )


def normalized(direction: tuple[float, float, float]) -> tuple[float, float, float]:
    """Normalize a Python-side direction tuple.

    Convenience for callers of trace_ray(). Like the device-side normalize,
    a zero vector is not guarded and yields non-finite components.
    """
    x, y, z = direction
    length = math.sqrt(x * x + y * y + z * z)
    inv = math.inf if length == 0.0 else 1.0 / length
    return (x * inv, y * inv, z * inv)
