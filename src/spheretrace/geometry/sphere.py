"""Sphere primitive with geometric ray-sphere intersection.

This module provides the Sphere dataclass and two intersection routines
based on the geometric (projection) solution rather than the quadratic
formula:

    l    = center - origin
    t_ca = dot(l, direction)           # projection of the center on the ray
    d2   = dot(l, l) - t_ca^2          # squared distance from center to ray
    t_hc = sqrt(radius^2 - d2)         # half chord length
    t0, t1 = t_ca - t_hc, t_ca + t_hc

``intersect_sphere`` rejects spheres whose center projects behind the ray
origin (t_ca < 0) before solving. It is used for shaded rendering and shadow
rays. ``intersect_sphere_unculled`` skips that rejection and relies on the
root checks alone, which is what the flat (depth-only) mode uses. The two
disagree when the origin lies inside a sphere behind its center: the far
root is positive, so only the unculled variant reports a hit.

Both expect a unit-length direction. A miss is reported through
``HitRecord.hit == 0``; any NaN in the computation also ends in a miss.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 0), radius=1.0, color=0.5)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import dot

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and scalar color.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (non-negative float). Lights use 0.
        color: Unitless reflectance, or intensity for lights. [0, 1] by
            convention.
    """

    center: vec3
    radius: ti.f32
    color: ti.f32


@ti.dataclass
class HitRecord:
    """Result of a ray-sphere intersection test.

    Attributes:
        hit: 1 if the ray intersected the sphere, 0 otherwise.
        t: Distance along the ray to the intersection (>= 0).
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def _solve_from_projection(l: vec3, t_ca: ti.f32, radius: ti.f32):
    """Find the nearest non-negative root given the center projection.

    Args:
        l: Vector from the ray origin to the sphere center.
        t_ca: Projection of l onto the ray direction.
        radius: The sphere radius.

    Returns:
        Tuple of (hit, t) where hit is 1 if a root >= 0 exists.
    """
    r2 = radius * radius
    d2 = dot(l, l) - t_ca * t_ca

    did_hit = 0
    t0 = 0.0

    if d2 <= r2:
        t_hc = ti.sqrt(r2 - d2)
        t0 = t_ca - t_hc
        t1 = t_ca + t_hc

        if t0 > t1:
            temp = t0
            t0 = t1
            t1 = temp

        # Origin inside the sphere or past the near root
        if t0 < 0.0:
            t0 = t1

        if t0 >= 0.0:
            did_hit = 1

    return did_hit, t0


@ti.func
def intersect_sphere(sphere: Sphere, origin: vec3, direction: vec3) -> HitRecord:
    """Intersect a ray with a sphere, rejecting spheres behind the origin.

    Args:
        sphere: The sphere to test.
        origin: The starting point of the ray.
        direction: The unit direction of the ray.

    Returns:
        A HitRecord with the distance to the nearest intersection in front
        of the origin.
    """
    l = sphere.center - origin
    t_ca = dot(l, direction)

    did_hit = 0
    hit_t = 0.0

    if t_ca >= 0.0:
        did_hit, hit_t = _solve_from_projection(l, t_ca, sphere.radius)

    return HitRecord(hit=did_hit, t=hit_t)


@ti.func
def intersect_sphere_unculled(sphere: Sphere, origin: vec3, direction: vec3) -> HitRecord:
    """Intersect a ray with a sphere without the t_ca < 0 early rejection.

    Args:
        sphere: The sphere to test.
        origin: The starting point of the ray.
        direction: The unit direction of the ray.

    Returns:
        A HitRecord with the distance to the nearest non-negative root.
    """
    l = sphere.center - origin
    t_ca = dot(l, direction)
    did_hit, hit_t = _solve_from_projection(l, t_ca, sphere.radius)
    return HitRecord(hit=did_hit, t=hit_t)


@ti.func
def make_sphere(center: vec3, radius: ti.f32, color: ti.f32) -> Sphere:
    """Create a sphere from center, radius and color."""
    return Sphere(center=center, radius=radius, color=color)
