"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the small set of vector
operations the tracer needs. All operations are Taichi functions so they can
be called from inside kernels.

Vectors are single-precision ``vec3`` values with value semantics: every
operation returns a new vector. Normalizing the zero vector divides by zero
and yields non-finite components; this is IEEE behaviour and is left to
propagate.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> origin = ti.math.vec3(0.0, 1.0, 5.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 4.0)  # Point 4 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Expected to be
            unit length, but this is not enforced.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Componentwise sum a + b."""
    return a + b


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Componentwise difference a - b."""
    return a - b


@ti.func
def mul(a: vec3, b: vec3) -> vec3:
    """Elementwise product of two vectors."""
    return vec3(a.x * b.x, a.y * b.y, a.z * b.z)


@ti.func
def scale(v: vec3, k: ti.f32) -> vec3:
    """Multiply every component of v by the scalar k."""
    return vec3(v.x * k, v.y * k, v.z * k)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector, sqrt(dot(v, v))."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Computed as scale(v, 1 / length(v)). A zero-length input produces
    inf/NaN components instead of a guarded result.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return scale(v, 1.0 / length(v))
