"""Scene storage and scene-level intersection queries.

The scene is held in Taichi fields using a Structure-of-Arrays layout: one
set of fields for the visible objects and one for the point lights. Object
order matters: nearest-hit selection uses a strictly-less comparison, so on
an exact distance tie the object added first wins.

Lights are stored as spheres of radius zero whose color is the light
intensity. They are never intersected by camera rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.scene.intersection import add_object, add_light, clear_scene
    >>> clear_scene()
    >>> add_object((0.0, 1.0, 0.0), 1.0, color=0.5)
    >>> add_light((0.0, 100.0, 0.0), color=0.4)
    >>> # Use nearest_hit / occluded within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.geometry.sphere import (
    HitRecord,
    Sphere,
    intersect_sphere,
    intersect_sphere_unculled,
)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if any object was intersected, 0 otherwise.
        t: Distance along the ray to the nearest intersection.
            Only valid if hit == 1.
        index: Index of the nearest object, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    index: ti.i32


# Maximum number of objects and lights supported in the scene
MAX_OBJECTS = 1024
MAX_LIGHTS = 64

# Object storage
object_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_colors = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Light storage (radius is always zero)
light_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all objects and lights.

    Resets the counts to zero. Field data is overwritten by later adds.
    """
    num_objects[None] = 0
    num_lights[None] = 0


def add_object(
    center: tuple[float, float, float],
    radius: float,
    color: float,
) -> int:
    """Append a visible sphere to the scene.

    Args:
        center: The center point of the sphere as (x, y, z).
        radius: The radius of the sphere. Must not be negative.
        color: The sphere's reflectance.

    Returns:
        The index of the added object.

    Raises:
        ValueError: If radius is negative.
        RuntimeError: If the maximum number of objects is exceeded.
    """
    if radius < 0.0:
        raise ValueError(f"Sphere radius must be non-negative, got {radius}")
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    object_centers[idx] = [center[0], center[1], center[2]]
    object_radii[idx] = radius
    object_colors[idx] = color
    num_objects[None] = idx + 1
    return idx


def add_light(center: tuple[float, float, float], color: float) -> int:
    """Append a point light to the scene.

    Args:
        center: The light position as (x, y, z).
        color: The light intensity.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_centers[idx] = [center[0], center[1], center[2]]
    light_colors[idx] = color
    num_lights[None] = idx + 1
    return idx


def get_object_count() -> int:
    """Get the number of objects in the scene."""
    return int(num_objects[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_object(i: ti.i32) -> Sphere:
    """Load object i from the scene fields."""
    return Sphere(center=object_centers[i], radius=object_radii[i], color=object_colors[i])


@ti.func
def get_light(i: ti.i32) -> Sphere:
    """Load light i from the scene fields."""
    return Sphere(center=light_centers[i], radius=0.0, color=light_colors[i])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(hit=0, t=0.0, index=-1)


@ti.func
def nearest_hit(origin: vec3, direction: vec3, cull: ti.i32) -> SceneHitRecord:
    """Find the nearest object hit by a ray.

    Scans every object in order and keeps the smallest distance. Ties keep
    the earlier object.

    Args:
        origin: The starting point of the ray.
        direction: The unit direction of the ray.
        cull: 1 to use intersect_sphere, 0 to use intersect_sphere_unculled.

    Returns:
        A SceneHitRecord for the nearest object, or a miss record.
    """
    result = _make_miss_record()

    for i in range(num_objects[None]):
        sphere = get_object(i)
        rec = HitRecord(hit=0, t=0.0)
        if cull == 1:
            rec = intersect_sphere(sphere, origin, direction)
        else:
            rec = intersect_sphere_unculled(sphere, origin, direction)

        if rec.hit == 1:
            if result.hit == 0 or rec.t < result.t:
                result = SceneHitRecord(hit=1, t=rec.t, index=i)

    return result


@ti.func
def occluded(origin: vec3, direction: vec3) -> ti.i32:
    """Test whether a shadow ray hits any object.

    Every object is tested, including the one the ray starts on, and hits
    are not limited to the distance of the light.

    Args:
        origin: The starting point of the shadow ray.
        direction: The unit direction toward the light.

    Returns:
        1 if any object was hit, 0 otherwise.
    """
    hit_any = 0

    for i in range(num_objects[None]):
        if hit_any == 0:
            rec = intersect_sphere(get_object(i), origin, direction)
            if rec.hit == 1:
                hit_any = 1

    return hit_any
