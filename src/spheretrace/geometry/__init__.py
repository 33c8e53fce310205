"""Geometry module for the sphere primitive.

All intersection routines are Taichi functions (@ti.func) returning a
HitRecord with an explicit hit flag:

    rec = intersect_sphere(sphere, ray_origin, ray_direction)
"""

from .sphere import (
    HitRecord,
    Sphere,
    intersect_sphere,
    intersect_sphere_unculled,
    make_sphere,
)

__all__ = [
    "Sphere",
    "HitRecord",
    "intersect_sphere",
    "intersect_sphere_unculled",
    "make_sphere",
]
