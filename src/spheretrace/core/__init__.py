"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    tracer: Nearest-hit selection, shading and background policies
    renderer: Render target and the per-pixel render kernel

All compute-intensive operations use Taichi kernels.
"""

from .ray import (
    Ray,
    add,
    dot,
    length,
    make_ray,
    mul,
    normalize,
    ray_at,
    scale,
    sub,
    vec3,
)

# Note: tracer and renderer are NOT imported here. They depend on the scene
# fields, which must not be created before ti.init(). Import them directly:
#   from spheretrace.core.tracer import trace_ray
#   from spheretrace.core.renderer import render

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "sub",
    "mul",
    "scale",
    "dot",
    "length",
    "normalize",
]
