"""Camera module for primary ray generation.

Components:
    fixed: The fixed camera at (0, 1, 5) looking down -Z
"""

from .fixed import CAMERA_ORIGIN, get_camera_origin, get_camera_ray

__all__ = [
    "CAMERA_ORIGIN",
    "get_camera_origin",
    "get_camera_ray",
]
