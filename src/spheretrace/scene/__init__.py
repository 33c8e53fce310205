"""Scene module for scene storage and configuration.

Components:
    intersection: Taichi field storage, nearest-hit and shadow queries
    manager: SceneConfig records and one-shot scene loading
    reference: The reference 4-sphere, 3-light scene

Scene data is organized for efficient GPU access using a
Structure-of-Arrays layout, one set of fields for objects and one for
lights.
"""

from .intersection import (
    MAX_LIGHTS,
    MAX_OBJECTS,
    SceneHitRecord,
    add_light,
    add_object,
    clear_scene,
    get_light_count,
    get_object_count,
    nearest_hit,
    occluded,
)
from .manager import (
    LightConfig,
    Scene,
    SceneConfig,
    SphereConfig,
    load_scene,
)
from .reference import create_reference_scene

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_object",
    "add_light",
    "clear_scene",
    "get_object_count",
    "get_light_count",
    "nearest_hit",
    "occluded",
    "MAX_OBJECTS",
    "MAX_LIGHTS",
    # Manager module
    "Scene",
    "SceneConfig",
    "SphereConfig",
    "LightConfig",
    "load_scene",
    # Reference scene
    "create_reference_scene",
]
