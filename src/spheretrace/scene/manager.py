"""Scene configuration and loading.

Scenes are described by plain data (a ``SceneConfig`` holding sphere and
light records) and loaded into the Taichi scene fields in one step. Once
loaded a scene is read-only: ``Scene`` exposes what was loaded but has no
methods for adding or removing objects.

The scene fields are module-level, so only one scene is active at a time.
Loading a new scene replaces the previous one.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.scene.manager import LightConfig, SceneConfig, SphereConfig, load_scene
    >>> config = SceneConfig(
    ...     objects=[SphereConfig(center=(0.0, 1.0, 0.0), radius=1.0, color=0.5)],
    ...     lights=[LightConfig(center=(0.0, 100.0, 0.0), color=0.4)],
    ... )
    >>> scene = load_scene(config)
    >>> scene.get_object_count()
    1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from spheretrace.scene.intersection import (
    MAX_LIGHTS,
    MAX_OBJECTS,
    add_light,
    add_object,
    clear_scene,
    get_light_count,
    get_object_count,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SphereConfig:
    """A visible sphere.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (non-negative).
        color: Reflectance of the surface, [0, 1] by convention.
    """

    center: tuple[float, float, float]
    radius: float
    color: float


@dataclass(frozen=True)
class LightConfig:
    """A point light.

    Attributes:
        center: The position of the light.
        color: The light intensity.
    """

    center: tuple[float, float, float]
    color: float


@dataclass
class SceneConfig:
    """Scene description as plain data.

    Attributes:
        objects: Visible spheres, in tie-break order.
        lights: Point lights.
    """

    objects: list[SphereConfig] = field(default_factory=list)
    lights: list[LightConfig] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration as a JSON-compatible dictionary."""
        return {
            "objects": [
                {"center": list(s.center), "radius": s.radius, "color": s.color}
                for s in self.objects
            ],
            "lights": [
                {"center": list(light.center), "color": light.color}
                for light in self.lights
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build a configuration from a dictionary.

        Args:
            data: Dictionary with "objects" and "lights" lists as produced
                by to_dict().

        Returns:
            The parsed SceneConfig.

        Raises:
            ValueError: If a record is missing a field or has a malformed
                center.
        """
        objects = []
        for entry in data.get("objects", []):
            try:
                objects.append(
                    SphereConfig(
                        center=_as_point(entry["center"]),
                        radius=float(entry["radius"]),
                        color=float(entry["color"]),
                    )
                )
            except KeyError as e:
                raise ValueError(f"Object record missing field: {e}") from e

        lights = []
        for entry in data.get("lights", []):
            try:
                lights.append(
                    LightConfig(
                        center=_as_point(entry["center"]),
                        color=float(entry["color"]),
                    )
                )
            except KeyError as e:
                raise ValueError(f"Light record missing field: {e}") from e

        return cls(objects=objects, lights=lights)


def _as_point(values: Any) -> tuple[float, float, float]:
    """Convert a 3-element sequence to a float tuple."""
    if len(values) != 3:
        raise ValueError(f"Expected 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


class Scene:
    """A loaded, read-only scene.

    Instances are created by load_scene(). They mirror the contents of the
    Taichi scene fields for inspection from Python.

    Attributes:
        objects: The loaded spheres, in order.
        lights: The loaded lights, in order.
    """

    def __init__(self, objects: list[SphereConfig], lights: list[LightConfig]) -> None:
        self._objects = tuple(objects)
        self._lights = tuple(lights)

    @property
    def objects(self) -> tuple[SphereConfig, ...]:
        """The loaded spheres."""
        return self._objects

    @property
    def lights(self) -> tuple[LightConfig, ...]:
        """The loaded lights."""
        return self._lights

    def get_object_count(self) -> int:
        """Get the number of objects in the scene fields."""
        return get_object_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene fields."""
        return get_light_count()

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        return SceneConfig(objects=list(self._objects), lights=list(self._lights))

    @staticmethod
    def get_max_objects() -> int:
        """Get the maximum number of objects supported."""
        return MAX_OBJECTS

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, lights={len(self._lights)})"


def load_scene(config: SceneConfig) -> Scene:
    """Replace the active scene with the given configuration.

    Args:
        config: The scene to load.

    Returns:
        A Scene describing the loaded data.

    Raises:
        ValueError: If a sphere has a negative radius.
        RuntimeError: If the scene exceeds MAX_OBJECTS or MAX_LIGHTS.
    """
    # Validate everything before clearing the active scene
    for sphere in config.objects:
        if sphere.radius < 0.0:
            raise ValueError(f"Sphere radius must be non-negative, got {sphere.radius}")
    if len(config.objects) > MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    if len(config.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    clear_scene()
    for sphere in config.objects:
        add_object(sphere.center, sphere.radius, sphere.color)
    for light in config.lights:
        add_light(light.center, light.color)

    logger.debug(
        "Loaded scene with %d objects and %d lights",
        len(config.objects),
        len(config.lights),
    )
    return Scene(list(config.objects), list(config.lights))
