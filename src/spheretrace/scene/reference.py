"""Reference scene configuration.

The reference scene is the standard test scene for the renderer: a very
large sphere acting as the ground plane, three unit spheres of different
reflectance resting on it, and three point lights of different intensity.

Rendered with the fixed camera it is used for the golden-value regression
tests, so the values below must not change.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from spheretrace.scene.manager import load_scene
    >>> from spheretrace.scene.reference import create_reference_scene
    >>> scene = load_scene(create_reference_scene())
"""

from spheretrace.scene.manager import LightConfig, SceneConfig, SphereConfig

# =============================================================================
# Reference Scene Constants
# =============================================================================

# Ground: radius large enough to look flat at camera scale, top surface at y = 0
GROUND = SphereConfig(center=(0.0, -1000.0, 0.0), radius=1000.0, color=0.001)

# Unit spheres resting on the ground, left to right
LEFT_SPHERE = SphereConfig(center=(-2.0, 1.0, -2.0), radius=1.0, color=1.0)
CENTER_SPHERE = SphereConfig(center=(0.0, 1.0, 0.0), radius=1.0, color=0.5)
RIGHT_SPHERE = SphereConfig(center=(2.0, 1.0, -1.0), radius=1.0, color=0.1)

REFERENCE_OBJECTS = (GROUND, LEFT_SPHERE, CENTER_SPHERE, RIGHT_SPHERE)

REFERENCE_LIGHTS = (
    LightConfig(center=(0.0, 100.0, 0.0), color=0.4),
    LightConfig(center=(100.0, 100.0, 200.0), color=0.5),
    LightConfig(center=(-100.0, 300.0, 100.0), color=0.1),
)


def create_reference_scene() -> SceneConfig:
    """Create the reference 4-sphere, 3-light scene.

    Returns:
        A fresh SceneConfig; callers may modify it without affecting the
        module constants.
    """
    return SceneConfig(objects=list(REFERENCE_OBJECTS), lights=list(REFERENCE_LIGHTS))
