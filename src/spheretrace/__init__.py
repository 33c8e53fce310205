"""Sphere ray tracer built on Taichi.

This package renders scenes of spheres lit by point lights, casting one ray
per pixel from a fixed camera and shading the nearest hit with ambient,
diffuse and specular terms and hard shadows.

Subpackages:
    core: Vector utilities, the tracer and the image renderer
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene storage, configuration and the reference scene
    camera: The fixed camera model
    output: Terminal, pixel-map and PNG sinks

Taichi must be initialized before importing modules that declare fields
(scene, core.tracer, core.renderer). Use ``fast_math=False`` so that NaN
and infinity follow IEEE semantics:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
"""

__version__ = "0.1.0"
