"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. fast_math is off so
    NaN and infinity behave as IEEE floats.
    """
    ti.init(arch=ti.cpu, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the scene and render target before and after each test."""
    # Import here so the fields are created after ti.init()
    from spheretrace.core.renderer import reset_render_target
    from spheretrace.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        reset_render_target()

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def reference_scene():
    """Load the reference 4-sphere, 3-light scene."""
    from spheretrace.scene.manager import load_scene
    from spheretrace.scene.reference import create_reference_scene

    return load_scene(create_reference_scene())
