"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def clear_device_scene():
    """Clear uploaded spheres and lights before and after each test."""
    # Import here so that Taichi is initialized before fields are declared
    from src.raytracer.core.lighting import clear_lights
    from src.raytracer.scene.intersection import clear_objects

    clear_objects()
    clear_lights()
    yield
    clear_objects()
    clear_lights()


@pytest.fixture
def ambient_red_scene():
    """Black background, one red diffuse sphere at (0, 0, 4), ambient 0.2."""
    from src.raytracer.scene.lights import AmbientLight
    from src.raytracer.scene.scene import Scene

    scene = Scene(background=(0.0, 0.0, 0.0))
    scene.add_sphere(center=(0.0, 0.0, 4.0), radius=1.0, color=(255.0, 0.0, 0.0))
    scene.add_light(AmbientLight(0.2))
    yield scene
    scene.free()
