"""Scene module for objects, lights and the scene container.

This module handles scene representation:

Components:
    collection: Growable collections with an explicit capacity contract
    objects: Sphere primitive, ObjectKind and ObjectCollection
    lights: Ambient/point/directional lights and LightCollection
    scene: Scene container and manifest (SceneConfig) support
    demo: The built-in demo scene
    intersection: Device-side sphere storage and closest-hit search

The scene module manages:
    - Host-side scene building with validation
    - Upload of spheres to Taichi fields (Structure of Arrays)
    - Linear closest-hit search for primary, reflected and shadow rays

``intersection`` declares Taichi fields and is not imported here; import it
after ``ti.init()``.
"""

from .collection import CapacityError, GrowableCollection
from .demo import create_demo_scene
from .lights import (
    MAX_LIGHTS,
    AmbientLight,
    DirectionalLight,
    Light,
    LightCollection,
    LightKind,
    PointLight,
    light_from_dict,
)
from .objects import MAX_SPHERES, ObjectCollection, ObjectKind, Sphere
from .scene import Scene, SceneConfig

__all__ = [
    # Collections
    "GrowableCollection",
    "CapacityError",
    # Objects
    "Sphere",
    "ObjectKind",
    "ObjectCollection",
    "MAX_SPHERES",
    # Lights
    "Light",
    "LightKind",
    "AmbientLight",
    "PointLight",
    "DirectionalLight",
    "LightCollection",
    "light_from_dict",
    "MAX_LIGHTS",
    # Scene
    "Scene",
    "SceneConfig",
    "create_demo_scene",
]
