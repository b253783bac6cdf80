"""Scene container coordinating objects, lights and the background.

A Scene owns one ObjectCollection, one LightCollection and the background
color returned for rays that hit nothing. Scenes are built once (directly or
from a manifest) and treated as read-only while a frame renders.

Example:
    >>> from src.raytracer.scene.scene import Scene
    >>> from src.raytracer.scene.lights import AmbientLight
    >>> scene = Scene(background=(0, 0, 0))
    >>> scene.add_sphere(center=(0, 0, 4), radius=1.0, color=(255, 0, 0))
    0
    >>> scene.add_light(AmbientLight(0.2))
    0
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from src.raytracer.core.color import BLACK, Color
from src.raytracer.scene.collection import CapacityError
from src.raytracer.scene.lights import Light, LightCollection, light_from_dict
from src.raytracer.scene.objects import ObjectCollection, Sphere

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Manifest describing a scene.

    Attributes:
        background: Background color as [r, g, b] or [r, g, b, a].
        objects: List of sphere entries (center, radius, color, specular,
            reflectivity).
        lights: List of light entries (type, intensity, position or
            direction).
    """

    background: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    objects: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


class Scene:
    """Spheres, lights and a background color.

    Attributes:
        objects: The sphere collection, in insertion order.
        lights: The light collection, in insertion order.
        background: Color for rays that hit nothing.
    """

    def __init__(self, background: Color | tuple[float, ...] = BLACK) -> None:
        self.objects = ObjectCollection()
        self.lights = LightCollection()
        self.background = Color.of(background)

    def __repr__(self) -> str:
        return (
            f"Scene(objects={len(self.objects)}, lights={len(self.lights)}, "
            f"background={self.background.rgb()})"
        )

    # =========================================================================
    # Building
    # =========================================================================

    def add_object(self, sphere: Sphere) -> int:
        """Add a sphere and return its index.

        Raises:
            CapacityError: If the object collection cannot grow.
        """
        return self.objects.add(sphere)

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, ...],
        specular: int = 0,
        reflectivity: float = 0.0,
    ) -> int:
        """Create a sphere from its parameters and add it.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If the sphere parameters are invalid.
            CapacityError: If the object collection cannot grow.
        """
        sphere = Sphere(
            center=center,
            radius=radius,
            color=color,
            specular=specular,
            reflectivity=reflectivity,
        )
        return self.add_object(sphere)

    def add_light(self, light: Light) -> int:
        """Add a light and return its index.

        Raises:
            CapacityError: If the light collection cannot grow.
        """
        return self.lights.add(light)

    def free(self) -> None:
        """Free both collections. Safe to call more than once."""
        self.objects.free()
        self.lights.free()

    # =========================================================================
    # Manifest round trip
    # =========================================================================

    @classmethod
    def from_config(cls, config: SceneConfig) -> "Scene":
        """Build a scene from a manifest.

        Any failure frees what was built so far and re-raises, so callers
        never receive a partially populated scene.

        Args:
            config: The scene manifest.

        Returns:
            The populated scene.

        Raises:
            ValueError: If an entry is invalid or a light type is unknown.
            CapacityError: If a collection cannot grow.
        """
        scene = cls(background=Color.of(config.background))
        try:
            for entry in config.objects:
                scene.add_object(Sphere.from_dict(entry))
            for entry in config.lights:
                scene.add_light(light_from_dict(entry))
        except (ValueError, TypeError, CapacityError):
            logger.warning("Scene build aborted after %d objects, %d lights",
                           len(scene.objects), len(scene.lights))
            scene.free()
            raise
        logger.debug("Built %r", scene)
        return scene

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Build a scene from a dictionary with background/objects/lights keys."""
        config = SceneConfig(
            background=data.get("background", [0.0, 0.0, 0.0]),
            objects=data.get("objects", []),
            lights=data.get("lights", []),
        )
        return cls.from_config(config)

    def to_config(self) -> SceneConfig:
        return SceneConfig(
            background=list(self.background),
            objects=[sphere.to_dict() for sphere in self.objects],
            lights=[light.to_dict() for light in self.lights],
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "background": config.background,
            "objects": config.objects,
            "lights": config.lights,
        }
