"""Scene objects: the sphere primitive and its collection.

Spheres are the only renderable primitive. ObjectKind also lists the cube
and cuboid kinds known to the scene format, but nothing can be built from
them yet.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from src.raytracer.core.color import Color
from src.raytracer.core.vector import Vector3
from src.raytracer.scene.collection import GrowableCollection

# Device storage size for spheres (see scene.intersection)
MAX_SPHERES = 1024

# Capacity reserved by the first insert
INITIAL_OBJECT_CAPACITY = 8


class ObjectKind(IntEnum):
    """Enumeration of primitive kinds.

    Only SPHERE is implemented.
    """

    SPHERE = 0
    CUBE = 1
    CUBOID = 2


@dataclass(frozen=True)
class Sphere:
    """A shaded sphere.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        color: The surface color (channels on the 0..255 scale).
        specular: Phong specular exponent; 0 disables the highlight.
        reflectivity: Fraction of the final color taken from the mirror
            reflection, in [0, 1]. 0 is fully diffuse.
    """

    center: Vector3
    radius: float
    color: Color
    specular: int = 0
    reflectivity: float = 0.0
    kind: ObjectKind = field(default=ObjectKind.SPHERE, init=False)

    def __post_init__(self) -> None:
        # Accept plain tuples for vectors and colors
        object.__setattr__(self, "center", Vector3.of(self.center))
        object.__setattr__(self, "color", Color.of(self.color))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if int(self.specular) != self.specular or self.specular < 0:
            raise ValueError(f"Specular exponent must be a non-negative integer, got {self.specular}")
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"Reflectivity must be in [0, 1], got {self.reflectivity}")
        object.__setattr__(self, "specular", int(self.specular))

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": list(self.center),
            "radius": self.radius,
            "color": list(self.color),
            "specular": self.specular,
            "reflectivity": self.reflectivity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sphere":
        """Build a sphere from a manifest entry.

        ``center`` and ``radius`` are required; the surface fields default to
        a matte, non-reflective white.

        Raises:
            ValueError: If a required field is missing or a value is invalid.
        """
        missing = [key for key in ("center", "radius") if key not in data]
        if missing:
            raise ValueError(f"Sphere entry is missing {', '.join(missing)}")
        return cls(
            center=Vector3.of(data["center"]),
            radius=data["radius"],
            color=Color.of(data.get("color", [255.0, 255.0, 255.0])),
            specular=data.get("specular", 0),
            reflectivity=data.get("reflectivity", 0.0),
        )


class ObjectCollection(GrowableCollection[Sphere]):
    """Ordered collection of spheres, bounded by the device storage size."""

    initial_capacity = INITIAL_OBJECT_CAPACITY

    def __init__(self, max_capacity: int | None = MAX_SPHERES) -> None:
        super().__init__(max_capacity)

    def _validate(self, item: Sphere) -> None:
        if not isinstance(item, Sphere):
            raise TypeError(f"ObjectCollection only holds Sphere, got {type(item).__name__}")
