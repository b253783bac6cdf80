"""Light sources and the light collection.

A light is one of three frozen dataclasses, each carrying only its own
fields:

- AmbientLight: a constant contribution, never shadow-tested.
- PointLight: emits from a world-space position.
- DirectionalLight: parallel rays; ``direction`` points from the surface
  toward the light and is normalized at use, not at construction.

``Light`` is the union of the three. LightKind gives each variant the
integer tag used by the device-side light table.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union

from src.raytracer.core.vector import Vector3
from src.raytracer.scene.collection import GrowableCollection

# Device storage size for lights (see core.lighting)
MAX_LIGHTS = 64

# Capacity reserved by the first insert
INITIAL_LIGHT_CAPACITY = 4


class LightKind(IntEnum):
    """Device-side tag for each light variant."""

    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2


def _check_intensity(intensity: float) -> None:
    if intensity < 0.0:
        raise ValueError(f"Light intensity must be non-negative, got {intensity}")


@dataclass(frozen=True)
class AmbientLight:
    """Uniform light reaching every surface point.

    Attributes:
        intensity: Scalar intensity added to every shaded point.
    """

    intensity: float

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)

    @property
    def kind(self) -> LightKind:
        return LightKind.AMBIENT

    def to_dict(self) -> dict[str, Any]:
        return {"type": "ambient", "intensity": self.intensity}


@dataclass(frozen=True)
class PointLight:
    """Light emitted from a single point.

    Attributes:
        intensity: Scalar intensity.
        position: World-space position of the light.
    """

    intensity: float
    position: Vector3

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)
        object.__setattr__(self, "position", Vector3.of(self.position))

    @property
    def kind(self) -> LightKind:
        return LightKind.POINT

    def to_dict(self) -> dict[str, Any]:
        return {"type": "point", "intensity": self.intensity, "position": list(self.position)}


@dataclass(frozen=True)
class DirectionalLight:
    """Light arriving along parallel rays.

    Attributes:
        intensity: Scalar intensity.
        direction: Vector from any surface point toward the light. Stored
            as given.
    """

    intensity: float
    direction: Vector3

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)
        object.__setattr__(self, "direction", Vector3.of(self.direction))

    @property
    def kind(self) -> LightKind:
        return LightKind.DIRECTIONAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "directional",
            "intensity": self.intensity,
            "direction": list(self.direction),
        }


Light = Union[AmbientLight, PointLight, DirectionalLight]

LIGHT_TYPES = (AmbientLight, PointLight, DirectionalLight)


def _required(data: dict[str, Any], key: str, light_type: str) -> Any:
    if key not in data:
        raise ValueError(f"A {light_type} light needs a '{key}'")
    return data[key]


def light_from_dict(data: dict[str, Any]) -> Light:
    """Build a light from a manifest entry.

    Args:
        data: Dictionary with a ``type`` of "ambient", "point" or
            "directional", an ``intensity``, and a ``position`` or
            ``direction`` where the type needs one.

    Returns:
        The light value.

    Raises:
        ValueError: If the type is unknown, the intensity is negative, or the
            position or direction the type needs is missing.
    """
    light_type = data.get("type", "").lower()
    intensity = data.get("intensity", 1.0)
    if light_type == "ambient":
        return AmbientLight(intensity)
    elif light_type == "point":
        return PointLight(intensity, Vector3.of(_required(data, "position", light_type)))
    elif light_type == "directional":
        return DirectionalLight(intensity, Vector3.of(_required(data, "direction", light_type)))
    else:
        raise ValueError(f"Unknown light type: {light_type}")


class LightCollection(GrowableCollection[Light]):
    """Ordered collection of lights, bounded by the device storage size."""

    initial_capacity = INITIAL_LIGHT_CAPACITY

    def __init__(self, max_capacity: int | None = MAX_LIGHTS) -> None:
        super().__init__(max_capacity)

    def _validate(self, item: Light) -> None:
        if not isinstance(item, LIGHT_TYPES):
            raise TypeError(f"LightCollection only holds lights, got {type(item).__name__}")
