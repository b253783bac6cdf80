"""Camera models mapping canvas pixels to ray directions.

Pixels are addressed relative to the canvas center: x runs over
[-width/2, width/2) left to right and y over [-height/2, height/2) bottom to
top. A pixel maps to the point

    (x * viewport_width / width, y * viewport_height / height, projection_distance)

on a viewport placed ``projection_distance`` in front of the camera. That
point, read as a vector from the camera, is the ray direction in camera
space. It is not normalized here; the engine normalizes before tracing.

Two models are provided:

- Camera: looks down +z with the identity basis.
- OrientedCamera: adds yaw and pitch. Its forward/right/up basis is derived
  from the angles with a fixed world up vector and recomputed on every
  angle change, and camera-space directions are rotated into world space.

Example:
    >>> camera = Camera(position=(0, 0, 0), viewport_width=1, viewport_height=1)
    >>> camera.pixel_to_ray(0, 0, 100, 100)
    Vector3(x=0.0, y=0.0, z=1.0)
"""

import math
from dataclasses import dataclass

from src.raytracer.core.vector import ZERO, Vector3

# Fixed up direction used to build the oriented camera basis
WORLD_UP = Vector3(0.0, 1.0, 0.0)

# Pitch limit keeping forward away from WORLD_UP (basis would collapse)
MAX_PITCH = math.radians(89.0)

# Yaw that makes an OrientedCamera look down +z
DEFAULT_YAW = math.pi / 2.0


@dataclass
class Camera:
    """A camera at a position looking down +z.

    Attributes:
        position: Camera position in world space; every primary ray starts
            here.
        viewport_width: Viewport width in world units.
        viewport_height: Viewport height in world units.
        projection_distance: Distance from the camera to the viewport.
    """

    position: Vector3 = ZERO
    viewport_width: float = 1.0
    viewport_height: float = 1.0
    projection_distance: float = 1.0

    def __post_init__(self) -> None:
        self.position = Vector3.of(self.position)
        if self.viewport_width <= 0.0 or self.viewport_height <= 0.0:
            raise ValueError(
                f"Viewport size must be positive, got {self.viewport_width}x{self.viewport_height}"
            )
        if self.projection_distance <= 0.0:
            raise ValueError(
                f"Projection distance must be positive, got {self.projection_distance}"
            )

    @classmethod
    def for_canvas(
        cls,
        canvas_width: int,
        canvas_height: int,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        projection_distance: float = 1.0,
    ) -> "Camera":
        """Create a camera whose viewport matches the canvas aspect ratio.

        The viewport is one unit high and ``width / height`` units wide, so
        pixels stay square.
        """
        aspect_ratio = canvas_width / canvas_height
        return cls(
            position=Vector3.of(position),
            viewport_width=aspect_ratio,
            viewport_height=1.0,
            projection_distance=projection_distance,
        )

    def basis(self) -> tuple[Vector3, Vector3, Vector3]:
        """Return the (right, up, forward) unit vectors in world space."""
        return Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0)

    def local_direction(self, pixel_x: int, pixel_y: int, canvas_width: int, canvas_height: int) -> Vector3:
        """Map a centered pixel coordinate to a camera-space direction."""
        return Vector3(
            pixel_x * self.viewport_width / canvas_width,
            pixel_y * self.viewport_height / canvas_height,
            self.projection_distance,
        )

    def pixel_to_ray(self, pixel_x: int, pixel_y: int, canvas_width: int, canvas_height: int) -> Vector3:
        """Map a centered pixel coordinate to a world-space ray direction.

        Args:
            pixel_x: Horizontal pixel offset from the canvas center.
            pixel_y: Vertical pixel offset from the canvas center (up is
                positive).
            canvas_width: Canvas width in pixels.
            canvas_height: Canvas height in pixels.

        Returns:
            The (unnormalized) ray direction.
        """
        local = self.local_direction(pixel_x, pixel_y, canvas_width, canvas_height)
        right, up, forward = self.basis()
        return right.scale(local.x).add(up.scale(local.y)).add(forward.scale(local.z))


class OrientedCamera(Camera):
    """A camera with yaw and pitch.

    The basis is recomputed whenever ``yaw`` or ``pitch`` is assigned:

        forward = (cos(yaw) cos(pitch), sin(pitch), sin(yaw) cos(pitch))
        right   = normalize(WORLD_UP x forward)
        up      = forward x right

    Pitch is clamped to [-MAX_PITCH, MAX_PITCH].

    Attributes:
        forward: Unit view direction.
        right: Unit vector pointing to the right of the view.
        up: Unit vector pointing up in the view.
    """

    def __init__(
        self,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        viewport_width: float = 1.0,
        viewport_height: float = 1.0,
        projection_distance: float = 1.0,
        yaw: float = DEFAULT_YAW,
        pitch: float = 0.0,
    ) -> None:
        super().__init__(
            position=Vector3.of(position),
            viewport_width=viewport_width,
            viewport_height=viewport_height,
            projection_distance=projection_distance,
        )
        self._yaw = yaw
        self._pitch = _clamp_pitch(pitch)
        self.update_vectors()

    def __repr__(self) -> str:
        return (
            f"OrientedCamera(position={tuple(self.position)}, yaw={self._yaw:.4f}, "
            f"pitch={self._pitch:.4f})"
        )

    @property
    def yaw(self) -> float:
        """Rotation about the world y axis, in radians."""
        return self._yaw

    @yaw.setter
    def yaw(self, value: float) -> None:
        self._yaw = value
        self.update_vectors()

    @property
    def pitch(self) -> float:
        """Elevation of the view direction, in radians."""
        return self._pitch

    @pitch.setter
    def pitch(self, value: float) -> None:
        self._pitch = _clamp_pitch(value)
        self.update_vectors()

    def turn(self, delta_yaw: float, delta_pitch: float = 0.0) -> None:
        """Rotate by the given yaw and pitch increments."""
        self._yaw += delta_yaw
        self._pitch = _clamp_pitch(self._pitch + delta_pitch)
        self.update_vectors()

    def update_vectors(self) -> None:
        """Recompute forward, right and up from yaw and pitch."""
        cos_pitch = math.cos(self._pitch)
        self.forward = Vector3(
            math.cos(self._yaw) * cos_pitch,
            math.sin(self._pitch),
            math.sin(self._yaw) * cos_pitch,
        ).normalize()
        self.right = WORLD_UP.cross(self.forward).normalize()
        self.up = self.forward.cross(self.right).normalize()

    def basis(self) -> tuple[Vector3, Vector3, Vector3]:
        return self.right, self.up, self.forward


def _clamp_pitch(pitch: float) -> float:
    return max(-MAX_PITCH, min(MAX_PITCH, pitch))
