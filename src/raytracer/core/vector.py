"""3D vector algebra for the host side and for Taichi kernels.

Two flavours of the same operations live here:

- ``Vector3``: an immutable host-side value used for scene manifests, camera
  setup and tests. Computation happens in Python floats.
- ``@ti.func`` helpers over ``ti.math.vec3`` used inside kernels. These run in
  single precision.

Both normalize with the same rule: a vector shorter than NORMALIZE_EPSILON
normalizes to the zero vector instead of producing NaN or Inf.

Example:
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.magnitude()
    5.0
    >>> v.normalize()
    Vector3(x=0.6, y=0.0, z=0.8)
"""

import math
from typing import NamedTuple

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Magnitudes below this normalize to the zero vector
NORMALIZE_EPSILON = 1e-8


class Vector3(NamedTuple):
    """An immutable 3D vector.

    All operations return new vectors.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def of(cls, values) -> "Vector3":
        """Build a vector from any 3-element sequence."""
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def add(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def negate(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude_squared(self) -> float:
        return self.dot(self)

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalize(self) -> "Vector3":
        """Return the unit vector in the same direction.

        Returns:
            The normalized vector, or the zero vector if the magnitude is
            below NORMALIZE_EPSILON.
        """
        magnitude = self.magnitude()
        if magnitude < NORMALIZE_EPSILON:
            return ZERO
        return Vector3(self.x / magnitude, self.y / magnitude, self.z / magnitude)


ZERO = Vector3(0.0, 0.0, 0.0)


# =============================================================================
# Device-side vector functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    return tm.dot(a, b)


@ti.func
def magnitude(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike ``tm.normalize``, a vector whose magnitude is below
    NORMALIZE_EPSILON yields the zero vector rather than NaN.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or the zero vector.
    """
    length = magnitude(v)
    result = vec3(0.0, 0.0, 0.0)
    if length >= NORMALIZE_EPSILON:
        result = v / length
    return result
