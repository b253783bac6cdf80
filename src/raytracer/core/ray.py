"""Ray data structure and reflection helpers for Taichi kernels.

A ray is an origin plus a direction. Directions handed to the intersection
code do not have to be unit length (the quadratic's ``a`` coefficient is
always computed), but the engine normalizes primary and reflected rays so
that every t value along a ray is a world-space distance.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

from src.raytracer.core.vector import Vector3, dot, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Largest finite f32; the "no limit" ray length and the miss sentinel
FLT_MAX = 3.4028234663852886e38

# Bias applied to t_min for every ray so that it does not re-hit the
# surface it starts on
RAY_EPSILON = 0.05

# Upper t bound for unbounded rays (primary, reflected, directional shadow)
T_MAX = FLT_MAX


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3).
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


@ti.func
def reflect(v: vec3, normal: vec3) -> vec3:
    """Mirror a vector about a surface normal.

    Uses ``R = 2 (N . V) N - V``. Both the incoming vector and the result
    point away from the surface, which is the convention for light and view
    vectors during shading.

    Args:
        v: The vector to mirror (pointing away from the surface).
        normal: The unit surface normal.

    Returns:
        The mirrored vector, with the same length as v.
    """
    return 2.0 * dot(normal, v) * normal - v


@ti.func
def reflect_normalized(v: vec3, normal: vec3) -> vec3:
    """Mirror a vector about a normal and normalize the result."""
    return normalize(reflect(v, normal))


def reflect_host(v: Vector3, normal: Vector3) -> Vector3:
    """Host-side twin of ``reflect`` for Python callers and tests."""
    return normal.scale(2.0 * normal.dot(v)).subtract(v)
