"""Sphere primitive with ray-sphere intersection.

The ray ``origin + t * direction`` meets a sphere of center C and radius r
where

    a*t^2 + b*t + c = 0

with

    oc = origin - C
    a  = dot(direction, direction)
    b  = 2 * dot(oc, direction)
    c  = dot(oc, oc) - r^2

``a`` is always computed, so directions need not be unit length. When the
discriminant ``b^2 - 4ac`` is negative there is no intersection and both
roots are NO_INTERSECTION, a value larger than any valid t.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.geometry.sphere import SphereData, intersect_sphere
    >>> # Use intersect_sphere within a Taichi kernel:
    >>> # roots = intersect_sphere(origin, direction, SphereData(center=c, radius=1.0))
"""

import taichi as ti
import taichi.math as tm

from src.raytracer.core.ray import FLT_MAX
from src.raytracer.core.vector import dot, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Root value reported when the ray misses
NO_INTERSECTION = FLT_MAX

# Directions with a squared length below this cannot define a ray
DEGENERATE_DIRECTION = 1e-12


@ti.dataclass
class SphereData:
    """Geometric part of a sphere as seen by kernels.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class IntersectionResult:
    """Both roots of the ray-sphere quadratic.

    Attributes:
        t1: The smaller root, or NO_INTERSECTION on a miss.
        t2: The larger root, or NO_INTERSECTION on a miss.
    """

    t1: ti.f32
    t2: ti.f32


@ti.func
def no_intersection() -> IntersectionResult:
    return IntersectionResult(t1=NO_INTERSECTION, t2=NO_INTERSECTION)


@ti.func
def intersect_sphere(origin: vec3, direction: vec3, sphere: SphereData) -> IntersectionResult:
    """Solve the ray-sphere quadratic.

    Args:
        origin: The starting point of the ray.
        direction: The ray direction (any non-zero length).
        sphere: The sphere to test.

    Returns:
        An IntersectionResult with ``t1 <= t2``. Both roots are
        NO_INTERSECTION when the discriminant is negative or the direction
        is degenerate. Roots are not filtered by sign; callers apply their
        own [t_min, t_max] window.
    """
    oc = origin - sphere.center

    a = dot(direction, direction)
    b = 2.0 * dot(oc, direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = b * b - 4.0 * a * c

    result = no_intersection()
    if discriminant >= 0.0 and a > DEGENERATE_DIRECTION:
        sqrt_d = ti.sqrt(discriminant)
        inv_2a = 1.0 / (2.0 * a)
        t1 = (-b - sqrt_d) * inv_2a
        t2 = (-b + sqrt_d) * inv_2a

        # Ensure t1 <= t2
        if t1 > t2:
            temp = t1
            t1 = t2
            t2 = temp

        result = IntersectionResult(t1=t1, t2=t2)

    return result


@ti.func
def sphere_normal(point: vec3, sphere: SphereData) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return normalize(point - sphere.center)


# =============================================================================
# Python-callable wrapper
# =============================================================================


@ti.kernel
def _intersect_kernel(origin: vec3, direction: vec3, center: vec3, radius: ti.f32) -> tm.vec2:
    roots = intersect_sphere(origin, direction, SphereData(center=center, radius=radius))
    return tm.vec2(roots.t1, roots.t2)


def intersect(origin, direction, center, radius: float) -> tuple[float, float]:
    """Intersect a ray with a sphere from Python.

    Args:
        origin: Ray origin as an (x, y, z) sequence.
        direction: Ray direction as an (x, y, z) sequence.
        center: Sphere center as an (x, y, z) sequence.
        radius: Sphere radius.

    Returns:
        Tuple ``(t1, t2)`` with ``t1 <= t2``; both equal NO_INTERSECTION
        on a miss.
    """
    roots = _intersect_kernel(vec3(*origin), vec3(*direction), vec3(*center), radius)
    return float(roots[0]), float(roots[1])
