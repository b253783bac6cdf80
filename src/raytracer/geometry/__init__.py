"""Geometry module for shape primitives.

This module provides the sphere primitive and its intersection algorithm:

Components:
    sphere: Sphere data as seen by kernels and the ray-sphere quadratic

Spheres are the only supported primitive. Intersection routines are Taichi
functions (@ti.func) returning both roots of the quadratic; the closest-hit
search in ``scene.intersection`` chooses between them.

Ray-object intersection follows the pattern:
    roots = intersect_sphere(ray_origin, ray_direction, sphere_data)
"""

from .sphere import (
    NO_INTERSECTION,
    IntersectionResult,
    SphereData,
    intersect,
    intersect_sphere,
    sphere_normal,
)

__all__ = [
    "SphereData",
    "IntersectionResult",
    "NO_INTERSECTION",
    "intersect",
    "intersect_sphere",
    "sphere_normal",
]
