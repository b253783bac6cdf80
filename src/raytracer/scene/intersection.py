"""Scene-level closest-hit search over the uploaded spheres.

The spheres of a Scene are copied into Taichi fields (Structure of Arrays)
before rendering. ``find_closest`` scans them linearly in collection order
and returns the nearest root inside the open interval (t_min, t_max). The
same search serves primary rays, reflected rays and shadow rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.scene.intersection import upload_objects, find_closest_python
    >>> upload_objects(scene)
    >>> index, t = find_closest_python(scene, (0, 0, 0), (0, 0, 1), 0.001, 1e30)
"""

import logging

import taichi as ti
import taichi.math as tm

from src.raytracer.geometry.sphere import NO_INTERSECTION, SphereData, intersect_sphere
from src.raytracer.scene.objects import MAX_SPHERES

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class ClosestHit:
    """Result of a closest-hit search.

    Attributes:
        index: Index of the hit sphere in the object collection, or -1 when
            nothing was hit.
        t: Ray parameter of the hit, or NO_INTERSECTION.
    """

    index: ti.i32
    t: ti.f32


# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_speculars = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
sphere_reflectivities = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_objects() -> None:
    """Forget all uploaded spheres."""
    num_spheres[None] = 0


def upload_objects(scene) -> None:
    """Copy the scene's spheres into device storage.

    Previous contents are overwritten; the sphere order matches the
    collection order, which is what the tie-break relies on.

    Args:
        scene: The Scene whose objects to upload.

    Raises:
        RuntimeError: If the scene holds more spheres than MAX_SPHERES.
    """
    count = len(scene.objects)
    if count > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    for i, sphere in enumerate(scene.objects):
        sphere_centers[i] = list(sphere.center)
        sphere_radii[i] = sphere.radius
        sphere_colors[i] = list(sphere.color.rgb())
        sphere_speculars[i] = sphere.specular
        sphere_reflectivities[i] = sphere.reflectivity
    num_spheres[None] = count
    logger.debug("Uploaded %d spheres", count)


def get_object_count() -> int:
    """Get the number of uploaded spheres."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> SphereData:
    return SphereData(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def find_closest(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> ClosestHit:
    """Find the nearest sphere hit by a ray.

    Both roots of every sphere are tested. A root counts only if it lies in
    the open interval (t_min, t_max) and is strictly smaller than the best
    so far, so the first sphere in collection order wins ties.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Exclusive lower bound on t (a small positive bias).
        t_max: Exclusive upper bound on t.

    Returns:
        A ClosestHit; ``index`` is -1 when nothing was hit.
    """
    closest_index = -1
    closest_t = NO_INTERSECTION

    for i in range(num_spheres[None]):
        roots = intersect_sphere(ray_origin, ray_direction, get_sphere(i))
        if t_min < roots.t1 < t_max and roots.t1 < closest_t:
            closest_t = roots.t1
            closest_index = i
        if t_min < roots.t2 < t_max and roots.t2 < closest_t:
            closest_t = roots.t2
            closest_index = i

    return ClosestHit(index=closest_index, t=closest_t)


@ti.func
def is_occluded(point: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32) -> ti.i32:
    """Check whether anything lies between point and point + t_max * direction."""
    return find_closest(point, direction, t_min, t_max).index >= 0


# =============================================================================
# Python-callable wrapper
# =============================================================================


@ti.kernel
def _find_closest_kernel(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32) -> tm.vec2:
    hit = find_closest(origin, direction, t_min, t_max)
    return tm.vec2(ti.cast(hit.index, ti.f32), hit.t)


def find_closest_python(scene, origin, direction, t_min: float, t_max: float) -> tuple[int | None, float]:
    """Run the closest-hit search from Python.

    Uploads the scene's spheres first.

    Args:
        scene: The Scene to search.
        origin: Ray origin as an (x, y, z) sequence.
        direction: Ray direction as an (x, y, z) sequence.
        t_min: Exclusive lower bound on t.
        t_max: Exclusive upper bound on t.

    Returns:
        Tuple ``(index, t)``; index is None (and t is NO_INTERSECTION) when
        nothing was hit.
    """
    upload_objects(scene)
    result = _find_closest_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    index = int(round(float(result[0])))
    if index < 0:
        return None, float(result[1])
    return index, float(result[1])
