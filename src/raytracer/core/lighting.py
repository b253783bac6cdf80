"""Phong-style local illumination with shadow rays.

Lights are uploaded into Taichi fields as a tagged array: an integer kind
(ambient, point, directional), a scalar intensity and a vector that is the
position for point lights and the direction for directional lights.

For a surface point with unit normal N and view vector V, each light adds:

    ambient:      I
    diffuse:      I * (N . L)                if N . L > 0
    specular:     I * (R . V)^s              if s > 0 and R . V > 0

where L is the normalized direction toward the light and R = 2(N.L)N - L.
Point and directional lights are skipped when a shadow ray from the point
toward the light hits any sphere. The total is clamped to at most 1.0.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.lighting import compute_light_python
    >>> intensity = compute_light_python(scene, (0, 0, 3), (0, 0, -1), 0, (0, 0, -1))
"""

import logging

import taichi as ti
import taichi.math as tm

from src.raytracer.core.ray import RAY_EPSILON, T_MAX, reflect_normalized
from src.raytracer.core.vector import NORMALIZE_EPSILON, dot, magnitude, normalize
from src.raytracer.scene.intersection import is_occluded, upload_objects
from src.raytracer.scene.lights import MAX_LIGHTS, DirectionalLight, LightKind, PointLight

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Upper bound of the accumulated intensity
MAX_INTENSITY = 1.0

# Integer tags used on the device
LIGHT_AMBIENT = int(LightKind.AMBIENT)
LIGHT_POINT = int(LightKind.POINT)
LIGHT_DIRECTIONAL = int(LightKind.DIRECTIONAL)

# =============================================================================
# Taichi Fields for Light Storage
# =============================================================================

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)

# Position (point lights) or direction (directional lights); unused for ambient
light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)

num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Forget all uploaded lights."""
    num_lights[None] = 0


def upload_lights(scene) -> None:
    """Copy the scene's lights into device storage.

    Args:
        scene: The Scene whose lights to upload.

    Raises:
        RuntimeError: If the scene holds more lights than MAX_LIGHTS.
    """
    count = len(scene.lights)
    if count > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    for i, light in enumerate(scene.lights):
        light_kinds[i] = int(light.kind)
        light_intensities[i] = light.intensity
        if isinstance(light, PointLight):
            light_vectors[i] = list(light.position)
        elif isinstance(light, DirectionalLight):
            light_vectors[i] = list(light.direction)
        else:
            light_vectors[i] = [0.0, 0.0, 0.0]
    num_lights[None] = count
    logger.debug("Uploaded %d lights", count)


def get_light_count() -> int:
    """Get the number of uploaded lights."""
    return int(num_lights[None])


@ti.func
def compute_light(point: vec3, normal: vec3, specular: ti.i32, view: vec3) -> ti.f32:
    """Compute the light intensity reaching a surface point.

    Args:
        point: The shaded point in world space.
        normal: Unit outward surface normal at the point.
        specular: Specular exponent; 0 disables the highlight.
        view: Vector from the point back toward the viewer (need not be
            normalized).

    Returns:
        Total intensity in [0, 1].
    """
    total = 0.0
    view_dir = normalize(view)

    for i in range(num_lights[None]):
        kind = light_kinds[i]
        intensity = light_intensities[i]

        if kind == LIGHT_AMBIENT:
            total += intensity
        else:
            to_light = light_vectors[i]
            shadow_t_max = T_MAX
            if kind == LIGHT_POINT:
                to_light = light_vectors[i] - point

            length = magnitude(to_light)
            if length >= NORMALIZE_EPSILON:
                light_dir = to_light / length
                if kind == LIGHT_POINT:
                    shadow_t_max = length

                # Shadow ray toward the light
                if is_occluded(point, light_dir, RAY_EPSILON, shadow_t_max) == 0:
                    n_dot_l = dot(normal, light_dir)
                    if n_dot_l > 0.0:
                        total += intensity * n_dot_l

                    if specular > 0:
                        r = reflect_normalized(light_dir, normal)
                        r_dot_v = dot(r, view_dir)
                        if r_dot_v > 0.0:
                            total += intensity * ti.pow(r_dot_v, ti.cast(specular, ti.f32))

    return ti.min(total, MAX_INTENSITY)


# =============================================================================
# Python-callable wrapper
# =============================================================================


@ti.kernel
def _compute_light_kernel(point: vec3, normal: vec3, specular: ti.i32, view: vec3) -> ti.f32:
    return compute_light(point, normal, specular, view)


def compute_light_python(scene, point, normal, specular: int, view) -> float:
    """Evaluate the illumination model from Python.

    Uploads the scene's spheres (for shadow rays) and lights first.

    Args:
        scene: The Scene providing lights and occluders.
        point: Shaded point as an (x, y, z) sequence.
        normal: Unit surface normal as an (x, y, z) sequence.
        specular: Specular exponent.
        view: Vector toward the viewer as an (x, y, z) sequence.

    Returns:
        Total intensity in [0, 1].
    """
    upload_objects(scene)
    upload_lights(scene)
    return float(_compute_light_kernel(vec3(*point), vec3(*normal), specular, vec3(*view)))
