"""Whitted-style ray tracing engine.

This module implements the per-pixel trace and the frame render kernel:

- ``trace_ray`` finds the closest sphere, shades it with ``compute_light``
  and follows the mirror reflection a bounded number of times, blending
  ``local * (1 - r) + reflected * r`` at every bounce.
- ``render_frame`` uploads the scene and camera, traces one primary ray per
  pixel and returns the result as a Frame.

Taichi functions cannot recurse, so the reflection chain is unrolled into a
loop that carries the weight of the current bounce. Writing c_k for the
local color and r_k for the reflectivity at bounce k, the recursive blend
expands to

    c_0 (1 - r_0) + r_0 (c_1 (1 - r_1) + r_1 (...))

so each bounce adds ``weight * (1 - r) * local`` and multiplies the weight
by r. The last bounce (depth exhausted, zero reflectivity or a miss) adds
``weight * local`` or ``weight * background``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.engine import render_frame
    >>> from src.raytracer.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene(320, 240)
    >>> frame = render_frame(camera, scene, 320, 240)
    >>> frame.save_png("demo.png")
"""

import logging
import time

import numpy as np
import taichi as ti
import taichi.math as tm

from src.raytracer.camera.camera import Camera
from src.raytracer.camera.projection import get_camera_position, pixel_to_ray, setup_camera
from src.raytracer.core.color import Color
from src.raytracer.core.frame import Frame
from src.raytracer.core.lighting import compute_light, upload_lights
from src.raytracer.core.ray import RAY_EPSILON, T_MAX, Ray, ray_at, reflect
from src.raytracer.core.vector import normalize
from src.raytracer.geometry.sphere import sphere_normal
from src.raytracer.scene.intersection import (
    find_closest,
    get_sphere,
    sphere_colors,
    sphere_reflectivities,
    sphere_speculars,
    upload_objects,
)

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Default number of reflection bounces
RECURSION_DEPTH = 3

# Maximum supported canvas (preallocated to avoid kernel recompilation)
MAX_CANVAS_WIDTH = 2048
MAX_CANVAS_HEIGHT = 2048

# Background color for rays that hit nothing
_background = ti.Vector.field(3, dtype=ti.f32, shape=())

# Frame buffer indexed [i, j]: i = 0 at the left, j = 0 at the bottom
_frame_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_CANVAS_WIDTH, MAX_CANVAS_HEIGHT))


def upload_scene(scene) -> None:
    """Copy spheres, lights and background of a scene into device storage."""
    upload_objects(scene)
    upload_lights(scene)
    _background[None] = list(scene.background.rgb())


# =============================================================================
# Ray Tracing Core
# =============================================================================


@ti.func
def trace_ray(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32, depth: ti.i32) -> vec3:
    """Trace a ray through the uploaded scene.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        t_min: Exclusive lower bound on t for the first segment.
        t_max: Exclusive upper bound on t for the first segment.
        depth: Number of reflection bounces still allowed.

    Returns:
        The RGB color (0..255 scale, unclamped) seen along the ray.
    """
    color = vec3(0.0, 0.0, 0.0)
    weight = 1.0

    ray_origin = origin
    ray_direction = direction
    lower = t_min
    upper = t_max
    remaining = depth

    # Active flag for the reflection chain (no break in ti.func loops)
    active = 1

    for _ in range(ti.max(depth, 0) + 1):
        if active == 1:
            hit = find_closest(ray_origin, ray_direction, lower, upper)

            if hit.index < 0:
                color += weight * _background[None]
                active = 0
            else:
                index = hit.index
                hit_point = ray_at(Ray(origin=ray_origin, direction=ray_direction), hit.t)
                normal = sphere_normal(hit_point, get_sphere(index))
                view = -ray_direction

                intensity = compute_light(hit_point, normal, sphere_speculars[index], view)
                local = sphere_colors[index] * intensity
                reflectivity = sphere_reflectivities[index]

                if remaining <= 0 or reflectivity <= 0.0:
                    color += weight * local
                    active = 0
                else:
                    color += weight * (1.0 - reflectivity) * local
                    weight *= reflectivity

                    # Follow the mirror direction of the view vector
                    ray_direction = reflect(normalize(view), normal)
                    ray_origin = hit_point
                    lower = RAY_EPSILON
                    upper = T_MAX
                    remaining -= 1

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame_kernel(width: ti.i32, height: ti.i32, depth: ti.i32):
    """Trace one primary ray per pixel into the frame buffer.

    Pixels are visited one after another.
    """
    ti.loop_config(serialize=True)
    for i, j in ti.ndrange(width, height):
        x = i - width // 2
        y = j - height // 2
        direction = normalize(pixel_to_ray(x, y, width, height))
        _frame_buffer[i, j] = trace_ray(get_camera_position(), direction, RAY_EPSILON, T_MAX, depth)


@ti.kernel
def _trace_ray_kernel(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32, depth: ti.i32) -> vec3:
    return trace_ray(origin, direction, t_min, t_max, depth)


# =============================================================================
# Public Rendering API
# =============================================================================


def check_canvas_size(width: int, height: int) -> None:
    """Validate a canvas size against the preallocated frame buffer.

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
    if width > MAX_CANVAS_WIDTH or height > MAX_CANVAS_HEIGHT:
        raise ValueError(
            f"Canvas dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_CANVAS_WIDTH}x{MAX_CANVAS_HEIGHT})"
        )


def render_frame(
    camera: Camera,
    scene,
    width: int,
    height: int,
    depth: int = RECURSION_DEPTH,
) -> Frame:
    """Render one frame of a scene.

    Args:
        camera: The camera; every primary ray starts at its position.
        scene: The Scene to render. It must not change during the call.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        depth: Number of reflection bounces per primary ray.

    Returns:
        The rendered Frame.

    Raises:
        ValueError: If the canvas size is not supported.
    """
    check_canvas_size(width, height)

    start = time.perf_counter()
    upload_scene(scene)
    setup_camera(camera)
    _render_frame_kernel(width, height, depth)
    data = _frame_buffer.to_numpy()[:width, :height].astype(np.float32)
    elapsed = time.perf_counter() - start

    logger.debug("Rendered %dx%d frame (depth %d) in %.3f s", width, height, depth, elapsed)
    return Frame(width=width, height=height, data=data)


def trace_ray_python(
    scene,
    origin,
    direction,
    t_min: float = RAY_EPSILON,
    t_max: float = T_MAX,
    depth: int = RECURSION_DEPTH,
) -> Color:
    """Trace a single ray from Python.

    Uploads the scene first. This is a Python-callable function for testing;
    for whole images use render_frame().

    Args:
        scene: The Scene to trace against.
        origin: Ray origin as an (x, y, z) sequence.
        direction: Ray direction as an (x, y, z) sequence.
        t_min: Exclusive lower bound on t.
        t_max: Exclusive upper bound on t.
        depth: Number of reflection bounces allowed.

    Returns:
        The traced Color (0..255 scale, unclamped).
    """
    upload_scene(scene)
    color = _trace_ray_kernel(vec3(*origin), vec3(*direction), t_min, t_max, depth)
    return Color(float(color[0]), float(color[1]), float(color[2]))
