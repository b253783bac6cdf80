"""Device-side camera state and pixel-to-ray mapping for kernels.

``setup_camera`` copies a Camera (plain or oriented) into Taichi fields and
``pixel_to_ray`` reproduces ``Camera.pixel_to_ray`` inside kernels. The
plain camera uploads the identity basis, so both models share one device
code path.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.camera.camera import Camera
    >>> from src.raytracer.camera.projection import setup_camera, pixel_to_ray
    >>> setup_camera(Camera.for_canvas(640, 480))
    >>> @ti.kernel
    ... def render():
    ...     direction = pixel_to_ray(0, 0, 640, 480)  # Ray through the center
"""

import taichi as ti
import taichi.math as tm

from src.raytracer.camera.camera import Camera

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

# Camera origin (position)
_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())

# Orthonormal basis vectors
_camera_right = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_up = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_forward = ti.Vector.field(3, dtype=ti.f32, shape=())

# Viewport as (width, height, projection distance)
_viewport = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Upload camera state for use in kernels.

    Must be called again after the camera moves or turns; the render entry
    points do this on every frame.

    Args:
        camera: The camera to upload.
    """
    right, up, forward = camera.basis()
    _camera_position[None] = list(camera.position)
    _camera_right[None] = list(right)
    _camera_up[None] = list(up)
    _camera_forward[None] = list(forward)
    _viewport[None] = [camera.viewport_width, camera.viewport_height, camera.projection_distance]


@ti.func
def get_camera_position() -> vec3:
    """Get the camera position in world space."""
    return _camera_position[None]


@ti.func
def pixel_to_ray(pixel_x: ti.i32, pixel_y: ti.i32, canvas_width: ti.i32, canvas_height: ti.i32) -> vec3:
    """Map a centered pixel coordinate to a world-space ray direction.

    Args:
        pixel_x: Horizontal offset from the canvas center.
        pixel_y: Vertical offset from the canvas center (up is positive).
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.

    Returns:
        The unnormalized ray direction.
    """
    viewport = _viewport[None]
    local_x = ti.cast(pixel_x, ti.f32) * viewport[0] / ti.cast(canvas_width, ti.f32)
    local_y = ti.cast(pixel_y, ti.f32) * viewport[1] / ti.cast(canvas_height, ti.f32)
    local_z = viewport[2]
    return local_x * _camera_right[None] + local_y * _camera_up[None] + local_z * _camera_forward[None]


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging.

    Returns:
        Dictionary with position, right, up, forward and viewport.
    """

    def as_tuple(field) -> tuple[float, float, float]:
        value = field[None]
        return (float(value[0]), float(value[1]), float(value[2]))

    return {
        "position": as_tuple(_camera_position),
        "right": as_tuple(_camera_right),
        "up": as_tuple(_camera_up),
        "forward": as_tuple(_camera_forward),
        "viewport": as_tuple(_viewport),
    }
