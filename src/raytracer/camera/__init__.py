"""Camera module for view and ray generation.

This module provides camera models for generating primary rays:

Components:
    camera: Camera (looks down +z) and OrientedCamera (yaw/pitch)
    projection: Device-side camera state and pixel_to_ray for kernels

Camera responsibilities:
    - Map centered pixel coordinates onto a viewport at a fixed distance
    - Rotate camera-space directions into world space (oriented camera)
    - Size the viewport to the canvas aspect ratio

Pixel coordinates are centered:
    x in [-width/2, width/2): left to right
    y in [-height/2, height/2): bottom to top

``projection`` declares Taichi fields and is not imported here.
"""

from .camera import DEFAULT_YAW, MAX_PITCH, WORLD_UP, Camera, OrientedCamera

__all__ = [
    "Camera",
    "OrientedCamera",
    "WORLD_UP",
    "MAX_PITCH",
    "DEFAULT_YAW",
]
