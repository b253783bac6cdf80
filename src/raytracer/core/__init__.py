"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Host-side Vector3 and device-side vec3 helpers
    color: Color values and saturating output conversion
    ray: Ray data structure, reflection and ray constants
    lighting: Light storage on the device and the Phong illumination model
    engine: Closest-hit tracing with bounded reflection and frame rendering
    frame: Rendered frame wrapper with display conversion
    renderer: Frame-by-frame Renderer for driver loops

Only the host-side value types are imported here. ``lighting``, ``engine``
and ``renderer`` declare or use Taichi fields and must be imported after
``ti.init()``.
"""

from .color import BLACK, WHITE, Color, to_bytes
from .frame import Frame
from .vector import NORMALIZE_EPSILON, ZERO, Vector3

__all__ = [
    "Vector3",
    "ZERO",
    "NORMALIZE_EPSILON",
    "Color",
    "BLACK",
    "WHITE",
    "to_bytes",
    "Frame",
]
