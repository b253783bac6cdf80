"""Demo scene configuration.

This module provides a factory for the built-in demo scene: three small
spheres resting on a very large sphere that acts as the floor, lit by an
ambient, a point and a directional light, with the camera at the origin
looking down +z.

The demo consists of:
- Red sphere in front (shiny), green sphere to the left (matte),
  blue sphere to the right (shiny)
- Floor: a sphere of radius 5000 just below the others
- Every sphere partly reflective
- Black background

Example:
    >>> from src.raytracer.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene(800, 600)
    >>> len(scene.objects), len(scene.lights)
    (4, 3)
"""

from src.raytracer.camera.camera import Camera
from src.raytracer.core.color import BLACK
from src.raytracer.scene.scene import Scene, SceneConfig

# =============================================================================
# Demo Scene Constants
# =============================================================================

# Default canvas size
DEMO_CANVAS_WIDTH = 800
DEMO_CANVAS_HEIGHT = 600

# Floor sphere: huge radius so it reads as a plane near the other spheres
FLOOR_RADIUS = 5000.0

DEMO_OBJECTS = [
    {"center": [0.0, -1.0, 3.0], "radius": 1.0, "color": [255.0, 0.0, 0.0],
     "specular": 500, "reflectivity": 0.2},
    {"center": [-2.0, 0.0, 4.0], "radius": 1.0, "color": [0.0, 255.0, 0.0],
     "specular": 10, "reflectivity": 0.4},
    {"center": [2.0, 0.0, 4.0], "radius": 1.0, "color": [0.0, 0.0, 255.0],
     "specular": 500, "reflectivity": 0.3},
    {"center": [0.0, -5001.0, 0.0], "radius": FLOOR_RADIUS, "color": [255.0, 255.0, 0.0],
     "specular": 1000, "reflectivity": 0.5},
]

DEMO_LIGHTS = [
    {"type": "ambient", "intensity": 0.2},
    {"type": "point", "intensity": 0.6, "position": [2.0, 1.0, 0.0]},
    {"type": "directional", "intensity": 0.2, "direction": [1.0, 4.0, 4.0]},
]


def demo_scene_config() -> SceneConfig:
    """Return the manifest of the demo scene."""
    return SceneConfig(
        background=list(BLACK.rgb()),
        objects=[dict(entry) for entry in DEMO_OBJECTS],
        lights=[dict(entry) for entry in DEMO_LIGHTS],
    )


def create_demo_scene(
    canvas_width: int = DEMO_CANVAS_WIDTH,
    canvas_height: int = DEMO_CANVAS_HEIGHT,
) -> tuple[Scene, Camera]:
    """Create the demo scene and a matching camera.

    Args:
        canvas_width: Canvas width in pixels, used for the viewport aspect.
        canvas_height: Canvas height in pixels.

    Returns:
        A tuple of (Scene, Camera) where the camera sits at the origin with
        a viewport one unit high at distance 1.
    """
    scene = Scene.from_config(demo_scene_config())
    camera = Camera.for_canvas(canvas_width, canvas_height)
    return scene, camera
