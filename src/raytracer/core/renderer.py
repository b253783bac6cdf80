"""Frame-by-frame renderer for driver loops.

This module provides a small wrapper around ``render_frame`` that keeps the
canvas size and reflection depth, so that a window or batch driver only
hands over the camera and scene for each frame:
- Single frame rendering
- A generator of successive frames with progress reporting
- Resizing between frames

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.renderer import Renderer
    >>> from src.raytracer.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene(320, 240)
    >>> renderer = Renderer(320, 240)
    >>> frame = renderer.render(camera, scene)
    >>> frame.save_png("demo.png")
"""

from collections.abc import Callable, Generator

from src.raytracer.camera.camera import Camera
from src.raytracer.core.engine import RECURSION_DEPTH, check_canvas_size, render_frame
from src.raytracer.core.frame import Frame

# Type alias for frame callback
# Callback receives (frames_rendered, total_frames)
FrameCallback = Callable[[int, int], None]


class Renderer:
    """Renders frames of a fixed canvas size.

    The scene is uploaded again for every frame, so a driver may move the
    camera (or rebuild the scene) between frames but never during one.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        depth: Reflection bounces per primary ray.
    """

    def __init__(self, width: int, height: int, depth: int = RECURSION_DEPTH) -> None:
        """Initialize the renderer.

        Args:
            width: Canvas width in pixels (max 2048).
            height: Canvas height in pixels (max 2048).
            depth: Reflection bounces per primary ray.

        Raises:
            ValueError: If dimensions are not supported.
        """
        check_canvas_size(width, height)
        self._width = width
        self._height = height
        self.depth = depth
        self._frame_count = 0

    @property
    def width(self) -> int:
        """Get the canvas width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the canvas height."""
        return self._height

    @property
    def frame_count(self) -> int:
        """Get the number of frames rendered so far."""
        return self._frame_count

    def resize(self, width: int, height: int) -> None:
        """Change the canvas size for subsequent frames.

        Raises:
            ValueError: If dimensions are not supported.
        """
        check_canvas_size(width, height)
        self._width = width
        self._height = height

    def render(self, camera: Camera, scene) -> Frame:
        """Render a single frame."""
        frame = render_frame(camera, scene, self._width, self._height, self.depth)
        self._frame_count += 1
        return frame

    def frames(
        self,
        camera: Camera,
        scene,
        count: int,
        callback: FrameCallback | None = None,
    ) -> Generator[Frame, None, None]:
        """Render frames one after another.

        The camera is read again for each frame, so changes made by the
        consumer between iterations show up in the next frame.

        Args:
            camera: The camera to render from.
            scene: The Scene to render.
            count: Number of frames to render.
            callback: Optional callback called after each frame with
                (frames_done, count).

        Yields:
            Each rendered Frame.
        """
        for done in range(1, count + 1):
            frame = self.render(camera, scene)
            if callback is not None:
                callback(done, count)
            yield frame

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"depth={self.depth}, frames={self.frame_count})"
        )
