"""Rendered frame buffer.

A Frame holds the traced colors of one render as a float array of shape
(width, height, 3), indexed like the device buffer: column i from the left,
row j from the bottom, channels on the 0..255 scale and not yet clamped.

Callers address pixels the way the renderer does, relative to the canvas
center with y pointing up. ``to_display`` converts to the usual image
layout (rows from the top) and clamps to 8 bits.

Example:
    >>> frame = render_frame(camera, scene, 4, 2)
    >>> frame.pixel(0, 0)  # The pixel just up and right of the center
    Color(r=..., g=..., b=..., a=255.0)
    >>> frame.to_display().shape
    (2, 4, 3)
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.raytracer.core.color import Color, to_bytes


@dataclass
class Frame:
    """A rendered image.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        data: Float array of shape (width, height, 3).
    """

    width: int
    height: int
    data: npt.NDArray[np.float32]

    def __post_init__(self) -> None:
        expected = (self.width, self.height, 3)
        if self.data.shape != expected:
            raise ValueError(f"Frame data must have shape {expected}, got {self.data.shape}")

    def __repr__(self) -> str:
        return f"Frame(width={self.width}, height={self.height})"

    def pixel(self, x: int, y: int) -> Color:
        """Get the color of a centered pixel coordinate.

        Args:
            x: Horizontal offset in [-width/2, width/2).
            y: Vertical offset in [-height/2, height/2), up is positive.

        Returns:
            The unclamped color.

        Raises:
            IndexError: If the coordinate lies outside the canvas.
        """
        i = x + self.width // 2
        j = y + self.height // 2
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        r, g, b = self.data[i, j]
        return Color(float(r), float(g), float(b))

    def to_display(self) -> npt.NDArray[np.uint8]:
        """Convert to an 8-bit image of shape (height, width, 3).

        Row 0 is the top of the canvas. Channels saturate to [0, 255].
        """
        # (w, h, 3) -> (h, w, 3), then flip so the top row comes first
        image = np.transpose(self.data, (1, 0, 2))[::-1]
        return to_bytes(np.ascontiguousarray(image))

    def save_png(self, filepath: str) -> None:
        """Save the frame as an 8-bit PNG file."""
        from src.raytracer.preview.export import save_png

        save_png(self, filepath)
