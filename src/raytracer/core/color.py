"""Color values and output conversion.

Colors carry float channels on the 0..255 scale. While shading, channels are
free to leave that range (a light can push a channel past 255, a scale can
make it tiny); they are only clamped when written to an output buffer, using
saturating truncation: below 0 becomes 0, above 255 becomes 255, and the
fractional part is dropped.

Example:
    >>> red = Color(255.0, 0.0, 0.0)
    >>> red.scale(0.5)
    Color(r=127.5, g=0.0, b=0.0, a=255.0)
    >>> Color(300.0, -4.0, 12.7).clamped()
    (255, 0, 12, 255)
"""

from typing import NamedTuple

import numpy as np
import numpy.typing as npt

# Valid output channel range
CHANNEL_MIN = 0
CHANNEL_MAX = 255


def _saturate(value: float) -> int:
    """Clamp a channel to [0, 255] and truncate toward zero."""
    if value <= CHANNEL_MIN:
        return CHANNEL_MIN
    if value >= CHANNEL_MAX:
        return CHANNEL_MAX
    return int(value)


class Color(NamedTuple):
    """An RGBA color with unclamped float channels.

    Attributes:
        r: Red channel (nominally 0..255).
        g: Green channel (nominally 0..255).
        b: Blue channel (nominally 0..255).
        a: Alpha channel, defaults to fully opaque.
    """

    r: float
    g: float
    b: float
    a: float = 255.0

    @classmethod
    def of(cls, values) -> "Color":
        """Build a color from a 3- or 4-element sequence."""
        channels = [float(v) for v in values]
        if len(channels) not in (3, 4):
            raise ValueError(f"Color needs 3 or 4 channels, got {len(channels)}")
        return cls(*channels)

    def scale(self, intensity: float) -> "Color":
        """Scale the RGB channels by an intensity, keeping alpha."""
        return Color(self.r * intensity, self.g * intensity, self.b * intensity, self.a)

    def add(self, other: "Color") -> "Color":
        """Add RGB channels, keeping this color's alpha."""
        return Color(self.r + other.r, self.g + other.g, self.b + other.b, self.a)

    def blend(self, other: "Color", weight: float) -> "Color":
        """Mix toward another color: ``self * (1 - weight) + other * weight``."""
        return self.scale(1.0 - weight).add(other.scale(weight))

    def rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def clamped(self) -> tuple[int, int, int, int]:
        """Convert to integer output channels with saturating truncation."""
        return (
            _saturate(self.r),
            _saturate(self.g),
            _saturate(self.b),
            _saturate(self.a),
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(255.0, 255.0, 255.0)


def to_bytes(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Clamp a float image to the output range and truncate to uint8.

    Args:
        image: Array of float channels on the 0..255 scale, any shape.
            NaN channels are written as 0.

    Returns:
        Array of the same shape with dtype uint8.
    """
    clean = np.nan_to_num(image.astype(np.float32), nan=0.0)
    return np.clip(clean, CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)
