"""Image export utilities for rendered frames.

This module provides functions for saving rendered frames to files and
comparing images.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.raytracer.preview.export import save_png
    >>> frame = render_frame(camera, scene, 320, 240)
    >>> save_png(frame, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.raytracer.core.frame import Frame


def save_png(frame: Frame, filepath: str) -> None:
    """Save a rendered frame as a PNG file.

    Channels are clamped to [0, 255] and the top row of the canvas becomes
    the first row of the file.

    Args:
        frame: The Frame to save.
        filepath: Output file path (should end in .png).
    """
    save_png_from_array(frame.to_display(), filepath)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str) -> None:
    """Save an 8-bit array of shape (H, W, 3) as a PNG file."""
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)


def load_png(filepath: str) -> npt.NDArray[np.uint8]:
    """Load a PNG file as an 8-bit array of shape (H, W, 3)."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)


def compute_rmse(
    image_a: npt.NDArray[np.number],
    image_b: npt.NDArray[np.number],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
