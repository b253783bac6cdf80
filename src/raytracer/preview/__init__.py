"""Preview module for output.

This module handles writing rendered frames:

Components:
    export: PNG export and image comparison utilities

Frames are stored with y pointing up; export writes the top row first and
saturates every channel to 8 bits.

Example:
    >>> from src.raytracer.preview import save_png
    >>> save_png(frame, "output.png")
"""

from src.raytracer.preview.export import (
    compute_rmse,
    load_png,
    save_png,
    save_png_from_array,
)

__all__ = [
    "save_png",
    "save_png_from_array",
    "load_png",
    "compute_rmse",
]
