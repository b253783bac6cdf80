"""Unit tests for frames, the Renderer and PNG export.

Tests cover:
- Centered pixel addressing
- Display conversion (flip, clamp, dtype)
- PNG round trip through Pillow
- Renderer frame loop, callbacks and resizing
- Image comparison helpers
"""

import numpy as np
import pytest

from src.raytracer.camera.camera import Camera, OrientedCamera
from src.raytracer.core.color import Color
from src.raytracer.core.frame import Frame
from src.raytracer.preview.export import (
    compute_rmse,
    load_png,
    save_png,
    save_png_from_array,
)


def make_frame(width: int = 4, height: int = 2) -> Frame:
    """Frame whose red channel is the column and green channel the row."""
    data = np.zeros((width, height, 3), dtype=np.float32)
    for i in range(width):
        for j in range(height):
            data[i, j] = (i * 10.0, j * 100.0, 0.0)
    return Frame(width=width, height=height, data=data)


class TestFrame:
    """Tests for the Frame value."""

    def test_pixel_uses_centered_coordinates(self):
        frame = make_frame()
        assert frame.pixel(-2, -1) == Color(0.0, 0.0, 0.0)
        assert frame.pixel(0, 0) == Color(20.0, 100.0, 0.0)
        assert frame.pixel(1, 0) == Color(30.0, 100.0, 0.0)

    def test_pixel_outside_canvas(self):
        frame = make_frame()
        with pytest.raises(IndexError):
            frame.pixel(2, 0)
        with pytest.raises(IndexError):
            frame.pixel(0, -2)

    def test_shape_is_checked(self):
        with pytest.raises(ValueError):
            Frame(width=4, height=2, data=np.zeros((2, 4, 3), dtype=np.float32))

    def test_to_display_puts_top_row_first(self):
        display = make_frame().to_display()
        assert display.shape == (2, 4, 3)
        assert display.dtype == np.uint8
        # Row 0 of the display is the top row of the canvas (j = 1)
        assert display[0, :, 1].tolist() == [100, 100, 100, 100]
        assert display[1, :, 1].tolist() == [0, 0, 0, 0]
        assert display[0, :, 0].tolist() == [0, 10, 20, 30]

    def test_to_display_saturates(self):
        data = np.array([[[300.0, -20.0, 127.9]]], dtype=np.float32)
        display = Frame(width=1, height=1, data=data).to_display()
        assert display.tolist() == [[[255, 0, 127]]]

    def test_repr(self):
        assert repr(make_frame()) == "Frame(width=4, height=2)"


class TestExport:
    """Tests for PNG export and image helpers."""

    def test_save_and_load_png(self, tmp_path):
        frame = make_frame()
        path = tmp_path / "frame.png"
        save_png(frame, str(path))
        loaded = load_png(str(path))
        np.testing.assert_array_equal(loaded, frame.to_display())

    def test_frame_save_png(self, tmp_path):
        frame = make_frame()
        path = tmp_path / "frame.png"
        frame.save_png(str(path))
        assert path.exists()
        assert load_png(str(path)).shape == (2, 4, 3)

    def test_save_png_from_array(self, tmp_path):
        image = np.full((3, 5, 3), 42, dtype=np.uint8)
        path = tmp_path / "flat.png"
        save_png_from_array(image, str(path))
        np.testing.assert_array_equal(load_png(str(path)), image)

    def test_rmse_identical_images(self):
        image = np.random.default_rng(0).uniform(0, 255, (4, 4, 3))
        assert compute_rmse(image, image) == 0.0

    def test_rmse_constant_offset(self):
        a = np.zeros((2, 2, 3))
        b = np.full((2, 2, 3), 3.0)
        assert compute_rmse(a, b) == pytest.approx(3.0)

    def test_rmse_shape_mismatch(self):
        with pytest.raises(ValueError):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((3, 2, 3)))


class TestRenderer:
    """Tests for the frame-by-frame Renderer."""

    def test_properties(self):
        from src.raytracer.core.renderer import Renderer

        renderer = Renderer(32, 16, depth=2)
        assert renderer.width == 32
        assert renderer.height == 16
        assert renderer.depth == 2
        assert renderer.frame_count == 0

    def test_default_depth(self):
        from src.raytracer.core.engine import RECURSION_DEPTH
        from src.raytracer.core.renderer import Renderer

        assert Renderer(8, 8).depth == RECURSION_DEPTH == 3

    def test_render(self, ambient_red_scene):
        from src.raytracer.core.renderer import Renderer

        renderer = Renderer(8, 8)
        frame = renderer.render(Camera(), ambient_red_scene)
        assert frame.pixel(0, 0).rgb() == pytest.approx((51.0, 0.0, 0.0), abs=1e-3)
        assert renderer.frame_count == 1

    def test_frames_with_callback(self, ambient_red_scene):
        from src.raytracer.core.renderer import Renderer

        progress = []
        renderer = Renderer(4, 4)
        frames = list(
            renderer.frames(Camera(), ambient_red_scene, 3, callback=lambda d, t: progress.append((d, t)))
        )
        assert len(frames) == 3
        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert renderer.frame_count == 3

    def test_frames_follow_camera_changes(self, ambient_red_scene):
        from src.raytracer.core.renderer import Renderer

        camera = OrientedCamera()
        renderer = Renderer(4, 4)
        centers = []
        for frame in renderer.frames(camera, ambient_red_scene, 2):
            centers.append(frame.pixel(0, 0).r)
            # Turn around before the next frame
            camera.turn(np.pi)
        assert centers[0] == pytest.approx(51.0, abs=1e-3)
        assert centers[1] == 0.0

    def test_resize(self, ambient_red_scene):
        from src.raytracer.core.renderer import Renderer

        renderer = Renderer(4, 4)
        renderer.resize(6, 2)
        frame = renderer.render(Camera(), ambient_red_scene)
        assert frame.data.shape == (6, 2, 3)

    def test_rejects_unsupported_size(self):
        from src.raytracer.core.renderer import Renderer

        with pytest.raises(ValueError):
            Renderer(4096, 4)
        renderer = Renderer(4, 4)
        with pytest.raises(ValueError):
            renderer.resize(0, 4)
        assert renderer.width == 4

    def test_repr(self):
        from src.raytracer.core.renderer import Renderer

        assert repr(Renderer(8, 4, depth=1)) == "Renderer(width=8, height=4, depth=1, frames=0)"
