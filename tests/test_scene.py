"""Unit tests for the Scene container, manifests and the demo scene."""

import pytest

from src.raytracer.core.color import BLACK, Color
from src.raytracer.scene.collection import CapacityError
from src.raytracer.scene.demo import DEMO_LIGHTS, DEMO_OBJECTS, create_demo_scene
from src.raytracer.scene.lights import AmbientLight, PointLight
from src.raytracer.scene.objects import MAX_SPHERES, Sphere
from src.raytracer.scene.scene import Scene, SceneConfig


class TestSceneBuilding:
    """Tests for building scenes directly."""

    def test_default_background_is_black(self):
        assert Scene().background == BLACK

    def test_add_sphere_and_light(self):
        scene = Scene(background=(10, 20, 30))
        assert scene.add_sphere(center=(0, 0, 4), radius=1.0, color=(255, 0, 0)) == 0
        assert scene.add_sphere(center=(0, 0, 8), radius=2.0, color=(0, 255, 0), specular=10) == 1
        assert scene.add_light(AmbientLight(0.2)) == 0
        assert len(scene.objects) == 2
        assert len(scene.lights) == 1
        assert scene.objects.get(1).specular == 10
        assert scene.background == Color(10.0, 20.0, 30.0)

    def test_add_object(self):
        scene = Scene()
        sphere = Sphere(center=(0, 0, 4), radius=1.0, color=(1, 2, 3))
        assert scene.add_object(sphere) == 0
        assert scene.objects.get(0) is sphere

    def test_free(self):
        scene = Scene()
        scene.add_sphere(center=(0, 0, 4), radius=1.0, color=(255, 0, 0))
        scene.add_light(AmbientLight(0.2))
        scene.free()
        assert len(scene.objects) == 0
        assert len(scene.lights) == 0
        scene.free()

    def test_repr(self):
        scene = Scene()
        scene.add_light(AmbientLight(0.2))
        assert repr(scene) == "Scene(objects=0, lights=1, background=(0.0, 0.0, 0.0))"


class TestSceneManifest:
    """Tests for building scenes from manifests."""

    def test_from_config(self):
        config = SceneConfig(
            background=[0, 0, 255],
            objects=[{"center": [0, 0, 4], "radius": 1.0, "color": [255, 0, 0], "specular": 5}],
            lights=[
                {"type": "ambient", "intensity": 0.2},
                {"type": "point", "intensity": 0.6, "position": [2, 1, 0]},
            ],
        )
        scene = Scene.from_config(config)
        assert scene.background.rgb() == (0.0, 0.0, 255.0)
        assert scene.objects.get(0).specular == 5
        assert scene.lights.get(1) == PointLight(0.6, (2.0, 1.0, 0.0))

    def test_dict_round_trip(self):
        scene, _ = create_demo_scene()
        rebuilt = Scene.from_dict(scene.to_dict())
        assert list(rebuilt.objects) == list(scene.objects)
        assert list(rebuilt.lights) == list(scene.lights)
        assert rebuilt.background == scene.background

    def test_to_config(self):
        scene = Scene()
        scene.add_light(AmbientLight(0.5))
        config = scene.to_config()
        assert config.objects == []
        assert config.lights == [{"type": "ambient", "intensity": 0.5}]

    def test_unknown_light_aborts_build(self):
        data = {
            "objects": [{"center": [0, 0, 4], "radius": 1.0, "color": [255, 0, 0]}],
            "lights": [{"type": "area", "intensity": 1.0}],
        }
        with pytest.raises(ValueError):
            Scene.from_dict(data)

    def test_invalid_object_aborts_build(self):
        data = {"objects": [{"center": [0, 0, 4], "radius": -1.0, "color": [255, 0, 0]}]}
        with pytest.raises(ValueError):
            Scene.from_dict(data)

    def test_incomplete_entries_abort_build(self):
        no_radius = {"objects": [{"center": [0, 0, 4], "color": [255, 0, 0]}]}
        with pytest.raises(ValueError):
            Scene.from_dict(no_radius)

        no_position = {
            "objects": [{"center": [0, 0, 4], "radius": 1.0}],
            "lights": [{"type": "point", "intensity": 0.6}],
        }
        with pytest.raises(ValueError):
            Scene.from_dict(no_position)

    def test_too_many_spheres_raises_capacity_error(self):
        entry = {"center": [0, 0, 4], "radius": 1.0, "color": [255, 0, 0]}
        config = SceneConfig(objects=[entry] * (MAX_SPHERES + 1))
        with pytest.raises(CapacityError):
            Scene.from_config(config)


class TestDemoScene:
    """Tests for the built-in demo scene."""

    def test_contents(self):
        scene, camera = create_demo_scene()
        assert len(scene.objects) == len(DEMO_OBJECTS) == 4
        assert len(scene.lights) == len(DEMO_LIGHTS) == 3
        assert scene.background == BLACK
        assert tuple(camera.position) == (0.0, 0.0, 0.0)

    def test_camera_matches_canvas(self):
        _, camera = create_demo_scene(800, 600)
        assert camera.viewport_width == pytest.approx(800 / 600)
        assert camera.viewport_height == 1.0
        assert camera.projection_distance == 1.0

    def test_scenes_are_independent(self):
        first, _ = create_demo_scene()
        second, _ = create_demo_scene()
        first.free()
        assert len(second.objects) == 4
