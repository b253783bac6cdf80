"""Unit tests for the ray module.

Tests cover:
- Ray dataclass and ray_at
- Mirror reflection on the device and on the host
- Ray constants
"""

import pytest
import taichi as ti

from src.raytracer.core.ray import FLT_MAX, RAY_EPSILON, T_MAX, reflect_host
from src.raytracer.core.vector import Vector3


def as_list(v) -> list[float]:
    return [float(v[i]) for i in range(3)]


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from src.raytracer.core.ray import Ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        assert as_list(result[None]) == pytest.approx([1.0, 2.0, 3.0])

    def test_ray_at_positive_t(self):
        from src.raytracer.core.ray import Ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 1.0, -2.0))
            result[None] = ray_at(ray, 2.5)

        test_kernel()
        assert as_list(result[None]) == pytest.approx([1.0, 4.5, -2.0])

    def test_ray_at_negative_t(self):
        from src.raytracer.core.ray import Ray, ray_at, vec3

        @ti.kernel
        def along(origin: vec3, direction: vec3, t: ti.f32) -> vec3:
            return ray_at(Ray(origin=origin, direction=direction), t)

        result = along(vec3(0.0, 0.0, 0.0), vec3(1.0, 1.0, 0.0), -3.0)
        assert as_list(result) == pytest.approx([-3.0, -3.0, 0.0])


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_along_normal_is_unchanged(self):
        from src.raytracer.core.ray import reflect, vec3

        @ti.kernel
        def mirrored(v: vec3, n: vec3) -> vec3:
            return reflect(v, n)

        result = mirrored(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, -1.0))
        assert as_list(result) == pytest.approx([0.0, 0.0, -1.0])

    def test_reflect_mirrors_about_normal(self):
        from src.raytracer.core.ray import reflect, vec3

        @ti.kernel
        def mirrored(v: vec3, n: vec3) -> vec3:
            return reflect(v, n)

        # Vector leaving the surface at 45 degrees to the left comes out to the right
        result = mirrored(vec3(-1.0, 1.0, 0.0), vec3(0.0, 1.0, 0.0))
        assert as_list(result) == pytest.approx([1.0, 1.0, 0.0])

    def test_reflect_normalized(self):
        from src.raytracer.core.ray import reflect_normalized, vec3

        @ti.kernel
        def mirrored(v: vec3, n: vec3) -> vec3:
            return reflect_normalized(v, n)

        result = mirrored(vec3(-3.0, 4.0, 0.0), vec3(0.0, 1.0, 0.0))
        assert as_list(result) == pytest.approx([0.6, 0.8, 0.0], abs=1e-6)

    def test_host_reflect_matches_device(self):
        from src.raytracer.core.ray import reflect, vec3

        @ti.kernel
        def mirrored(v: vec3, n: vec3) -> vec3:
            return reflect(v, n)

        v = Vector3(0.3, 0.5, -0.8)
        n = Vector3(0.0, 0.6, 0.8)
        expected = reflect_host(v, n)
        assert as_list(mirrored(vec3(*v), vec3(*n))) == pytest.approx(list(expected), abs=1e-6)

    def test_reflection_preserves_length(self):
        v = Vector3(2.0, -1.0, 3.0)
        n = Vector3(1.0, 1.0, 0.0).normalize()
        assert reflect_host(v, n).magnitude() == pytest.approx(v.magnitude())


class TestRayConstants:
    """Tests for the ray constants."""

    def test_epsilon_is_small_and_positive(self):
        assert 0.0 < RAY_EPSILON < 1.0

    def test_unbounded_ray_length_is_flt_max(self):
        assert T_MAX == FLT_MAX
