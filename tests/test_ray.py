"""Unit tests for Ray and vector utilities.

Tests cover:
- Ray construction and evaluation
- add, sub, mul, scale, dot, length, normalize
- Unit length after normalization
- NaN propagation when normalizing the zero vector
"""

import math

import pytest
import taichi as ti


class TestRay:
    """Tests for the Ray dataclass."""

    def test_make_ray(self):
        """Test make_ray stores origin and direction."""
        from spheretrace.core.ray import make_ray, vec3

        origin = ti.field(dtype=ti.math.vec3, shape=())
        direction = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 1.0, 5.0), vec3(0.0, 0.0, -1.0))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        o = origin[None]
        d = direction[None]
        assert (o[0], o[1], o[2]) == (0.0, 1.0, 5.0)
        assert (d[0], d[1], d[2]) == (0.0, 0.0, -1.0)

    def test_ray_at(self):
        """Test ray_at returns origin + t * direction."""
        from spheretrace.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 1.0, 5.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 4.0)

        test_kernel()
        p = result[None]
        assert abs(p[0]) < 1e-6
        assert abs(p[1] - 1.0) < 1e-6
        assert abs(p[2] - 1.0) < 1e-6


class TestVectorArithmetic:
    """Tests for componentwise vector operations."""

    def test_add_sub(self):
        """Test add and sub are componentwise."""
        from spheretrace.core.ray import add, sub, vec3

        sum_result = ti.field(dtype=ti.math.vec3, shape=())
        diff_result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(4.0, -5.0, 0.5)
            sum_result[None] = add(a, b)
            diff_result[None] = sub(a, b)

        test_kernel()
        s = sum_result[None]
        d = diff_result[None]
        assert (s[0], s[1], s[2]) == pytest.approx((5.0, -3.0, 3.5))
        assert (d[0], d[1], d[2]) == pytest.approx((-3.0, 7.0, 2.5))

    def test_mul_is_elementwise(self):
        """Test mul multiplies matching components."""
        from spheretrace.core.ray import mul, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = mul(vec3(1.0, 2.0, 3.0), vec3(2.0, 0.5, -1.0))

        test_kernel()
        r = result[None]
        assert (r[0], r[1], r[2]) == pytest.approx((2.0, 1.0, -3.0))

    def test_scale(self):
        """Test scale multiplies every component by a scalar."""
        from spheretrace.core.ray import scale, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = scale(vec3(1.0, -2.0, 3.0), 2.5)

        test_kernel()
        r = result[None]
        assert (r[0], r[1], r[2]) == pytest.approx((2.5, -5.0, 7.5))

    def test_dot_and_length(self):
        """Test dot product and length of a 3-4-12 vector."""
        from spheretrace.core.ray import dot, length, vec3

        dot_result = ti.field(dtype=ti.f32, shape=())
        length_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 12.0)
            dot_result[None] = dot(v, vec3(1.0, 1.0, 1.0))
            length_result[None] = length(v)

        test_kernel()
        assert dot_result[None] == pytest.approx(19.0)
        assert length_result[None] == pytest.approx(13.0)


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize(
        "components",
        [
            (3.0, 4.0, 12.0),
            (0.0, 0.5, -25.0),
            (-1.0, 1e-3, 0.0),
            (100.0, 99.0, 199.0),
        ],
    )
    def test_normalize_has_unit_length(self, components):
        """Test that normalized vectors have length 1."""
        from spheretrace.core.ray import length, normalize, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = length(normalize(vec3(x, y, z)))

        test_kernel(*components)
        assert abs(result[None] - 1.0) < 1e-5

    def test_normalize_keeps_direction(self):
        """Test that normalize only changes magnitude."""
        from spheretrace.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, -600.0))

        test_kernel()
        r = result[None]
        assert (r[0], r[1], r[2]) == pytest.approx((0.0, 0.0, -1.0))

    def test_normalize_zero_vector_is_not_finite(self):
        """Test that the zero vector normalizes to non-finite components."""
        from spheretrace.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = normalize(vec3(x, y, z))

        test_kernel(0.0, 0.0, 0.0)
        r = result[None]
        for i in range(3):
            assert math.isnan(r[i])
