"""Tests for the ray tracer.

Tests cover:
- Background policies for rays that miss
- Ambient, diffuse and specular terms
- Hard shadows, including occluders beyond the light
- Flat shading and its unculled intersection
- Nearest-hit tie-breaking through the tracer
- Mode name parsing
- Golden value for the reference scene
"""

import math

import pytest


class TestBackground:
    """Tests for the color of rays that hit nothing."""

    def test_gradient_straight_up(self):
        """Test a ray straight up is black under the gradient."""
        from spheretrace.core.tracer import trace_ray

        assert trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == pytest.approx(0.0)

    def test_gradient_horizontal(self):
        """Test a horizontal ray is white under the gradient."""
        from spheretrace.core.tracer import trace_ray

        assert trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == pytest.approx(1.0)

    def test_gradient_straight_down(self):
        """Test the gradient is unclamped below the horizon."""
        from spheretrace.core.tracer import trace_ray

        assert trace_ray((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) == pytest.approx(2.0)

    def test_constant_background(self):
        """Test the constant background returns BACKGROUND_COLOR."""
        from spheretrace.core.tracer import BACKGROUND_COLOR, BackgroundMode, trace_ray

        color = trace_ray(
            (0.0, 0.0, 0.0), (0.0, 0.0, -1.0), background=BackgroundMode.CONSTANT
        )
        assert color == pytest.approx(BACKGROUND_COLOR)

    def test_flat_defaults_to_constant(self):
        """Test flat shading uses the constant background by default."""
        from spheretrace.core.tracer import ShadingMode, trace_ray

        assert trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), ShadingMode.FLAT) == 0.0

    def test_flat_with_gradient(self):
        """Test flat shading honours an explicit background."""
        from spheretrace.core.tracer import BackgroundMode, ShadingMode, trace_ray

        color = trace_ray(
            (0.0, 0.0, 0.0),
            (0.0, 0.0, -1.0),
            ShadingMode.FLAT,
            BackgroundMode.GRADIENT,
        )
        assert color == pytest.approx(1.0)

    def test_lights_are_invisible(self):
        """Test a ray through a light position sees the background."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light

        add_light((0.0, 0.0, -5.0), 1.0)
        assert trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == pytest.approx(1.0)


class TestPhongShading:
    """Tests for ambient, diffuse and specular terms."""

    def test_ambient_only(self):
        """Test a scene with no lights gives the ambient term."""
        from spheretrace.core.tracer import AMBIENT_FACTOR, trace_ray
        from spheretrace.scene.intersection import add_object

        add_object((0.0, 0.0, 0.0), 1.0, 0.5)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.5 * AMBIENT_FACTOR, abs=1e-6)

    def test_light_along_normal(self):
        """Test full diffuse and specular with a light on the normal."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 0.5)
        add_light((10.0, 0.0, 0.0), 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        # 0.5 * 0.1 + 0.5 * 1.0 * 0.7 + 0.4
        assert color == pytest.approx(0.8, abs=1e-5)

    def test_result_is_unclamped(self):
        """Test bright surfaces can exceed 1."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 1.0)
        add_light((10.0, 0.0, 0.0), 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(1.2, abs=1e-5)

    def test_oblique_light(self):
        """Test diffuse falls off with the cosine to the light."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 1.0)
        add_light((11.0, 10.0, 0.0), 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        # Specular is cos(45)^70 * 0.4, about 1e-11
        assert color == pytest.approx(0.1 + 0.7 * math.sqrt(0.5), abs=1e-5)

    def test_light_behind_surface(self):
        """Test a light behind the hit point adds nothing."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 1.0)
        add_light((-10.0, 0.0, 0.0), 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.1, abs=1e-6)

    def test_lights_accumulate(self):
        """Test contributions of several lights add up."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 0.5)
        add_light((10.0, 0.0, 0.0), 0.5)
        add_light((20.0, 0.0, 0.0), 0.5)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        # Ambient 0.05, twice (0.5 * 0.5 * 0.7 + 0.4)
        assert color == pytest.approx(0.05 + 2 * (0.175 + 0.4), abs=1e-5)


class TestShadows:
    """Tests for hard shadows."""

    def _scene(self, light_center):
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 1.0)
        add_light(light_center, 1.0)

    def test_unshadowed(self):
        """Test the lit point without an occluder."""
        from spheretrace.core.tracer import trace_ray

        self._scene((11.0, 10.0, 0.0))
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.59497, abs=1e-4)

    def test_occluder_between_point_and_light(self):
        """Test an occluder removes the light's contribution."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_object

        self._scene((11.0, 10.0, 0.0))
        add_object((6.0, 5.0, 0.0), 1.0, 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.1, abs=1e-6)

    def test_occluder_beyond_light(self):
        """Test an object past the light still casts a shadow."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_object

        self._scene((2.0, 1.0, 0.0))
        add_object((6.0, 5.0, 0.0), 1.0, 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.1, abs=1e-6)

    def test_only_blocked_light_is_removed(self):
        """Test an occluder only removes the lights it blocks."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        self._scene((11.0, 10.0, 0.0))
        add_light((11.0, -10.0, 0.0), 1.0)
        add_object((6.0, 5.0, 0.0), 1.0, 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
        assert color == pytest.approx(0.59497, abs=1e-4)


class TestFlatShading:
    """Tests for flat (depth-only) shading."""

    def test_returns_object_color(self):
        """Test flat shading ignores lighting."""
        from spheretrace.core.tracer import ShadingMode, trace_ray
        from spheretrace.scene.intersection import add_light, add_object

        add_object((0.0, 0.0, 0.0), 1.0, 0.7)
        add_light((10.0, 0.0, 0.0), 1.0)
        color = trace_ray((5.0, 0.0, 0.0), (-1.0, 0.0, 0.0), ShadingMode.FLAT)
        assert color == pytest.approx(0.7, abs=1e-6)

    def test_sees_sphere_from_inside_past_center(self):
        """Test flat shading hits a sphere the shaded mode culls."""
        from spheretrace.core.tracer import ShadingMode, trace_ray
        from spheretrace.scene.intersection import add_object

        add_object((0.0, 0.0, 0.0), 1.0, 0.7)
        flat = trace_ray((0.0, 0.0, 0.5), (0.0, 0.0, 1.0), ShadingMode.FLAT)
        phong = trace_ray((0.0, 0.0, 0.5), (0.0, 0.0, 1.0), ShadingMode.PHONG)
        assert flat == pytest.approx(0.7, abs=1e-6)
        # Culled: the ray sees the background
        assert phong == pytest.approx(1.0)


class TestTieBreak:
    """Tests for equal-distance hits."""

    def test_first_object_wins(self):
        """Test the earlier of two coincident spheres is shaded."""
        from spheretrace.core.tracer import trace_ray
        from spheretrace.scene.intersection import add_object

        add_object((0.0, 0.0, -5.0), 1.0, 0.3)
        add_object((0.0, 0.0, -5.0), 1.0, 0.9)
        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(0.03, abs=1e-6)


class TestModeParsing:
    """Tests for mode lookup helpers."""

    def test_parse_shading_mode(self):
        """Test shading modes parse case-insensitively."""
        from spheretrace.core.tracer import ShadingMode, parse_shading_mode

        assert parse_shading_mode("phong") is ShadingMode.PHONG
        assert parse_shading_mode("FLAT") is ShadingMode.FLAT

    def test_parse_background_mode(self):
        """Test background modes parse case-insensitively."""
        from spheretrace.core.tracer import BackgroundMode, parse_background_mode

        assert parse_background_mode("gradient") is BackgroundMode.GRADIENT
        assert parse_background_mode("Constant") is BackgroundMode.CONSTANT

    def test_unknown_names(self):
        """Test unknown names raise ValueError."""
        from spheretrace.core.tracer import parse_background_mode, parse_shading_mode

        with pytest.raises(ValueError, match="Unknown shading mode"):
            parse_shading_mode("pathtrace")
        with pytest.raises(ValueError, match="Unknown background mode"):
            parse_background_mode("skybox")

    def test_default_background(self):
        """Test each shading mode's default background."""
        from spheretrace.core.tracer import BackgroundMode, ShadingMode, default_background

        assert default_background(ShadingMode.PHONG) is BackgroundMode.GRADIENT
        assert default_background(ShadingMode.FLAT) is BackgroundMode.CONSTANT


class TestNormalized:
    """Tests for the Python-side direction helper."""

    def test_unit_length(self):
        """Test normalized scales to unit length."""
        from spheretrace.core.tracer import normalized

        assert normalized((3.0, 4.0, 0.0)) == pytest.approx((0.6, 0.8, 0.0))

    def test_zero_vector(self):
        """Test the zero vector is not guarded."""
        from spheretrace.core.tracer import normalized

        assert all(math.isnan(c) for c in normalized((0.0, 0.0, 0.0)))


class TestReferenceScene:
    """Golden values for the reference scene."""

    def test_camera_forward_ray(self, reference_scene):
        """Test the forward ray from the camera hits the centre sphere."""
        from spheretrace.camera.fixed import CAMERA_ORIGIN
        from spheretrace.core.tracer import trace_ray

        color = trace_ray(CAMERA_ORIGIN, (0.0, 0.0, -1.0))
        assert color == pytest.approx(0.203372, abs=1e-4)

    def test_camera_forward_ray_flat(self, reference_scene):
        """Test flat shading returns the centre sphere's color."""
        from spheretrace.camera.fixed import CAMERA_ORIGIN
        from spheretrace.core.tracer import ShadingMode, trace_ray

        color = trace_ray(CAMERA_ORIGIN, (0.0, 0.0, -1.0), ShadingMode.FLAT)
        assert color == pytest.approx(0.5)
