"""Unit tests for Lambertian shading.

Tests cover:
- Single-light cosine term
- Lights behind the surface clamped to zero
- Accumulation over several lights without intermediate clamping
- Color scaling by the accumulated intensity
- Light storage operations
"""

import math

import pytest
import taichi as ti


def _run_shade(point, normal, diffuse_color):
    """Run shade_lambertian in a kernel and return the color tuple."""
    from src.python.materials.lambertian import shade_lambertian

    result = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        px: ti.f32, py: ti.f32, pz: ti.f32,
        nx: ti.f32, ny: ti.f32, nz: ti.f32,
        r: ti.f32, g: ti.f32, b: ti.f32,
    ):
        result[None] = shade_lambertian(
            ti.math.vec3(px, py, pz),
            ti.math.normalize(ti.math.vec3(nx, ny, nz)),
            ti.math.vec3(r, g, b),
        )

    test_kernel(*point, *normal, *diffuse_color)
    c = result[None]
    return (float(c[0]), float(c[1]), float(c[2]))


def _run_intensity(point, normal):
    """Run diffuse_intensity in a kernel and return the scalar."""
    from src.python.materials.lambertian import diffuse_intensity

    result = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(px: ti.f32, py: ti.f32, pz: ti.f32, nx: ti.f32, ny: ti.f32, nz: ti.f32):
        result[None] = diffuse_intensity(
            ti.math.vec3(px, py, pz), ti.math.normalize(ti.math.vec3(nx, ny, nz))
        )

    test_kernel(*point, *normal)
    return float(result[None])


class TestLightStorage:
    """Tests for point light storage."""

    def test_add_light(self):
        """Test adding lights returns sequential indices."""
        from src.python.scene.lights import add_light, get_light_count

        assert get_light_count() == 0
        assert add_light((0.0, -20.0, 0.0), 2.0) == 0
        assert add_light((10.0, 10.0, 10.0), 1.5) == 1
        assert get_light_count() == 2

    def test_clear_lights(self):
        """Test clearing all lights."""
        from src.python.scene.lights import add_light, clear_lights, get_light_count

        add_light((0.0, 0.0, 0.0), 1.0)
        clear_lights()
        assert get_light_count() == 0

    def test_capacity_exceeded(self):
        """Adding past MAX_LIGHTS raises RuntimeError."""
        from src.python.scene import lights

        lights.num_lights[None] = lights.MAX_LIGHTS
        with pytest.raises(RuntimeError, match="Maximum number of lights"):
            lights.add_light((0.0, 0.0, 0.0), 1.0)


class TestLambertianShading:
    """Tests for the Lambertian shading model."""

    def test_no_lights_is_black(self):
        """Without lights every surface is black."""
        color = _run_shade((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 0.5, 0.75))
        assert color == pytest.approx((0.0, 0.0, 0.0))

    def test_light_along_normal(self):
        """A light straight above contributes its full intensity."""
        from src.python.scene.lights import add_light

        add_light((0.0, 10.0, 0.0), 2.0)
        color = _run_shade((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 0.5, 0.75))
        assert color == pytest.approx((2.0, 1.0, 1.5), abs=1e-5)

    def test_light_at_angle(self):
        """Contribution follows the cosine of the incidence angle."""
        from src.python.scene.lights import add_light

        add_light((10.0, 10.0, 0.0), 1.0)
        intensity = _run_intensity((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert intensity == pytest.approx(math.cos(math.pi / 4), abs=1e-5)

    def test_light_behind_surface_clamped(self):
        """A light behind the surface contributes exactly zero."""
        from src.python.scene.lights import add_light

        add_light((0.0, -10.0, 0.0), 5.0)
        intensity = _run_intensity((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert intensity == 0.0

    def test_negative_contributions_never_subtract(self):
        """A back-facing light does not reduce the contribution of a front one."""
        from src.python.scene.lights import add_light

        add_light((0.0, 10.0, 0.0), 1.0)
        add_light((0.0, -10.0, 0.0), 100.0)
        intensity = _run_intensity((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert intensity == pytest.approx(1.0, abs=1e-5)

    def test_accumulation_is_unclamped(self):
        """Several bright lights push channels above 1.0 before serialization."""
        from src.python.scene.lights import add_light

        for _ in range(4):
            add_light((0.0, 10.0, 0.0), 1.0)
        color = _run_shade((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 0.5, 0.25))
        assert color == pytest.approx((4.0, 2.0, 1.0), abs=1e-5)

    @pytest.mark.parametrize(
        "light_position",
        [
            (0.0, 10.0, 0.0),
            (10.0, 0.0, 0.0),
            (-3.0, -7.0, 2.0),
            (0.0, -1.0, 0.0),
            (5.0, 5.0, -5.0),
        ],
    )
    def test_intensity_never_negative(self, light_position):
        """Accumulated intensity is non-negative for any light direction."""
        from src.python.scene.lights import add_light

        add_light(light_position, 1.0)
        add_light((-light_position[0], -light_position[1], -light_position[2]), 1.0)
        intensity = _run_intensity((0.0, 0.0, 0.0), (0.3, 0.8, -0.2))
        assert intensity >= 0.0
