"""Integration tests for the end-to-end rendering pipeline.

This module renders the default scene through the Renderer and checks the
result against a straightforward double precision reference for a handful
of pixels, then exercises the file writers and the command-line script.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import math

import numpy as np
import pytest


def _reference_pixel(i, j, width, height, fov, spheres, lights, background):
    """Shade one pixel in float64 with plain numpy."""
    d = np.array(
        [
            (i + 0.5) - width / 2.0,
            -(j + 0.5) + height / 2.0,
            -height / (2.0 * math.tan(fov / 2.0)),
        ]
    )
    d /= np.linalg.norm(d)

    closest_t, closest = np.inf, None
    for sphere in spheres:
        center = np.array(sphere.center)
        tca = center.dot(d)
        d2 = center.dot(center) - tca * tca
        r2 = sphere.radius * sphere.radius
        if d2 > r2:
            continue
        thc = math.sqrt(r2 - d2)
        t = tca - thc if tca - thc >= 0.0 else tca + thc
        if t >= 0.0 and t < closest_t:
            closest_t, closest = t, sphere

    if closest is None or closest_t >= 1000.0:
        return np.array(background)

    point = closest_t * d
    normal = point - np.array(closest.center)
    normal /= np.linalg.norm(normal)
    intensity = 0.0
    for light in lights:
        to_light = np.array(light.position) - point
        to_light /= np.linalg.norm(to_light)
        intensity += light.intensity * max(0.0, to_light.dot(normal))
    return intensity * np.array(closest.material.diffuse_color)


class TestRenderConfig:
    """Tests for render configuration."""

    def test_defaults(self):
        """Default configuration is 1050x750, one radian, ./picture.ppm."""
        from src.python.core.config import RenderConfig

        config = RenderConfig()
        assert (config.width, config.height) == (1050, 750)
        assert config.fov == 1.0
        assert config.camera_origin == (0.0, 0.0, 0.0)
        assert config.background == (1.0, 0.3, 0.2)
        assert config.output_path == "./picture.ppm"
        assert config.aspect_ratio == pytest.approx(1.4)
        assert config.focal_distance == pytest.approx(750 / (2 * math.tan(0.5)))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -3},
            {"width": 4096},
            {"height": 2049},
            {"fov": 0.0},
            {"fov": math.pi},
            {"fov": -1.0},
        ],
    )
    def test_validate_rejects(self, kwargs):
        """Invalid configurations raise ValueError."""
        from src.python.core.config import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(**kwargs).validate()

    def test_renderer_validates_config(self):
        """Renderer refuses an invalid configuration."""
        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer

        with pytest.raises(ValueError):
            Renderer(RenderConfig(width=0))

    def test_oversized_config_rejected_before_scene_upload(self):
        """A frame larger than the framebuffer fails in the constructor."""
        from src.python.core.config import MAX_IMAGE_WIDTH, RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.scene.intersection import add_sphere, get_sphere_count

        add_sphere((0.0, 0.0, -10.0), 1.0, (1.0, 1.0, 1.0))

        with pytest.raises(ValueError, match="exceed maximum"):
            Renderer(RenderConfig(width=MAX_IMAGE_WIDTH + 1))
        # The constructor never reached the scene fields
        assert get_sphere_count() == 1

    def test_largest_config_accepted(self):
        """The full framebuffer size is a valid configuration."""
        from src.python.core.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderConfig

        RenderConfig(width=MAX_IMAGE_WIDTH, height=MAX_IMAGE_HEIGHT).validate()


class TestDefaultSceneRender:
    """End-to-end render of the default scene at full resolution."""

    def test_full_frame(self, tmp_path):
        """The default frame matches a double precision reference."""
        from src.python.core.renderer import Renderer
        from src.python.preview.export import framebuffer_to_uint8, load_ppm
        from src.python.scene.default_scene import create_default_scene

        spheres, lights = create_default_scene()
        renderer = Renderer()
        image = renderer.render(spheres, lights)

        assert image.shape == (750, 1050, 3)
        assert image.dtype == np.float32

        config = renderer.config
        for i, j in [(525, 375), (280, 253), (0, 0), (1049, 749), (238, 190), (700, 400)]:
            expected = _reference_pixel(
                i, j, config.width, config.height, config.fov,
                spheres, lights, config.background,
            )
            np.testing.assert_allclose(image[j, i], expected, atol=1e-3)

        # Center pixel lands on the pink sphere, lit from below
        center = image[375, 525]
        assert center[0] > 1.0  # unclamped in the framebuffer
        center_bytes = framebuffer_to_uint8(center.reshape(1, 1, 3))[0, 0]
        expected_center = _reference_pixel(
            525, 375, config.width, config.height, config.fov,
            spheres, lights, config.background,
        )
        expected_bytes = framebuffer_to_uint8(expected_center.reshape(1, 1, 3))[0, 0]
        assert center_bytes[0] == 255
        assert np.all(np.abs(center_bytes.astype(int) - expected_bytes.astype(int)) <= 1)
        # Intensity 2.0 at a cosine of about 0.52 gives roughly 1.037 here
        assert expected_bytes.tolist() == [255, 132, 198]

        # Corners see only the background
        np.testing.assert_allclose(image[0, 0], (1.0, 0.3, 0.2))

        path = renderer.save(tmp_path / "picture.ppm")
        data = path.read_bytes()
        header = b"P6\n1050 750\n255\n"
        assert data.startswith(header)
        assert len(data) == len(header) + 1050 * 750 * 3

        np.testing.assert_array_equal(load_ppm(path), framebuffer_to_uint8(image))


class TestRenderer:
    """Tests for the Renderer at small resolutions."""

    def test_save_before_render_raises(self, tmp_path):
        """save() needs a completed render."""
        from src.python.core.renderer import Renderer

        renderer = Renderer()
        assert renderer.image is None
        with pytest.raises(RuntimeError, match="Call render"):
            renderer.save(tmp_path / "out.ppm")

    def test_render_to_file_ppm(self, tmp_path):
        """render_to_file writes a PPM of the configured size."""
        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.preview.export import load_ppm
        from src.python.scene.default_scene import create_default_scene

        output = tmp_path / "small.ppm"
        renderer = Renderer(RenderConfig(width=64, height=48, output_path=str(output)))
        path = renderer.render_to_file(*create_default_scene())

        assert path == output
        assert load_ppm(path).shape == (48, 64, 3)

    def test_render_to_file_png(self, tmp_path):
        """A .png suffix writes a PNG instead."""
        from PIL import Image as PILImage

        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.scene.default_scene import create_default_scene

        renderer = Renderer(RenderConfig(width=32, height=24))
        path = renderer.render_to_file(*create_default_scene(), filepath=tmp_path / "a.png")

        with PILImage.open(path) as pil_image:
            assert pil_image.format == "PNG"
            assert pil_image.size == (32, 24)

    def test_rerender_replaces_scene(self):
        """A second render does not keep spheres from the first."""
        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.scene.default_scene import create_default_scene

        renderer = Renderer(RenderConfig(width=40, height=30))
        first = renderer.render(*create_default_scene())
        empty = renderer.render([], [])

        assert renderer.scene.get_sphere_count() == 0
        assert not np.array_equal(first, empty)
        np.testing.assert_allclose(empty, np.broadcast_to((1.0, 0.3, 0.2), empty.shape))

    def test_custom_background_and_camera(self):
        """Background and camera origin come from the configuration."""
        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.scene.default_scene import create_default_scene

        # Moving the camera far to the side leaves nothing in view
        config = RenderConfig(
            width=20, height=10, camera_origin=(500.0, 0.0, 0.0), background=(0.0, 1.0, 0.0)
        )
        image = Renderer(config).render(*create_default_scene())
        assert np.all(image == np.array([0.0, 1.0, 0.0], dtype=np.float32))

    def test_output_is_deterministic(self):
        """Rendering the same scene twice gives identical framebuffers."""
        from src.python.core.config import RenderConfig
        from src.python.core.renderer import Renderer
        from src.python.scene.default_scene import create_default_scene

        renderer = Renderer(RenderConfig(width=50, height=40))
        first = renderer.render(*create_default_scene()).copy()
        second = renderer.render(*create_default_scene())
        np.testing.assert_array_equal(first, second)


class TestRenderSpheresScript:
    """Tests for the command-line example."""

    def test_parse_args_defaults(self):
        """No arguments selects the classic render."""
        from examples.render_spheres import parse_args

        args = parse_args([])
        assert (args.width, args.height, args.fov) == (1050, 750, 1.0)
        assert args.output == "./picture.ppm"
        assert not args.png

    def test_render_spheres_writes_files(self, tmp_path, capsys):
        """render_spheres writes the PPM, and the PNG when asked."""
        from examples.render_spheres import render_spheres

        output = tmp_path / "picture.ppm"
        path = render_spheres(width=30, height=20, output_path=str(output), png=True)

        assert path == output
        assert output.exists()
        assert output.with_suffix(".png").exists()
        assert "Saved to" in capsys.readouterr().out

    def test_render_spheres_quiet(self, tmp_path, capsys):
        """--quiet suppresses progress output."""
        from examples.render_spheres import render_spheres

        render_spheres(width=8, height=8, output_path=str(tmp_path / "q.ppm"), quiet=True)
        assert capsys.readouterr().out == ""
