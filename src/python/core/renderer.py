"""High-level frame renderer.

This module wraps the integrator, camera and scene upload into one object:

    renderer = Renderer(RenderConfig(width=320, height=240))
    image = renderer.render(spheres, lights)
    renderer.save("picture.ppm")

render() computes every pixel before returning, and save() refuses to run
until a render has completed, so an image file is never written from a
partially filled framebuffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.core.renderer import Renderer
    >>> from src.python.scene.default_scene import create_default_scene
    >>>
    >>> spheres, lights = create_default_scene()
    >>> path = Renderer().render_to_file(spheres, lights)
"""

from collections.abc import Iterable
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.python.camera.pinhole import PinholeCamera, setup_camera
from src.python.core.config import RenderConfig
from src.python.core.integrator import (
    get_framebuffer_numpy,
    render_frame,
    setup_render_target,
)
from src.python.preview.export import save_png, save_ppm
from src.python.scene.entities import Light, SceneSphere
from src.python.scene.manager import SceneManager


class Renderer:
    """Renders a scene of diffuse spheres to a framebuffer and to disk.

    Attributes:
        config: The render configuration.
        scene: The SceneManager holding the most recently rendered scene.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Render configuration. Defaults to RenderConfig().

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config if config is not None else RenderConfig()
        self.config.validate()
        self.scene = SceneManager()
        self._image: npt.NDArray[np.float32] | None = None

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.config.height

    @property
    def image(self) -> npt.NDArray[np.float32] | None:
        """The framebuffer from the last completed render, or None."""
        return self._image

    def render(
        self,
        spheres: Iterable[SceneSphere],
        lights: Iterable[Light],
    ) -> npt.NDArray[np.float32]:
        """Render a scene.

        Uploads the scene, configures camera and render target, and computes
        every pixel.

        Args:
            spheres: The spheres to render, in tie-break order.
            lights: The point lights illuminating them.

        Returns:
            Linear, unclamped framebuffer of shape (height, width, 3).
        """
        self._image = None

        self.scene.load(spheres, lights)
        setup_render_target(self.width, self.height, self.config.background)
        setup_camera(
            PinholeCamera(origin=self.config.camera_origin, fov=self.config.fov),
            image_height=self.height,
        )

        render_frame()
        self._image = get_framebuffer_numpy()
        return self._image

    def save(self, filepath: str | Path | None = None) -> Path:
        """Write the last rendered image.

        Files ending in .png are written as PNG, anything else as binary PPM.

        Args:
            filepath: Output path. Defaults to config.output_path.

        Returns:
            The path written.

        Raises:
            RuntimeError: If nothing has been rendered yet.
            OSError: If the file cannot be written.
        """
        if self._image is None:
            raise RuntimeError("Nothing to save. Call render() first.")

        path = Path(filepath if filepath is not None else self.config.output_path)
        if path.suffix.lower() == ".png":
            return save_png(self._image, path)
        return save_ppm(self._image, path)

    def render_to_file(
        self,
        spheres: Iterable[SceneSphere],
        lights: Iterable[Light],
        filepath: str | Path | None = None,
    ) -> Path:
        """Render a scene and write the image in one call.

        Returns:
            The path written.
        """
        self.render(spheres, lights)
        return self.save(filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"fov={self.config.fov}, rendered={self._image is not None})"
        )
