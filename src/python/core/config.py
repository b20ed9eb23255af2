"""Render configuration.

The resolution, field of view, camera position, background color and output
path used to be fixed constants. They are collected here in one immutable
dataclass that is passed into the frame driver, so tests can render tiny
scenes without touching the rendering code.

Example:
    >>> from src.python.core.config import RenderConfig
    >>> config = RenderConfig(width=64, height=48)
    >>> config.validate()
    >>> config.aspect_ratio
    1.3333333333333333
"""

import math
from dataclasses import dataclass

# Defaults reproduce the classic single-frame render
DEFAULT_WIDTH = 1050
DEFAULT_HEIGHT = 750
DEFAULT_FOV = 1.0  # Vertical field of view in radians
DEFAULT_BACKGROUND = (1.00, 0.30, 0.20)
DEFAULT_OUTPUT_PATH = "./picture.ppm"

# Size of the preallocated framebuffer; larger images cannot be rendered
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a single frame render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians, in (0, pi).
        camera_origin: Pinhole position in world space. The camera always
            looks down the negative z axis.
        background: Color returned for rays that hit nothing (RGB).
        output_path: Where the PPM image is written.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fov: float = DEFAULT_FOV
    camera_origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    background: tuple[float, float, float] = DEFAULT_BACKGROUND
    output_path: str = DEFAULT_OUTPUT_PATH

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def focal_distance(self) -> float:
        """Distance from the pinhole to the image plane, in pixel units."""
        return self.height / (2.0 * math.tan(self.fov / 2.0))

    def validate(self) -> None:
        """Check the configuration for values the renderer cannot use.

        Raises:
            ValueError: If the resolution is not positive or exceeds the
                framebuffer (MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT), or the field of
                view is outside (0, pi).
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.fov}")
