"""Pinhole camera model for primary ray generation.

The camera sits at a fixed position and looks down the negative z axis with
+y up. Rays are built directly in pixel units: the image plane lies at a
focal distance derived from the vertical field of view,

    focal = height / (2 * tan(fov / 2))

and the ray through pixel (i, j) points at

    ((i + 0.5) - width / 2, -(j + 0.5) + height / 2, -focal)

Row j = 0 is the top of the image, so y is flipped: increasing the row index
moves the ray down. The direction is normalized before it is returned.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(origin=(0.0, 0.0, 0.0), fov=1.0)
    >>> setup_camera(camera, image_height=750)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(525, 375, 1050, 750)  # Ray near the image center
"""

import math
from dataclasses import dataclass

import taichi as ti

from src.python.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        origin: Camera position in world space (x, y, z).
        fov: Vertical field of view in radians.
    """

    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    fov: float = 1.0


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Distance from the pinhole to the image plane, in pixel units
_focal_distance = ti.field(dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def focal_distance(fov: float, image_height: int) -> float:
    """Compute the image-plane distance for a vertical field of view.

    Args:
        fov: Vertical field of view in radians.
        image_height: Image height in pixels.

    Returns:
        height / (2 * tan(fov / 2)).
    """
    return image_height / (2.0 * math.tan(fov / 2.0))


def setup_camera(camera: PinholeCamera, image_height: int) -> None:
    """Initialize camera state from configuration.

    Must be called before rendering, and again whenever the image height
    changes since the focal distance depends on it.

    Args:
        camera: Camera configuration with position and field of view.
        image_height: Height of the image the camera renders into.
    """
    _camera_origin[None] = [camera.origin[0], camera.origin[1], camera.origin[2]]
    _focal_distance[None] = focal_distance(camera.fov, image_height)


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (i, j).

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera origin with a unit-length direction.
    """
    dir_x = (ti.cast(pixel_i, ti.f32) + 0.5) - ti.cast(width, ti.f32) / 2.0
    dir_y = -(ti.cast(pixel_j, ti.f32) + 0.5) + ti.cast(height, ti.f32) / 2.0
    dir_z = -_focal_distance[None]
    direction = normalize(vec3(dir_x, dir_y, dir_z))
    return make_ray(_camera_origin[None], direction)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the camera origin and focal distance.
    """
    origin_vec = _camera_origin[None]
    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "focal_distance": float(_focal_distance[None]),
    }
