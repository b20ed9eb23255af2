"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera at a fixed position looking down -z

Camera responsibilities:
    - Turn (column, row) pixel coordinates into world-space rays
    - Derive the image-plane distance from the vertical field of view

One ray per pixel, through the pixel center. There is no jitter and no
anti-aliasing.
"""

from .pinhole import (
    PinholeCamera,
    focal_distance,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "focal_distance",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
