"""Ray casting integrator and framebuffer.

This module implements the per-pixel rendering kernel. For every pixel a
single primary ray is generated by the pinhole camera, intersected with the
scene, and shaded:

    camera ray -> intersect_scene -> shade_lambertian -> framebuffer[j, i]

Rays that hit nothing closer than the horizon take the background color.
There are no secondary rays: no reflection, refraction or shadow tests.

The framebuffer stores unclamped linear colors. Clamping to [0, 1] happens
only when the image is serialized (see src.python.preview.export).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.core.integrator import (
    ...     render_frame, setup_render_target, get_framebuffer_numpy
    ... )
    >>> from src.python.camera.pinhole import PinholeCamera, setup_camera
    >>>
    >>> setup_render_target(1050, 750)
    >>> setup_camera(PinholeCamera(), image_height=750)
    >>> render_frame()
    >>> image = get_framebuffer_numpy()  # shape (750, 1050, 3)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.python.camera.pinhole import get_ray
from src.python.core.config import DEFAULT_BACKGROUND, MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from src.python.core.ray import normalize
from src.python.materials.lambertian import shade_lambertian
from src.python.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Render Target (Framebuffer)
# =============================================================================

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color returned for rays that miss every sphere
_background_color = ti.Vector.field(3, dtype=ti.f32, shape=())

# Framebuffer indexed [row, column], preallocated to max size
_framebuffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(
    width: int,
    height: int,
    background: tuple[float, float, float] = DEFAULT_BACKGROUND,
) -> None:
    """Initialize the render target.

    Sets the active image dimensions and background color and clears the
    framebuffer. The framebuffer is preallocated to MAX_IMAGE_HEIGHT x
    MAX_IMAGE_WIDTH so changing the size does not recompile kernels.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).
        background: Color for rays that hit nothing (RGB).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _background_color[None] = [background[0], background[1], background[2]]
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the framebuffer to zero."""
    _framebuffer.fill(0.0)


def reset_render_target() -> None:
    """Clear the framebuffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def get_background_color() -> tuple[float, float, float]:
    """Get the background color used for missed rays."""
    bg = _background_color[None]
    return (float(bg[0]), float(bg[1]), float(bg[2]))


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Ray Casting Core
# =============================================================================


@ti.func
def cast_ray(ray_origin: vec3, ray_direction: vec3) -> vec3:
    """Compute the color seen along a single ray.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The shaded color of the nearest sphere, or the background color if
        no sphere is hit within the horizon.
    """
    color = _background_color[None]
    rec = intersect_scene(ray_origin, ray_direction)
    if rec.hit == 1:
        color = shade_lambertian(rec.point, rec.normal, rec.diffuse_color)
    return color


@ti.func
def render_pixel_impl(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Render the color of one pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The linear, unclamped color of the pixel.
    """
    ray = get_ray(pixel_i, pixel_j, width, height)
    return cast_ray(ray.origin, ray.direction)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(width: ti.i32, height: ti.i32):
    """Render every pixel of the active region into the framebuffer.

    The outer loop is parallelized by Taichi. Each iteration writes its own
    slot and only reads scene data, so no synchronization is needed.
    """
    for j, i in ti.ndrange(height, width):
        _framebuffer[j, i] = render_pixel_impl(i, j, width, height)


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Render a specific pixel without touching the framebuffer."""
    return render_pixel_impl(pixel_i, pixel_j, width, height)


@ti.kernel
def _cast_single_ray(origin: vec3, direction: vec3) -> vec3:
    """Cast one arbitrary ray from Python scope."""
    return cast_ray(origin, normalize(direction))


# =============================================================================
# Public Rendering API
# =============================================================================


def render_frame() -> None:
    """Render the full image into the framebuffer.

    Every pixel of the active region is computed exactly once. The scene and
    camera must already be set up.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_frame(width, height)


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
    """Render a single pixel and return its color.

    Useful for testing individual pixels. For full images use render_frame(),
    which processes all pixels in parallel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).

    Returns:
        Tuple of (R, G, B) color values, unclamped.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(pixel_i, pixel_j, width, height)

    return (float(color[0]), float(color[1]), float(color[2]))


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Cast a single ray through the current scene.

    The direction is normalized before use.

    Args:
        origin: Ray origin (x, y, z).
        direction: Ray direction (x, y, z), any non-zero length.

    Returns:
        Tuple of (R, G, B) color values, unclamped.

    Raises:
        RuntimeError: If render target has not been set up (the background
            color lives there).
    """
    _check_render_target_initialized()

    color = _cast_single_ray(vec3(*origin), vec3(*direction))
    return (float(color[0]), float(color[1]), float(color[2]))


def get_framebuffer():
    """Get the raw framebuffer field.

    Note: This returns the full preallocated buffer. Use
    get_image_dimensions() to determine the active region.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _framebuffer


def get_framebuffer_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are linear and unclamped. The array is row-major with shape
    (height, width, 3): row 0 is the top of the image, and flattening the
    first two axes puts pixel (i, j) at index i + j * width.

    Returns:
        NumPy array of shape (height, width, 3) with dtype float32.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _framebuffer.to_numpy()

    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.float32)
