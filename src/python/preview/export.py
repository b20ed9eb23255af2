"""Image export utilities for rendered framebuffers.

Converts a linear float framebuffer to 8-bit channels and writes it out.
The conversion is deliberately plain: each channel is clamped to [0, 1],
multiplied by 255 and truncated toward zero. No gamma, no tone mapping, no
dithering.

Supported formats:
    - PPM (binary P6, written directly)
    - PNG (8-bit via Pillow)

Example:
    >>> from src.python.preview.export import save_ppm
    >>> from src.python.core.integrator import get_framebuffer_numpy
    >>>
    >>> save_ppm(get_framebuffer_numpy(), "picture.ppm")
"""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

PathLike = str | os.PathLike[str]


def clamp_image(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Clamp every channel of a linear image to [0, 1].

    NaN channels clamp to 1.0: the upper bound is applied first and a NaN
    never compares below it.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        Clamped float32 image of the same shape.
    """
    image = np.asarray(image, dtype=np.float32)
    image = np.where(np.isnan(image), 1.0, image)
    return np.clip(image, 0.0, 1.0).astype(np.float32)


def framebuffer_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear framebuffer to 8-bit channels.

    Args:
        image: Linear image array of shape (H, W, 3), values unbounded.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    # astype truncates toward zero, which is what we want for [0, 255]
    return (255.0 * clamp_image(image)).astype(np.uint8)


def ppm_header(width: int, height: int) -> bytes:
    """Build the header of a binary (P6) PPM file with maxval 255."""
    return f"P6\n{width} {height}\n255\n".encode("ascii")


def encode_ppm(image: npt.NDArray[np.floating]) -> bytes:
    """Encode a linear framebuffer as a binary PPM file.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        The header followed by exactly H * W * 3 bytes, row-major, no padding.

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    height, width = image.shape[0], image.shape[1]
    pixels = np.ascontiguousarray(framebuffer_to_uint8(image))
    return ppm_header(width, height) + pixels.tobytes()


def save_ppm(image: npt.NDArray[np.floating], filepath: PathLike) -> Path:
    """Save a linear framebuffer as a binary PPM file.

    The whole file is encoded in memory before anything is written. Errors
    from the file system (unwritable path, disk full) propagate as OSError.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.
    """
    data = encode_ppm(image)
    path = Path(filepath)
    with open(path, "wb") as f:
        f.write(data)
    return path


def load_ppm(filepath: PathLike) -> npt.NDArray[np.uint8]:
    """Load a PPM (or any Pillow-readable) image as 8-bit RGB.

    Returns:
        Image array of shape (H, W, 3) with dtype uint8.
    """
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8).copy()


def save_png(image: npt.NDArray[np.floating], filepath: PathLike) -> Path:
    """Save a linear framebuffer as an 8-bit PNG file.

    Uses the same clamp-and-truncate conversion as the PPM writer.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).

    Returns:
        The path written.
    """
    image_uint8 = framebuffer_to_uint8(image)
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(path)
    return path


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
