"""Preview module for output and visualization.

This module handles writing and showing rendered framebuffers:

Components:
    export: PPM/PNG image export and PPM loading
    display: Matplotlib-based static preview

Every path from a linear framebuffer to 8-bit pixels uses the same
conversion: clamp each channel to [0, 1], scale by 255, truncate.

Example:
    >>> from src.python.preview import save_ppm, show_preview
    >>> save_ppm(image, "picture.ppm")
    >>> show_preview(image)
"""

from src.python.preview.display import (
    process_image_for_display,
    show_preview,
)
from src.python.preview.export import (
    clamp_image,
    compute_rmse,
    encode_ppm,
    framebuffer_to_uint8,
    load_ppm,
    ppm_header,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "process_image_for_display",
    # Export functions
    "clamp_image",
    "framebuffer_to_uint8",
    "ppm_header",
    "encode_ppm",
    "save_ppm",
    "load_ppm",
    "save_png",
    "compute_rmse",
]
