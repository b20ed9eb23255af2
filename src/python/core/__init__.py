"""Core rendering module.

This module contains the fundamental building blocks for ray casting:

Components:
    ray: Ray data structure and the vector helpers used by every kernel
    config: Render configuration (resolution, field of view, output path)
    integrator: Per-pixel ray casting kernel and the framebuffer
    renderer: High-level Renderer tying scene, camera and export together

Each pixel gets exactly one primary ray. The ray is tested against every
sphere in the scene, and the nearest hit is shaded with a Lambertian term
summed over all point lights. Rays that miss take the background color.

The pixel loop runs as a Taichi kernel, so pixels are computed in parallel.
"""

from .config import RenderConfig
from .ray import (
    Ray,
    dot,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import them directly: from src.python.core.integrator import render_frame

__all__ = [
    "Ray",
    "RenderConfig",
    "dot",
    "length_squared",
    "make_ray",
    "normalize",
    "ray_at",
    "vec3",
]
