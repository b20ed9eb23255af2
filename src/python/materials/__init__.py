"""Materials module for surface shading.

Components:
    lambertian: Ideal diffuse shading from point lights

Only diffuse surfaces are modelled. Shading sums a clamped cosine term over
every light in the scene and scales the surface's diffuse color by the total.
The color itself is stored per sphere (see scene.intersection).
"""

from .lambertian import diffuse_intensity, light_term, shade_lambertian

__all__ = [
    "diffuse_intensity",
    "light_term",
    "shade_lambertian",
]
