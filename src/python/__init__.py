"""A small Taichi ray caster for diffusely lit spheres.

One ray per pixel from a pinhole camera, nearest-sphere intersection, and
Lambertian shading summed over point lights. The framebuffer is written as
a binary PPM image.

Subpackages:
    core: Ray utilities, render configuration, integrator and renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Lambertian shading
    scene: Scene entities, storage, nearest-hit queries and the default scene
    camera: Pinhole camera ray generation
    preview: Image export and preview utilities
"""

__version__ = "0.1.0"
