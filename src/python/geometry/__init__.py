"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) called from the
render kernel. They follow the pattern:
    result = hit_shape(ray_origin, ray_direction, shape)
"""

from .sphere import Sphere, SphereHit, hit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "SphereHit",
    "hit_sphere",
    "sphere_normal",
]
