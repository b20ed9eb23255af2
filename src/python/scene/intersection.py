"""Scene-level sphere intersection testing.

This module stores the scene's spheres in Taichi fields and answers
nearest-hit queries against all of them with a brute-force linear scan.
Each sphere carries its own diffuse color; materials are copied by value
into the sphere slot when the sphere is added.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, -5), 1.0, diffuse_color=vec3(1.0, 0.5, 0.75))
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.python.core.ray import make_ray, ray_at
from src.python.geometry.sphere import Sphere, hit_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Hits at or beyond this distance are treated as misses (far plane)
HORIZON_DISTANCE = 1000.0

# Initial "closest so far" distance: the largest finite f32
NO_HIT_DISTANCE = 3.4028234e38


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection with the hit sphere's material.

    Attributes:
        hit: 1 if a sphere was hit closer than HORIZON_DISTANCE, 0 otherwise.
        t: Distance along the ray to the hit. Only valid if hit == 1.
        point: The hit point. Only valid if hit == 1.
        normal: Outward unit normal of the hit sphere at the hit point.
            Only valid if hit == 1.
        diffuse_color: Diffuse color of the hit sphere. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    diffuse_color: vec3


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: vec3, radius: float, diffuse_color: vec3) -> int:
    """Add a sphere to the scene.

    Spheres are tested in the order they are added; on an exact distance tie
    the earlier sphere wins.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        diffuse_color: The sphere's diffuse color (RGB).

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_diffuse_colors[idx] = diffuse_color
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        diffuse_color=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest sphere hit along a ray.

    Every sphere is tested. A sphere replaces the current best only if its
    distance is strictly smaller, so equidistant surfaces resolve to the
    sphere added first. The nearest hit counts only if it is closer than
    HORIZON_DISTANCE.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray. Must be unit length.

    Returns:
        A SceneHitRecord for the nearest sphere, or a miss record.
    """
    closest_t = NO_HIT_DISTANCE
    closest_index = -1

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1 and rec.t < closest_t:
            closest_t = rec.t
            closest_index = i

    result = _make_miss_record()
    if closest_index >= 0 and closest_t < HORIZON_DISTANCE:
        sphere = Sphere(
            center=sphere_centers[closest_index],
            radius=sphere_radii[closest_index],
        )
        point = ray_at(make_ray(ray_origin, ray_direction), closest_t)
        result = SceneHitRecord(
            hit=1,
            t=closest_t,
            point=point,
            normal=sphere_normal(sphere, point),
            diffuse_color=sphere_diffuse_colors[closest_index],
        )

    return result
