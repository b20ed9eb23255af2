"""Sphere primitive with geometric ray-sphere intersection.

The intersection test works from the ray's closest approach to the sphere
center rather than from the general quadratic:

    L   = center - origin
    tca = dot(L, direction)          # projection of L onto the ray
    d2  = dot(L, L) - tca * tca      # squared distance from center to the ray
    thc = sqrt(radius^2 - d2)        # half chord length

The two crossings are at tca - thc (entry) and tca + thc (exit). This form
requires a unit-length direction.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from src.python.core.ray import dot, length_squared, normalize, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Expected positive, not validated.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class SphereHit:
    """Result of a ray-sphere intersection test.

    Attributes:
        hit: 1 if the ray crosses the sphere at or in front of its origin,
            0 otherwise.
        t: Distance along the ray to the first forward crossing. Only valid
            if hit == 1, and then never negative.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> SphereHit:
    """Find the nearest forward crossing of a ray with a sphere.

    The entry root is preferred. When it lies behind the origin (the origin
    is inside the sphere, or the whole sphere is behind it) the exit root is
    used instead; if that is negative too the sphere is missed.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray. Must be unit length.
        sphere: The sphere to test against.

    Returns:
        A SphereHit with the distance to the first forward crossing.
    """
    L = sphere.center - ray_origin
    tca = dot(L, ray_direction)
    d2 = length_squared(L) - tca * tca
    r2 = sphere.radius * sphere.radius

    did_hit = 0
    hit_t = 0.0

    if d2 <= r2:
        thc = ti.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 < 0.0:
            t0 = t1
        if t0 >= 0.0:
            did_hit = 1
            hit_t = t0

    return SphereHit(hit=did_hit, t=hit_t)


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of a sphere at a point on its surface.

    Points away from the center whichever side the ray came from.
    """
    return normalize(point - sphere.center)
