"""Lambertian (ideal diffuse) shading from point lights.

A Lambertian surface looks equally bright from every viewing direction; its
brightness depends only on the angle between the surface normal and the
direction to each light. For a hit point p with unit normal n, the scalar
light intensity is

    I(p) = sum_k intensity_k * max(0, dot(normalize(pos_k - p), n))

and the shaded color is diffuse_color * I(p). Lights behind the surface
contribute zero; they never subtract. No shadow rays are cast, so a light
contributes fully even when another sphere sits in between.

The result is not clamped here. Several bright lights can push channels
well above 1.0; saturation happens only when the framebuffer is serialized.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.materials.lambertian import shade_lambertian
    >>> # Use within a Taichi kernel:
    >>> # color = shade_lambertian(point, normal, diffuse_color)
"""

import taichi as ti

from src.python.core.ray import dot, normalize, vec3
from src.python.scene.lights import light_intensities, light_positions, num_lights


@ti.func
def light_term(point: vec3, normal: vec3, light_position: vec3, intensity: ti.f32) -> ti.f32:
    """Diffuse contribution of a single point light.

    Args:
        point: The surface point being shaded.
        normal: The unit surface normal at point.
        light_position: The light position.
        intensity: The light intensity.

    Returns:
        intensity * max(0, cos(theta)), where theta is the angle between the
        normal and the direction to the light.
    """
    light_dir = normalize(light_position - point)
    return intensity * ti.max(0.0, dot(light_dir, normal))


@ti.func
def diffuse_intensity(point: vec3, normal: vec3) -> ti.f32:
    """Accumulated diffuse light intensity at a surface point over all lights."""
    total = 0.0
    for k in range(num_lights[None]):
        total += light_term(point, normal, light_positions[k], light_intensities[k])
    return total


@ti.func
def shade_lambertian(point: vec3, normal: vec3, diffuse_color: vec3) -> vec3:
    """Shade a surface point with the Lambertian model.

    Args:
        point: The hit point.
        normal: The unit surface normal at the hit point.
        diffuse_color: The surface's diffuse color (RGB).

    Returns:
        diffuse_color scaled uniformly by the accumulated light intensity.
    """
    return diffuse_color * diffuse_intensity(point, normal)
