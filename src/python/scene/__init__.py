"""Scene module for scene management and hit records.

This module handles scene representation and ray-scene queries:

Components:
    entities: Immutable host-side Light, Material and SceneSphere
    intersection: Sphere storage and nearest-hit queries
    lights: Point light storage
    manager: SceneManager that uploads entities and serializes scenes
    default_scene: The default two-sphere scene

Scene data is stored in Taichi fields using a Structure-of-Arrays layout
and is read-only while a frame renders.
"""

from .default_scene import create_default_scene
from .entities import Light, Material, SceneSphere
from .intersection import (
    HORIZON_DISTANCE,
    MAX_SPHERES,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .lights import MAX_LIGHTS, add_light, clear_lights, get_light_count
from .manager import SceneConfig, SceneManager

__all__ = [
    # Entities
    "Light",
    "Material",
    "SceneSphere",
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "HORIZON_DISTANCE",
    "MAX_SPHERES",
    # Lights module
    "add_light",
    "clear_lights",
    "get_light_count",
    "MAX_LIGHTS",
    # Manager module
    "SceneManager",
    "SceneConfig",
    # Default scene
    "create_default_scene",
]
