"""Scene manager for uploading spheres and lights.

This module provides a high-level scene API on top of the field storage in
scene.intersection and scene.lights. The SceneManager keeps a host-side copy
of what it uploaded, in insertion order, so the scene can be inspected and
serialized to a JSON-friendly dictionary.

Insertion order matters: spheres are tested in the order they were added,
and when two spheres are hit at exactly the same distance the earlier one
wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.scene.entities import Light, Material, SceneSphere
    >>> from src.python.scene.manager import SceneManager
    >>> pink = Material(diffuse_color=(1.0, 0.5, 0.75))
    >>> scene = SceneManager()
    >>> scene.add_sphere(SceneSphere(center=(5, 0, -50), radius=6, material=pink))
    0
    >>> scene.add_light(Light(position=(0, -20, 0), intensity=2.0))
    0
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from src.python.scene.entities import Light, Material, SceneSphere, Vec3
from src.python.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)
from src.python.scene.lights import (
    MAX_LIGHTS,
    add_light,
    clear_lights,
    get_light_count,
)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


def _to_vec3(value: Any, name: str) -> Vec3:
    """Convert a 3-element sequence to a float tuple.

    Raises:
        ValueError: If value is not a sequence of exactly three numbers.
    """
    try:
        x, y, z = value
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of three numbers, got {value!r}") from e


class SceneManager:
    """High-level scene builder.

    Uploads spheres and lights into the Taichi fields used by the render
    kernel and tracks them locally.

    Only one scene is live at a time. The fields are module-level, so every
    SceneManager writes to the same storage, and constructing, clearing or
    loading another manager empties it. After that the first manager's
    spheres, lights and to_dict() no longer describe what will be rendered;
    call load() on it again to re-upload its scene.

    Attributes:
        spheres: The spheres in the scene, in insertion order.
        lights: The lights in the scene, in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SceneSphere] = []
        self.lights: list[Light] = []
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_lights()
        self.spheres.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Clear the entire scene (spheres and lights)."""
        self._clear_all()

    # =========================================================================
    # Scene Construction
    # =========================================================================

    def add_sphere(self, sphere: SceneSphere) -> int:
        """Add a sphere to the scene.

        Args:
            sphere: The sphere to add. Its material's diffuse color is copied
                into the sphere slot.

        Returns:
            The index of the sphere in the scene.

        Raises:
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        index = add_sphere(sphere.center, sphere.radius, sphere.material.diffuse_color)
        self.spheres.append(sphere)
        return index

    def add_light(self, light: Light) -> int:
        """Add a point light to the scene.

        Returns:
            The index of the light in the scene.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
        """
        index = add_light(light.position, light.intensity)
        self.lights.append(light)
        return index

    def load(self, spheres: Iterable[SceneSphere], lights: Iterable[Light]) -> None:
        """Replace the current scene with the given spheres and lights.

        The inputs are copied before clearing, so passing this manager's own
        spheres and lights re-uploads them.
        """
        spheres = list(spheres)
        lights = list(lights)
        self.clear()
        for sphere in spheres:
            self.add_sphere(sphere)
        for light in lights:
            self.add_light(light)

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return get_light_count()

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "diffuse_color": list(sphere.material.diffuse_color),
                }
            )

        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "intensity": light.intensity,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        spheres = []
        for sphere_config in config.spheres:
            if "center" not in sphere_config or "radius" not in sphere_config:
                raise ValueError(f"Sphere entry needs 'center' and 'radius': {sphere_config!r}")
            spheres.append(
                SceneSphere(
                    center=_to_vec3(sphere_config["center"], "center"),
                    radius=float(sphere_config["radius"]),
                    material=Material(
                        diffuse_color=_to_vec3(
                            sphere_config.get("diffuse_color", [0.0, 0.0, 0.0]),
                            "diffuse_color",
                        )
                    ),
                )
            )

        lights = []
        for light_config in config.lights:
            if "position" not in light_config or "intensity" not in light_config:
                raise ValueError(
                    f"Light entry needs 'position' and 'intensity': {light_config!r}"
                )
            lights.append(
                Light(
                    position=_to_vec3(light_config["position"], "position"),
                    intensity=float(light_config["intensity"]),
                )
            )

        self.load(spheres, lights)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'spheres' and 'lights' keys."""
        config = SceneConfig(
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS
