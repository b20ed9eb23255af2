"""Host-side scene entities.

These immutable dataclasses describe a scene in plain Python before it is
uploaded to Taichi fields by the SceneManager. None of the values are
validated: radii, intensities and colors are taken as given.
"""

from dataclasses import dataclass

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Light position in world space.
        intensity: Scalar intensity, conventionally positive.
    """

    position: Vec3
    intensity: float


@dataclass(frozen=True)
class Material:
    """A diffuse material.

    Materials are copied by value into every sphere that uses them.

    Attributes:
        diffuse_color: RGB diffuse color, components conventionally in [0, 1].
    """

    diffuse_color: Vec3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class SceneSphere:
    """A sphere with its material.

    Attributes:
        center: Sphere center in world space.
        radius: Sphere radius, conventionally positive.
        material: The sphere's material.
    """

    center: Vec3
    radius: float
    material: Material
