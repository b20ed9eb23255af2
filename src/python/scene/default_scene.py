"""The default two-sphere scene.

A pink sphere in the middle distance and a smaller blue sphere closer to the
camera and up to the left, lit by one point light below the camera.
"""

from src.python.scene.entities import Light, Material, SceneSphere

PINK = Material(diffuse_color=(1.00, 0.50, 0.75))
BLUE = Material(diffuse_color=(0.20, 0.30, 0.70))


def create_default_scene() -> tuple[list[SceneSphere], list[Light]]:
    """Create the default scene.

    Returns:
        Tuple of (spheres, lights).
    """
    spheres = [
        SceneSphere(center=(5.0, 0.0, -50.0), radius=6.0, material=PINK),
        SceneSphere(center=(-10.0, 5.0, -28.0), radius=5.0, material=BLUE),
    ]
    lights = [
        Light(position=(0.0, -20.0, 0.0), intensity=2.0),
    ]
    return spheres, lights
