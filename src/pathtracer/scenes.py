# src/pathtracer/scenes.py
"""
Built-in scenes.

Every scene builder takes a random generator (used for object placement and
procedural textures) plus optional keyword arguments, and returns the world
together with the camera that frames it.
"""
import logging
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from pathtracer.config import CameraSettings
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.texture_loader import create_image_material
from pathtracer.materials.textures import CheckerTexture, NoiseTexture

logger = logging.getLogger(__name__)

Scene = Tuple[HittableList, CameraSettings]


def bouncing_spheres(rng: np.random.Generator, **_) -> Scene:
    """
    A checkered ground covered in small random spheres, with three large
    ones in the middle. The diffuse spheres bounce upward during the
    exposure.
    """
    world = HittableList()

    checker = CheckerTexture(0.32, Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = Color(*rng.random(3)) * Color(*rng.random(3))
                center2 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(Sphere(center, 0.2, Lambertian(albedo), center2))
            elif choose_mat < 0.95:
                # metal
                albedo = Color(*rng.uniform(0.5, 1, 3))
                fuzz = rng.uniform(0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = CameraSettings(
        vfov=20,
        lookfrom=(13, 2, 3),
        lookat=(0, 0, 0),
        vup=(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, camera


def checkered_spheres(rng: np.random.Generator, **_) -> Scene:
    world = HittableList()
    checker = CheckerTexture(0.32, Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point3(0, -10, 0), 10, Lambertian(checker)))
    world.add(Sphere(Point3(0, 10, 0), 10, Lambertian(checker)))

    camera = CameraSettings(vfov=20, lookfrom=(13, 2, 3), lookat=(0, 0, 0))
    return world, camera


def perlin_spheres(rng: np.random.Generator, **_) -> Scene:
    world = HittableList()
    pertext = NoiseTexture(4, rng)
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(pertext)))
    world.add(Sphere(Point3(0, 2, 0), 2, Lambertian(pertext)))

    camera = CameraSettings(vfov=20, lookfrom=(13, 2, 3), lookat=(0, 0, 0))
    return world, camera


def earth(rng: np.random.Generator, texture: Optional[str] = None, **_) -> Scene:
    """
    A single globe. Uses the image at `texture` when given, otherwise a
    marble noise stand-in.
    """
    if texture is not None:
        surface = create_image_material(texture, Lambertian)
    else:
        logger.info("No texture given for the earth scene, using noise")
        surface = Lambertian(NoiseTexture(2, rng))

    world = HittableList([Sphere(Point3(0, 0, 0), 2, surface)])
    camera = CameraSettings(vfov=20, lookfrom=(0, 0, 12), lookat=(0, 0, 0))
    return world, camera


def single_sphere(rng: np.random.Generator, **_) -> Scene:
    """
    One diffuse sphere of radius 0.5 at the origin seen from straight above.
    """
    world = HittableList([Sphere(Point3(0, 0, 0), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])
    camera = CameraSettings(
        aspect_ratio=1.0,
        image_width=16,
        vfov=90,
        lookfrom=(0, 2, 0),
        lookat=(0, 0, 0),
        vup=(0, 0, -1),
        focus_dist=2.0,
    )
    return world, camera


SCENES: Dict[str, Callable[..., Scene]] = {
    'bouncing_spheres': bouncing_spheres,
    'checkered_spheres': checkered_spheres,
    'perlin_spheres': perlin_spheres,
    'earth': earth,
    'single_sphere': single_sphere,
}


def get_scene(name: str, rng: np.random.Generator, **options) -> Scene:
    """
    Builds the named scene.

    Raises:
        KeyError: If no scene has that name.
    """
    try:
        builder = SCENES[name]
    except KeyError:
        raise KeyError(f"Unknown scene {name!r}; choose from {', '.join(sorted(SCENES))}") from None

    world, camera = builder(rng, **options)
    logger.info("Built scene %s with %d objects", name, len(world))
    return world, camera
