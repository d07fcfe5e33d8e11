from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.sphere import Sphere, get_sphere_uv
from pathtracer.geometry.world import HittableList
from pathtracer.geometry.bvh import BVHNode

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
    "get_sphere_uv",
    "HittableList",
    "BVHNode",
]
