# src/pathtracer/geometry/sphere.py
import math
from typing import Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    Passing center2 makes a moving sphere: its center travels linearly from
    center at time 0 to center2 at time 1, and the ray's time picks the
    position used for the intersection.
    """
    def __init__(self, center: Point3, radius: float, material,
                 center2: Optional[Point3] = None):
        # Center path stored as a ray so center(t) is just a ray evaluation.
        motion = Vector3(0, 0, 0) if center2 is None else center2 - center
        self.center = Ray(center, motion)
        self.radius = max(0.0, radius)
        self.material = material

        rvec = Vector3(self.radius, self.radius, self.radius)
        box0 = AABB.from_points(center - rvec, center + rvec)
        if center2 is None:
            self.bbox = box0
        else:
            box1 = AABB.from_points(center2 - rvec, center2 + rvec)
            self.bbox = AABB.surrounding_box(box0, box1)

    @property
    def is_moving(self) -> bool:
        return not self.center.direction.near_zero()

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.radius == 0.0:
            # A point has no surface to hit.
            return None
        current_center = self.center.at(ray.time)
        oc = current_center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrt_disc) / a
        if not ray_t.surrounds(root):
            root = (h + sqrt_disc) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(root)
        outward_normal = (rec.p - current_center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = get_sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.origin!r}, radius={self.radius})"


def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
    """
    Maps a point on the unit sphere to texture coordinates.

    u is the angle around the Y axis measured from X=-1, v the angle from
    Y=-1 to Y=+1, both scaled to [0, 1]:
        (1, 0, 0) -> (0.50, 0.50)    (-1, 0, 0) -> (0.00, 0.50)
        (0, 1, 0) -> (0.50, 1.00)    (0, -1, 0) -> (0.50, 0.00)
        (0, 0, 1) -> (0.25, 0.50)    (0, 0, -1) -> (0.75, 0.50)
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi
