# src/pathtracer/camera/camera.py
import math
from pathtracer.config import CameraSettings
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Point3, Vector3


class Camera:
    """
    Positionable thin-lens camera.

    All derived geometry (basis, pixel grid, defocus disk) is computed once
    in the constructor and never changes, so one camera can serve any number
    of render threads.
    """
    def __init__(self, settings: CameraSettings):
        self.settings = settings
        self.image_width = settings.image_width
        self.image_height = settings.image_height
        self.defocus_angle = settings.defocus_angle
        self.center = Point3(*settings.lookfrom)

        lookat = Point3(*settings.lookat)
        vup = Vector3(*settings.vup)

        # Viewport dimensions on the focus plane
        theta = math.radians(settings.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * settings.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal basis: u right, v up, w opposite the view direction.
        self.w = (self.center - lookat).normalize()
        right = vup.cross(self.w)
        if right.near_zero():
            raise ValueError("vup must not be parallel to the viewing direction")
        self.u = right.normalize()
        self.v = self.w.cross(self.u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * settings.focus_dist
                               - viewport_u / 2
                               - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = settings.focus_dist * math.tan(math.radians(settings.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng) -> Ray:
        """
        Ray from the lens through a random point of pixel (i, j).

        i counts columns from the left, j rows from the top. The ray starts
        on the defocus disk when depth of field is on, and carries a random
        time in [0, 1) for motion blur.
        """
        offset_x = rng.random() - 0.5
        offset_y = rng.random() - 0.5
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset_x)
                        + self.pixel_delta_v * (j + offset_y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        ray_direction = pixel_sample - ray_origin
        ray_time = rng.random()
        return Ray(ray_origin, ray_direction, ray_time)

    def defocus_disk_sample(self, rng) -> Point3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y
