# src/pathtracer/renderer/raytracer.py
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.config import CameraSettings, RenderSettings
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import make_rng
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Scattered rays start on the surface they left; ignoring hits closer than
# this keeps them from hitting it again through rounding error.
T_MIN = 0.001
BLACK = Color(0.0, 0.0, 0.0)
# Sky gradient ends for rays pointing straight down and straight up.
HORIZON = Color(1.0, 1.0, 1.0)
ZENITH = Color(0.5, 0.7, 1.0)


def ray_color(ray: Ray, depth: int, world: Hittable, rng,
              horizon: Color = HORIZON, zenith: Color = ZENITH) -> Color:
    """
    Radiance carried back along a ray.

    Follows the scattered ray until it leaves the scene, is absorbed, or the
    bounce budget runs out. Each bounce multiplies in its material's
    attenuation; a path that escapes picks up the sky gradient.
    """
    # If we've exceeded the ray bounce limit, no more light is gathered.
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, Interval(T_MIN, math.inf))
    if rec is not None:
        result = rec.material.scatter(ray, rec, rng)
        if result is None:
            return BLACK
        attenuation, scattered = result
        return attenuation * ray_color(scattered, depth - 1, world, rng, horizon, zenith)

    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return horizon * (1.0 - a) + zenith * a


def partition_rows(height: int, workers: int) -> List[Tuple[int, int]]:
    """
    Splits [0, height) into at most `workers` contiguous half-open ranges.

    Ranges differ in size by at most one row and never overlap or come out
    empty.
    """
    workers = max(1, min(workers, height))
    base, extra = divmod(height, workers)
    ranges = []
    start = 0
    for k in range(workers):
        end = start + base + (1 if k < extra else 0)
        ranges.append((start, end))
        start = end
    return ranges


class Renderer:
    """
    Multithreaded Monte Carlo path tracer.

    The image rows are split into one contiguous block per worker thread.
    Workers share the scene and camera read-only and write only their own
    rows of the output buffer, so no locking is needed. Every row draws from
    its own random stream keyed by (seed, row), which makes the image
    independent of how many workers rendered it.
    """
    def __init__(self, camera_settings: CameraSettings,
                 settings: Optional[RenderSettings] = None):
        self.settings = settings if settings is not None else RenderSettings()
        self.camera = Camera(camera_settings)
        self.width = self.camera.image_width
        self.height = self.camera.image_height
        self.pixel_samples_scale = 1.0 / self.settings.samples_per_pixel
        self.horizon = Color(*self.settings.horizon_color)
        self.zenith = Color(*self.settings.zenith_color)

    def render(self, world: Hittable) -> np.ndarray:
        """
        Renders the world into a (height, width, 3) array of linear colors.

        Row 0 is the top of the image. Returns only after every worker has
        finished; an exception in any worker is re-raised here.
        """
        buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        # Resolve the seed once so every row of this render shares it.
        entropy = np.random.SeedSequence(self.settings.seed).entropy
        partitions = partition_rows(self.height, self.settings.worker_count)

        logger.info("Rendering %dx%d, %d spp, depth %d, %d workers",
                    self.width, self.height, self.settings.samples_per_pixel,
                    self.settings.max_depth, len(partitions))
        started = time.perf_counter()

        with ThreadPoolExecutor(max_workers=len(partitions),
                                thread_name_prefix="render") as executor:
            futures = [
                executor.submit(self.render_rows, world, buffer, start, end, entropy)
                for start, end in partitions
            ]
            for future in futures:
                future.result()

        logger.info("Render finished in %.2fs", time.perf_counter() - started)
        return buffer

    def render_rows(self, world: Hittable, buffer: np.ndarray,
                    start: int, end: int, entropy: int) -> None:
        """
        Renders rows [start, end) into buffer. Runs on a worker thread.
        """
        camera = self.camera
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth
        scale = self.pixel_samples_scale
        row = np.empty((self.width, 3), dtype=np.float64)

        for j in range(start, end):
            rng = make_rng(entropy, j)
            for i in range(self.width):
                r = g = b = 0.0
                for _ in range(samples):
                    ray = camera.get_ray(i, j, rng)
                    c = ray_color(ray, max_depth, world, rng, self.horizon, self.zenith)
                    r += c.x
                    g += c.y
                    b += c.z
                row[i] = (r * scale, g * scale, b * scale)
            buffer[j] = row

        logger.debug("Rows %d-%d done", start, end - 1)
