"""
Configuration settings for the path tracer.

The dictionaries hold the defaults; the dataclasses validate a concrete
configuration once, before any rendering starts.
"""
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

Vec = Tuple[float, float, float]

# Rendering settings
RENDER_SETTINGS = {
    'samples_per_pixel': 10,
    'max_depth': 10,
    'workers': None,        # None uses one worker per logical core
    'seed': None,           # None draws fresh entropy on every render
    'horizon_color': (1.0, 1.0, 1.0),
    'zenith_color': (0.5, 0.7, 1.0),
}

# Camera settings
CAMERA_SETTINGS = {
    'aspect_ratio': 16.0 / 9.0,
    'image_width': 400,
    'vfov': 90.0,
    'lookfrom': (0.0, 0.0, 0.0),
    'lookat': (0.0, 0.0, -1.0),
    'vup': (0.0, 1.0, 0.0),
    'defocus_angle': 0.0,
    'focus_dist': 10.0,
}


def _known_fields(cls, values: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(values) - names
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return dict(values)


@dataclass
class RenderSettings:
    """
    How many samples to take and how far to follow each path.

    Attributes:
        samples_per_pixel: Random samples averaged into each pixel.
        max_depth: Maximum number of bounces followed per path.
        workers: Number of worker threads; None means os.cpu_count().
        seed: Seed of the per-row random streams; None is nondeterministic.
        horizon_color: Background color for rays pointing straight down.
        zenith_color: Background color for rays pointing straight up.
    """
    samples_per_pixel: int = RENDER_SETTINGS['samples_per_pixel']
    max_depth: int = RENDER_SETTINGS['max_depth']
    workers: Optional[int] = RENDER_SETTINGS['workers']
    seed: Optional[int] = RENDER_SETTINGS['seed']
    horizon_color: Vec = RENDER_SETTINGS['horizon_color']
    zenith_color: Vec = RENDER_SETTINGS['zenith_color']

    def __post_init__(self):
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must not be negative, got {self.seed}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @property
    def worker_count(self) -> int:
        return self.workers if self.workers is not None else (os.cpu_count() or 1)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "RenderSettings":
        return cls(**_known_fields(cls, values))


@dataclass
class CameraSettings:
    """
    Where the camera is, where it looks, and the image it produces.

    Attributes:
        aspect_ratio: Image width over height.
        image_width: Rendered image width in pixels.
        vfov: Vertical field of view in degrees.
        lookfrom: Camera position.
        lookat: Point the camera looks at.
        vup: Up direction, used to orient the camera.
        defocus_angle: Cone angle in degrees of rays through each pixel; 0 disables depth of field.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """
    aspect_ratio: float = CAMERA_SETTINGS['aspect_ratio']
    image_width: int = CAMERA_SETTINGS['image_width']
    vfov: float = CAMERA_SETTINGS['vfov']
    lookfrom: Vec = CAMERA_SETTINGS['lookfrom']
    lookat: Vec = CAMERA_SETTINGS['lookat']
    vup: Vec = CAMERA_SETTINGS['vup']
    defocus_angle: float = CAMERA_SETTINGS['defocus_angle']
    focus_dist: float = CAMERA_SETTINGS['focus_dist']

    def __post_init__(self):
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if not 0 < self.vfov < 180:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if tuple(self.lookfrom) == tuple(self.lookat):
            raise ValueError("lookfrom and lookat must differ")
        if self.focus_dist <= 0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")
        if self.defocus_angle < 0:
            raise ValueError(f"defocus_angle must not be negative, got {self.defocus_angle}")

    @property
    def image_height(self) -> int:
        return max(1, int(self.image_width / self.aspect_ratio))

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "CameraSettings":
        return cls(**_known_fields(cls, values))
