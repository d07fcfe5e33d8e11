# src/pathtracer/materials/textures.py
import logging
import math
from typing import Optional, Union

import numpy as np
from PIL import Image

from pathtracer.core.vector import Color, Point3
from pathtracer.materials.perlin import Perlin

logger = logging.getLogger(__name__)

# Returned by image textures that have no data, so the failure is visible.
DEBUG_COLOR = Color(0, 1, 1)


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Point3) -> Color:
        """Color at surface coordinates (u, v) and world position p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, albedo: Color):
        self.albedo = albedo

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.albedo


def as_texture(albedo: Union[Color, Texture]) -> Texture:
    """Wraps a plain color in a SolidColor; textures pass through."""
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)


class CheckerTexture(Texture):
    """
    A 3D checker pattern in world space.

    Cells are cubes of side `scale`; even cells take `even`, odd cells `odd`.
    """
    def __init__(self, scale: float, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.inv_scale = 1.0 / scale
        self.even = as_texture(even)
        self.odd = as_texture(odd)

    def value(self, u: float, v: float, p: Point3) -> Color:
        x = math.floor(self.inv_scale * p.x)
        y = math.floor(self.inv_scale * p.y)
        z = math.floor(self.inv_scale * p.z)
        is_even = (x + y + z) % 2 == 0
        return self.even.value(u, v, p) if is_even else self.odd.value(u, v, p)


class ImageTexture(Texture):
    """A texture from an image file, addressed by (u, v)."""
    def __init__(self, image_path: str):
        self.data: Optional[np.ndarray] = None
        self.width = 0
        self.height = 0
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                # Normalize to [0,1] once, up front.
                self.data = np.asarray(img, dtype=np.float64) / 255.0
                self.width = img.width
                self.height = img.height
        except (OSError, Image.DecompressionBombError) as e:
            logger.warning("Could not load texture %s: %s", image_path, e)

    def value(self, u: float, v: float, p: Point3) -> Color:
        if self.data is None or self.height <= 0:
            return DEBUG_COLOR

        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)  # Flip V to image coordinates

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        r, g, b = self.data[y, x]
        return Color(float(r), float(g), float(b))


class NoiseTexture(Texture):
    """A marble-like procedural texture driven by Perlin turbulence."""
    def __init__(self, scale: float = 1.0, rng: Optional[np.random.Generator] = None):
        self.scale = scale
        self.noise = Perlin(rng)

    def value(self, u: float, v: float, p: Point3) -> Color:
        phase = self.scale * p.z + 10 * self.noise.turb(p, 7)
        return Color(0.5, 0.5, 0.5) * (1 + math.sin(phase))
