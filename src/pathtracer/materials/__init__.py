from pathtracer.materials.material import Material
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.textures import (
    CheckerTexture,
    ImageTexture,
    NoiseTexture,
    SolidColor,
    Texture,
)

__all__ = [
    "Material",
    "Lambertian",
    "Metal",
    "Dielectric",
    "Texture",
    "SolidColor",
    "CheckerTexture",
    "ImageTexture",
    "NoiseTexture",
]
