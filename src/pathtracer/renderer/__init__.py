from pathtracer.renderer.raytracer import Renderer, partition_rows, ray_color
from pathtracer.renderer.tone_mapping import to_rgb8
from pathtracer.renderer.image_io import save_image, write_ppm

__all__ = ["Renderer", "partition_rows", "ray_color", "to_rgb8", "save_image", "write_ppm"]
