# src/pathtracer/materials/texture_loader.py
import os
from pathtracer.materials.textures import ImageTexture


def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture, failing loudly.

    ImageTexture itself tolerates unreadable files (it renders a debug
    color); use this when a missing texture should stop scene construction.

    Args:
        image_path: Path to the image file

    Returns:
        ImageTexture object

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the file exists but could not be decoded
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    texture = ImageTexture(image_path)
    if texture.data is None:
        raise ValueError(f"Error loading texture {image_path}")
    return texture


def create_image_material(image_path: str, material_class, **material_params):
    """
    Create a material with an image texture.

    Args:
        image_path: Path to the image file
        material_class: Material class to instantiate (e.g., Lambertian, Metal)
        **material_params: Additional parameters for the material (e.g., fuzz for Metal)

    Returns:
        Material instance with the image texture
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)
