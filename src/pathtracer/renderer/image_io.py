# src/pathtracer/renderer/image_io.py
import logging
import os
from typing import TextIO

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def write_ppm(stream: TextIO, rgb8: np.ndarray) -> None:
    """
    Writes an (h, w, 3) uint8 image as plain-text PPM (P3), top row first.
    """
    height, width = rgb8.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in rgb8:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))


def save_image(path: str, rgb8: np.ndarray) -> None:
    """
    Saves an 8-bit image. .ppm paths get plain-text PPM; anything else is
    handed to Pillow, which picks the format from the extension.
    """
    if os.path.splitext(path)[1].lower() == ".ppm":
        with open(path, "w", encoding="ascii", newline="\n") as f:
            write_ppm(f, rgb8)
    else:
        Image.fromarray(np.ascontiguousarray(rgb8, dtype=np.uint8), "RGB").save(path)
    logger.info("Wrote %s", path)
