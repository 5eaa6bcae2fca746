"""Load input pictures as grayscale masks."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

logger = logging.getLogger(__name__)


def mask_from_image(image: Image.Image) -> NDArray[np.uint8]:
    """Convert a PIL image to a grayscale mask.

    Args:
        image: Image in any mode

    Returns:
        HxW uint8 array, 0 = black, 255 = white
    """
    if image.mode != "L":
        image = image.convert("L")
    return np.array(image, dtype=np.uint8)


def load_mask(path: str | Path) -> NDArray[np.uint8]:
    """Load an image file as a grayscale mask.

    Args:
        path: Image file path, any format Pillow can read

    Returns:
        HxW uint8 array, 0 = black, 255 = white

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input image not found: {path}")

    with Image.open(path) as image:
        mask = mask_from_image(image)

    logger.info("Loaded %s (%dx%d)", path, mask.shape[1], mask.shape[0])
    return mask
