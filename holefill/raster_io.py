"""Reading input images and writing the filled result."""
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image
from PIL import ImageOps

from holefill.types import HOLE_VALUE, RasterIOError

logger = logging.getLogger(__name__)


def _open_checked(path: Path) -> Image.Image:
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    if not path.is_file():
        raise RasterIOError(f"Path is not a file: {path}")
    try:
        img = Image.open(path)
        img.load()
    except (IOError, OSError) as e:
        raise RasterIOError(f"Failed to load image {path}: {e}")
    # Apply EXIF orientation so image and mask line up
    return ImageOps.exif_transpose(img)


def load_rgb(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as an RGB array.

    Transparent images are composited on a white background.

    Args:
        path: Path to image file

    Returns:
        (H, W, 3) uint8 array

    Raises:
        FileNotFoundError: If file doesn't exist
        RasterIOError: If file cannot be loaded
    """
    path = Path(path)
    with _open_checked(path) as img:
        if img.mode == 'RGBA':
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[3])
            img = background
        elif img.mode != 'RGB':
            img = img.convert('RGB')

        image = np.array(img, dtype=np.uint8)

    logger.debug(f"Loaded {path}: {image.shape[1]}x{image.shape[0]}")
    return image


def load_mask(path: Union[str, Path]) -> np.ndarray:
    """
    Load a mask image as a single 8-bit channel.

    Returns:
        (H, W) uint8 array; dark pixels mark the hole

    Raises:
        FileNotFoundError: If file doesn't exist
        RasterIOError: If file cannot be loaded
    """
    path = Path(path)
    with _open_checked(path) as img:
        mask = np.array(img.convert('L'), dtype=np.uint8)
    return mask


def to_uint8(image: np.ndarray, hole_value: float = HOLE_VALUE) -> np.ndarray:
    """Round and clamp a float image to 8-bit; leftover hole pixels become 0."""
    values = np.where(image == hole_value, 0.0, image)
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def save_filled(image: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Write a filled float image as an 8-bit grayscale file.

    Args:
        image: (H, W) float image
        path: Output path; format chosen from the extension

    Returns:
        The path written

    Raises:
        RasterIOError: If the file cannot be written
    """
    path = Path(path)
    try:
        Image.fromarray(to_uint8(image)).save(path)
    except (IOError, OSError, ValueError) as e:
        raise RasterIOError(f"Failed to write image {path}: {e}")
    logger.info(f"Saved filled image to {path}")
    return path
