"""Build the sentinel-marked grayscale input from a colour image and a mask."""
import logging

import cv2
import numpy as np

from holefill.types import HOLE_VALUE, MASK_THRESHOLD

logger = logging.getLogger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert an RGB or RGBA image to a single channel.

    Args:
        image: (H, W), (H, W, 3) or (H, W, 4) array in RGB channel order

    Returns:
        (H, W) array of the same dtype
    """
    if image.ndim == 2:
        return image
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected HxW, HxWx3 or HxWx4 array, got shape {image.shape}")

    code = cv2.COLOR_RGB2GRAY if image.shape[2] == 3 else cv2.COLOR_RGBA2GRAY
    return cv2.cvtColor(np.ascontiguousarray(image), code)


def normalize_mask(mask: np.ndarray) -> np.ndarray:
    """Reduce a mask to a single float channel in [0, 1]."""
    if mask.dtype == bool:
        mask = mask.astype(np.uint8) * 255
    mask = to_grayscale(mask)
    if np.issubdtype(mask.dtype, np.integer):
        return mask.astype(np.float32) / 255.0
    return mask.astype(np.float32)


def apply_mask(
    image: np.ndarray,
    mask: np.ndarray,
    hole_value: float = HOLE_VALUE,
    threshold: float = MASK_THRESHOLD
) -> np.ndarray:
    """
    Mark masked pixels of a grayscale version of the image as holes.

    Pixels whose mask value is below the threshold become the hole
    sentinel; all others carry the grayscale intensity.

    Args:
        image: Colour or grayscale image, uint8 values in [0, 255]
        mask: Mask of the same height and width; 8-bit masks are scaled
            to [0, 1] before thresholding
        hole_value: Sentinel written into hole pixels
        threshold: Mask values below this mark holes

    Returns:
        (H, W) float32 image ready for filling

    Raises:
        ValueError: If image and mask sizes differ
    """
    if image.shape[:2] != mask.shape[:2]:
        raise ValueError(
            f"Image and mask have different sizes: {image.shape[:2]} vs {mask.shape[:2]}"
        )

    gray = to_grayscale(image).astype(np.float32)
    holes = normalize_mask(mask) < threshold

    masked = np.where(holes, np.float32(hole_value), gray).astype(np.float32)
    logger.info(f"Masked {int(np.count_nonzero(holes))} of {holes.size} pixels")
    return masked
