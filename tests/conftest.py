"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image

from holefill.types import HOLE_VALUE
from holefill.weights import euclidean_weight


def _make_block_hole(size: int, hole: int, value: float = 128.0) -> np.ndarray:
    """Square image of one value with a centred square hole."""
    image = np.full((size, size), value, dtype=np.float32)
    start = (size - hole) // 2
    image[start:start + hole, start:start + hole] = HOLE_VALUE
    return image


@pytest.fixture
def weight():
    """Reference weight function 1 / (||p - q||^z + epsilon)."""
    return euclidean_weight


@pytest.fixture
def ring_image():
    """5x5 image, inner 3x3 hole, outer ring 255."""
    return _make_block_hole(5, 3, 255.0)


@pytest.fixture
def random_hole_image():
    """12x12 random intensities with an irregular hole."""
    rng = np.random.default_rng(7)
    image = rng.uniform(0, 255, size=(12, 12)).astype(np.float32)
    image[3:7, 4:9] = HOLE_VALUE
    image[7:9, 6] = HOLE_VALUE
    image[5, 9:11] = HOLE_VALUE
    return image


@pytest.fixture
def image_files(tmp_path):
    """RGB image and mask on disk; the mask marks a 3x3 hole."""
    rgb = np.full((8, 8, 3), 100, dtype=np.uint8)
    rgb[:, 4:] = 200
    mask = np.full((8, 8), 255, dtype=np.uint8)
    mask[3:6, 3:6] = 0

    rgb_path = tmp_path / "image.png"
    mask_path = tmp_path / "mask.png"
    Image.fromarray(rgb).save(rgb_path)
    Image.fromarray(mask).save(mask_path)
    return rgb_path, mask_path


@pytest.fixture
def block_hole():
    """Factory for square images with a centred square hole."""
    return _make_block_hole
