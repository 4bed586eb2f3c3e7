"""Hole and boundary segmentation by iterative flood fill."""
import logging

import numpy as np
from scipy.ndimage import generate_binary_structure, label

from holefill.image_view import ImageView
from holefill.types import (
    Connectivity,
    EmptyInputError,
    HOLE_VALUE,
    MalformedInputError,
    Pixel,
    Segmentation,
)

logger = logging.getLogger(__name__)


def find_first_hole_pixel(image: np.ndarray, hole_value: float = HOLE_VALUE) -> Pixel:
    """
    Find the first hole pixel in row-major order.

    Args:
        image: (H, W) float image
        hole_value: Sentinel marking hole pixels

    Returns:
        (row, col) of the first hole pixel

    Raises:
        EmptyInputError: If the image has no hole pixel
    """
    coords = np.argwhere(image == hole_value)
    if len(coords) == 0:
        raise EmptyInputError("Image contains no hole pixels")
    row, col = coords[0]
    return int(row), int(col)


def segment_hole(view: ImageView, seed: Pixel, connectivity: Connectivity) -> Segmentation:
    """
    Collect the hole component containing the seed and its boundary.

    Flood fill driven by an explicit stack so that hole size is not limited
    by recursion depth. The visited array covers hole and boundary pixels
    alike, so each boundary pixel is reported once.

    Args:
        view: Image to segment
        seed: A hole pixel
        connectivity: Neighbour relation

    Returns:
        Segmentation with hole pixels, boundary pixels and boundary values

    Raises:
        MalformedInputError: If the seed is not a hole pixel or the hole
            has no boundary
    """
    if not view.in_bounds(seed) or not view.is_hole(seed):
        raise MalformedInputError(f"Seed {seed} is not a hole pixel")

    segmentation = Segmentation(seed=seed)
    visited = np.zeros(view.shape, dtype=bool)
    stack = [seed]

    while stack:
        pixel = stack.pop()
        if visited[pixel]:
            continue
        visited[pixel] = True

        if not view.is_hole(pixel):
            segmentation.boundary.append(pixel)
            segmentation.boundary_values.append(view.get(pixel))
            continue

        segmentation.holes.append(pixel)
        # Reversed so neighbours pop in offset-table order
        for neighbour in reversed(list(view.neighbours(pixel, connectivity))):
            if not visited[neighbour]:
                stack.append(neighbour)

    if not segmentation.boundary:
        raise MalformedInputError(
            f"Hole of {segmentation.hole_count} pixels has no boundary samples"
        )

    logger.debug(
        f"Segmented hole from seed {seed}: {segmentation.hole_count} hole pixels, "
        f"{segmentation.boundary_count} boundary pixels"
    )
    return segmentation


def count_hole_components(
    image: np.ndarray,
    connectivity: Connectivity = Connectivity.EIGHT,
    hole_value: float = HOLE_VALUE
) -> int:
    """
    Count connected hole regions under the given connectivity.

    Args:
        image: (H, W) float image
        connectivity: Neighbour relation
        hole_value: Sentinel marking hole pixels

    Returns:
        Number of separate hole components
    """
    rank = 1 if connectivity is Connectivity.FOUR else 2
    structure = generate_binary_structure(2, rank)
    _, num_features = label(image == hole_value, structure=structure)
    return int(num_features)
