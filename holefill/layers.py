"""Depth layering of hole pixels from the boundary inward."""
import logging

import numpy as np

from holefill.image_view import ImageView
from holefill.types import Connectivity, LayerMap, MalformedInputError, Segmentation

logger = logging.getLogger(__name__)

UNASSIGNED = -1
BOUNDARY_DEPTH = 0


def build_layers(
    view: ImageView,
    segmentation: Segmentation,
    connectivity: Connectivity
) -> LayerMap:
    """
    Assign every hole pixel its distance from the boundary.

    Breadth-first search seeded with all boundary pixels at depth 0. Each
    wave labels the unassigned hole neighbours of the previous wave with
    the next depth, so hole pixels touching the boundary get depth 1.

    Args:
        view: Image the segmentation was taken from
        segmentation: Hole and boundary pixels
        connectivity: Neighbour relation, same as used for segmentation

    Returns:
        LayerMap with a dense depth array and pixels grouped by depth,
        in insertion order within each depth

    Raises:
        MalformedInputError: If a hole pixel is unreachable from the boundary
    """
    hole_mask = segmentation.hole_mask(view.shape)
    depth = np.full(view.shape, UNASSIGNED, dtype=np.int32)
    for pixel in segmentation.boundary:
        depth[pixel] = BOUNDARY_DEPTH

    layer_map = LayerMap(depth=depth)
    frontier = list(segmentation.boundary)
    current_depth = BOUNDARY_DEPTH

    while frontier:
        next_frontier = []
        for pixel in frontier:
            for neighbour in view.neighbours(pixel, connectivity):
                if hole_mask[neighbour] and depth[neighbour] == UNASSIGNED:
                    depth[neighbour] = current_depth + 1
                    next_frontier.append(neighbour)
        if next_frontier:
            layer_map.layers[current_depth + 1] = next_frontier
        frontier = next_frontier
        current_depth += 1

    unassigned = int(np.count_nonzero(hole_mask & (depth == UNASSIGNED)))
    if unassigned:
        raise MalformedInputError(
            f"{unassigned} hole pixels are not connected to the boundary"
        )

    logger.debug(
        f"Built {len(layer_map.layers)} layers over {segmentation.hole_count} hole pixels"
    )
    return layer_map
