"""Approximate filling by layered Gauss-Seidel relaxation."""
import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from holefill.image_view import ImageView
from holefill.layers import BOUNDARY_DEPTH
from holefill.types import (
    Connectivity,
    DEFAULT_ITERATIONS,
    LayerMap,
    Pixel,
    WeightFunction,
)
from holefill.weights import checked_weight, weighted_mean

logger = logging.getLogger(__name__)

# (neighbour, weight) pairs for one hole pixel
Contributors = List[Tuple[Pixel, float]]


def collect_contributors(
    view: ImageView,
    layer_map: LayerMap,
    weight: WeightFunction,
    z: int,
    epsilon: float,
    connectivity: Connectivity
) -> List[Tuple[Pixel, Contributors]]:
    """
    Pair every hole pixel with the neighbours allowed to influence it.

    A neighbour contributes when it is a boundary pixel or a hole pixel
    whose depth does not exceed the pixel's own depth. Weights depend only
    on coordinates, so each one is evaluated once here and reused by
    every sweep.

    Returns:
        (pixel, contributors) in increasing depth order
    """
    plan = []
    for depth in sorted(layer_map.layers):
        for pixel in layer_map.layers[depth]:
            contributors = []
            for neighbour in view.neighbours(pixel, connectivity):
                neighbour_depth = layer_map.depth[neighbour]
                if BOUNDARY_DEPTH <= neighbour_depth <= depth:
                    contributors.append(
                        (neighbour, checked_weight(weight, pixel, neighbour, z, epsilon))
                    )
            plan.append((pixel, contributors))
    return plan


def fill_iterative(
    view: ImageView,
    layer_map: LayerMap,
    weight: WeightFunction,
    z: int,
    epsilon: float,
    connectivity: Connectivity,
    iterations: int = DEFAULT_ITERATIONS,
    on_sweep: Optional[Callable[[int, float], None]] = None
) -> None:
    """
    Fill hole pixels by repeated local weighted means, outermost layer first.

    Each sweep visits layers in increasing depth. A pixel becomes the
    weighted mean of its contributing neighbours, read from the working
    image as it stands, so values written earlier in the same sweep are
    used immediately. Hole neighbours not yet written in this invocation
    still hold the sentinel and are skipped.

    Args:
        view: Working image, modified in place
        layer_map: Depths from build_layers
        weight: Weight function w(hole, neighbour, z, epsilon)
        z: Weight function power
        epsilon: Weight function offset
        connectivity: Neighbour relation
        iterations: Number of sweeps
        on_sweep: Called after each sweep with (sweep index, max change)

    Raises:
        DegenerateWeightsError: If a weight is not positive and finite, or a
            pixel has no usable contributor
    """
    plan = collect_contributors(view, layer_map, weight, z, epsilon, connectivity)
    depth = layer_map.depth
    written = np.zeros(view.shape, dtype=bool)

    for sweep in range(iterations):
        max_change = 0.0
        for pixel, contributors in plan:
            dividend = 0.0
            divisor = 0.0
            for neighbour, w in contributors:
                if depth[neighbour] == BOUNDARY_DEPTH or written[neighbour]:
                    dividend += view.get(neighbour) * w
                    divisor += w

            value = weighted_mean(dividend, divisor, pixel)
            if written[pixel]:
                max_change = max(max_change, abs(value - view.get(pixel)))
            view.set(pixel, value)
            written[pixel] = True

        logger.debug(f"Sweep {sweep + 1}/{iterations}: max change {max_change:.6g}")
        if on_sweep is not None:
            on_sweep(sweep, max_change)
