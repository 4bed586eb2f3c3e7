"""Weight functions relating a hole pixel to a sample pixel."""
import math
from typing import Dict

from holefill.types import DegenerateWeightsError, Pixel, WeightFunction


def euclidean_distance(p1: Pixel, p2: Pixel) -> float:
    """Euclidean distance between two (row, col) pixels."""
    d_row = p2[0] - p1[0]
    d_col = p2[1] - p1[1]
    return math.sqrt(d_row * d_row + d_col * d_col)


def euclidean_weight(p1: Pixel, p2: Pixel, z: int, epsilon: float) -> float:
    """
    Inverse distance weight 1 / (||p1 - p2||^z + epsilon).

    Args:
        p1: Hole pixel
        p2: Sample pixel
        z: Power applied to the distance
        epsilon: Small positive constant keeping the weight finite

    Returns:
        Strictly positive weight
    """
    return 1.0 / (euclidean_distance(p1, p2) ** z + epsilon)


def manhattan_weight(p1: Pixel, p2: Pixel, z: int, epsilon: float) -> float:
    """Inverse weight on the L1 distance: 1 / ((|dr| + |dc|)^z + epsilon)."""
    distance = abs(p2[0] - p1[0]) + abs(p2[1] - p1[1])
    return 1.0 / (distance ** z + epsilon)


def gaussian_weight(p1: Pixel, p2: Pixel, z: int, epsilon: float) -> float:
    """Gaussian falloff with standard deviation z, plus epsilon."""
    squared = (p2[0] - p1[0]) ** 2 + (p2[1] - p1[1]) ** 2
    return math.exp(-squared / (2.0 * z * z)) + epsilon


def checked_weight(
    weight: WeightFunction,
    p1: Pixel,
    p2: Pixel,
    z: int,
    epsilon: float
) -> float:
    """
    Evaluate a weight function, rejecting non-positive or non-finite results.

    Raises:
        DegenerateWeightsError: If the weight is <= 0 or not finite
    """
    w = weight(p1, p2, z, epsilon)
    if not math.isfinite(w) or w <= 0:
        raise DegenerateWeightsError(
            f"Weight between {p1} and {p2} must be positive and finite, got {w}"
        )
    return w


def weighted_mean(dividend: float, divisor: float, pixel: Pixel) -> float:
    """
    Finish a weighted mean accumulated as sum(w * v) / sum(w).

    Raises:
        DegenerateWeightsError: If the divisor is zero or either sum is not finite
    """
    if divisor == 0 or not math.isfinite(divisor) or not math.isfinite(dividend):
        raise DegenerateWeightsError(
            f"Degenerate weights at pixel {pixel}: sum(w*v)={dividend}, sum(w)={divisor}"
        )
    return dividend / divisor


WEIGHT_FUNCTIONS: Dict[str, WeightFunction] = {
    'euclidean': euclidean_weight,
    'manhattan': manhattan_weight,
    'gaussian': gaussian_weight,
}


def get_weight_function(name: str) -> WeightFunction:
    """
    Look up a weight function by name.

    Raises:
        ValueError: If the name is not registered
    """
    try:
        return WEIGHT_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown weight function {name!r}, choose from {sorted(WEIGHT_FUNCTIONS)}"
        )
