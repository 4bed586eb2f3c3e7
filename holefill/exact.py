"""Exact filling: every hole pixel is a weighted mean over the whole boundary."""
import logging

from holefill.image_view import ImageView
from holefill.types import Segmentation, WeightFunction
from holefill.weights import checked_weight, weighted_mean

logger = logging.getLogger(__name__)


def fill_exact(
    view: ImageView,
    segmentation: Segmentation,
    weight: WeightFunction,
    z: int,
    epsilon: float
) -> None:
    """
    Fill each hole pixel with the weighted mean of all boundary samples.

    Costs |holes| * |boundary| weight evaluations. Values are written into
    the view in place.

    Args:
        view: Working image, modified in place
        segmentation: Hole and boundary pixels of the hole being filled
        weight: Weight function w(hole, sample, z, epsilon)
        z: Weight function power
        epsilon: Weight function offset

    Raises:
        DegenerateWeightsError: If a weight is not positive and finite, or a
            denominator is zero or not finite
    """
    boundary = list(zip(segmentation.boundary, segmentation.boundary_values))
    logger.debug(
        f"Exact fill: {segmentation.hole_count} x {len(boundary)} weight evaluations"
    )

    for hole_pixel in segmentation.holes:
        dividend = 0.0
        divisor = 0.0
        for boundary_pixel, value in boundary:
            w = checked_weight(weight, hole_pixel, boundary_pixel, z, epsilon)
            dividend += value * w
            divisor += w
        view.set(hole_pixel, weighted_mean(dividend, divisor, hole_pixel))
