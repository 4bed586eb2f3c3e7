"""Post-fill checks of the guarantees a filled image must satisfy."""
import logging

import numpy as np

from holefill.types import FillResult

logger = logging.getLogger(__name__)


def audit_fill(original: np.ndarray, result: FillResult) -> dict:
    """
    Check a fill result against its input.

    Pixels outside the hole must be unchanged, hole pixels must be finite
    and no longer carry the sentinel, and every filled value must lie
    between the smallest and largest boundary sample.

    Args:
        original: Image passed to the filler
        result: What the filler returned

    Returns:
        Dictionary with audit statistics; "passed" is True when no
        violation was found
    """
    filled = result.image
    hole_mask = result.segmentation.hole_mask(filled.shape)
    hole_values = filled[hole_mask]
    boundary_values = np.asarray(result.segmentation.boundary_values, dtype=filled.dtype)

    stats = {
        "hole_pixels": int(hole_mask.sum()),
        "boundary_pixels": len(boundary_values),
        "changed_outside_hole": int(np.count_nonzero(filled[~hole_mask] != original[~hole_mask])),
        "unfilled": int(np.count_nonzero(hole_values == result.config.hole_value)),
        "non_finite": int(np.count_nonzero(~np.isfinite(hole_values))),
        "out_of_range": 0,
        "boundary_min": None,
        "boundary_max": None,
    }

    if len(boundary_values):
        low = boundary_values.min()
        high = boundary_values.max()
        stats["boundary_min"] = float(low)
        stats["boundary_max"] = float(high)
        stats["out_of_range"] = int(np.count_nonzero((hole_values < low) | (hole_values > high)))

    violations = [
        key for key in ("changed_outside_hole", "unfilled", "non_finite", "out_of_range")
        if stats[key]
    ]
    for key in violations:
        logger.warning(f"Fill audit: {stats[key]} pixels {key.replace('_', ' ')}")

    stats["passed"] = not violations
    logger.info(
        f"Fill audit: {stats['hole_pixels']} hole pixels, "
        f"{stats['boundary_pixels']} boundary pixels, "
        f"{'passed' if stats['passed'] else 'FAILED'}"
    )
    return stats
