"""Hole filling package."""
from holefill.types import (
    Algorithm,
    Connectivity,
    FillConfig,
    FillResult,
    HoleFillingError,
    EmptyInputError,
    DegenerateWeightsError,
    MalformedInputError,
    RasterIOError,
    HOLE_VALUE,
)
from holefill.filler import HoleFiller, fill, fill_all_holes
from holefill.weights import euclidean_weight

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Connectivity",
    "FillConfig",
    "FillResult",
    "HoleFillingError",
    "EmptyInputError",
    "DegenerateWeightsError",
    "MalformedInputError",
    "RasterIOError",
    "HOLE_VALUE",
    "HoleFiller",
    "fill",
    "fill_all_holes",
    "euclidean_weight",
]
