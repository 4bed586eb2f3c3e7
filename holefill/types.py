"""Core types for the hole filling engine."""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

# Sentinel written into hole pixels by the masker
HOLE_VALUE = -1.0

# Mask scalars below this mark hole pixels
MASK_THRESHOLD = 0.5

# Sweeps performed by the iterative filler
DEFAULT_ITERATIONS = 100

# Type aliases
Pixel = Tuple[int, int]  # (row, col)
WeightFunction = Callable[[Pixel, Pixel, int, float], float]


class Connectivity(Enum):
    """Neighbour relation used for segmentation, layering and relaxation."""
    FOUR = 4
    EIGHT = 8

    @property
    def neighbour_count(self) -> int:
        """Number of entries of the offset table in use."""
        return self.value


class Algorithm(Enum):
    """Filling algorithm, numbered as on the command line."""
    EXACT = 1
    ITERATIVE = 2


@dataclass
class FillConfig:
    """Configuration for a hole filling invocation."""
    # Weight function parameters
    z: int = 3
    epsilon: float = 0.01

    # Neighbourhood and algorithm
    connectivity: Connectivity = Connectivity.EIGHT
    algorithm: Algorithm = Algorithm.EXACT

    # Iterative filler
    iterations: int = DEFAULT_ITERATIONS

    # Value marking hole pixels
    hole_value: float = HOLE_VALUE

    def __post_init__(self):
        # Accept the raw CLI integers as well as enum members
        if not isinstance(self.connectivity, Connectivity):
            try:
                self.connectivity = Connectivity(int(self.connectivity))
            except ValueError:
                raise ValueError(
                    f"connectivity must be 4 or 8, got {self.connectivity!r}"
                )
        if not isinstance(self.algorithm, Algorithm):
            try:
                self.algorithm = Algorithm(int(self.algorithm))
            except ValueError:
                raise ValueError(
                    f"algorithm must be 1 (exact) or 2 (iterative), got {self.algorithm!r}"
                )

    def validate(self) -> None:
        """
        Check parameter pre-conditions.

        Raises:
            ValueError: If any parameter is out of range
        """
        if isinstance(self.z, bool) or not isinstance(self.z, (int, np.integer)):
            raise ValueError(f"z must be an integer, got {self.z!r}")
        if self.z < 1:
            raise ValueError(f"z must be >= 1, got {self.z}")
        if not math.isfinite(self.epsilon) or self.epsilon <= 0:
            raise ValueError(f"epsilon must be a positive number, got {self.epsilon}")
        if not isinstance(self.connectivity, Connectivity):
            raise ValueError(f"connectivity must be 4 or 8, got {self.connectivity!r}")
        if not isinstance(self.algorithm, Algorithm):
            raise ValueError(
                f"algorithm must be 1 (exact) or 2 (iterative), got {self.algorithm!r}"
            )
        if (isinstance(self.iterations, bool)
                or not isinstance(self.iterations, (int, np.integer))):
            raise ValueError(f"iterations must be an integer, got {self.iterations!r}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.hole_value >= 0:
            raise ValueError(
                f"hole_value must be negative so it cannot collide with samples, "
                f"got {self.hole_value}"
            )


@dataclass
class Segmentation:
    """Hole pixels and the sample pixels surrounding them."""
    holes: List[Pixel] = field(default_factory=list)
    boundary: List[Pixel] = field(default_factory=list)
    boundary_values: List[float] = field(default_factory=list)
    seed: Optional[Pixel] = None

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def boundary_count(self) -> int:
        return len(self.boundary)

    def hole_mask(self, shape: Tuple[int, int]) -> np.ndarray:
        """Boolean (H, W) mask of the hole pixels."""
        mask = np.zeros(shape, dtype=bool)
        if self.holes:
            rows, cols = zip(*self.holes)
            mask[list(rows), list(cols)] = True
        return mask


@dataclass
class LayerMap:
    """Depth of every hole pixel and the pixels grouped by depth."""
    depth: np.ndarray  # (H, W) int32: -1 outside, 0 boundary, k >= 1 hole
    layers: Dict[int, List[Pixel]] = field(default_factory=dict)

    @property
    def max_depth(self) -> int:
        return max(self.layers) if self.layers else 0

    def depth_of(self, pixel: Pixel) -> int:
        return int(self.depth[pixel])


@dataclass
class FillResult:
    """Output of a single hole filling invocation."""
    image: np.ndarray
    segmentation: Segmentation
    config: FillConfig
    layer_map: Optional[LayerMap] = None
    elapsed: float = 0.0


class HoleFillingError(Exception):
    """Base exception for hole filling errors."""
    pass


class EmptyInputError(HoleFillingError):
    """Raised when the image contains no hole pixel."""
    pass


class DegenerateWeightsError(HoleFillingError):
    """Raised when a weighted mean has a zero or non-finite denominator."""
    pass


class MalformedInputError(HoleFillingError):
    """Raised for zero-sized images or holes without a boundary."""
    pass


class RasterIOError(HoleFillingError):
    """Raised when an image file cannot be read or written."""
    pass
