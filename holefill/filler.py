"""Hole filling entry point: segment, then fill with the chosen algorithm."""
import logging
import time
from typing import Optional, Union

import numpy as np

from holefill.exact import fill_exact
from holefill.image_view import ImageView
from holefill.iterative import fill_iterative
from holefill.layers import build_layers
from holefill.segmentation import count_hole_components, find_first_hole_pixel, segment_hole
from holefill.types import (
    Algorithm,
    Connectivity,
    DEFAULT_ITERATIONS,
    EmptyInputError,
    FillConfig,
    FillResult,
    WeightFunction,
)
from holefill.weights import euclidean_weight

logger = logging.getLogger(__name__)


def _working_copy(image: np.ndarray) -> np.ndarray:
    """Writable copy of the input; non-float images become float32."""
    if not isinstance(image, np.ndarray):
        raise ValueError(f"Image must be a numpy array, got {type(image).__name__}")
    if np.issubdtype(image.dtype, np.floating):
        return image.copy()
    return image.astype(np.float32)


class HoleFiller:
    """Fills the hole region of a single-channel image."""

    def __init__(
        self,
        config: Optional[FillConfig] = None,
        weight: WeightFunction = euclidean_weight
    ):
        """
        Initialize the filler.

        Args:
            config: Configuration (uses defaults if None)
            weight: Weight function w(hole, sample, z, epsilon)
        """
        self.config = config or FillConfig()
        self.weight = weight

    def fill(self, image: np.ndarray) -> np.ndarray:
        """
        Fill the first hole of an image.

        Args:
            image: (H, W) image, hole pixels carrying the sentinel

        Returns:
            New array with the hole filled; the input is not modified

        Raises:
            EmptyInputError: If the image has no hole pixel
            MalformedInputError: If the image is empty or the hole has no boundary
            DegenerateWeightsError: If a weighted mean cannot be formed
            ValueError: If the configuration is invalid
        """
        return self.fill_with_details(image).image

    def fill_with_details(self, image: np.ndarray) -> FillResult:
        """Fill the first hole and return the intermediate structures too."""
        config = self.config
        config.validate()
        start_time = time.time()

        output = _working_copy(image)
        view = ImageView(output, hole_value=config.hole_value)

        seed = find_first_hole_pixel(output, config.hole_value)
        components = count_hole_components(output, config.connectivity, config.hole_value)
        if components > 1:
            logger.warning(
                f"Image has {components} separate holes, only the one containing "
                f"{seed} is filled"
            )

        segmentation = segment_hole(view, seed, config.connectivity)
        layer_map = None

        if config.algorithm is Algorithm.EXACT:
            fill_exact(view, segmentation, self.weight, config.z, config.epsilon)
        else:
            layer_map = build_layers(view, segmentation, config.connectivity)
            fill_iterative(
                view,
                layer_map,
                self.weight,
                config.z,
                config.epsilon,
                config.connectivity,
                iterations=config.iterations
            )

        elapsed = time.time() - start_time
        layers = f", {layer_map.max_depth} layers" if layer_map is not None else ""
        logger.info(
            f"Filled {segmentation.hole_count} hole pixels from "
            f"{segmentation.boundary_count} boundary pixels "
            f"({config.algorithm.name.lower()}, connectivity "
            f"{config.connectivity.value}{layers}) in {elapsed:.3f}s"
        )

        return FillResult(
            image=output,
            segmentation=segmentation,
            config=config,
            layer_map=layer_map,
            elapsed=elapsed
        )

    def fill_all(self, image: np.ndarray) -> np.ndarray:
        """
        Fill every hole by invoking the filler once per hole.

        Holes are filled in order of their first pixel in row-major order,
        each one seeing the values written for the previous holes.

        Returns:
            New array without hole pixels; a copy of the input if it had none
        """
        output = _working_copy(image)
        filled = 0
        while True:
            try:
                output = self.fill(output)
            except EmptyInputError:
                break
            filled += 1
        logger.info(f"Filled {filled} holes")
        return output


def fill(
    image: np.ndarray,
    z: int,
    epsilon: float,
    connectivity: Union[Connectivity, int],
    algorithm: Union[Algorithm, int],
    weight: WeightFunction = euclidean_weight,
    iterations: int = DEFAULT_ITERATIONS
) -> np.ndarray:
    """
    Fill the hole of an image.

    Args:
        image: (H, W) image, hole pixels equal to -1
        z: Weight function power, >= 1
        epsilon: Weight function offset, > 0
        connectivity: 4 or 8
        algorithm: Algorithm.EXACT (1) or Algorithm.ITERATIVE (2)
        weight: Weight function w(hole, sample, z, epsilon)
        iterations: Sweeps of the iterative algorithm

    Returns:
        Filled copy of the image

    Raises:
        EmptyInputError: If the image has no hole pixel
    """
    config = FillConfig(
        z=z,
        epsilon=epsilon,
        connectivity=connectivity,
        algorithm=algorithm,
        iterations=iterations
    )
    return HoleFiller(config, weight).fill(image)


def fill_all_holes(
    image: np.ndarray,
    z: int,
    epsilon: float,
    connectivity: Union[Connectivity, int],
    algorithm: Union[Algorithm, int],
    weight: WeightFunction = euclidean_weight,
    iterations: int = DEFAULT_ITERATIONS
) -> np.ndarray:
    """Fill every hole of an image, one invocation per hole."""
    config = FillConfig(
        z=z,
        epsilon=epsilon,
        connectivity=connectivity,
        algorithm=algorithm,
        iterations=iterations
    )
    return HoleFiller(config, weight).fill_all(image)
