"""Narrow read/write view over a single-channel float image."""
from typing import Iterator, Tuple

import numpy as np

from holefill.types import Connectivity, HOLE_VALUE, MalformedInputError, Pixel

# Axis neighbours first, then diagonals. Connectivity 4 uses the first four
# entries, connectivity 8 all of them.
NEIGHBOUR_OFFSETS: Tuple[Pixel, ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)


class ImageView:
    """
    Access to an (H, W) float image by (row, col).

    The wrapped array is used directly, so writes through the view are
    visible to the owner of the array.
    """

    def __init__(self, data: np.ndarray, hole_value: float = HOLE_VALUE):
        if data.ndim != 2:
            raise MalformedInputError(
                f"Expected single-channel 2D image, got {data.ndim}D array"
            )
        if data.size == 0:
            raise MalformedInputError(f"Image is empty: shape {data.shape}")
        self.data = data
        self.hole_value = hole_value
        self.rows, self.cols = data.shape

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def get(self, pixel: Pixel) -> float:
        return float(self.data[pixel[0], pixel[1]])

    def set(self, pixel: Pixel, value: float) -> None:
        self.data[pixel[0], pixel[1]] = value

    def is_hole(self, pixel: Pixel) -> bool:
        return self.data[pixel[0], pixel[1]] == self.hole_value

    def in_bounds(self, pixel: Pixel) -> bool:
        row, col = pixel
        return 0 <= row < self.rows and 0 <= col < self.cols

    def linear_index(self, pixel: Pixel) -> int:
        return pixel[0] * self.cols + pixel[1]

    def neighbours(self, pixel: Pixel, connectivity: Connectivity) -> Iterator[Pixel]:
        """Yield in-bounds neighbours of a pixel in offset-table order."""
        row, col = pixel
        for d_row, d_col in NEIGHBOUR_OFFSETS[:connectivity.neighbour_count]:
            r, c = row + d_row, col + d_col
            if 0 <= r < self.rows and 0 <= c < self.cols:
                yield r, c
