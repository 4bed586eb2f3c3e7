"""Tests for hole and boundary segmentation."""
import numpy as np
import pytest

from holefill.image_view import ImageView, NEIGHBOUR_OFFSETS
from holefill.segmentation import count_hole_components, find_first_hole_pixel, segment_hole
from holefill.types import (
    Connectivity,
    EmptyInputError,
    HOLE_VALUE,
    MalformedInputError,
)


class TestImageView:
    """Test the image view."""

    def test_four_neighbours_are_subset_of_eight(self):
        """Axis offsets come first so connectivity 4 is a prefix of 8."""
        four = set(NEIGHBOUR_OFFSETS[:4])
        eight = set(NEIGHBOUR_OFFSETS)
        assert len(eight) == 8
        assert four < eight
        assert all(abs(dr) + abs(dc) == 1 for dr, dc in four)

    def test_neighbours_bounded(self):
        """Corner pixels only get in-bounds neighbours."""
        view = ImageView(np.zeros((3, 4), dtype=np.float32))
        assert sorted(view.neighbours((0, 0), Connectivity.FOUR)) == [(0, 1), (1, 0)]
        assert sorted(view.neighbours((0, 0), Connectivity.EIGHT)) == [(0, 1), (1, 0), (1, 1)]
        assert len(list(view.neighbours((1, 1), Connectivity.EIGHT))) == 8

    def test_get_set_and_hole(self):
        """Reads and writes go through (row, col)."""
        data = np.zeros((2, 3), dtype=np.float32)
        view = ImageView(data)
        view.set((1, 2), HOLE_VALUE)
        assert data[1, 2] == HOLE_VALUE
        assert view.is_hole((1, 2))
        assert not view.is_hole((0, 0))
        assert view.linear_index((1, 2)) == 5
        assert view.shape == (2, 3)

    def test_rejects_bad_shapes(self):
        """Empty and multi-channel arrays are malformed."""
        with pytest.raises(MalformedInputError):
            ImageView(np.zeros((0, 4), dtype=np.float32))
        with pytest.raises(MalformedInputError):
            ImageView(np.zeros((3, 3, 3), dtype=np.float32))


class TestFindFirstHolePixel:
    """Test seed selection."""

    def test_row_major_order(self):
        """The first hole pixel in row-major order is the seed."""
        image = np.zeros((4, 4), dtype=np.float32)
        image[2, 0] = HOLE_VALUE
        image[1, 3] = HOLE_VALUE
        assert find_first_hole_pixel(image) == (1, 3)

    def test_no_hole(self):
        """An image without sentinel raises EmptyInputError."""
        with pytest.raises(EmptyInputError):
            find_first_hole_pixel(np.ones((3, 3), dtype=np.float32))


class TestSegmentHole:
    """Test flood fill segmentation."""

    def test_block_hole_four_connected(self, ring_image):
        """Ring corners are not 4-neighbours of the hole."""
        view = ImageView(ring_image)
        seg = segment_hole(view, (1, 1), Connectivity.FOUR)

        assert seg.hole_count == 9
        assert seg.boundary_count == 12
        assert (0, 0) not in seg.boundary
        assert all(v == 255.0 for v in seg.boundary_values)

    def test_block_hole_eight_connected(self, ring_image):
        """With 8-connectivity the whole ring is boundary."""
        view = ImageView(ring_image)
        seg = segment_hole(view, (1, 1), Connectivity.EIGHT)

        assert seg.hole_count == 9
        assert seg.boundary_count == 16
        assert (0, 0) in seg.boundary

    def test_hole_and_boundary_disjoint_and_unique(self, random_hole_image):
        """Every pixel is reported once, in exactly one set."""
        view = ImageView(random_hole_image)
        seed = find_first_hole_pixel(random_hole_image)
        seg = segment_hole(view, seed, Connectivity.EIGHT)

        assert len(set(seg.holes)) == len(seg.holes)
        assert len(set(seg.boundary)) == len(seg.boundary)
        assert not set(seg.holes) & set(seg.boundary)
        assert seg.hole_count == int(np.sum(random_hole_image == HOLE_VALUE))
        for pixel, value in zip(seg.boundary, seg.boundary_values):
            assert value == random_hole_image[pixel]
            assert value != HOLE_VALUE

    def test_boundary_values_are_neighbours(self, random_hole_image):
        """Each boundary pixel touches some hole pixel."""
        view = ImageView(random_hole_image)
        seg = segment_hole(view, find_first_hole_pixel(random_hole_image), Connectivity.FOUR)
        holes = set(seg.holes)
        for pixel in seg.boundary:
            assert any(n in holes for n in view.neighbours(pixel, Connectivity.FOUR))

    def test_hole_touching_border(self):
        """The image edge is not a boundary sample."""
        image = np.full((3, 3), 5.0, dtype=np.float32)
        image[0, 0] = HOLE_VALUE
        view = ImageView(image)

        seg4 = segment_hole(view, (0, 0), Connectivity.FOUR)
        assert sorted(seg4.boundary) == [(0, 1), (1, 0)]

        seg8 = segment_hole(view, (0, 0), Connectivity.EIGHT)
        assert sorted(seg8.boundary) == [(0, 1), (1, 0), (1, 1)]

    def test_only_seed_component(self):
        """Diagonal holes are separate under 4-connectivity, joined under 8."""
        image = np.full((5, 5), 1.0, dtype=np.float32)
        image[1, 1] = HOLE_VALUE
        image[2, 2] = HOLE_VALUE
        view = ImageView(image)

        assert segment_hole(view, (1, 1), Connectivity.FOUR).holes == [(1, 1)]
        assert sorted(segment_hole(view, (1, 1), Connectivity.EIGHT).holes) == [(1, 1), (2, 2)]

    def test_large_hole_no_recursion_limit(self):
        """Holes far larger than the recursion limit are segmented."""
        image = np.zeros((300, 300), dtype=np.float32)
        image[1:-1, 1:-1] = HOLE_VALUE
        seg = segment_hole(ImageView(image), (1, 1), Connectivity.FOUR)

        assert seg.hole_count == 298 * 298
        assert seg.boundary_count == 4 * 298

    def test_hole_without_boundary(self):
        """A 1x1 sentinel image has nothing to fill from."""
        image = np.array([[HOLE_VALUE]], dtype=np.float32)
        with pytest.raises(MalformedInputError):
            segment_hole(ImageView(image), (0, 0), Connectivity.EIGHT)

    def test_seed_must_be_hole(self):
        """Seeding from a sample pixel is an error."""
        image = np.zeros((3, 3), dtype=np.float32)
        with pytest.raises(MalformedInputError):
            segment_hole(ImageView(image), (1, 1), Connectivity.FOUR)


class TestCountHoleComponents:
    """Test hole component counting."""

    def test_diagonal_components(self):
        """Connectivity decides whether diagonal holes merge."""
        image = np.full((5, 5), 1.0, dtype=np.float32)
        image[1, 1] = HOLE_VALUE
        image[2, 2] = HOLE_VALUE
        image[4, 0] = HOLE_VALUE

        assert count_hole_components(image, Connectivity.FOUR) == 3
        assert count_hole_components(image, Connectivity.EIGHT) == 2

    def test_no_holes(self):
        """Images without holes have no components."""
        assert count_hole_components(np.zeros((4, 4), dtype=np.float32)) == 0
