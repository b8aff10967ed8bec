"""
Unit tests for nd_core/indexer.py.

Coverage:
- Known flat indices for uniform and non-uniform extents
- inflate as the inverse of flatten
- flatten_many ordering
- strides / volume / shape_from_bounds
- numpy flatten_array / inflate_array agreement with the scalar API
- InvalidArgumentError on every out-of-domain argument
"""

import logging

import numpy as np
import pytest

from nd_universe.nd_core.indexer import (
    flatten,
    flatten_array,
    flatten_many,
    inflate,
    inflate_array,
    shape_from_bounds,
    strides,
    volume,
)
from nd_universe.nd_core.types import InvalidArgumentError


class TestFlatten:
    """Test n-d -> 1d flattening."""

    def test_cube_corner(self):
        """Far corner of a 3x3x3 cube is the last index."""
        assert flatten([2, 2, 2], [3, 3, 3]) == 26

    def test_cube_uneven_coords(self):
        """Dimension 0 has the smallest weight: 0*1 + 1*3 + 2*9."""
        assert flatten([0, 1, 2], [3, 3, 3]) == 21

    def test_non_uniform_extents(self):
        """1*1 + 3*3 + 7*18 = 136."""
        assert flatten([1, 3, 7], [3, 6, 9]) == 136

    def test_origin_is_zero(self):
        assert flatten((0, 0, 0, 0), (4, 5, 6, 7)) == 0

    def test_one_dimension_is_identity(self):
        for i in range(10):
            assert flatten([i], [10]) == i

    def test_accepts_tuples_and_numpy_ints(self):
        coords = np.array([1, 3, 7], dtype=np.int32)
        assert flatten(coords, (3, 6, 9)) == 136
        assert flatten(tuple(coords), np.array([3, 6, 9])) == 136

    def test_returns_python_int(self):
        assert type(flatten(np.array([1, 3, 7]), [3, 6, 9])) is int

    def test_large_extents_do_not_overflow(self):
        """Volumes far beyond 64 bits stay exact with Python ints."""
        extents = [2**40] * 4
        coords = [2**40 - 1] * 4
        assert flatten(coords, extents) == 2**160 - 1


class TestInflate:
    """Test 1d -> n-d inflation."""

    def test_known_answer(self):
        assert inflate(136, [3, 6, 9]) == (1, 3, 7)

    def test_cube_corner(self):
        assert inflate(26, [3, 3, 3]) == (2, 2, 2)

    def test_returns_tuple(self):
        result = inflate(21, [3, 3, 3])
        assert isinstance(result, tuple)
        assert result == (0, 1, 2)

    def test_extent_one_dimensions_are_zero(self):
        assert inflate(5, [1, 7, 1]) == (0, 5, 0)

    def test_large_index(self):
        extents = [2**40] * 4
        assert inflate(2**160 - 1, extents) == (2**40 - 1,) * 4


class TestFlattenMany:
    """Test elementwise flattening."""

    def test_order_preserved(self):
        coords = [[2, 2, 2], [0, 0, 0], [0, 1, 2]]
        assert flatten_many(coords, [3, 3, 3]) == [26, 0, 21]

    def test_duplicates_kept(self):
        coords = [(1, 1), (1, 1), (0, 1)]
        assert flatten_many(coords, (2, 2)) == [3, 3, 2]

    def test_empty(self):
        assert flatten_many([], [3, 3]) == []

    def test_accepts_generator(self):
        gen = ((i, 0) for i in range(3))
        assert flatten_many(gen, [3, 2]) == [0, 1, 2]


class TestExtentHelpers:
    """Test strides, volume and shape_from_bounds."""

    def test_strides(self):
        assert strides([3, 6, 9]) == (1, 3, 18)

    def test_strides_single_dimension(self):
        assert strides([7]) == (1,)

    def test_volume(self):
        assert volume([3, 6, 9]) == 162
        assert volume([1]) == 1

    def test_shape_from_bounds(self):
        assert shape_from_bounds([(0, 10), (5, 8), (-3, 3)]) == (10, 3, 6)

    def test_shape_from_bounds_degenerate_dimension(self):
        assert shape_from_bounds([(4, 4)]) == (0,)

    def test_shape_from_bounds_inverted_raises(self):
        with pytest.raises(InvalidArgumentError, match="max"):
            shape_from_bounds([(0, 1), (5, 2)])

    def test_shape_from_bounds_bad_pair_raises(self):
        with pytest.raises(InvalidArgumentError, match="pair"):
            shape_from_bounds([(0, 1, 2)])

    def test_shape_from_bounds_empty_raises(self):
        with pytest.raises(InvalidArgumentError):
            shape_from_bounds([])


class TestArrayVariants:
    """Test numpy flatten_array / inflate_array."""

    def test_flatten_array_matches_scalar(self):
        extents = (3, 6, 9)
        coords = np.array([[1, 3, 7], [2, 5, 8], [0, 0, 0]])
        result = flatten_array(coords, extents)
        assert result.dtype == np.int64
        assert result.tolist() == [flatten(c, extents) for c in coords.tolist()]

    def test_inflate_array_matches_scalar(self):
        extents = (3, 6, 9)
        indices = np.array([136, 0, 161])
        result = inflate_array(indices, extents)
        assert result.shape == (3, 3)
        assert [tuple(row) for row in result.tolist()] == [inflate(i, extents) for i in indices.tolist()]

    def test_flatten_array_empty(self):
        result = flatten_array(np.empty((0, 3), dtype=np.int64), (3, 3, 3))
        assert result.shape == (0,)

    def test_flatten_array_zero_width_rows_raise(self):
        """Three rows of zero-length coords are three wrong-length vectors."""
        with pytest.raises(InvalidArgumentError, match="shape"):
            flatten_array(np.zeros((3, 0), dtype=np.int64), (3, 3, 3))

    def test_flatten_array_flat_empty_list_raises(self):
        with pytest.raises(InvalidArgumentError, match="shape"):
            flatten_array([], (3, 3))

    def test_flatten_array_wrong_width_raises(self):
        with pytest.raises(InvalidArgumentError, match="shape"):
            flatten_array(np.zeros((4, 2), dtype=np.int64), (3, 3, 3))

    def test_flatten_array_out_of_range_raises(self):
        coords = np.array([[0, 0, 0], [1, 6, 0]])
        with pytest.raises(InvalidArgumentError, match=r"coords\[1\]\[1\]"):
            flatten_array(coords, (3, 6, 9))

    def test_flatten_array_float_raises(self):
        with pytest.raises(InvalidArgumentError, match="integer"):
            flatten_array(np.zeros((2, 2)), (3, 3))

    def test_inflate_array_out_of_range_raises(self):
        with pytest.raises(InvalidArgumentError, match="outside"):
            inflate_array(np.array([0, 27]), (3, 3, 3))

    def test_inflate_array_negative_raises(self):
        with pytest.raises(InvalidArgumentError):
            inflate_array(np.array([-1]), (3, 3, 3))

    def test_volume_beyond_int64_rejected(self):
        with pytest.raises(InvalidArgumentError, match="int64"):
            flatten_array(np.zeros((1, 2), dtype=np.int64), (2**32, 2**32))


class TestInvalidArguments:
    """Every out-of-domain argument raises InvalidArgumentError."""

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError, match="2 dimensions but extents has 3"):
            flatten([1, 1], [3, 3, 3])

    def test_length_mismatch_longer_coords(self):
        with pytest.raises(InvalidArgumentError):
            flatten([1, 1, 1, 1], [3, 3, 3])

    def test_empty_vectors(self):
        with pytest.raises(InvalidArgumentError, match="at least one"):
            flatten([], [])
        with pytest.raises(InvalidArgumentError):
            inflate(0, [])

    @pytest.mark.parametrize("extents", [[3, 0, 3], [3, -2, 3]])
    def test_non_positive_extent(self, extents):
        with pytest.raises(InvalidArgumentError, match=r"extents\[1\]"):
            flatten([0, 0, 0], extents)

    @pytest.mark.parametrize("coords", [[3, 0, 0], [0, -1, 0], [0, 0, 9]])
    def test_coord_outside_extent(self, coords):
        with pytest.raises(InvalidArgumentError, match="outside"):
            flatten(coords, [3, 3, 9])

    @pytest.mark.parametrize("index", [-1, 162, 10**6])
    def test_inflate_out_of_range(self, index):
        with pytest.raises(InvalidArgumentError, match="outside"):
            inflate(index, [3, 6, 9])

    def test_non_integer_coords(self):
        with pytest.raises(InvalidArgumentError, match="integers"):
            flatten([1.0, 2.0], [3, 3])

    def test_bool_coords_rejected(self):
        with pytest.raises(InvalidArgumentError):
            flatten([True, False], [3, 3])

    def test_non_sequence_rejected(self):
        with pytest.raises(InvalidArgumentError, match="sequence"):
            flatten(5, [3])

    def test_is_value_error(self):
        """Callers catching ValueError still see the failure."""
        with pytest.raises(ValueError):
            inflate(27, [3, 3, 3])

    def test_rejection_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="nd_universe.nd_core.types"):
            with pytest.raises(InvalidArgumentError):
                inflate(27, [3, 3, 3])
        assert "flat_index=27 outside [0, 27)" in caplog.text
