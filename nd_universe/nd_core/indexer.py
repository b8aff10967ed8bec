"""
Grid indexer: n-dimensional coordinates <-> flat (1d) indices.

Mixed-radix positional encoding with non-uniform extents per dimension.
Dimension 0 carries the smallest weight:

    weight(0) = 1
    weight(i) = extents[0] * extents[1] * ... * extents[i-1]
    flat      = sum(coords[i] * weight(i))

So for extents (3, 6, 9) the coordinate (1, 3, 7) flattens to
1*1 + 3*3 + 7*18 = 136, and inflating 136 gives back (1, 3, 7).

Provides:
- flatten / inflate: the bijection between valid coords and [0, volume)
- flatten_many: order-preserving flatten over a sequence of coords
- strides / volume / shape_from_bounds: extent helpers
- flatten_array / inflate_array: numpy int64 versions for bulk work

Scalar functions use Python ints and never overflow. The numpy versions
refuse extents whose volume does not fit in int64.
"""

import numbers
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .types import (
    INT64_MAX,
    Coord,
    Extents,
    FlatIndex,
    IntVector,
    invalid_argument,
)


# =============================================================================
# Argument Validation
# =============================================================================


def as_coord(values: IntVector, name: str = "coords") -> Coord:
    """
    Convert an integer sequence into a Coord tuple.

    Accepts Python and numpy integers. Rejects bools, floats and
    non-iterables rather than coercing them.
    """
    try:
        items = tuple(values)
    except TypeError:
        raise invalid_argument(f"{name} must be a sequence of integers, got {values!r}") from None

    for value in items:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
            raise invalid_argument(f"{name} must contain only integers, got {value!r}")

    return tuple(int(value) for value in items)


def as_extents(extents: IntVector) -> Extents:
    """Validate an extent vector: non-empty, every entry >= 1."""
    ext = as_coord(extents, "extents")
    if not ext:
        raise invalid_argument("extents must have at least one dimension")
    for i, extent in enumerate(ext):
        if extent < 1:
            raise invalid_argument(f"extents[{i}] must be >= 1, got {extent}")
    return ext


def _check_coord_in_extents(coord: Coord, ext: Extents) -> None:
    if len(coord) != len(ext):
        raise invalid_argument(
            f"coords has {len(coord)} dimensions but extents has {len(ext)}"
        )
    for i, (c, e) in enumerate(zip(coord, ext)):
        if not 0 <= c < e:
            raise invalid_argument(f"coords[{i}]={c} outside [0, {e})")


# =============================================================================
# Extent Helpers
# =============================================================================


def strides(extents: IntVector) -> Tuple[int, ...]:
    """
    Positional weight of each dimension.

    Examples:
        >>> strides([3, 6, 9])
        (1, 3, 18)
    """
    ext = as_extents(extents)
    weights = []
    weight = 1
    for extent in ext:
        weights.append(weight)
        weight *= extent
    return tuple(weights)


def volume(extents: IntVector) -> int:
    """Number of valid coordinates (product of extents)."""
    total = 1
    for extent in as_extents(extents):
        total *= extent
    return total


def shape_from_bounds(bounds: Sequence[Sequence[int]]) -> Extents:
    """
    Shape of an n-d box given per-dimension (min, max) bounds.

    Args:
        bounds: [(min_0, max_0), (min_1, max_1), ...]

    Returns:
        (max_0 - min_0, max_1 - min_1, ...)

    Raises:
        InvalidArgumentError: empty bounds, a pair that is not (min, max),
            or max < min
    """
    if len(bounds) == 0:
        raise invalid_argument("bounds must have at least one dimension")

    shape = []
    for i, pair in enumerate(bounds):
        lo_hi = as_coord(pair, f"bounds[{i}]")
        if len(lo_hi) != 2:
            raise invalid_argument(f"bounds[{i}] must be a (min, max) pair, got {pair!r}")
        lo, hi = lo_hi
        if hi < lo:
            raise invalid_argument(f"bounds[{i}] has max {hi} < min {lo}")
        shape.append(hi - lo)
    return tuple(shape)


# =============================================================================
# Flatten / Inflate
# =============================================================================


def flatten(coords: IntVector, extents: IntVector) -> FlatIndex:
    """
    Flatten n-dimensional coords into a single index.

    Args:
        coords: One coordinate per dimension, coords[i] in [0, extents[i])
        extents: Exclusive upper bound per dimension

    Returns:
        Flat index in [0, volume(extents))

    Raises:
        InvalidArgumentError: length mismatch, empty vectors, extent < 1,
            or a coordinate outside its extent

    Examples:
        >>> flatten([2, 2, 2], [3, 3, 3])
        26
        >>> flatten([0, 1, 2], [3, 3, 3])
        21
    """
    ext = as_extents(extents)
    coord = as_coord(coords)
    _check_coord_in_extents(coord, ext)

    total = 0
    weight = 1
    for c, extent in zip(coord, ext):
        total += c * weight
        weight *= extent
    return FlatIndex(total)


def inflate(flat_index: int, extents: IntVector) -> Coord:
    """
    Inverse of flatten: expand a flat index back into coords.

    Each coordinate is computed independently as
    (flat_index // weight(i)) % extents[i].

    Raises:
        InvalidArgumentError: flat_index outside [0, volume(extents)),
            or invalid extents

    Examples:
        >>> inflate(136, [3, 6, 9])
        (1, 3, 7)
    """
    (index,) = as_coord([flat_index], "flat_index")
    ext = as_extents(extents)
    size = volume(ext)
    if not 0 <= index < size:
        raise invalid_argument(f"flat_index={index} outside [0, {size})")

    return tuple(
        (index // weight) % extent
        for weight, extent in zip(strides(ext), ext)
    )


def flatten_many(coords_list: Iterable[IntVector], extents: IntVector) -> List[FlatIndex]:
    """Flatten each coord in order. No deduplication."""
    ext = as_extents(extents)
    return [flatten(coords, ext) for coords in coords_list]


# =============================================================================
# Vectorised (numpy) Variants
# =============================================================================


def _int64_strides(ext: Extents) -> np.ndarray:
    size = volume(ext)
    if size - 1 > INT64_MAX:
        raise invalid_argument(f"volume {size} of extents {ext} exceeds int64 range")
    return np.array(strides(ext), dtype=np.int64)


def flatten_array(coords: np.ndarray, extents: IntVector) -> np.ndarray:
    """
    Flatten an (M, N) integer array of coords into M flat indices.

    Same convention as flatten. Uses int64 arithmetic, so extents whose
    volume exceeds int64 are rejected up front.

    Returns:
        int64 array of shape (M,)
    """
    ext = as_extents(extents)
    weights = _int64_strides(ext)

    arr = np.asarray(coords)
    if arr.ndim != 2 or arr.shape[1] != len(ext):
        raise invalid_argument(
            f"coords must have shape (M, {len(ext)}), got {arr.shape}"
        )
    if arr.shape[0] == 0:
        return np.zeros(0, dtype=np.int64)
    if not np.issubdtype(arr.dtype, np.integer):
        raise invalid_argument(f"coords must be an integer array, got dtype {arr.dtype}")

    arr = arr.astype(np.int64)
    upper = np.array(ext, dtype=np.int64)
    out_of_range = (arr < 0) | (arr >= upper)
    if out_of_range.any():
        row, dim = np.argwhere(out_of_range)[0]
        raise invalid_argument(
            f"coords[{row}][{dim}]={arr[row, dim]} outside [0, {ext[dim]})"
        )

    return arr @ weights


def inflate_array(flat_indices: np.ndarray, extents: IntVector) -> np.ndarray:
    """
    Inflate M flat indices into an (M, N) int64 array of coords.

    Raises:
        InvalidArgumentError: any index outside [0, volume(extents))
    """
    ext = as_extents(extents)
    weights = _int64_strides(ext)
    size = volume(ext)

    idx = np.asarray(flat_indices)
    if idx.ndim != 1:
        raise invalid_argument(f"flat_indices must be 1-dimensional, got shape {idx.shape}")
    if idx.size and not np.issubdtype(idx.dtype, np.integer):
        raise invalid_argument(f"flat_indices must be an integer array, got dtype {idx.dtype}")

    idx = idx.astype(np.int64)
    bad = (idx < 0) | (idx >= size) if size <= INT64_MAX else idx < 0
    if bad.any():
        first = int(np.flatnonzero(bad)[0])
        raise invalid_argument(f"flat_indices[{first}]={idx[first]} outside [0, {size})")

    upper = np.array(ext, dtype=np.int64)
    return (idx[:, None] // weights[None, :]) % upper[None, :]
