"""
Helpers for sets of n-d points held as (M, N) numpy arrays.

All functions return new arrays and leave their inputs untouched.
"""

from typing import Optional, Union

import numpy as np

from .types import Coord, invalid_argument


def _as_point_array(points, name: str = "points") -> np.ndarray:
    try:
        arr = np.asarray(points, dtype=np.float64)
    except ValueError:
        raise invalid_argument(f"{name} must be a rectangular (M, N) array of numbers") from None
    if arr.ndim != 2:
        raise invalid_argument(f"{name} must have shape (M, N), got {arr.shape}")
    if arr.shape[0] == 0:
        raise invalid_argument(f"{name} must contain at least one point")
    return arr


def to_float_points(points) -> np.ndarray:
    """Integer grid points (e.g. a rasterized path) as a float64 (M, N) array."""
    try:
        raw = np.asarray(points)
    except ValueError:
        raise invalid_argument("points must be a rectangular (M, N) array of integers") from None
    if raw.size and not np.issubdtype(raw.dtype, np.integer):
        raise invalid_argument(f"points must be integers, got dtype {raw.dtype}")
    return _as_point_array(raw)


def copy_points(points) -> np.ndarray:
    """Independent float64 copy of a point set."""
    return _as_point_array(points).copy()


def translate_points(points, offset) -> np.ndarray:
    """
    Shift every point by the same n-d offset.

    Raises:
        InvalidArgumentError: offset length differs from point dimension
    """
    arr = _as_point_array(points)
    shift = np.asarray(offset, dtype=np.float64)
    if shift.shape != (arr.shape[1],):
        raise invalid_argument(
            f"offset has shape {shift.shape} but points have {arr.shape[1]} dimensions"
        )
    return arr + shift


def average_point(points) -> np.ndarray:
    """
    Mean of a point set. Not necessarily one of the input points.

    Examples:
        >>> average_point([[0, 0], [2, 4]]).tolist()
        [1.0, 2.0]
    """
    return _as_point_array(points).mean(axis=0)


def random_point(
    n_dims: int,
    upper: int,
    rng: Optional[Union[int, np.random.Generator]] = None,
) -> Coord:
    """
    Uniform random integer point in [0, upper)^n_dims.

    Args:
        n_dims: Number of dimensions (>= 1)
        upper: Exclusive upper bound per dimension (>= 1)
        rng: numpy Generator, integer seed, or None for fresh entropy
    """
    if n_dims < 1:
        raise invalid_argument(f"n_dims must be >= 1, got {n_dims}")
    if upper < 1:
        raise invalid_argument(f"upper must be >= 1, got {upper}")

    gen = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    return tuple(int(v) for v in gen.integers(0, upper, size=n_dims))
