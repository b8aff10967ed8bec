"""
Pair codec: Szudzik's pairing function and its inverse.

Maps N x N -> N bijectively with no declared bounds:

    encode(x, y) = x*x + x + y    if x >= y
                 = y*y + x        otherwise

Unlike Cantor pairing, Szudzik packs every square [0, n)^2 into [0, n^2)
with no gaps.

Scalar encode/decode work on Python ints of any size. The array variants
take uint32 inputs and produce uint64 outputs; (2^32 - 1)^2 + 2 * (2^32 - 1)
is exactly 2^64 - 1, so the widening is lossless.

References:
    https://en.wikipedia.org/wiki/Pairing_function
    http://szudzik.com/ElegantPairing.pdf
"""

import math
from typing import Tuple

import numpy as np

from .indexer import as_coord
from .types import UINT32_MAX, invalid_argument


def _natural(value: int, name: str) -> int:
    (n,) = as_coord([value], name)
    if n < 0:
        raise invalid_argument(f"{name} must be non-negative, got {n}")
    return n


def encode(x: int, y: int) -> int:
    """
    Encode a pair of non-negative integers into one.

    Examples:
        >>> encode(3, 5)
        28
        >>> encode(5, 3)
        33
    """
    x = _natural(x, "x")
    y = _natural(y, "y")
    if x >= y:
        return x * x + x + y
    return y * y + x


def decode(z: int) -> Tuple[int, int]:
    """
    Inverse of encode.

    math.isqrt is exact for any int, so no float sqrt correction is needed
    here (compare decode_array).

    Examples:
        >>> decode(28)
        (3, 5)
    """
    z = _natural(z, "z")

    floor = math.isqrt(z)
    t = z - floor * floor
    if t < floor:
        return t, floor
    return floor, t - floor


# =============================================================================
# Vectorised (numpy) Variants
# =============================================================================


def _as_uint_array(values, name: str, limit: int) -> np.ndarray:
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(arr.shape, dtype=np.uint64)
    if not np.issubdtype(arr.dtype, np.integer):
        raise invalid_argument(f"{name} must be an integer array, got dtype {arr.dtype}")
    if np.issubdtype(arr.dtype, np.signedinteger) and (arr < 0).any():
        raise invalid_argument(f"{name} must be non-negative")
    if int(arr.max()) > limit:
        raise invalid_argument(f"{name} has values above {limit}")
    return arr.astype(np.uint64)


def encode_array(xs, ys) -> np.ndarray:
    """
    Elementwise encode for uint32-range inputs.

    Returns:
        uint64 array, broadcast shape of xs and ys
    """
    x = _as_uint_array(xs, "xs", UINT32_MAX)
    y = _as_uint_array(ys, "ys", UINT32_MAX)
    x, y = np.broadcast_arrays(x, y)
    return np.where(x >= y, x * x + x + y, y * y + x)


def decode_array(zs) -> Tuple[np.ndarray, np.ndarray]:
    """
    Elementwise decode of uint64 codes.

    The float64 sqrt estimate may be off by one in either direction for
    large codes; both corrections compare by division so nothing overflows.

    Returns:
        (xs, ys) as uint64 arrays with the shape of zs
    """
    z = _as_uint_array(zs, "zs", 2**64 - 1)

    floor = np.floor(np.sqrt(z.astype(np.float64)))
    floor = np.minimum(floor, float(UINT32_MAX)).astype(np.uint64)

    # floor^2 > z  <=>  floor > z // floor
    safe = np.maximum(floor, np.uint64(1))
    too_big = (floor > 0) & (floor > z // safe)
    floor = floor - too_big.astype(np.uint64)

    # (floor + 1)^2 <= z  <=>  floor + 1 <= z // (floor + 1)
    nxt = floor + np.uint64(1)
    too_small = nxt <= z // nxt
    floor = floor + too_small.astype(np.uint64)

    t = z - floor * floor
    below = t < floor
    xs = np.where(below, t, floor)
    ys = np.where(below, floor, t - floor)
    return xs, ys
