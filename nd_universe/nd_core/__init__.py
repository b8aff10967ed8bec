"""
nd_core: Pure integer primitives for n-dimensional grids.

Provides:
- types: Coord, Extents, FlatIndex, Path and InvalidArgumentError
- indexer: flatten/inflate between n-d coords and flat indices
- raster: generalised Bresenham line between two n-d points
- pairing: Szudzik pairing of two naturals into one
- points: translate/average/copy helpers for point arrays
"""

from .indexer import flatten, flatten_many, inflate, shape_from_bounds, strides, volume
from .pairing import decode, encode
from .raster import chebyshev_distance, interpolate
from .types import Coord, Extents, FlatIndex, InvalidArgumentError

__all__ = [
    "Coord",
    "Extents",
    "FlatIndex",
    "InvalidArgumentError",
    "chebyshev_distance",
    "decode",
    "encode",
    "flatten",
    "flatten_many",
    "inflate",
    "interpolate",
    "shape_from_bounds",
    "strides",
    "volume",
]
