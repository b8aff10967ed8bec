"""
Core type definitions for n-dimensional grid indexing.

Coordinates, extents and flat indices are plain Python integers held in
tuples, so values are hashable and usable as dict keys once built.
"""

import logging
from typing import NewType, Sequence, Tuple

logger = logging.getLogger(__name__)

# Coordinate vector: one integer per dimension, e.g. (x, y, z)
Coord = Tuple[int, ...]

# Extent vector: exclusive upper bound per dimension, every entry >= 1
Extents = Tuple[int, ...]

# Single integer encoding of a Coord under some Extents
FlatIndex = NewType("FlatIndex", int)

# Ordered sequence of Chebyshev-adjacent coordinates
Path = list[Coord]

# Anything a caller may hand us as a vector (list, tuple, range, ...)
IntVector = Sequence[int]


# Integer widths the pair codec and the numpy helpers are defined against
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1
INT64_MAX = 2**63 - 1


class InvalidArgumentError(ValueError):
    """Raised when an argument lies outside an operation's valid domain."""


def invalid_argument(message: str) -> InvalidArgumentError:
    """Build the error for a rejected argument, logging it at DEBUG."""
    logger.debug("rejected argument: %s", message)
    return InvalidArgumentError(message)
