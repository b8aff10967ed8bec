"""
Grid rasterizer: discrete straight line between two n-d integer points.

Generalised Bresenham walk. The dimension with the largest absolute delta
advances by exactly one cell per step; every other dimension advances
proportionally and is rounded to the nearest cell.

Rounding: half away from zero (2.5 -> 3, -2.5 -> -3), applied to the
offset from start in every dimension.

Point k of a path with `steps` steps is

    start[i] + round_half_away(delta[i] * k / steps)

computed with integer arithmetic, which is the value obtained by adding
delta[i] / steps to start k times in exact arithmetic. No float error can
accumulate, and the last point is set to `end` outright.
"""

from typing import List, Sequence

from .indexer import as_coord
from .types import Coord, IntVector, Path, invalid_argument


def _round_half_away(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest int, ties away from zero."""
    magnitude = (2 * abs(numerator) + denominator) // (2 * denominator)
    return magnitude if numerator >= 0 else -magnitude


def chebyshev_distance(a: IntVector, b: IntVector) -> int:
    """
    Maximum absolute per-dimension difference between two points.

    Examples:
        >>> chebyshev_distance((0, 0, 0), (3, -5, 1))
        5
    """
    p = as_coord(a, "a")
    q = as_coord(b, "b")
    if len(p) != len(q):
        raise invalid_argument(f"a has {len(p)} dimensions but b has {len(q)}")
    return max((abs(x - y) for x, y in zip(p, q)), default=0)


def is_chebyshev_path(path: Sequence[IntVector]) -> bool:
    """True if every consecutive pair of points is at Chebyshev distance <= 1."""
    return all(
        chebyshev_distance(path[i], path[i + 1]) <= 1
        for i in range(len(path) - 1)
    )


def interpolate(start: IntVector, end: IntVector) -> Path:
    """
    All integer points on a near-straight line from start to end.

    Args:
        start: Start point (any integers, negatives allowed)
        end: End point, same number of dimensions as start

    Returns:
        List of max(|end[i] - start[i]|) + 1 points. The first is start,
        the last is end, and consecutive points differ by at most 1 in
        every dimension.

    Raises:
        InvalidArgumentError: zero-dimensional points or a dimension
            mismatch

    Examples:
        >>> interpolate((0, 0), (3, 2))
        [(0, 0), (1, 1), (2, 1), (3, 2)]
        >>> interpolate((4, 4), (4, 4))
        [(4, 4)]
    """
    p0 = as_coord(start, "start")
    p1 = as_coord(end, "end")
    if not p0:
        raise invalid_argument("start must have at least one dimension")
    if len(p0) != len(p1):
        raise invalid_argument(f"start has {len(p0)} dimensions but end has {len(p1)}")

    deltas = [b - a for a, b in zip(p0, p1)]
    steps = max(abs(d) for d in deltas)
    if steps == 0:
        return [p0]

    points: List[Coord] = [p0]
    for k in range(1, steps):
        points.append(
            tuple(a + _round_half_away(d * k, steps) for a, d in zip(p0, deltas))
        )
    points.append(p1)

    return points
