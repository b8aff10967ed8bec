#!/usr/bin/env python3
"""
Bijection Gate: property validation of nd_core at scale.

Checks:
- indexer: flatten/inflate is a bijection between valid coords and
  [0, volume) for a set of extent vectors (exhaustive)
- raster: random start/end pairs give Chebyshev-adjacent paths of length
  max|delta| + 1 with exact endpoints
- pairing: encode/decode round-trips over [INT32_MAX - window, INT32_MAX]^2
  (exhaustive) and the vectorised codec agrees with the scalar one

Usage:
    python -m nd_universe.integration_tests.run_gate_bijection --dims 3 --max-extent 12
"""

import argparse
import itertools
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from nd_universe.nd_core.indexer import (
    flatten,
    flatten_array,
    inflate,
    inflate_array,
    volume,
)
from nd_universe.nd_core.pairing import decode, decode_array, encode, encode_array
from nd_universe.nd_core.points import random_point
from nd_universe.nd_core.raster import chebyshev_distance, interpolate
from nd_universe.nd_core.types import INT32_MAX

from nd_universe.integration_tests.utils import (
    build_receipt,
    compute_summary_stats,
    save_receipt,
    setup_logger,
)

GATE = "bijection"

# Volumes up to this size are also checked point by point with the scalar API
SCALAR_LIMIT = 20_000


def validate_indexer_bijection(extents: Sequence[int], logger: logging.Logger) -> Dict[str, Any]:
    """
    Validate flatten/inflate over every coordinate of one extent vector.

    Returns:
        Receipt dictionary
    """
    check_id = "indexer_" + "x".join(str(e) for e in extents)
    try:
        size = volume(extents)
        all_indices = np.arange(size, dtype=np.int64)

        coords = inflate_array(all_indices, extents)
        flat = flatten_array(coords, extents)
        vector_ok = bool(np.array_equal(flat, all_indices))
        distinct_coords = len({tuple(row) for row in coords.tolist()})

        scalar_ok = True
        if size <= SCALAR_LIMIT:
            image = set()
            for c in itertools.product(*(range(e) for e in extents)):
                idx = flatten(c, extents)
                image.add(idx)
                if inflate(idx, extents) != c:
                    scalar_ok = False
                    break
            scalar_ok = scalar_ok and image == set(range(size))

        data = {
            "extents": list(extents),
            "volume": size,
            "distinct_coords": distinct_coords,
            "vector_roundtrip": vector_ok,
            "scalar_checked": size <= SCALAR_LIMIT,
            "scalar_roundtrip": scalar_ok,
        }
        passed = vector_ok and scalar_ok and distinct_coords == size
        logger.info(f"{check_id}: volume={size} vector={vector_ok} scalar={scalar_ok}")
        return build_receipt(check_id, GATE, data, "PASS" if passed else "FAIL")

    except Exception as e:
        logger.error(f"{check_id}: {e}")
        return build_receipt(check_id, GATE, status="FAIL", error=str(e))


def validate_raster_paths(
    n_dims: int,
    upper: int,
    samples: int,
    rng: np.random.Generator,
    logger: logging.Logger,
) -> Dict[str, Any]:
    """
    Validate interpolate on random start/end pairs.

    Returns:
        Receipt dictionary
    """
    check_id = f"raster_{n_dims}d_{upper}"
    try:
        max_step = 0
        max_len = 0
        violations: List[str] = []

        for _ in range(samples):
            start = random_point(n_dims, upper, rng)
            end = random_point(n_dims, upper, rng)
            path = interpolate(start, end)

            expected_len = chebyshev_distance(start, end) + 1
            steps = [chebyshev_distance(a, b) for a, b in zip(path, path[1:])]
            step = max(steps, default=0)
            max_step = max(max_step, step)
            max_len = max(max_len, len(path))

            if path[0] != start or path[-1] != end or len(path) != expected_len or step > 1:
                violations.append(f"{start}->{end}")

        data = {
            "n_dims": n_dims,
            "upper": upper,
            "samples": samples,
            "max_step": max_step,
            "max_path_length": max_len,
            "violations": violations[:10],
        }
        logger.info(f"{check_id}: samples={samples} max_step={max_step} violations={len(violations)}")
        return build_receipt(check_id, GATE, data, "FAIL" if violations else "PASS")

    except Exception as e:
        logger.error(f"{check_id}: {e}")
        return build_receipt(check_id, GATE, status="FAIL", error=str(e))


def validate_pair_window(window: int, logger: logging.Logger) -> Dict[str, Any]:
    """
    Exhaustive pairing round-trip over [INT32_MAX - window, INT32_MAX]^2.

    One numpy row per x value; the scalar codec is checked on the corners.

    Returns:
        Receipt dictionary
    """
    check_id = f"pairing_window_{window}"
    try:
        lo = INT32_MAX - window
        ys = np.arange(lo, INT32_MAX + 1, dtype=np.uint64)
        failures = 0

        for x in range(lo, INT32_MAX + 1):
            xs = np.full_like(ys, x)
            dx, dy = decode_array(encode_array(xs, ys))
            failures += int(np.count_nonzero((dx != xs) | (dy != ys)))

        corners = [(lo, lo), (lo, INT32_MAX), (INT32_MAX, lo), (INT32_MAX, INT32_MAX)]
        scalar_ok = all(decode(encode(x, y)) == (x, y) for x, y in corners)
        agree = all(
            int(encode_array([x], [y])[0]) == encode(x, y) for x, y in corners
        )

        data = {
            "window": window,
            "pairs_checked": (window + 1) ** 2,
            "vector_failures": failures,
            "scalar_corners": scalar_ok,
            "vector_scalar_agree": agree,
        }
        passed = failures == 0 and scalar_ok and agree
        logger.info(f"{check_id}: pairs={(window + 1) ** 2} failures={failures}")
        return build_receipt(check_id, GATE, data, "PASS" if passed else "FAIL")

    except Exception as e:
        logger.error(f"{check_id}: {e}")
        return build_receipt(check_id, GATE, status="FAIL", error=str(e))


def run_gate(
    dims: int,
    max_extent: int,
    samples: int,
    pair_window: int,
    seed: Optional[int],
    logger: logging.Logger,
) -> List[Dict[str, Any]]:
    """Run every check of the gate and return the receipts in order."""
    rng = np.random.default_rng(seed)
    receipts = []

    # Uniform cubes, then random non-uniform extents of the same rank
    extent_sets = [tuple([e] * dims) for e in (1, 2, 3, max_extent)]
    extent_sets += [
        tuple(int(v) for v in rng.integers(1, max_extent + 1, size=dims))
        for _ in range(4)
    ]
    for extents in extent_sets:
        receipts.append(validate_indexer_bijection(extents, logger))

    for n_dims in range(1, dims + 2):
        receipts.append(validate_raster_paths(n_dims, max_extent * 4, samples, rng, logger))

    receipts.append(validate_pair_window(pair_window, logger))
    return receipts


def main():
    parser = argparse.ArgumentParser(description="Bijection gate for nd_core")
    parser.add_argument(
        "--dims", type=int, default=3, help="Rank of the extent vectors (default: 3)"
    )
    parser.add_argument(
        "--max-extent", type=int, default=12, help="Largest extent per dimension (default: 12)"
    )
    parser.add_argument(
        "--samples", type=int, default=500, help="Random paths per raster check (default: 500)"
    )
    parser.add_argument(
        "--pair-window",
        type=int,
        default=10000,
        help="Width of the INT32_MAX pairing window (default: 10000)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for sampled checks"
    )

    args = parser.parse_args()

    # Setup paths
    integration_dir = Path(__file__).parent
    logs_dir = integration_dir / "logs"
    receipts_dir = integration_dir / "receipts" / GATE

    logger = setup_logger("gate_bijection", logs_dir / "gate_bijection.log")

    logger.info("=" * 80)
    logger.info("Bijection Gate")
    logger.info(f"Dims: {args.dims}  Max extent: {args.max_extent}")
    logger.info(f"Raster samples: {args.samples}  Pair window: {args.pair_window}")
    logger.info(f"Random seed: {args.seed}")
    logger.info("=" * 80)

    receipts = run_gate(
        args.dims, args.max_extent, args.samples, args.pair_window, args.seed, logger
    )
    for receipt in receipts:
        save_receipt(receipt, receipts_dir)

    stats = compute_summary_stats(receipts)

    logger.info("=" * 80)
    logger.info("SUMMARY STATISTICS")
    logger.info("=" * 80)
    logger.info(f"Total checks: {stats['total_checks']}")
    logger.info(f"Passed: {stats['passed']}")
    logger.info(f"Failed: {stats['failed']}")
    logger.info(f"Pass rate: {stats['pass_rate']:.2%}")

    if "raster" in stats:
        logger.info(f"Longest path: {stats['raster']['max_path_length']}")
        logger.info(f"Largest step: {stats['raster']['max_step']}")

    if stats["failed"]:
        logger.error(f"{stats['failed']} checks FAILED")
    else:
        logger.info("All checks PASS")

    logger.info(f"Receipts saved to: {receipts_dir}")
    return 1 if stats["failed"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
