"""
Utility functions for nd_universe integration gates.

Provides:
- Logging setup
- Receipt generation and persistence
- Summary statistics over receipts
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


def setup_logger(
    name: str,
    log_file: Path,
    level=logging.INFO,
    console_level=logging.INFO,
) -> logging.Logger:
    """
    Logger for one gate run: full detail to log_file, summary to stderr.

    Handlers from an earlier run under the same name are closed and
    replaced. Records do not propagate to the root logger.

    Args:
        name: Logger name
        log_file: Path to log file (parent directories are created)
        level: Level for the logger and the file handler
        console_level: Level for the console handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    for handler, handler_level in (
        (logging.FileHandler(log_file, mode="w"), level),
        (logging.StreamHandler(), console_level),
    ):
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def build_receipt(
    check_id: str,
    gate: str,
    data: Optional[Dict[str, Any]] = None,
    status: str = "PASS",
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a receipt dictionary for one gate check.

    Args:
        check_id: Check identifier, also used as the receipt file name
        gate: Gate name ("bijection", ...)
        data: Measurements collected by the check
        status: "PASS" or "FAIL"
        error: Error message if status is FAIL

    Returns:
        Receipt dictionary
    """
    receipt = {
        "check_id": check_id,
        "gate": gate,
        "timestamp": datetime.now().isoformat(),
        "status": status,
    }

    if data is not None:
        receipt["data"] = data

    if error is not None:
        receipt["error"] = error

    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> None:
    """
    Save receipt to JSON file.

    Args:
        receipt: Receipt dictionary
        output_dir: Directory to save receipt (e.g., receipts/bijection/)
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"{receipt['check_id']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compute summary statistics from a list of receipts.

    Args:
        receipts: List of receipt dictionaries

    Returns:
        Summary statistics dictionary
    """
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")

    stats = {
        "total_checks": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
    }

    # Raster statistics
    raster_receipts = [r for r in receipts if "max_step" in r.get("data", {})]
    if raster_receipts:
        lengths = [r["data"]["max_path_length"] for r in raster_receipts]
        stats["raster"] = {
            "max_path_length": max(lengths),
            "max_step": max(r["data"]["max_step"] for r in raster_receipts),
        }

    return stats
