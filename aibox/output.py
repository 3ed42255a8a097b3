"""Console output helpers: log levels, byte sizes and scan summaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class ScanResult:
    """Outcome of one scan run."""

    scan_id: int = 0
    nodes_found: int = 0
    edges_found: int = 0
    warnings: list[str] = field(default_factory=list)
    error: Exception | None = None


def parse_log_level(name: str) -> int:
    """Map a level name (any case) to a logging level.

    Raises ValueError for names other than debug, info, warn, warning, error.
    """
    try:
        return _LOG_LEVELS[name.lower()]
    except KeyError:
        raise ValueError(
            f'invalid --log-level "{name}" (use: debug, info, warn, error)'
        ) from None


def format_bytes(size: int) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 KB``."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {'KMGTPE'[exp]}B"


def print_scan_result(result: ScanResult) -> None:
    """Print a scan summary, or the failure if the scan failed."""
    if result.error is not None:
        print(f"Scan failed: {result.error}")
        return
    print(f"Discovered {result.nodes_found} nodes, {result.edges_found} edges")
    for warning in result.warnings:
        print(f"  warning: {warning}")