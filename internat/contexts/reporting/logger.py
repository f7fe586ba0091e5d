"""
Reporting context logger.

Provides logging interface for reporting context with automatic [report] prefix.
All reporting modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[report]"


def _log_info(message: str) -> None:
    """Log info message with [report] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [report] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [report] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [report] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_snapshot_loaded(path: Path, schema: str, count: int, unit: str) -> None:
    """Log which schema a persisted file was read with."""
    _log_info(f"Loaded {count} {unit} from {path.name} ({schema} format)")


def log_report_written(kind: str, path: Path) -> None:
    """Log a written output file."""
    _log_success(f"{kind} written: {path}")
