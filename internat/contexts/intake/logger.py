"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[intake]"


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_parse_start(year: int, pdf_path: Path, page_count) -> None:
    """Log start of PDF parsing with context."""
    _log_info(f"Parsing placements for {year}")
    _log_debug(f"  Source: {pdf_path}")
    if page_count is not None:
        _log_debug(f"  Pages: {page_count}")


def log_parse_result(year: int, line_count: int, record_count: int, unresolved: int) -> None:
    """
    Log parsing statistics.

    Args:
        year: Year of the parsed document
        line_count: Number of reconstructed logical lines
        record_count: Number of placement records found
        unresolved: Record-like lines dropped because no city matched
    """
    _log_info(f"Logical lines processed: {line_count}")
    _log_success(f"{year}: {record_count} placements found")
    if unresolved:
        _log_warning(f"{unresolved} lines dropped for unknown city (extend the city list)")
