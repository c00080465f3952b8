"""Utility modules for postpipe"""

from .logger import (
    get_logger,
    setup_logging,
    validate_safe_path,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "validate_safe_path",
]
