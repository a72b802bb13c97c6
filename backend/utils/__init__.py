"""Utility modules.

This package contains:
- Logging configuration
"""

from .logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
