"""
Core Module
===========

Central configuration and utilities.

Structure:
- config.py: Application settings and environment configuration
- exceptions.py: Exception taxonomy raised by Access Objects and handlers
- constants.py: Application-wide constants
- correlation.py: Request correlation ID logging
"""

from .config import Settings, settings
from .constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from .correlation import CorrelationLogFilter, get_request_id, set_request_id
from .exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StarterAPIException,
    UnavailableError,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "ConflictError",
    "CorrelationLogFilter",
    "InvalidArgumentError",
    "NotFoundError",
    "Settings",
    "StarterAPIException",
    "UnavailableError",
    "get_request_id",
    "set_request_id",
    "settings",
]
