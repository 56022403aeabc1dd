"""
Shared library code for EgoFix Diagnostics.

Usage:
    from egofix.lib import StorageError, setup_logging
"""

from egofix.lib.exceptions import (
    ConfigurationError,
    EgoFixException,
    StorageError,
    ValidationError,
)
from egofix.lib.logging import setup_logging

__all__ = [
    "EgoFixException",
    "ConfigurationError",
    "StorageError",
    "ValidationError",
    "setup_logging",
]
