"""
Custom exception hierarchy for EgoFix Diagnostics.

All exceptions inherit from EgoFixException, enabling a catch-all for
EgoFix-specific errors while keeping the ability to catch specific
error types.

Detectors never raise for missing data: "not enough history yet" is an
expected state and is expressed by returning None.
"""

from __future__ import annotations


class EgoFixException(Exception):
    """Base exception for all EgoFix errors."""


class ConfigurationError(EgoFixException):
    """Missing or invalid environment configuration."""


class StorageError(EgoFixException):
    """Loading history or persisting patterns failed (connection, query, constraint)."""


class ValidationError(EgoFixException):
    """Input validation failures (out-of-range weekday/hour, unknown enum values)."""
