"""Savepoint locator exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each resolution stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class SavepointError(Exception):
    """Base exception for all savepoint lookup failures."""


class SavepointConfigError(SavepointError):
    """Raised for missing or invalid object-store configuration."""


class SavepointConnectionError(SavepointError):
    """Raised when a storage client or session cannot be created."""


class SavepointListingError(SavepointError):
    """Raised when a bucket listing or directory read fails."""


class NoSavepointsError(SavepointListingError):
    """Raised when a savepoint directory has no entries at all."""


class SavepointInspectionError(SavepointError):
    """Raised when a single directory entry cannot be inspected."""
