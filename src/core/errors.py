"""layoffkit exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class LayoffKitError(Exception):
    """Base exception for all layoffkit failures."""


class LayoffKitConfigError(LayoffKitError):
    """Raised for invalid runtime configuration or cleaning rules."""


class LayoffKitIngestError(LayoffKitError):
    """Raised for source reading and staging failures."""


class SchemaMismatch(LayoffKitIngestError):
    """Raised when a raw row disagrees with the layoff record schema."""


class LayoffKitTransformError(LayoffKitError):
    """Raised for cleaning pipeline failures."""


class DateParseError(LayoffKitTransformError):
    """Raised when a textual date does not match the expected format."""


class LayoffKitReportError(LayoffKitError):
    """Raised for reporting view failures."""


class LayoffKitStoreError(LayoffKitError):
    """Raised for run output persistence failures."""


class LayoffKitDependencyError(LayoffKitError):
    """Raised when a runtime dependency is missing."""
