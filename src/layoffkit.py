"""Public SDK surface for layoffkit.

This module provides a stable import path for library users.
It re-exports the client, pipeline entry points, and typed models.
"""

from __future__ import annotations

from core.cleaning_rules import load_cleaning_rules
from core.config import LayoffKitConfig
from core.errors import DateParseError, LayoffKitError, SchemaMismatch
from core.types import (
    CleanOptions,
    CleaningResult,
    CleaningRules,
    LayoffRecord,
    ReportTable,
)
from ingest.pipeline import CleaningPipeline, clean_layoff_rows
from reports.registry import build_report, build_reports, report_names
from store.layoff_sdk import LayoffClient

__all__ = [
    "CleanOptions",
    "CleaningPipeline",
    "CleaningResult",
    "CleaningRules",
    "DateParseError",
    "LayoffClient",
    "LayoffKitConfig",
    "LayoffKitError",
    "LayoffRecord",
    "ReportTable",
    "SchemaMismatch",
    "build_report",
    "build_reports",
    "clean_layoff_rows",
    "load_cleaning_rules",
    "report_names",
]
