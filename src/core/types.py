"""Shared typed models.

This module defines immutable data models used by ingest, transforms,
reports, and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from core.constants import (
    BACKFILL_POLICY_FLAG,
    DEFAULT_COUNTRY_PREFIXES,
    DEFAULT_DATASET_NAME,
    DEFAULT_DATE_FORMAT,
    DEFAULT_INDUSTRY_LABELS,
    DEFAULT_TOP_N,
)

RawLayoffRow = tuple[object, ...]
ReportValue = str | int | float | date | None


@dataclass(frozen=True)
class LayoffRecord:
    """One observation of a layoff event.

    Attributes:
        company: Company name.
        location: City or region of the event.
        industry: Industry label, None when unknown.
        total_laid_off: Headcount laid off, None when unreported.
        percentage_laid_off: Fraction of staff laid off in [0, 1].
        event_date: Parsed event date, None until parsed or when invalid.
        stage: Funding stage of the company.
        country: Country of the event.
        funds_raised_millions: Funds raised in millions.
        date_text: Raw textual date as loaded from the source.
        source_row: Zero-based ingestion position.
        flags: Data-quality flags raised during cleaning.
    """

    company: str
    location: str
    industry: str | None
    total_laid_off: int | None
    percentage_laid_off: float | None
    event_date: date | None
    stage: str | None
    country: str
    funds_raised_millions: int | None
    date_text: str | None = None
    source_row: int = 0
    flags: tuple[str, ...] = ()

    @property
    def year(self) -> int | None:
        """Calendar year of the event, None without a parsed date."""
        return self.event_date.year if self.event_date else None


@dataclass(frozen=True)
class IndustryLabelRule:
    """Folds industry labels sharing a prefix into one canonical label."""

    prefix: str
    canonical: str


@dataclass(frozen=True)
class CleaningRules:
    """Configuration table for normalization passes.

    Attributes:
        date_format: strptime format of source dates.
        backfill_conflicts: Policy for disagreeing sibling industries.
        industry_labels: Prefix folding rules for industry labels.
        country_prefixes: Canonical country names whose trailing dots are stripped.
    """

    date_format: str = DEFAULT_DATE_FORMAT
    backfill_conflicts: str = BACKFILL_POLICY_FLAG
    industry_labels: tuple[IndustryLabelRule, ...] = tuple(
        IndustryLabelRule(prefix=prefix, canonical=canonical)
        for prefix, canonical in DEFAULT_INDUSTRY_LABELS
    )
    country_prefixes: tuple[str, ...] = DEFAULT_COUNTRY_PREFIXES


@dataclass(frozen=True)
class DeduplicationResult:
    """Records that survived deduplication and how many were discarded."""

    records: list[LayoffRecord]
    removed_count: int


@dataclass(frozen=True)
class BackfillConflict:
    """Null-industry record whose siblings disagree on the industry.

    Attributes:
        company: Company shared by the record and its siblings.
        source_row: Ingestion position of the flagged record.
        candidates: Distinct sibling industries in first-seen order.
        resolved_industry: Industry adopted under the active policy, if any.
    """

    company: str
    source_row: int
    candidates: tuple[str, ...]
    resolved_industry: str | None


@dataclass(frozen=True)
class DateParseFailure:
    """Record whose textual date could not be parsed."""

    source_row: int
    date_text: str
    message: str


@dataclass(frozen=True)
class NormalizationResult:
    """Normalized records plus the recoverable issues found on the way."""

    records: list[LayoffRecord]
    conflicts: tuple[BackfillConflict, ...] = ()
    date_failures: tuple[DateParseFailure, ...] = ()


@dataclass(frozen=True)
class CleaningResult:
    """Outcome of a full cleaning run.

    Attributes:
        records: Cleaned records in ingestion order.
        input_count: Number of staged rows.
        duplicates_removed: Rows discarded as duplicates.
        unanalyzable_removed: Rows dropped for carrying no layoff metric.
        conflicts: Industry backfill conflicts.
        date_failures: Dates that failed to parse.
    """

    records: list[LayoffRecord]
    input_count: int
    duplicates_removed: int
    unanalyzable_removed: int
    conflicts: tuple[BackfillConflict, ...] = ()
    date_failures: tuple[DateParseFailure, ...] = ()


@dataclass(frozen=True)
class ReportTable:
    """Tabular output of one reporting view.

    Attributes:
        name: View identifier.
        columns: Ordered column names.
        rows: Row tuples aligned with columns.
        percent_columns: Fraction columns rendered as percentages.
    """

    name: str
    columns: tuple[str, ...]
    rows: tuple[tuple[ReportValue, ...], ...]
    percent_columns: tuple[str, ...] = ()

    def as_dicts(self) -> list[dict[str, ReportValue]]:
        """Return rows as column-keyed dictionaries."""
        return [dict(zip(self.columns, row)) for row in self.rows]


@dataclass(frozen=True)
class CleanOptions:
    """Clean command options.

    Attributes:
        source_path: CSV file to clean.
        dataset_name: Name prefix for the run id.
        rules_path: Optional YAML cleaning-rules override.
        write_parquet: Also write cleaned records as Parquet.
        top_n: Number of leading categories kept by top-N views.
    """

    source_path: str
    dataset_name: str = DEFAULT_DATASET_NAME
    rules_path: str | None = None
    write_parquet: bool = True
    top_n: int = DEFAULT_TOP_N


@dataclass(frozen=True)
class RunManifest:
    """Immutable metadata describing one persisted cleaning run.

    Attributes:
        dataset_name: Logical dataset identifier.
        run_id: Immutable run id.
        created_at: UTC creation timestamp.
        input_count: Rows read from source.
        record_count: Cleaned records persisted.
        duplicates_removed: Rows discarded as duplicates.
        unanalyzable_removed: Rows dropped without layoff metrics.
        report_names: Views written under the reports directory.
        conflicts: Serialized backfill conflicts.
        date_failures: Serialized date parse failures.
    """

    dataset_name: str
    run_id: str
    created_at: datetime
    input_count: int
    record_count: int
    duplicates_removed: int
    unanalyzable_removed: int
    report_names: tuple[str, ...]
    conflicts: tuple[dict[str, object], ...] = field(default_factory=tuple)
    date_failures: tuple[dict[str, object], ...] = field(default_factory=tuple)
