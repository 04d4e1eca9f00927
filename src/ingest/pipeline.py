"""Cleaning orchestration for the layoffs batch.

This module coordinates staging, deduplication, normalization, and
filtering. One pipeline object owns the working collection and hands
it from stage to stage; stages never share mutable global state.
"""

from __future__ import annotations

from typing import Iterable

from core.errors import LayoffKitTransformError
from core.logging_config import get_logger
from core.types import (
    BackfillConflict,
    CleaningResult,
    CleaningRules,
    DateParseFailure,
    LayoffRecord,
    RawLayoffRow,
)
from ingest.staging import stage_records
from transforms.deduplication import remove_duplicates
from transforms.filtering import drop_unanalyzable_records
from transforms.normalization import normalize_records

_LOGGER = get_logger(__name__)


class CleaningPipeline:
    """Single-use runner that owns the working collection for one batch."""

    def __init__(self, rules: CleaningRules | None = None) -> None:
        self._rules = rules or CleaningRules()
        self._records: list[LayoffRecord] = []
        self._consumed = False
        self._input_count = 0
        self._duplicates_removed = 0
        self._unanalyzable_removed = 0
        self._conflicts: tuple[BackfillConflict, ...] = ()
        self._date_failures: tuple[DateParseFailure, ...] = ()

    def run(self, rows: Iterable[RawLayoffRow]) -> CleaningResult:
        """Execute every cleaning stage in order and return the result.

        Raises:
            LayoffKitTransformError: If the pipeline was already run.
            SchemaMismatch: If a raw row disagrees with the schema.
        """
        if self._consumed:
            raise LayoffKitTransformError(
                "Cleaning pipeline already ran. Create a new pipeline for each batch."
            )
        self._consumed = True
        self._ingest(rows)
        self._deduplicate()
        self._normalize()
        self._collapse_normalized_duplicates()
        self._filter()
        result = CleaningResult(
            records=self._records,
            input_count=self._input_count,
            duplicates_removed=self._duplicates_removed,
            unanalyzable_removed=self._unanalyzable_removed,
            conflicts=self._conflicts,
            date_failures=self._date_failures,
        )
        self._records = []
        _log_cleaning_completion(result)
        return result

    def _ingest(self, rows: Iterable[RawLayoffRow]) -> None:
        self._records = stage_records(rows)
        self._input_count = len(self._records)

    def _deduplicate(self) -> None:
        dedup_result = remove_duplicates(self._records)
        self._records = dedup_result.records
        self._duplicates_removed = dedup_result.removed_count

    def _normalize(self) -> None:
        normalization = normalize_records(self._records, self._rules)
        self._records = normalization.records
        self._conflicts = normalization.conflicts
        self._date_failures = normalization.date_failures

    def _collapse_normalized_duplicates(self) -> None:
        """Drop records whose business keys only match after normalization."""
        dedup_result = remove_duplicates(self._records)
        self._records = dedup_result.records
        self._duplicates_removed += dedup_result.removed_count

    def _filter(self) -> None:
        kept_records = drop_unanalyzable_records(self._records)
        self._unanalyzable_removed = len(self._records) - len(kept_records)
        self._records = kept_records


def clean_layoff_rows(
    rows: Iterable[RawLayoffRow],
    rules: CleaningRules | None = None,
) -> CleaningResult:
    """Clean one static batch of raw layoff rows.

    Args:
        rows: Raw 9-column tuples.
        rules: Optional cleaning rules; defaults when omitted.

    Returns:
        Cleaned records and run statistics.

    Raises:
        SchemaMismatch: If a raw row disagrees with the schema.
    """
    return CleaningPipeline(rules).run(rows)


def _log_cleaning_completion(result: CleaningResult) -> None:
    """Log pipeline completion with contextual counts."""
    _LOGGER.info(
        "cleaning_completed",
        input_count=result.input_count,
        output_count=len(result.records),
        duplicates_removed=result.duplicates_removed,
        unanalyzable_removed=result.unanalyzable_removed,
        conflict_count=len(result.conflicts),
        date_failure_count=len(result.date_failures),
    )
