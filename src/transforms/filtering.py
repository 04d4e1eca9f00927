"""Post-normalization record filtering.

This module drops records that carry no analyzable layoff metric.
"""

from __future__ import annotations

from core.logging_config import get_logger
from core.types import LayoffRecord

_LOGGER = get_logger(__name__)


def drop_unanalyzable_records(records: list[LayoffRecord]) -> list[LayoffRecord]:
    """Remove records where both layoff metrics are null.

    Args:
        records: Normalized records.

    Returns:
        Records with at least one of total or percentage laid off.
    """
    kept = [record for record in records if has_layoff_signal(record)]
    _LOGGER.info(
        "unanalyzable_records_dropped",
        input_count=len(records),
        dropped_count=len(records) - len(kept),
    )
    return kept


def has_layoff_signal(record: LayoffRecord) -> bool:
    """Return whether the record reports any layoff metric."""
    return record.total_laid_off is not None or record.percentage_laid_off is not None
