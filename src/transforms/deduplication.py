"""Business-key deduplication transform.

This module ranks records that share every business-key field and
keeps the first one in ingestion order. Nulls group with nulls.
"""

from __future__ import annotations

import hashlib
import json
from typing import Iterable

from core.constants import HASH_ALGORITHM
from core.logging_config import get_logger
from core.types import DeduplicationResult, LayoffRecord

_LOGGER = get_logger(__name__)


def rank_duplicates(records: Iterable[LayoffRecord]) -> list[tuple[LayoffRecord, int]]:
    """Assign a 1-based rank within each business-key group.

    Args:
        records: Records to rank.

    Returns:
        ``(record, rank)`` pairs in ingestion order.
    """
    ordered = sorted(records, key=lambda record: record.source_row)
    seen_counts: dict[str, int] = {}
    ranked: list[tuple[LayoffRecord, int]] = []
    for record in ordered:
        key_hash = build_record_id(record)
        rank = seen_counts.get(key_hash, 0) + 1
        seen_counts[key_hash] = rank
        ranked.append((record, rank))
    return ranked


def remove_duplicates(records: Iterable[LayoffRecord]) -> DeduplicationResult:
    """Keep one record per business key.

    Args:
        records: Working collection.

    Returns:
        Rank-1 records in ingestion order and the discarded count.
    """
    ranked = rank_duplicates(records)
    survivors = [record for record, rank in ranked if rank == 1]
    removed_count = len(ranked) - len(survivors)
    _LOGGER.info(
        "duplicates_removed",
        input_count=len(ranked),
        output_count=len(survivors),
        removed_count=removed_count,
    )
    return DeduplicationResult(records=survivors, removed_count=removed_count)


def build_record_id(record: LayoffRecord) -> str:
    """Build a stable id from the record's business key.

    Args:
        record: Layoff record.

    Returns:
        Hex digest shared by all duplicates of the same event.
    """
    return _hash_text(_serialize_business_key(record))


def _serialize_business_key(record: LayoffRecord) -> str:
    """Render the business key as canonical JSON.

    Nulls serialize to the ``null`` sentinel so two missing values
    in the same position compare equal.
    """
    date_value = record.date_text
    if date_value is None and record.event_date is not None:
        date_value = record.event_date.isoformat()
    key = [
        record.company,
        record.location,
        record.industry,
        record.total_laid_off,
        record.percentage_laid_off,
        date_value,
        record.stage,
        record.country,
        record.funds_raised_millions,
    ]
    return json.dumps(key, ensure_ascii=False, separators=(",", ":"))


def _hash_text(text: str) -> str:
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()
