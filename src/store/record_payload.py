"""Shared JSON serialization for cleaned layoff records.

This module centralizes record payload conversion and JSONL IO.
Bookkeeping fields used during cleaning are never exported.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

from core.errors import LayoffKitStoreError
from core.types import LayoffRecord
from transforms.deduplication import build_record_id

EXPORT_COLUMNS = (
    "record_id",
    "company",
    "location",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "event_date",
    "stage",
    "country",
    "funds_raised_millions",
)


def layoff_record_to_payload(record: LayoffRecord) -> dict[str, object]:
    """Serialize a cleaned record into a JSON-safe payload.

    Args:
        record: Cleaned layoff record.

    Returns:
        Dictionary keyed by export column.
    """
    return {
        "record_id": build_record_id(record),
        "company": record.company,
        "location": record.location,
        "industry": record.industry,
        "total_laid_off": record.total_laid_off,
        "percentage_laid_off": record.percentage_laid_off,
        "event_date": record.event_date.isoformat() if record.event_date else None,
        "stage": record.stage,
        "country": record.country,
        "funds_raised_millions": record.funds_raised_millions,
    }


def layoff_record_from_payload(payload: dict[str, Any], source_row: int = 0) -> LayoffRecord:
    """Deserialize an exported payload back into a record.

    Args:
        payload: Serialized record payload.
        source_row: Position to assign for ordering.

    Returns:
        Parsed record.
    """
    raw_date = payload.get("event_date")
    return LayoffRecord(
        company=str(payload["company"]),
        location=str(payload["location"]),
        industry=_optional_str(payload.get("industry")),
        total_laid_off=_optional_int(payload.get("total_laid_off")),
        percentage_laid_off=_optional_float(payload.get("percentage_laid_off")),
        event_date=date.fromisoformat(str(raw_date)) if raw_date else None,
        stage=_optional_str(payload.get("stage")),
        country=str(payload["country"]),
        funds_raised_millions=_optional_int(payload.get("funds_raised_millions")),
        date_text=str(raw_date) if raw_date else None,
        source_row=source_row,
    )


def write_records_jsonl(records_path: Path, records: list[LayoffRecord]) -> None:
    """Write cleaned records to a JSONL file.

    Raises:
        LayoffKitStoreError: If the write fails.
    """
    lines = [json.dumps(layoff_record_to_payload(record), sort_keys=True) for record in records]
    try:
        records_path.write_text("\n".join(lines) + "\n" if lines else "", encoding="utf-8")
    except OSError as error:
        raise LayoffKitStoreError(
            f"Failed to persist records at {records_path}: {error}. "
            "Check write permissions and available disk space."
        ) from error


def read_records_jsonl(records_path: Path) -> list[LayoffRecord]:
    """Read cleaned records from a JSONL file.

    Raises:
        LayoffKitStoreError: If the file is missing or malformed.
    """
    if not records_path.exists():
        raise LayoffKitStoreError(f"Records file not found at {records_path}.")
    records: list[LayoffRecord] = []
    for line_number, line in enumerate(records_path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as error:
            raise LayoffKitStoreError(
                f"Failed to parse records at {records_path}:{line_number}: {error.msg}. "
                "Re-run the clean command to regenerate outputs."
            ) from error
        records.append(layoff_record_from_payload(payload, source_row=len(records)))
    return records


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: object) -> int | None:
    return None if value is None else int(value)  # type: ignore[call-overload]


def _optional_float(value: object) -> float | None:
    return None if value is None else float(value)  # type: ignore[arg-type]
