"""Staging of raw rows into the working collection.

This module copies raw rows verbatim into typed layoff records.
It validates shape and types but never filters or rewrites values.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import SOURCE_COLUMNS
from core.errors import SchemaMismatch
from core.logging_config import get_logger
from core.types import LayoffRecord, RawLayoffRow

_LOGGER = get_logger(__name__)

_REQUIRED_TEXT = frozenset({"company", "location", "country"})
_OPTIONAL_TEXT = frozenset({"industry", "date", "stage"})
_OPTIONAL_INT = frozenset({"total_laid_off", "funds_raised_millions"})


def stage_records(rows: Iterable[RawLayoffRow]) -> list[LayoffRecord]:
    """Build the working collection from raw rows.

    Args:
        rows: Raw 9-column tuples in schema column order.

    Returns:
        One record per row, in input order.

    Raises:
        SchemaMismatch: If a row has the wrong column count or value types.
    """
    records = [_stage_row(index, row) for index, row in enumerate(rows)]
    _LOGGER.info("records_staged", record_count=len(records))
    return records


def _stage_row(index: int, row: RawLayoffRow) -> LayoffRecord:
    if len(row) != len(SOURCE_COLUMNS):
        raise SchemaMismatch(
            f"Invalid raw row {index}: expected {len(SOURCE_COLUMNS)} columns, got {len(row)}."
        )
    values = dict(zip(SOURCE_COLUMNS, row))
    for column, value in values.items():
        _check_value_type(index, column, value)
    percentage = values["percentage_laid_off"]
    if percentage is not None and not 0 <= percentage <= 1:  # type: ignore[operator]
        raise SchemaMismatch(
            f"Invalid raw row {index}: column 'percentage_laid_off' expected a fraction "
            f"between 0 and 1, got {percentage}."
        )
    return LayoffRecord(
        company=str(values["company"]),
        location=str(values["location"]),
        industry=_optional_str(values["industry"]),
        total_laid_off=_optional_int(values["total_laid_off"]),
        percentage_laid_off=float(percentage) if percentage is not None else None,  # type: ignore[arg-type]
        event_date=None,
        stage=_optional_str(values["stage"]),
        country=str(values["country"]),
        funds_raised_millions=_optional_int(values["funds_raised_millions"]),
        date_text=_optional_str(values["date"]),
        source_row=index,
    )


def _check_value_type(index: int, column: str, value: object) -> None:
    if column in _REQUIRED_TEXT:
        valid = isinstance(value, str)
        expected = "string"
    elif column in _OPTIONAL_TEXT:
        valid = value is None or isinstance(value, str)
        expected = "string or null"
    elif column in _OPTIONAL_INT:
        valid = value is None or (isinstance(value, int) and not isinstance(value, bool))
        expected = "integer or null"
    else:
        valid = value is None or (
            isinstance(value, (int, float)) and not isinstance(value, bool)
        )
        expected = "number or null"
    if not valid:
        raise SchemaMismatch(
            f"Invalid raw row {index}: column '{column}' expected {expected}, "
            f"got {type(value).__name__}."
        )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: object) -> int | None:
    return None if value is None else int(value)  # type: ignore[call-overload]
