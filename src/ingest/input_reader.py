"""Source CSV reader for ingestion.

This module loads the raw layoffs CSV export into typed row tuples.
Cells are converted to Python values but never cleaned.
"""

from __future__ import annotations

import csv
from pathlib import Path

from core.constants import NULL_TOKEN, SOURCE_COLUMNS
from core.errors import LayoffKitIngestError, SchemaMismatch
from core.types import RawLayoffRow

_INT_COLUMNS = frozenset({"total_laid_off", "funds_raised_millions"})
_FLOAT_COLUMNS = frozenset({"percentage_laid_off"})
_NULLABLE_TEXT_COLUMNS = frozenset({"date", "stage"})


def read_source_rows(source_path: str | Path) -> list[RawLayoffRow]:
    """Load raw layoff rows from a CSV file.

    Args:
        source_path: Path to a CSV file with the layoffs header.

    Returns:
        Row tuples in file order, columns in schema order.

    Raises:
        LayoffKitIngestError: If the file is missing or unreadable.
        SchemaMismatch: If header or cell values disagree with the schema.
    """
    csv_path = Path(source_path).expanduser()
    if not csv_path.is_file():
        raise LayoffKitIngestError(
            f"Failed to read source at {csv_path}: file does not exist. "
            "Provide an existing CSV export of the layoffs table."
        )
    try:
        with csv_path.open(encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            _validate_header(csv_path, reader.fieldnames)
            return [
                _convert_row(csv_path, line_number, row)
                for line_number, row in enumerate(reader, 2)
            ]
    except (OSError, csv.Error, UnicodeDecodeError) as error:
        raise LayoffKitIngestError(
            f"Failed to read source at {csv_path}: {error}. Check the file encoding and format."
        ) from error


def _validate_header(csv_path: Path, fieldnames: list[str] | None) -> None:
    present = {name.strip() for name in fieldnames or []}
    missing = [column for column in SOURCE_COLUMNS if column not in present]
    if missing:
        raise SchemaMismatch(
            f"Invalid header in {csv_path}: missing columns {', '.join(missing)}. "
            f"Expected columns: {', '.join(SOURCE_COLUMNS)}."
        )


def _convert_row(csv_path: Path, line_number: int, row: dict[str, str | None]) -> RawLayoffRow:
    stripped_row = {str(key).strip(): value for key, value in row.items() if key is not None}
    return tuple(
        _convert_cell(csv_path, line_number, column, stripped_row.get(column))
        for column in SOURCE_COLUMNS
    )


def _convert_cell(
    csv_path: Path,
    line_number: int,
    column: str,
    raw_value: str | None,
) -> object:
    if raw_value is None:
        raise SchemaMismatch(
            f"Invalid row at {csv_path}:{line_number}: missing value for column '{column}'."
        )
    if column in _INT_COLUMNS or column in _FLOAT_COLUMNS:
        return _convert_number(csv_path, line_number, column, raw_value)
    if column in _NULLABLE_TEXT_COLUMNS:
        return None if _is_null_token(raw_value) else raw_value
    if column == "industry" and raw_value.strip() == NULL_TOKEN:
        return None
    return raw_value


def _convert_number(csv_path: Path, line_number: int, column: str, raw_value: str) -> object:
    if _is_null_token(raw_value):
        return None
    try:
        value = float(raw_value)
    except ValueError as error:
        raise SchemaMismatch(
            f"Invalid row at {csv_path}:{line_number}: column '{column}' "
            f"expected a number, got '{raw_value}'."
        ) from error
    if column not in _INT_COLUMNS:
        return value
    if not value.is_integer():
        raise SchemaMismatch(
            f"Invalid row at {csv_path}:{line_number}: column '{column}' "
            f"expected a whole number, got '{raw_value}'."
        )
    return int(value)


def _is_null_token(raw_value: str) -> bool:
    stripped = raw_value.strip()
    return not stripped or stripped == NULL_TOKEN
