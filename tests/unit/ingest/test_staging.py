"""Unit tests for staging raw rows."""

from __future__ import annotations

import pytest

from core.errors import SchemaMismatch
from ingest.staging import stage_records
from tests.fixture_paths import raw_row


def test_stage_records_copies_values_verbatim() -> None:
    """Staging should neither filter nor rewrite rows."""
    rows = [raw_row(company=" Acme "), raw_row(industry="", total_laid_off=None)]

    records = stage_records(rows)

    assert len(records) == 2
    assert records[0].company == " Acme "
    assert records[1].industry == ""
    assert records[0].date_text == "1/2/2023" and records[0].event_date is None


def test_stage_records_assigns_ingestion_order() -> None:
    """Each record remembers its input position."""
    records = stage_records([raw_row(), raw_row(), raw_row()])

    assert [record.source_row for record in records] == [0, 1, 2]


def test_stage_records_rejects_wrong_column_count() -> None:
    """Short rows are a schema mismatch."""
    with pytest.raises(SchemaMismatch):
        stage_records([raw_row()[:8]])


def test_stage_records_rejects_wrong_type() -> None:
    """Text in an integer column is a schema mismatch."""
    with pytest.raises(SchemaMismatch):
        stage_records([raw_row(total_laid_off="many")])  # type: ignore[arg-type]


def test_stage_records_rejects_null_company() -> None:
    """Company is not nullable."""
    with pytest.raises(SchemaMismatch):
        stage_records([raw_row(company=None)])  # type: ignore[arg-type]


def test_stage_records_accepts_integer_percentage() -> None:
    """Whole-number fractions are stored as floats."""
    records = stage_records([raw_row(percentage_laid_off=1)])

    assert records[0].percentage_laid_off == 1.0


@pytest.mark.parametrize("percentage", [1.5, -0.1])
def test_stage_records_rejects_out_of_range_percentage(percentage: float) -> None:
    """Layoff percentages are fractions in [0, 1]."""
    with pytest.raises(SchemaMismatch, match="percentage_laid_off"):
        stage_records([raw_row(percentage_laid_off=percentage)])
