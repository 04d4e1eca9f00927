"""Unit tests for the source CSV reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import LayoffKitIngestError, SchemaMismatch
from ingest.input_reader import read_source_rows
from tests.fixture_paths import fixture_path


def test_read_source_rows_keeps_every_row() -> None:
    """Reader should return one typed tuple per CSV line."""
    rows = read_source_rows(fixture_path("layoffs_sample.csv"))

    assert len(rows) == 21
    assert rows[0] == (
        "Atlassian",
        "Sydney",
        "Other",
        500,
        0.05,
        "3/6/2023",
        "Post-IPO",
        "Australia",
        210,
    )


def test_read_source_rows_maps_null_tokens() -> None:
    """NULL cells become None while blank industries stay blank."""
    rows = read_source_rows(fixture_path("layoffs_sample.csv"))

    airbnb_blank = rows[1]
    ballys = rows[10]
    assert airbnb_blank[2] == "" and airbnb_blank[4] is None
    assert ballys[2] is None and ballys[3] is None


def test_read_source_rows_preserves_untrimmed_company() -> None:
    """Reader should not clean values."""
    rows = read_source_rows(fixture_path("layoffs_sample.csv"))

    assert rows[3][0] == " Included Health"
    assert rows[3][7] == "United States."


def test_read_source_rows_raises_for_missing_file(tmp_path: Path) -> None:
    """Missing source should fail with ingest error."""
    with pytest.raises(LayoffKitIngestError):
        read_source_rows(tmp_path / "missing.csv")


def test_read_source_rows_raises_for_missing_columns() -> None:
    """A header without every schema column is a schema mismatch."""
    with pytest.raises(SchemaMismatch):
        read_source_rows(fixture_path("bad_header.csv"))


def test_read_source_rows_raises_for_bad_number() -> None:
    """Non-numeric metric cells are a schema mismatch."""
    with pytest.raises(SchemaMismatch):
        read_source_rows(fixture_path("bad_number.csv"))


def test_read_source_rows_raises_for_fractional_count() -> None:
    """Integer columns never truncate fractional cells."""
    with pytest.raises(SchemaMismatch, match="whole number"):
        read_source_rows(fixture_path("fractional_count.csv"))


def test_read_source_rows_accepts_whole_float_count() -> None:
    """Integral float spellings convert to integers."""
    rows = read_source_rows(fixture_path("whole_float_count.csv"))

    assert rows[0][3] == 120 and isinstance(rows[0][3], int)
