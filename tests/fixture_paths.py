"""Shared fixture helpers for tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from core.types import LayoffRecord, RawLayoffRow


def fixture_path(relative_path: str) -> Path:
    """Resolve a path under tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    tests_root = Path(__file__).resolve().parent
    return tests_root / "fixtures" / relative_path


def raw_row(
    company: str = "Acme",
    location: str = "SF Bay Area",
    industry: str | None = "Retail",
    total_laid_off: int | None = 100,
    percentage_laid_off: float | None = 0.1,
    date_text: str | None = "1/2/2023",
    stage: str | None = "Series B",
    country: str = "United States",
    funds_raised_millions: int | None = 50,
) -> RawLayoffRow:
    """Build a raw row in schema column order with overridable fields."""
    return (
        company,
        location,
        industry,
        total_laid_off,
        percentage_laid_off,
        date_text,
        stage,
        country,
        funds_raised_millions,
    )


def make_record(
    company: str = "Acme",
    total_laid_off: int | None = 100,
    year: int | None = 2023,
    month: int = 1,
    day: int = 1,
    industry: str | None = "Retail",
    stage: str | None = "Series B",
    country: str = "United States",
    percentage_laid_off: float | None = None,
    source_row: int = 0,
) -> LayoffRecord:
    """Build a cleaned record for reporting tests."""
    event_date = date(year, month, day) if year is not None else None
    return LayoffRecord(
        company=company,
        location="SF Bay Area",
        industry=industry,
        total_laid_off=total_laid_off,
        percentage_laid_off=percentage_laid_off,
        event_date=event_date,
        stage=stage,
        country=country,
        funds_raised_millions=None,
        date_text=event_date.isoformat() if event_date else None,
        source_row=source_row,
    )
