"""Unit tests for company reporting views."""

from __future__ import annotations

from datetime import date

from reports.company_trends import (
    full_shutdowns,
    longest_layoff_span,
    peak_company_year,
    top_companies_per_year,
)
from tests.fixture_paths import make_record


def test_peak_company_year_picks_maximum_year() -> None:
    """Each company reports its largest yearly total."""
    records = [
        make_record(company="Juul", total_laid_off=900, year=2020),
        make_record(company="Juul", total_laid_off=400, year=2022),
        make_record(company="Juul", total_laid_off=100, year=2022, month=6),
        make_record(company="Oda", total_laid_off=70, year=2022),
    ]

    table = peak_company_year(records)

    assert table.rows == (("Juul", 2020, 900), ("Oda", 2022, 70))


def test_peak_company_year_prefers_earliest_year_on_ties() -> None:
    """Tied maxima resolve to the first year."""
    records = [
        make_record(company="Tie", total_laid_off=50, year=2023),
        make_record(company="Tie", total_laid_off=50, year=2021),
    ]

    assert peak_company_year(records).rows == (("Tie", 2021, 50),)


def test_longest_layoff_span_measures_days() -> None:
    """Duration spans the first to last dated event."""
    records = [
        make_record(company="Airbnb", year=2020, month=5, day=5),
        make_record(company="Airbnb", year=2023, month=3, day=3),
        make_record(company="Airbnb", year=None),
        make_record(company="Oda", year=2022, month=11, day=1),
    ]

    table = longest_layoff_span(records)

    first_row = table.rows[0]
    assert first_row[:3] == ("Airbnb", date(2020, 5, 5), date(2023, 3, 3))
    assert first_row[3] == (date(2023, 3, 3) - date(2020, 5, 5)).days
    assert table.rows[1] == ("Oda", date(2022, 11, 1), date(2022, 11, 1), 0)


def test_top_companies_per_year_uses_dense_ranks() -> None:
    """Companies with equal totals share a rank within the year."""
    records = [
        make_record(company="A", total_laid_off=100),
        make_record(company="B", total_laid_off=100),
        make_record(company="C", total_laid_off=50),
        make_record(company="D", total_laid_off=10),
    ]

    table = top_companies_per_year(records, top_n=2)

    assert table.rows == ((2023, "A", 100, 1), (2023, "B", 100, 1), (2023, "C", 50, 2))


def test_full_shutdowns_lists_complete_layoffs() -> None:
    """Only events laying off the entire workforce are listed."""
    records = [
        make_record(company="Katerra", percentage_laid_off=1.0),
        make_record(company="Juul", percentage_laid_off=0.3, source_row=1),
    ]

    table = full_shutdowns(records)

    assert [row[0] for row in table.rows] == ["Katerra"]
