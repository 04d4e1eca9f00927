"""Unit tests for dataset-wide reporting views."""

from __future__ import annotations

from datetime import date

from reports.global_trends import peak_month, peak_single_day_event, yearly_totals
from tests.fixture_paths import make_record


def test_peak_single_day_event_prefers_first_on_ties() -> None:
    """The earliest-ingested record wins a tie for the maximum."""
    records = [
        make_record(company="Second", total_laid_off=500, source_row=1),
        make_record(company="First", total_laid_off=500, source_row=0),
        make_record(company="Small", total_laid_off=None, source_row=2),
    ]

    table = peak_single_day_event(records)

    assert table.rows == (("First", date(2023, 1, 1), 500),)


def test_peak_single_day_event_is_empty_without_totals() -> None:
    """No reported headcount yields an empty table."""
    records = [make_record(total_laid_off=None, percentage_laid_off=0.5)]

    assert peak_single_day_event(records).rows == ()


def test_peak_month_sums_by_calendar_month() -> None:
    """Months aggregate across companies and years stay distinct."""
    records = [
        make_record(company="A", total_laid_off=100, year=2023, month=1),
        make_record(company="B", total_laid_off=150, year=2023, month=1, day=20),
        make_record(company="C", total_laid_off=200, year=2022, month=1),
        make_record(company="D", total_laid_off=900, year=None),
    ]

    assert peak_month(records).rows == (("2023-01", 250),)


def test_yearly_totals_excludes_undated_records() -> None:
    """Null years are not a group."""
    records = [
        make_record(total_laid_off=10, year=2022),
        make_record(total_laid_off=20, year=2023),
        make_record(total_laid_off=5, year=2023),
        make_record(total_laid_off=99, year=None),
    ]

    assert yearly_totals(records).rows == ((2022, 10), (2023, 25))
