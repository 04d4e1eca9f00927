"""Unit tests for country reporting views."""

from __future__ import annotations

from reports.country_trends import country_totals, rolling_total_by_country
from tests.fixture_paths import make_record


def test_rolling_total_by_country_limits_to_top_countries() -> None:
    """Only the leading countries by all-time total are reported."""
    records = [
        make_record(country="United States", total_laid_off=900, year=2022),
        make_record(country="India", total_laid_off=500, year=2022),
        make_record(country="Norway", total_laid_off=10, year=2022),
    ]

    table = rolling_total_by_country(records, top_n=2)

    assert {row[0] for row in table.rows} == {"India", "United States"}


def test_rolling_total_by_country_is_monotonic() -> None:
    """Rolling totals never decrease within a country."""
    records = [
        make_record(country="India", total_laid_off=300, year=2023),
        make_record(country="India", total_laid_off=100, year=2020),
        make_record(country="India", total_laid_off=0, year=2021),
        make_record(country="India", total_laid_off=50, year=2022),
    ]

    table = rolling_total_by_country(records)

    rolling = [row[3] for row in table.rows]
    assert [row[1] for row in table.rows] == [2020, 2021, 2022, 2023]
    assert rolling == [100, 100, 150, 450]
    assert all(later >= earlier for earlier, later in zip(rolling, rolling[1:]))


def test_rolling_total_by_country_ranks_on_undated_totals_too() -> None:
    """All-time totals include undated records while yearly rows need a date."""
    records = [
        make_record(country="Brazil", total_laid_off=1000, year=None),
        make_record(country="Brazil", total_laid_off=5, year=2022),
        make_record(country="India", total_laid_off=500, year=2022),
    ]

    table = rolling_total_by_country(records, top_n=1)

    assert table.rows == (("Brazil", 2022, 5, 5),)


def test_country_totals_orders_largest_first() -> None:
    """Country totals sort by total descending then name."""
    records = [
        make_record(country="Canada", total_laid_off=10),
        make_record(country="India", total_laid_off=30),
        make_record(country="Brazil", total_laid_off=10),
        make_record(country="India", total_laid_off=None),
    ]

    table = country_totals(records)

    assert table.rows == (("India", 30), ("Brazil", 10), ("Canada", 10))
