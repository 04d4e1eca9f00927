"""Unit tests for industry reporting views."""

from __future__ import annotations

import pytest

from reports.industry_trends import (
    average_percentage_by_industry,
    cumulative_by_industry,
    declining_industries,
)
from tests.fixture_paths import make_record


def test_declining_industries_keeps_steepest_drop_per_industry() -> None:
    """Only the most negative year-over-year delta survives per industry."""
    records = [
        make_record(industry="Retail", total_laid_off=1000, year=2020),
        make_record(industry="Retail", total_laid_off=400, year=2021),
        make_record(industry="Retail", total_laid_off=300, year=2022),
        make_record(industry="Food", total_laid_off=50, year=2021),
        make_record(industry="Food", total_laid_off=80, year=2022),
    ]

    table = declining_industries(records)

    assert table.rows == (("Retail", 2021, 400, 1000, -600),)


def test_declining_industries_keeps_tied_drops() -> None:
    """Dense ranking lets tied drops share rank one."""
    records = [
        make_record(industry="Travel", total_laid_off=300, year=2020),
        make_record(industry="Travel", total_laid_off=200, year=2021),
        make_record(industry="Travel", total_laid_off=300, year=2022),
        make_record(industry="Travel", total_laid_off=200, year=2023),
    ]

    table = declining_industries(records)

    assert [row[1] for row in table.rows] == [2021, 2023]


def test_declining_industries_excludes_null_industry() -> None:
    """Null industries are not a group."""
    records = [
        make_record(industry=None, total_laid_off=100, year=2020),
        make_record(industry=None, total_laid_off=10, year=2021),
    ]

    assert declining_industries(records).rows == ()


def test_average_percentage_by_industry_keeps_fractions() -> None:
    """Averages stay fractions and mark the column for percent display."""
    records = [
        make_record(industry="Retail", percentage_laid_off=0.1),
        make_record(industry="Retail", percentage_laid_off=0.3),
        make_record(industry="Retail", percentage_laid_off=None),
        make_record(industry="Food", percentage_laid_off=1.0),
    ]

    table = average_percentage_by_industry(records)

    assert table.rows[0] == ("Food", 1.0)
    assert table.rows[1][0] == "Retail"
    assert table.rows[1][1] == pytest.approx(0.2)
    assert table.percent_columns == ("avg_percentage_laid_off",)


def test_cumulative_by_industry_runs_over_years() -> None:
    """Cumulative totals accumulate per industry in year order."""
    records = [
        make_record(industry="Retail", total_laid_off=5, year=2022),
        make_record(industry="Retail", total_laid_off=10, year=2020),
        make_record(industry="Retail", total_laid_off=None, year=2021),
    ]

    table = cumulative_by_industry(records)

    assert table.rows == (("Retail", 2020, 10, 10), ("Retail", 2022, 5, 15))
