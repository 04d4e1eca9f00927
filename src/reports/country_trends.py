"""Country-level reporting views."""

from __future__ import annotations

from typing import Sequence

from core.constants import DEFAULT_TOP_N
from core.types import LayoffRecord, ReportTable
from reports.aggregation import group_by_first, running_totals, sum_layoffs, text_key, top_keys


def rolling_total_by_country(
    records: Sequence[LayoffRecord],
    top_n: int = DEFAULT_TOP_N,
) -> ReportTable:
    """Running yearly total for the countries with the most layoffs.

    Args:
        records: Cleaned records.
        top_n: Number of countries ranked by all-time total.

    Returns:
        Rows of ``(country, year, total_laid_off, rolling_total)`` ordered
        by country and year.
    """
    all_time_totals = sum_layoffs(records, lambda record: text_key(record.country))
    leading_countries = set(top_keys(all_time_totals, top_n))

    def country_year_key(record: LayoffRecord) -> tuple[str, int] | None:
        country = text_key(record.country)
        if country not in leading_countries or record.year is None:
            return None
        return (country, record.year)

    yearly_totals = sum_layoffs(records, country_year_key)
    rows = [
        (country, year, total, rolling)
        for country, points in sorted(group_by_first(yearly_totals).items())
        for year, total, rolling in running_totals(points)
    ]
    return ReportTable(
        name="rolling_total_by_country",
        columns=("country", "year", "total_laid_off", "rolling_total"),
        rows=tuple(rows),
    )


def country_totals(records: Sequence[LayoffRecord]) -> ReportTable:
    """All-time layoffs per country, largest first."""
    totals = sum_layoffs(records, lambda record: text_key(record.country))
    rows = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return ReportTable(
        name="country_totals",
        columns=("country", "total_laid_off"),
        rows=tuple(rows),
    )
