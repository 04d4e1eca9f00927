"""Industry-level reporting views."""

from __future__ import annotations

import math
from typing import Sequence

from core.types import LayoffRecord, ReportTable
from reports.aggregation import group_by_first, running_totals, sum_layoffs, text_key


def declining_industries(records: Sequence[LayoffRecord]) -> ReportTable:
    """Find each industry's steepest year-over-year drop.

    Deltas compare a year with the previous observed year of the same
    industry. Per industry only the dense-rank-1 drop is kept, so tied
    drops are all reported. Industries that never declined are absent.

    Args:
        records: Cleaned records.

    Returns:
        Rows of ``(industry, year, current_year_layoffs, prev_year_layoffs,
        layoffs_difference)`` ordered by difference ascending.
    """
    yearly_totals = sum_layoffs(records, _industry_year_key)
    rows: list[tuple[str, int, int, int, int]] = []
    for industry, points in group_by_first(yearly_totals).items():
        drops = [
            (year, current, previous, current - previous)
            for (_, previous), (year, current) in zip(points, points[1:])
            if current < previous
        ]
        if not drops:
            continue
        steepest = min(drop[3] for drop in drops)
        rows.extend(
            (industry, year, current, previous, difference)
            for year, current, previous, difference in drops
            if difference == steepest
        )
    rows.sort(key=lambda row: (row[4], row[0], row[1]))
    return ReportTable(
        name="declining_industries",
        columns=(
            "industry",
            "year",
            "current_year_layoffs",
            "prev_year_layoffs",
            "layoffs_difference",
        ),
        rows=tuple(rows),
    )


def average_percentage_by_industry(records: Sequence[LayoffRecord]) -> ReportTable:
    """Average fraction of staff laid off per industry.

    Values stay fractions in [0, 1]; percentage display is applied
    only when rendering.
    """
    fractions: dict[str, list[float]] = {}
    for record in records:
        industry = text_key(record.industry)
        if industry is None or record.percentage_laid_off is None:
            continue
        fractions.setdefault(industry, []).append(record.percentage_laid_off)
    averages = [
        (industry, math.fsum(values) / len(values)) for industry, values in fractions.items()
    ]
    averages.sort(key=lambda row: (-row[1], row[0]))
    return ReportTable(
        name="average_percentage_by_industry",
        columns=("industry", "avg_percentage_laid_off"),
        rows=tuple(averages),
        percent_columns=("avg_percentage_laid_off",),
    )


def cumulative_by_industry(records: Sequence[LayoffRecord]) -> ReportTable:
    """Running total of layoffs per industry ordered by year."""
    yearly_totals = sum_layoffs(records, _industry_year_key)
    rows = [
        (industry, year, total, cumulative)
        for industry, points in sorted(group_by_first(yearly_totals).items())
        for year, total, cumulative in running_totals(points)
    ]
    return ReportTable(
        name="cumulative_by_industry",
        columns=("industry", "year", "total_laid_off", "cumulative_layoffs"),
        rows=tuple(rows),
    )


def _industry_year_key(record: LayoffRecord) -> tuple[str, int] | None:
    industry = text_key(record.industry)
    if industry is None or record.year is None:
        return None
    return (industry, record.year)
