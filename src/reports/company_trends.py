"""Company-level reporting views."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from core.constants import DEFAULT_TOP_N
from core.types import LayoffRecord, ReportTable
from reports.aggregation import dense_ranks, group_by_first, sum_layoffs, text_key


def peak_company_year(records: Sequence[LayoffRecord]) -> ReportTable:
    """Year with each company's largest summed layoffs.

    When several years tie for the maximum the earliest one wins.

    Returns:
        Rows of ``(company, year, total_laid_off)``, largest first.
    """
    yearly_totals = sum_layoffs(records, _company_year_key)
    rows: list[tuple[str, int, int]] = []
    for company, points in group_by_first(yearly_totals).items():
        best_year, best_total = points[0]
        for year, total in points[1:]:
            if total > best_total:
                best_year, best_total = year, total
        rows.append((company, best_year, best_total))
    rows.sort(key=lambda row: (-row[2], row[0]))
    return ReportTable(
        name="peak_company_year",
        columns=("company", "year", "total_laid_off"),
        rows=tuple(rows),
    )


def longest_layoff_span(records: Sequence[LayoffRecord]) -> ReportTable:
    """Days between each company's first and last dated layoff."""
    spans: dict[str, tuple[date, date]] = {}
    for record in records:
        company = text_key(record.company)
        if company is None or record.event_date is None:
            continue
        first, last = spans.get(company, (record.event_date, record.event_date))
        spans[company] = (min(first, record.event_date), max(last, record.event_date))
    rows = [
        (company, first, last, (last - first).days) for company, (first, last) in spans.items()
    ]
    rows.sort(key=lambda row: (-row[3], row[0]))
    return ReportTable(
        name="longest_layoff_span",
        columns=("company", "first_layoff", "last_layoff", "duration_days"),
        rows=tuple(rows),
    )


def top_companies_per_year(
    records: Sequence[LayoffRecord],
    top_n: int = DEFAULT_TOP_N,
) -> ReportTable:
    """Dense-ranked companies by yearly layoffs, ranks 1..top_n per year."""
    yearly_totals = sum_layoffs(records, _company_year_key)
    by_year: dict[int, list[tuple[str, int]]] = {}
    for (company, year), total in yearly_totals.items():
        by_year.setdefault(year, []).append((company, total))
    rows: list[tuple[int, str, int, int]] = []
    for year in sorted(by_year):
        entries = sorted(by_year[year], key=lambda entry: (-entry[1], entry[0]))
        ranks = dense_ranks([total for _, total in entries])
        rows.extend(
            (year, company, total, rank)
            for (company, total), rank in zip(entries, ranks)
            if rank <= top_n
        )
    return ReportTable(
        name="top_companies_per_year",
        columns=("year", "company", "total_laid_off", "ranking"),
        rows=tuple(rows),
    )


def full_shutdowns(records: Sequence[LayoffRecord]) -> ReportTable:
    """Events where the whole workforce was laid off."""
    rows = [
        (
            record.company,
            record.location,
            record.industry,
            record.total_laid_off,
            record.event_date,
            record.stage,
            record.country,
            record.funds_raised_millions,
        )
        for record in sorted(records, key=lambda item: item.source_row)
        if record.percentage_laid_off == 1
    ]
    return ReportTable(
        name="full_shutdowns",
        columns=(
            "company",
            "location",
            "industry",
            "total_laid_off",
            "event_date",
            "stage",
            "country",
            "funds_raised_millions",
        ),
        rows=tuple(rows),
    )


def _company_year_key(record: LayoffRecord) -> tuple[str, int] | None:
    company = text_key(record.company)
    if company is None or record.year is None:
        return None
    return (company, record.year)
