"""Dataset-wide reporting views."""

from __future__ import annotations

from typing import Sequence

from core.types import LayoffRecord, ReportTable
from reports.aggregation import sum_layoffs


def peak_single_day_event(records: Sequence[LayoffRecord]) -> ReportTable:
    """Single record with the largest headcount laid off.

    Ties go to the record ingested first. The table is empty when no
    record reports a headcount.
    """
    peak: LayoffRecord | None = None
    for record in sorted(records, key=lambda item: item.source_row):
        if record.total_laid_off is None:
            continue
        if peak is None or record.total_laid_off > (peak.total_laid_off or 0):
            peak = record
    rows = () if peak is None else ((peak.company, peak.event_date, peak.total_laid_off),)
    return ReportTable(
        name="peak_single_day_event",
        columns=("company", "event_date", "total_laid_off"),
        rows=rows,
    )


def peak_month(records: Sequence[LayoffRecord]) -> ReportTable:
    """Calendar month with the highest global layoffs, earliest on ties."""
    monthly_totals = sum_layoffs(
        records,
        lambda record: record.event_date.strftime("%Y-%m") if record.event_date else None,
    )
    if not monthly_totals:
        rows: tuple[tuple[str, int], ...] = ()
    else:
        month, total = min(monthly_totals.items(), key=lambda item: (-item[1], item[0]))
        rows = ((month, total),)
    return ReportTable(
        name="peak_month",
        columns=("year_month", "total_laid_off"),
        rows=rows,
    )


def yearly_totals(records: Sequence[LayoffRecord]) -> ReportTable:
    """Layoffs per calendar year across all companies."""
    totals = sum_layoffs(records, lambda record: record.year)
    return ReportTable(
        name="yearly_totals",
        columns=("year", "total_laid_off"),
        rows=tuple(sorted(totals.items())),
    )
