"""Registry of reporting views.

This module maps stable view names to builder functions so the SDK,
CLI, and run store can produce every view through one entry point.
"""

from __future__ import annotations

from typing import Callable, Sequence

from core.constants import DEFAULT_TOP_N
from core.errors import LayoffKitReportError
from core.types import LayoffRecord, ReportTable
from reports.company_trends import (
    full_shutdowns,
    longest_layoff_span,
    peak_company_year,
    top_companies_per_year,
)
from reports.country_trends import country_totals, rolling_total_by_country
from reports.global_trends import peak_month, peak_single_day_event, yearly_totals
from reports.industry_trends import (
    average_percentage_by_industry,
    cumulative_by_industry,
    declining_industries,
)
from reports.stage_trends import stage_trend

ReportBuilder = Callable[[Sequence[LayoffRecord], int], ReportTable]

_REPORT_BUILDERS: dict[str, ReportBuilder] = {
    "stage_trend": stage_trend,
    "declining_industries": lambda records, _: declining_industries(records),
    "rolling_total_by_country": rolling_total_by_country,
    "peak_company_year": lambda records, _: peak_company_year(records),
    "longest_layoff_span": lambda records, _: longest_layoff_span(records),
    "average_percentage_by_industry": lambda records, _: average_percentage_by_industry(records),
    "peak_single_day_event": lambda records, _: peak_single_day_event(records),
    "peak_month": lambda records, _: peak_month(records),
    "cumulative_by_industry": lambda records, _: cumulative_by_industry(records),
    "country_totals": lambda records, _: country_totals(records),
    "yearly_totals": lambda records, _: yearly_totals(records),
    "top_companies_per_year": top_companies_per_year,
    "full_shutdowns": lambda records, _: full_shutdowns(records),
}


def report_names() -> tuple[str, ...]:
    """Return registered view names in registration order."""
    return tuple(_REPORT_BUILDERS)


def build_report(
    name: str,
    records: Sequence[LayoffRecord],
    top_n: int = DEFAULT_TOP_N,
) -> ReportTable:
    """Build one named view.

    Args:
        name: Registered view name.
        records: Cleaned records.
        top_n: Number of leading categories for top-N views.

    Returns:
        The view table.

    Raises:
        LayoffKitReportError: If the view name is unknown.
    """
    builder = _REPORT_BUILDERS.get(name)
    if builder is None:
        supported = ", ".join(report_names())
        raise LayoffKitReportError(f"Unknown report '{name}'. Choose one of: {supported}.")
    return builder(records, top_n)


def build_reports(
    records: Sequence[LayoffRecord],
    top_n: int = DEFAULT_TOP_N,
) -> dict[str, ReportTable]:
    """Build every registered view over the same records."""
    return {name: builder(records, top_n) for name, builder in _REPORT_BUILDERS.items()}
