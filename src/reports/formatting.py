"""Presentation helpers for report tables.

Display transforms live here so stored values are never rewritten.
"""

from __future__ import annotations

from datetime import date

from core.types import ReportTable, ReportValue


def format_percentage(fraction: float) -> str:
    """Render a fraction in [0, 1] as a percentage with two decimals."""
    return f"{round(fraction * 100, 2):.2f}"


def render_report_table(table: ReportTable) -> str:
    """Render a report as tab-separated text with a header line."""
    lines = ["\t".join(table.columns)]
    for row in table.rows:
        cells = [
            _format_cell(value, column in table.percent_columns)
            for column, value in zip(table.columns, row)
        ]
        lines.append("\t".join(cells))
    return "\n".join(lines)


def json_safe_value(value: ReportValue) -> str | int | float | None:
    """Convert a report cell into a JSON-serializable value."""
    if isinstance(value, date):
        return value.isoformat()
    return value


def _format_cell(value: ReportValue, is_percent: bool) -> str:
    if value is None:
        return "-"
    if is_percent and isinstance(value, float):
        return format_percentage(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
