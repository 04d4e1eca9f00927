"""Funding-stage layoff trend view."""

from __future__ import annotations

from typing import Sequence

from core.constants import DEFAULT_TOP_N, OTHERS_BUCKET
from core.types import LayoffRecord, ReportTable
from reports.aggregation import sum_layoffs, text_key, top_keys


def stage_trend(records: Sequence[LayoffRecord], top_n: int = DEFAULT_TOP_N) -> ReportTable:
    """Sum layoffs by year and funding stage with a top-N collapse.

    The leading stages are chosen once from all-time totals; every
    other stage is reported as ``Others`` in every year.

    Args:
        records: Cleaned records.
        top_n: Number of stages kept by name.

    Returns:
        Rows of ``(stage, year, total_laid_off)`` ordered by stage and year.
    """
    dated = [record for record in records if record.event_date is not None]
    stage_totals = sum_layoffs(dated, lambda record: text_key(record.stage))
    leading_stages = set(top_keys(stage_totals, top_n))

    def bucket_key(record: LayoffRecord) -> tuple[str, int] | None:
        stage = text_key(record.stage)
        if stage is None or record.year is None:
            return None
        return (stage if stage in leading_stages else OTHERS_BUCKET, record.year)

    yearly_totals = sum_layoffs(dated, bucket_key)
    rows = sorted((stage, year, total) for (stage, year), total in yearly_totals.items())
    return ReportTable(
        name="stage_trend",
        columns=("stage", "year", "total_laid_off"),
        rows=tuple(rows),
    )
