"""Grouping helpers shared by reporting views.

Null grouping keys are excluded before aggregating, null metrics are
skipped, and a group whose metric is entirely null is omitted.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

from core.types import LayoffRecord

KeyT = TypeVar("KeyT", bound=Hashable)


def text_key(value: str | None) -> str | None:
    """Return a text grouping key, or None for missing and blank values."""
    if value is None or not value.strip():
        return None
    return value


def sum_layoffs(
    records: Iterable[LayoffRecord],
    key_fn: Callable[[LayoffRecord], KeyT | None],
) -> dict[KeyT, int]:
    """Sum ``total_laid_off`` per grouping key.

    Args:
        records: Cleaned records.
        key_fn: Returns the grouping key, or None to exclude the record.

    Returns:
        Totals keyed by group, in first-seen order.
    """
    totals: dict[KeyT, int] = {}
    for record in records:
        key = key_fn(record)
        if key is None or record.total_laid_off is None:
            continue
        totals[key] = totals.get(key, 0) + record.total_laid_off
    return totals


def top_keys(totals: dict[KeyT, int], limit: int) -> list[KeyT]:
    """Return the ``limit`` keys with the largest totals.

    Ties are broken by key order so results are deterministic.
    """
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [key for key, _ in ranked[:limit]]


def dense_ranks(values: list[int], descending: bool = True) -> list[int]:
    """Dense-rank values, equal values sharing a rank with no gaps."""
    distinct = sorted(set(values), reverse=descending)
    rank_by_value = {value: rank for rank, value in enumerate(distinct, 1)}
    return [rank_by_value[value] for value in values]


def group_by_first(pairs: dict[tuple[str, int], int]) -> dict[str, list[tuple[int, int]]]:
    """Split ``(group, year) -> total`` into per-group year-sorted series."""
    series: dict[str, list[tuple[int, int]]] = {}
    for (group, year), total in pairs.items():
        series.setdefault(group, []).append((year, total))
    for points in series.values():
        points.sort()
    return series


def running_totals(points: list[tuple[int, int]]) -> list[tuple[int, int, int]]:
    """Return ``(year, total, cumulative)`` rows for a year-sorted series."""
    cumulative = 0
    rows: list[tuple[int, int, int]] = []
    for year, total in points:
        cumulative += total
        rows.append((year, total, cumulative))
    return rows
