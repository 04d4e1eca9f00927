"""Field normalization passes.

This module standardizes text, backfills missing industries from
same-company siblings, folds near-duplicate labels, and parses dates.
Passes rewrite fields only; they never add or remove records.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import date, datetime

from core.constants import (
    BACKFILL_POLICY_FIRST_SEEN,
    BACKFILL_POLICY_MOST_COMMON,
    COUNTRY_TRAILING_PUNCTUATION,
    INDUSTRY_CONFLICT_FLAG,
    ISO_DATE_FORMAT,
)
from core.errors import DateParseError
from core.logging_config import get_logger
from core.types import (
    BackfillConflict,
    CleaningRules,
    DateParseFailure,
    IndustryLabelRule,
    LayoffRecord,
    NormalizationResult,
)

_LOGGER = get_logger(__name__)


def normalize_records(records: list[LayoffRecord], rules: CleaningRules) -> NormalizationResult:
    """Run every normalization pass in order.

    Args:
        records: Deduplicated working collection.
        rules: Cleaning rules table.

    Returns:
        Normalized records with backfill conflicts and date failures.
    """
    normalized = trim_company_names(records)
    normalized = blank_industries_to_null(normalized)
    normalized, conflicts = backfill_industries(
        normalized,
        rules.backfill_conflicts,
        rules.industry_labels,
    )
    normalized = collapse_industry_labels(normalized, rules.industry_labels)
    normalized = trim_country_names(normalized, rules.country_prefixes)
    normalized, date_failures = parse_event_dates(normalized, rules.date_format)
    return NormalizationResult(
        records=normalized,
        conflicts=tuple(conflicts),
        date_failures=tuple(date_failures),
    )


def trim_company_names(records: list[LayoffRecord]) -> list[LayoffRecord]:
    """Strip surrounding whitespace from company names."""
    return [_with_fields(record, company=record.company.strip()) for record in records]


def blank_industries_to_null(records: list[LayoffRecord]) -> list[LayoffRecord]:
    """Rewrite empty industry labels to None."""
    return [
        _with_fields(record, industry=None)
        if record.industry is not None and not record.industry.strip()
        else record
        for record in records
    ]


def backfill_industries(
    records: list[LayoffRecord],
    policy: str,
    label_rules: tuple[IndustryLabelRule, ...] = (),
) -> tuple[list[LayoffRecord], list[BackfillConflict]]:
    """Fill null industries from siblings sharing the company name.

    A single distinct sibling industry is adopted. Several distinct
    values are a conflict: the record is flagged and logged, and the
    policy decides whether a value is adopted. Sibling labels are
    compared after folding through ``label_rules``, so labels the
    rules table treats as one category never conflict.

    Args:
        records: Working collection with blank industries already nulled.
        policy: One of ``flag``, ``first_seen`` or ``most_common``.
        label_rules: Industry label folding rules applied to candidates.

    Returns:
        Rewritten records and the conflicts encountered.
    """
    sibling_industries = _collect_sibling_industries(records, label_rules)
    backfilled: list[LayoffRecord] = []
    conflicts: list[BackfillConflict] = []
    for record in records:
        candidates = sibling_industries.get(record.company)
        if record.industry is not None or not candidates:
            backfilled.append(record)
            continue
        distinct = tuple(dict.fromkeys(candidates))
        if len(distinct) == 1:
            backfilled.append(_with_fields(record, industry=distinct[0]))
            continue
        resolved = _resolve_conflict(candidates, policy)
        conflict = BackfillConflict(
            company=record.company,
            source_row=record.source_row,
            candidates=distinct,
            resolved_industry=resolved,
        )
        _LOGGER.warning(
            "industry_backfill_conflict",
            company=record.company,
            source_row=record.source_row,
            candidates=list(distinct),
            policy=policy,
            resolved_industry=resolved,
        )
        conflicts.append(conflict)
        backfilled.append(
            _with_fields(
                record,
                industry=resolved,
                flags=record.flags + (INDUSTRY_CONFLICT_FLAG,),
            )
        )
    return backfilled, conflicts


def collapse_industry_labels(
    records: list[LayoffRecord],
    label_rules: tuple[IndustryLabelRule, ...],
) -> list[LayoffRecord]:
    """Fold industry labels matching a configured prefix to its canonical form."""
    collapsed: list[LayoffRecord] = []
    for record in records:
        canonical = _canonical_industry(record.industry, label_rules)
        collapsed.append(_with_fields(record, industry=canonical))
    return collapsed


def trim_country_names(
    records: list[LayoffRecord],
    country_prefixes: tuple[str, ...],
) -> list[LayoffRecord]:
    """Strip trailing punctuation from countries matching a canonical prefix."""
    trimmed: list[LayoffRecord] = []
    for record in records:
        if record.country.startswith(country_prefixes):
            country = record.country.rstrip(COUNTRY_TRAILING_PUNCTUATION)
            trimmed.append(_with_fields(record, country=country))
        else:
            trimmed.append(record)
    return trimmed


def parse_event_dates(
    records: list[LayoffRecord],
    date_format: str,
) -> tuple[list[LayoffRecord], list[DateParseFailure]]:
    """Parse textual dates into ``event_date``.

    Unparseable values are logged and leave ``event_date`` as None;
    the record stays in the collection.
    Values already in ISO ``YYYY-MM-DD`` form are accepted alongside
    ``date_format``, so re-running the pass over parsed output is safe.

    Args:
        records: Working collection.
        date_format: strptime format of source dates.

    Returns:
        Records with parsed dates and the failures encountered.
    """
    parsed: list[LayoffRecord] = []
    failures: list[DateParseFailure] = []
    for record in records:
        if record.date_text is None:
            parsed.append(_with_fields(record, event_date=None))
            continue
        try:
            event_date = parse_event_date(record.date_text, date_format)
        except DateParseError as error:
            _LOGGER.warning(
                "event_date_unparseable",
                source_row=record.source_row,
                date_text=record.date_text,
                date_format=date_format,
            )
            failures.append(
                DateParseFailure(
                    source_row=record.source_row,
                    date_text=record.date_text,
                    message=str(error),
                )
            )
            event_date = None
        parsed.append(_with_fields(record, event_date=event_date))
    return parsed, failures


def parse_event_date(date_text: str, date_format: str) -> date:
    """Parse one textual date.

    Already-ISO values are accepted so re-running the pass is harmless.

    Raises:
        DateParseError: If the value matches neither format.
    """
    stripped = date_text.strip()
    for candidate_format in (date_format, ISO_DATE_FORMAT):
        try:
            return datetime.strptime(stripped, candidate_format).date()
        except ValueError:
            continue
    raise DateParseError(
        f"Invalid date '{date_text}': expected format '{date_format}'."
    )


def _collect_sibling_industries(
    records: list[LayoffRecord],
    label_rules: tuple[IndustryLabelRule, ...],
) -> dict[str, list[str]]:
    """Map company to its folded non-null industries in ingestion order."""
    siblings: dict[str, list[str]] = {}
    for record in sorted(records, key=lambda item: item.source_row):
        industry = _canonical_industry(record.industry, label_rules)
        if industry is not None:
            siblings.setdefault(record.company, []).append(industry)
    return siblings


def _resolve_conflict(candidates: list[str], policy: str) -> str | None:
    if policy == BACKFILL_POLICY_FIRST_SEEN:
        return candidates[0]
    if policy == BACKFILL_POLICY_MOST_COMMON:
        counts = Counter(candidates)
        best_count = max(counts.values())
        return next(value for value in candidates if counts[value] == best_count)
    return None


def _canonical_industry(
    industry: str | None,
    label_rules: tuple[IndustryLabelRule, ...],
) -> str | None:
    if industry is None:
        return None
    for rule in label_rules:
        if industry.startswith(rule.prefix):
            return rule.canonical
    return industry


def _with_fields(record: LayoffRecord, **changes: object) -> LayoffRecord:
    if all(getattr(record, name) == value for name, value in changes.items()):
        return record
    return replace(record, **changes)  # type: ignore[arg-type]
