"""Typed cleaning-rules parsing for normalization passes.

This module loads and validates the YAML rules file that drives
industry label folding, country trimming, date parsing, and backfill
conflict handling, so new canonicalization rules need no code change.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence, cast

from core.constants import SUPPORTED_BACKFILL_POLICIES
from core.errors import LayoffKitConfigError, LayoffKitDependencyError
from core.types import CleaningRules, IndustryLabelRule

_ALLOWED_ROOT_KEYS = frozenset(
    {"version", "date_format", "backfill_conflicts", "industry_labels", "country_prefixes"}
)


def load_cleaning_rules(rules_path: str | Path | None) -> CleaningRules:
    """Load cleaning rules from YAML, or defaults when no path is given.

    Args:
        rules_path: Optional file path to YAML rules.

    Returns:
        Fully validated cleaning rules.

    Raises:
        LayoffKitDependencyError: If PyYAML is unavailable.
        LayoffKitConfigError: If file is invalid or schema checks fail.
    """
    if rules_path is None:
        return CleaningRules()
    payload = _load_yaml_payload(Path(rules_path))
    return parse_cleaning_rules(payload)


def parse_cleaning_rules(payload: object) -> CleaningRules:
    """Validate a decoded rules payload.

    Args:
        payload: Decoded YAML document.

    Returns:
        Cleaning rules with defaults for omitted keys.

    Raises:
        LayoffKitConfigError: If schema checks fail.
    """
    root_mapping = _expect_mapping(payload, "cleaning rules root")
    _validate_root_keys(root_mapping)
    _parse_version(root_mapping)
    defaults = CleaningRules()
    date_format = _optional_string(root_mapping, "date_format") or defaults.date_format
    policy = _parse_backfill_policy(root_mapping, defaults.backfill_conflicts)
    industry_labels = _parse_industry_labels(root_mapping, defaults.industry_labels)
    country_prefixes = _parse_country_prefixes(root_mapping, defaults.country_prefixes)
    return CleaningRules(
        date_format=date_format,
        backfill_conflicts=policy,
        industry_labels=industry_labels,
        country_prefixes=country_prefixes,
    )


def _load_yaml_payload(rules_path: Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise LayoffKitDependencyError(
            "YAML cleaning rules require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    rules_file = rules_path.expanduser().resolve()
    if not rules_file.exists():
        raise LayoffKitConfigError(
            f"Cleaning rules file does not exist at {rules_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(rules_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise LayoffKitConfigError(
            f"Failed to read cleaning rules at {rules_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise LayoffKitConfigError(
            f"Failed to parse YAML cleaning rules at {rules_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        raise LayoffKitConfigError(
            f"Cleaning rules at {rules_file} are empty. Define at least 'version: 1'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise LayoffKitConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise LayoffKitConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise LayoffKitConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(set(root_mapping) - _ALLOWED_ROOT_KEYS)
    if unknown_keys:
        allowed = ", ".join(sorted(_ALLOWED_ROOT_KEYS))
        raise LayoffKitConfigError(
            f"Unknown cleaning rules keys: {', '.join(unknown_keys)}. Allowed keys: {allowed}."
        )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise LayoffKitConfigError("Cleaning rules field 'version' must be an integer. Set version: 1.")
    if raw_version != 1:
        raise LayoffKitConfigError(f"Unsupported cleaning rules version {raw_version}. Use version: 1.")
    return raw_version


def _optional_string(mapping: Mapping[str, object], key: str) -> str | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise LayoffKitConfigError(f"Cleaning rules field '{key}' must be a non-empty string.")
    return value


def _parse_backfill_policy(root_mapping: Mapping[str, object], default: str) -> str:
    policy = _optional_string(root_mapping, "backfill_conflicts")
    if policy is None:
        return default
    if policy not in SUPPORTED_BACKFILL_POLICIES:
        supported = ", ".join(SUPPORTED_BACKFILL_POLICIES)
        raise LayoffKitConfigError(
            f"Unsupported backfill_conflicts policy '{policy}'. Choose one of: {supported}."
        )
    return policy


def _parse_industry_labels(
    root_mapping: Mapping[str, object],
    default: tuple[IndustryLabelRule, ...],
) -> tuple[IndustryLabelRule, ...]:
    raw_labels = root_mapping.get("industry_labels")
    if raw_labels is None:
        return default
    rules: list[IndustryLabelRule] = []
    for index, raw_rule in enumerate(_expect_sequence(raw_labels, "industry_labels")):
        rule_mapping = _expect_mapping(raw_rule, f"industry_labels[{index}]")
        prefix = _optional_string(rule_mapping, "prefix")
        canonical = _optional_string(rule_mapping, "canonical")
        if prefix is None or canonical is None:
            raise LayoffKitConfigError(
                f"Invalid industry_labels[{index}]: both 'prefix' and 'canonical' are required."
            )
        rules.append(IndustryLabelRule(prefix=prefix, canonical=canonical))
    return tuple(rules)


def _parse_country_prefixes(
    root_mapping: Mapping[str, object],
    default: tuple[str, ...],
) -> tuple[str, ...]:
    raw_prefixes = root_mapping.get("country_prefixes")
    if raw_prefixes is None:
        return default
    prefixes: list[str] = []
    for index, raw_prefix in enumerate(_expect_sequence(raw_prefixes, "country_prefixes")):
        if not isinstance(raw_prefix, str) or not raw_prefix.strip():
            raise LayoffKitConfigError(
                f"Invalid country_prefixes[{index}]: expected a non-empty string."
            )
        prefixes.append(raw_prefix)
    return tuple(prefixes)
