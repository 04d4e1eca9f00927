"""Runtime configuration model for layoffkit.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_OUTPUT_ROOT, DEFAULT_TOP_N
from core.errors import LayoffKitConfigError


@dataclass(frozen=True)
class LayoffKitConfig:
    """Validated runtime configuration.

    Attributes:
        output_root: Local root directory for run outputs.
        rules_path: Optional YAML cleaning-rules file.
        top_n: Number of leading categories kept by top-N views.
    """

    output_root: Path
    rules_path: Path | None
    top_n: int

    @classmethod
    def from_env(cls) -> "LayoffKitConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LayoffKitConfigError: If environment values are invalid.
        """
        output_root_value = os.getenv("LAYOFFKIT_OUTPUT_ROOT", str(DEFAULT_OUTPUT_ROOT))
        rules_path_value = os.getenv("LAYOFFKIT_RULES_PATH")
        top_n_value = os.getenv("LAYOFFKIT_TOP_N", str(DEFAULT_TOP_N))
        return cls(
            output_root=Path(output_root_value).expanduser().resolve(),
            rules_path=Path(rules_path_value).expanduser() if rules_path_value else None,
            top_n=parse_top_n(top_n_value),
        )


def parse_top_n(raw_value: str, source: str = "LAYOFFKIT_TOP_N") -> int:
    """Parse a positive top-N value.

    Args:
        raw_value: Raw string from environment or CLI.
        source: Name of the setting the value came from, used in errors.

    Returns:
        Parsed positive integer.

    Raises:
        LayoffKitConfigError: If value is not a positive integer.
    """
    try:
        top_n = int(raw_value)
    except ValueError as error:
        raise LayoffKitConfigError(
            f"Invalid {source} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {source} to a positive number."
        ) from error
    if top_n < 1:
        raise LayoffKitConfigError(
            f"Invalid {source} value: expected at least 1, got {top_n}."
        )
    return top_n
