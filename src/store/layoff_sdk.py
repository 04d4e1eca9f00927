"""Python SDK for layoff cleaning and reporting.

This module exposes high-level APIs that read a source export, run
the cleaning pipeline, build reporting views, and persist runs.
"""

from __future__ import annotations

from pathlib import Path

from core.cleaning_rules import load_cleaning_rules
from core.config import LayoffKitConfig
from core.types import CleanOptions, CleaningResult, CleaningRules, ReportTable, RunManifest
from ingest.input_reader import read_source_rows
from ingest.pipeline import clean_layoff_rows
from reports.registry import build_report, build_reports
from store.run_store import RunStore


class LayoffClient:
    """Primary SDK entry point for cleaning workflows."""

    def __init__(self, config: LayoffKitConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or LayoffKitConfig.from_env()
        self._store = RunStore(self._config.output_root)

    @property
    def config(self) -> LayoffKitConfig:
        """Active runtime configuration."""
        return self._config

    def load_rules(self, rules_path: str | None = None) -> CleaningRules:
        """Load cleaning rules from an explicit path, the config, or defaults."""
        if rules_path is not None:
            return load_cleaning_rules(rules_path)
        return load_cleaning_rules(self._config.rules_path)

    def clean(self, source_path: str, rules_path: str | None = None) -> CleaningResult:
        """Read and clean a source CSV without persisting anything.

        Raises:
            LayoffKitIngestError: If the source cannot be read.
            SchemaMismatch: If source rows disagree with the schema.
        """
        rules = self.load_rules(rules_path)
        return clean_layoff_rows(read_source_rows(source_path), rules)

    def report(
        self,
        source_path: str,
        view_name: str,
        rules_path: str | None = None,
        top_n: int | None = None,
    ) -> ReportTable:
        """Clean a source CSV and build a single reporting view.

        Raises:
            LayoffKitReportError: If the view name is unknown.
        """
        result = self.clean(source_path, rules_path)
        return build_report(view_name, result.records, top_n or self._config.top_n)

    def run(self, options: CleanOptions) -> tuple[Path, RunManifest]:
        """Clean a source, build every view, and persist the run.

        Returns:
            Run directory and manifest.

        Raises:
            LayoffKitStoreError: If outputs cannot be written.
        """
        result = self.clean(options.source_path, options.rules_path)
        reports = build_reports(result.records, options.top_n)
        return self._store.write_run(
            options.dataset_name,
            result,
            reports,
            write_parquet=options.write_parquet,
        )
