"""Run output store.

This module persists one cleaning run: cleaned records as JSONL and
Parquet, every report table as JSON, and a manifest with run counts.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.constants import (
    MANIFEST_FILE_NAME,
    RECORDS_JSONL_FILE_NAME,
    RECORDS_PARQUET_FILE_NAME,
    REPORTS_DIR_NAME,
)
from core.errors import LayoffKitDependencyError, LayoffKitStoreError
from core.logging_config import get_logger
from core.types import CleaningResult, LayoffRecord, ReportTable, RunManifest
from reports.formatting import json_safe_value
from store.record_payload import EXPORT_COLUMNS, layoff_record_to_payload, write_records_jsonl

_LOGGER = get_logger(__name__)


class RunStore:
    """Directory-backed store of cleaning runs under one output root."""

    def __init__(self, output_root: Path) -> None:
        """Initialize the store.

        Args:
            output_root: Directory holding one subdirectory per run.
        """
        self._output_root = output_root

    def write_run(
        self,
        dataset_name: str,
        result: CleaningResult,
        reports: dict[str, ReportTable],
        write_parquet: bool = True,
    ) -> tuple[Path, RunManifest]:
        """Persist a cleaning run.

        Args:
            dataset_name: Logical dataset identifier.
            result: Cleaning result to persist.
            reports: Report tables keyed by view name.
            write_parquet: Also write records as Parquet.

        Returns:
            Run directory and its manifest.

        Raises:
            LayoffKitStoreError: If persistence fails.
            LayoffKitDependencyError: If Parquet is requested without pyarrow.
        """
        run_id = build_run_id(dataset_name, result.records)
        run_dir = self._output_root / run_id
        try:
            (run_dir / REPORTS_DIR_NAME).mkdir(parents=True, exist_ok=False)
        except OSError as error:
            raise LayoffKitStoreError(
                f"Failed to create run directory at {run_dir}: {error}. "
                "Check LAYOFFKIT_OUTPUT_ROOT permissions."
            ) from error
        write_records_jsonl(run_dir / RECORDS_JSONL_FILE_NAME, result.records)
        if write_parquet:
            write_records_parquet(run_dir / RECORDS_PARQUET_FILE_NAME, result.records)
        for table in reports.values():
            write_report_json(run_dir / REPORTS_DIR_NAME / f"{table.name}.json", table)
        manifest = RunManifest(
            dataset_name=dataset_name,
            run_id=run_id,
            created_at=datetime.now(timezone.utc),
            input_count=result.input_count,
            record_count=len(result.records),
            duplicates_removed=result.duplicates_removed,
            unanalyzable_removed=result.unanalyzable_removed,
            report_names=tuple(reports),
            conflicts=tuple(asdict(conflict) for conflict in result.conflicts),
            date_failures=tuple(asdict(failure) for failure in result.date_failures),
        )
        _write_manifest_file(run_dir, manifest)
        _LOGGER.info(
            "run_written",
            dataset_name=dataset_name,
            run_id=run_id,
            record_count=manifest.record_count,
            report_count=len(reports),
            parquet_written=write_parquet,
        )
        return run_dir, manifest

    def load_manifest(self, run_id: str) -> dict[str, Any]:
        """Load a persisted run manifest.

        Raises:
            LayoffKitStoreError: If the manifest is missing or invalid.
        """
        manifest_path = self._output_root / run_id / MANIFEST_FILE_NAME
        if not manifest_path.exists():
            raise LayoffKitStoreError(
                f"Run manifest not found at {manifest_path}. Run the clean command first."
            )
        try:
            payload = json.loads(manifest_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise LayoffKitStoreError(
                f"Failed to parse run manifest at {manifest_path}: {error.msg}."
            ) from error
        if not isinstance(payload, dict):
            raise LayoffKitStoreError(
                f"Failed to parse run manifest at {manifest_path}: expected JSON object."
            )
        return payload


def build_run_id(dataset_name: str, records: list[LayoffRecord]) -> str:
    """Build a run id from dataset name, UTC time, and record digest.

    Args:
        dataset_name: Dataset identifier.
        records: Cleaned records.

    Returns:
        Run id string.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    digest_seed = "|".join(str(layoff_record_to_payload(record)["record_id"]) for record in records)
    digest = hashlib.sha256(digest_seed.encode("utf-8")).hexdigest()[:10]
    return f"{dataset_name}-{timestamp}-{digest}"


def write_report_json(report_path: Path, table: ReportTable) -> None:
    """Write one report table as a JSON document.

    Raises:
        LayoffKitStoreError: If the write fails.
    """
    payload = {
        "name": table.name,
        "columns": list(table.columns),
        "percent_columns": list(table.percent_columns),
        "rows": [[json_safe_value(value) for value in row] for row in table.rows],
    }
    try:
        report_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as error:
        raise LayoffKitStoreError(
            f"Failed to write report at {report_path}: {error}."
        ) from error


def write_records_parquet(parquet_path: Path, records: list[LayoffRecord]) -> None:
    """Write cleaned records as a Parquet file.

    Raises:
        LayoffKitDependencyError: If pyarrow is missing.
        LayoffKitStoreError: If the write fails.
    """
    try:
        import pyarrow as pa
        import pyarrow.parquet as pq
    except ImportError as error:
        raise LayoffKitDependencyError(
            "Parquet output requires pyarrow, but it is not installed. "
            "Install pyarrow or pass --no-parquet."
        ) from error
    payloads = [layoff_record_to_payload(record) for record in records]
    schema = pa.schema(
        [
            ("record_id", pa.string()),
            ("company", pa.string()),
            ("location", pa.string()),
            ("industry", pa.string()),
            ("total_laid_off", pa.int64()),
            ("percentage_laid_off", pa.float64()),
            ("event_date", pa.date32()),
            ("stage", pa.string()),
            ("country", pa.string()),
            ("funds_raised_millions", pa.int64()),
        ]
    )
    columns: dict[str, list[object]] = {
        column: [payload[column] for payload in payloads] for column in EXPORT_COLUMNS
    }
    columns["event_date"] = [record.event_date for record in records]
    try:
        table = pa.table(columns, schema=schema)
        pq.write_table(table, str(parquet_path))
    except (OSError, pa.ArrowException) as error:
        raise LayoffKitStoreError(
            f"Failed to write Parquet records at {parquet_path}: {error}. "
            "Validate pyarrow compatibility and retry."
        ) from error


def _write_manifest_file(run_dir: Path, manifest: RunManifest) -> None:
    manifest_dict = asdict(manifest)
    manifest_dict["created_at"] = manifest.created_at.isoformat()
    manifest_path = run_dir / MANIFEST_FILE_NAME
    try:
        manifest_path.write_text(json.dumps(manifest_dict, indent=2) + "\n", encoding="utf-8")
    except OSError as error:
        raise LayoffKitStoreError(
            f"Failed to write run manifest at {manifest_path}: {error}."
        ) from error
