"""Core constants used across layoffkit modules.

This module centralizes defaults and canonical values.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_OUTPUT_ROOT = Path(".layoffkit")
DEFAULT_DATASET_NAME = "layoffs"
DEFAULT_TOP_N = 5
DEFAULT_DATE_FORMAT = "%m/%d/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"
HASH_ALGORITHM = "sha256"
OTHERS_BUCKET = "Others"
NULL_TOKEN = "NULL"
INDUSTRY_CONFLICT_FLAG = "industry_conflict"
DEFAULT_INDUSTRY_LABELS = (("Crypto", "Crypto"),)
DEFAULT_COUNTRY_PREFIXES = ("United States",)
COUNTRY_TRAILING_PUNCTUATION = "."
BACKFILL_POLICY_FLAG = "flag"
BACKFILL_POLICY_FIRST_SEEN = "first_seen"
BACKFILL_POLICY_MOST_COMMON = "most_common"
SUPPORTED_BACKFILL_POLICIES = (
    BACKFILL_POLICY_FLAG,
    BACKFILL_POLICY_FIRST_SEEN,
    BACKFILL_POLICY_MOST_COMMON,
)
SOURCE_COLUMNS = (
    "company",
    "location",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "date",
    "stage",
    "country",
    "funds_raised_millions",
)
RECORDS_JSONL_FILE_NAME = "records.jsonl"
RECORDS_PARQUET_FILE_NAME = "records.parquet"
MANIFEST_FILE_NAME = "manifest.json"
REPORTS_DIR_NAME = "reports"
