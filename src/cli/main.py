"""layoffkit CLI entry points.
This module exposes commands for cleaning and reporting on layoff exports.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import LayoffKitConfig, parse_top_n
from core.constants import DEFAULT_DATASET_NAME
from core.errors import LayoffKitError
from core.types import CleanOptions
from reports.formatting import render_report_table
from reports.registry import report_names
from store.layoff_sdk import LayoffClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="layoffkit", description="Layoffs cleaning CLI")
    parser.add_argument(
        "--output-root",
        help="Override LAYOFFKIT_OUTPUT_ROOT for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_clean_command(subparsers)
    _add_report_command(subparsers)
    _add_views_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the layoffkit CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.output_root)
        if args.command == "clean":
            return _run_clean_command(client, args)
        if args.command == "report":
            return _run_report_command(client, args)
        if args.command == "views":
            return _run_views_command()
    except LayoffKitError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(output_root: str | None) -> LayoffClient:
    """Build SDK client with optional output-root override."""
    config = LayoffKitConfig.from_env()
    if output_root:
        config = replace(config, output_root=Path(output_root).expanduser().resolve())
    return LayoffClient(config)


def _run_clean_command(client: LayoffClient, args: argparse.Namespace) -> int:
    """Handle clean command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = CleanOptions(
        source_path=args.source,
        dataset_name=args.dataset,
        rules_path=args.rules,
        write_parquet=not args.no_parquet,
        top_n=parse_top_n(args.top_n, "--top-n") if args.top_n else client.config.top_n,
    )
    run_dir, manifest = client.run(options)
    print(run_dir)
    print(
        f"records={manifest.record_count}\t"
        f"duplicates_removed={manifest.duplicates_removed}\t"
        f"unanalyzable_removed={manifest.unanalyzable_removed}\t"
        f"conflicts={len(manifest.conflicts)}\t"
        f"date_failures={len(manifest.date_failures)}"
    )
    return 0


def _run_report_command(client: LayoffClient, args: argparse.Namespace) -> int:
    """Handle report command."""
    top_n = parse_top_n(args.top_n, "--top-n") if args.top_n else None
    table = client.report(args.source, args.view, rules_path=args.rules, top_n=top_n)
    print(render_report_table(table))
    return 0


def _run_views_command() -> int:
    """Handle views command."""
    for name in report_names():
        print(name)
    return 0


def _add_clean_command(subparsers: Any) -> None:
    """Register clean subcommand."""
    parser = subparsers.add_parser("clean", help="Clean a layoffs CSV and write all reports")
    parser.add_argument("source", help="Source CSV export of the layoffs table")
    parser.add_argument("--dataset", default=DEFAULT_DATASET_NAME, help="Dataset name")
    parser.add_argument("--rules", help="Optional YAML cleaning-rules file")
    parser.add_argument("--top-n", help="Leading categories kept by top-N views")
    parser.add_argument(
        "--no-parquet",
        action="store_true",
        help="Skip writing records.parquet",
    )


def _add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser("report", help="Print one reporting view")
    parser.add_argument("source", help="Source CSV export of the layoffs table")
    parser.add_argument("--view", required=True, choices=report_names(), help="View name")
    parser.add_argument("--rules", help="Optional YAML cleaning-rules file")
    parser.add_argument("--top-n", help="Leading categories kept by top-N views")


def _add_views_command(subparsers: Any) -> None:
    """Register views subcommand."""
    subparsers.add_parser("views", help="List reporting view names")
