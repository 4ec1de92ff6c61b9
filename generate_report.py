"""Build the results workbook from the case catalog and the last run's ledger."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from case_types import CatalogCase
from config import load_config
from exceptions import TranslitError
from fixture_loader import catalog_from_cases, load_case_catalog, load_test_cases
from reporters import RunSummary, join_outcomes, load_ledger, summarize, write_results_workbook
from suite_runner import configure_logging


def build_report(
    catalog: List[CatalogCase],
    ledger_path: Path,
    output_path: Path,
    logger: Optional[logging.Logger] = None,
) -> RunSummary:
    """Join the catalog with the ledger and write the two-sheet workbook."""
    logger = logger or logging.getLogger("generate_report")
    ledger = load_ledger(ledger_path, logger)
    rows = join_outcomes(catalog, ledger)
    summary = summarize(rows)
    path = write_results_workbook(rows, summary, output_path)
    logger.info(f"Results workbook: {path}")
    return summary


def print_summary(summary: RunSummary, output_path: Path) -> None:
    print("\nExcel report generated successfully!")
    print(f"File: {output_path.resolve()}")
    print("\nSummary:")
    print(f"   Total Test Cases: {summary.total}")
    print(f"   Passed: {summary.passed}")
    print(f"   Failed: {summary.failed}")
    print(f"   Not Run: {summary.not_run}")
    print(f"   Pass Rate: {summary.pass_rate}")


def run_from_cli_args(args: argparse.Namespace, logger: logging.Logger) -> int:
    config_path = Path(args.config) if args.config else None
    cli_overrides = {
        "catalog": args.catalog,
        "ledger": args.ledger,
        "output": args.output,
    }
    cli_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
    config = load_config(config_path, cli_overrides)

    if args.from_fixture:
        catalog = catalog_from_cases(load_test_cases(Path(args.from_fixture)))
    else:
        catalog = load_case_catalog(config.data.catalog_path)

    summary = build_report(
        catalog,
        config.reporting.ledger_path,
        config.reporting.results_path,
        logger=logger,
    )
    print_summary(summary, config.reporting.results_path)
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Write the transliteration results workbook from the last run.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        help="Canonical case list, JSON or YAML (default: tests/data/test-data.json)",
    )
    source.add_argument(
        "--from-fixture",
        metavar="XLSX",
        help="Derive the case list from the fixture spreadsheet instead",
    )
    parser.add_argument(
        "--ledger",
        help="Ledger of the last run (default: test-results/.last-run.json)",
    )
    parser.add_argument(
        "--output",
        help="Workbook to write (default: results.xlsx)",
    )
    parser.add_argument(
        "--config",
        help="Path to config file (default: config.json if exists)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress non-essential output")
    return parser


def main() -> None:
    """Main entry point."""
    args = _build_arg_parser().parse_args()
    configure_logging(args.verbose, args.quiet)
    logger = logging.getLogger("generate_report")

    try:
        exit_code = run_from_cli_args(args, logger)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 130
    except TranslitError as exc:
        logger.error(f"Error: {exc}")
        exit_code = 1
    except Exception as exc:
        logger.exception(f"Unexpected error: {exc}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
