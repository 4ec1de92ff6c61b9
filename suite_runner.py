"""CLI-friendly orchestrator for the transliteration browser scenarios."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from browser import SimpleBrowser
from case_types import ScenarioResult, SuiteResult
from config import SuiteConfig, load_config
from exceptions import OutputMismatchError, TranslitError
from fixture_loader import load_test_cases
from reporters import JSONReporter, JUnitReporter, ReportFormat
from scenarios import SUITE_TITLE, Scenario, generate_scenarios


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SuiteRunner:
    """Runs scenarios against one browser, each in its own context."""

    def __init__(
        self,
        config: SuiteConfig,
        browser: Optional[SimpleBrowser] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger("suite_runner")
        self.browser = browser or SimpleBrowser(
            browser_type=config.browser.browser,
            headless=config.browser.headless,
            viewport_width=config.browser.viewport_width,
            viewport_height=config.browser.viewport_height,
            base_url=config.target.base_url,
            slow_mo=config.browser.slow_mo,
            logger=self.logger,
        )

    async def run_scenario(self, scenario: Scenario) -> ScenarioResult:
        """Run one scenario on a fresh page; any failure is confined to its result."""
        start = _now()
        actual: Optional[str] = None
        try:
            async with self.browser.isolated_page() as page:
                actual = await scenario.run(page)
        except OutputMismatchError as exc:
            self.logger.warning(f"FAIL {scenario.title}: {exc.message}")
            return self._result(scenario, False, start, exc.message, actual=exc.actual)
        except Exception as exc:
            self.logger.warning(f"FAIL {scenario.title}: {exc}")
            self.logger.debug("Scenario traceback", exc_info=True)
            return self._result(scenario, False, start, f"{type(exc).__name__}: {exc}")

        self.logger.info(f"PASS {scenario.title}")
        return self._result(scenario, True, start, "passed", actual=actual)

    def _result(
        self,
        scenario: Scenario,
        success: bool,
        started_at: datetime,
        reason: str,
        actual: Optional[str] = None,
    ) -> ScenarioResult:
        return ScenarioResult(
            title=scenario.title,
            success=success,
            started_at=started_at,
            finished_at=_now(),
            reason=reason,
            case_id=scenario.case_id,
            expected=scenario.expected,
            actual=actual,
            browser_type=self.config.browser.browser,
        )

    async def run_sequential(self, scenarios: Sequence[Scenario]) -> List[ScenarioResult]:
        """Run scenarios one after another."""
        results: List[ScenarioResult] = []

        for i, scenario in enumerate(scenarios, 1):
            self.logger.info(f"=== Running {scenario.title} ({i}/{len(scenarios)}) ===")
            results.append(await self.run_scenario(scenario))

        return results

    async def run_parallel(
        self,
        scenarios: Sequence[Scenario],
        max_workers: int = 4,
    ) -> List[ScenarioResult]:
        """Run scenarios concurrently with limited concurrency."""
        semaphore = asyncio.Semaphore(max_workers)

        async def run_with_limit(scenario: Scenario, index: int) -> ScenarioResult:
            async with semaphore:
                self.logger.info(f"=== Starting {scenario.title} ({index}/{len(scenarios)}) ===")
                return await self.run_scenario(scenario)

        tasks = [run_with_limit(scenario, i + 1) for i, scenario in enumerate(scenarios)]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        final_results = []
        for i, result in enumerate(results):
            if isinstance(result, BaseException):
                self.logger.error(f"Scenario failed with exception: {result}")
                final_results.append(
                    self._result(scenarios[i], False, _now(), f"Exception: {result}")
                )
            else:
                final_results.append(result)

        return final_results

    async def run_all(self, scenarios: Sequence[Scenario]) -> SuiteResult:
        """Start the browser, run every scenario, then write the run reports."""
        start_time = _now()

        await self.browser.start()
        try:
            if self.config.parallel_workers > 1:
                self.logger.info(
                    f"Running {len(scenarios)} scenarios with {self.config.parallel_workers} parallel workers"
                )
                results = await self.run_parallel(scenarios, self.config.parallel_workers)
            else:
                results = await self.run_sequential(scenarios)
        finally:
            await self.browser.close()

        suite_result = SuiteResult(
            results=results,
            started_at=start_time,
            finished_at=_now(),
            title=SUITE_TITLE,
        )

        self._generate_suite_reports(suite_result)

        return suite_result

    def _generate_suite_reports(self, suite: SuiteResult) -> None:
        """Write the ledger always, JUnit XML when requested."""
        reporting = self.config.reporting

        path = JSONReporter(target_path=reporting.ledger_path).generate_suite(
            suite, reporting.reports_folder
        )
        self.logger.info(f"Run ledger: {path}")

        requested = ReportFormat(reporting.output_format)
        for reporter in (JUnitReporter(),):
            if requested in (reporter.format, ReportFormat.ALL):
                path = reporter.generate_suite(suite, reporting.reports_folder)
                self.logger.info(f"{reporter.format.value} report: {path}")


def print_summary(suite_result: SuiteResult) -> None:
    print("\n" + "=" * 60)
    print("TEST SUITE SUMMARY")
    print("=" * 60)
    print(f"Total:  {suite_result.total}")
    print(f"Passed: {suite_result.passed}")
    print(f"Failed: {suite_result.failed}")
    print(f"Pass Rate: {suite_result.pass_rate:.1f}%")
    print(f"Duration: {suite_result.duration_seconds:.1f}s")
    print("=" * 60)

    if suite_result.failed_tests:
        print("\nFailed Tests:")
        for result in suite_result.failed_tests:
            print(f"  - {result.title}: {result.reason[:80]}")


async def run_from_cli_args(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Entry point shared by the CLI script."""
    config_path = Path(args.config) if args.config else None
    cli_overrides = {
        "base_url": args.base_url,
        "browser": args.browser,
        "headful": args.headful or None,
        "parallel": args.parallel,
        "verbose": args.verbose or None,
        "fixture": args.fixture,
        "reports_dir": args.reports_dir,
        "output_format": args.output_format,
    }
    cli_overrides = {k: v for k, v in cli_overrides.items() if v is not None}

    try:
        config = load_config(config_path, cli_overrides)
    except Exception as exc:
        logger.error(f"Failed to load config: {exc}")
        return 1

    cases = load_test_cases(config.data.fixture_path, only_ids=args.case)
    scenarios = generate_scenarios(cases, config.target, include_ui=not args.skip_ui)

    if not scenarios:
        logger.warning("No scenarios to run")
        return 0

    logger.info(f"Loaded {len(cases)} test case(s) from {config.data.fixture_path}")
    if config.verbose:
        logger.info(f"Target: {config.target.base_url}")
        logger.info(f"Browser: {config.browser.browser}, Headless: {config.browser.headless}")
        logger.info(f"Parallel workers: {config.parallel_workers}")

    runner = SuiteRunner(config=config, logger=logger)
    suite_result = await runner.run_all(scenarios)

    print_summary(suite_result)

    return 1 if suite_result.failed > 0 else 0


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Run spreadsheet-driven browser tests against a Singlish-to-Sinhala widget.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Run every case in the fixture
  %(prog)s --case TC01 --case TC02           # Run selected cases
  %(prog)s --parallel 4 --browser firefox    # Parallel with Firefox
  %(prog)s --base-url http://localhost:5173  # Point at a local build
        """,
    )

    data_group = parser.add_argument_group("Test Data")
    data_group.add_argument(
        "--fixture",
        help="Fixture spreadsheet (default: tests/data/test-data.xlsx)",
    )
    data_group.add_argument(
        "--case",
        action="append",
        help="Only run this TC ID (can be used multiple times)",
    )
    data_group.add_argument(
        "--skip-ui",
        action="store_true",
        help="Skip the fixed UI behaviour scenarios",
    )

    browser_group = parser.add_argument_group("Browser Options")
    browser_group.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        help="Browser engine to use (default: chromium)",
    )
    browser_group.add_argument(
        "--headful",
        action="store_true",
        help="Run browser in headful mode (show GUI)",
    )
    browser_group.add_argument(
        "--base-url",
        help="Root URL of the transliteration page",
    )

    exec_group = parser.add_argument_group("Execution Options")
    exec_group.add_argument(
        "--parallel",
        type=int,
        metavar="N",
        help="Number of scenarios run concurrently (default: 1)",
    )
    exec_group.add_argument(
        "--config",
        help="Path to config file (default: config.json if exists)",
    )

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--reports-dir",
        help="Directory for JUnit reports (default: reports)",
    )
    output_group.add_argument(
        "--output-format",
        choices=["json", "junit", "all"],
        help="Reports written besides the ledger (default: json)",
    )
    output_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    output_group.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output",
    )

    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        log_level = logging.WARNING
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s" if not verbose else "[%(levelname)s] %(name)s: %(message)s",
    )


def main() -> None:
    """Main entry point."""
    parser = _build_arg_parser()
    args = parser.parse_args()

    configure_logging(args.verbose, args.quiet)
    logger = logging.getLogger("suite_runner")

    try:
        exit_code = asyncio.run(run_from_cli_args(args, logger))
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
