"""Results workbook: canonical cases joined with the last run's ledger."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from case_types import CatalogCase, LedgerEntry, Outcome, ReportRow
from reporters.json_reporter import collect_specs

logger = logging.getLogger("excel_report")

DETAIL_SHEET = "Test Cases"
SUMMARY_SHEET = "Summary"
DETAIL_HEADERS = (
    "Test Case ID",
    "Category",
    "Singlish Input",
    "Expected Sinhala Output",
    "Description",
    "Status",
)
DETAIL_WIDTHS = (12, 15, 25, 30, 35, 10)
SUMMARY_HEADERS = ("Metric", "Value")
SUMMARY_WIDTHS = (20, 25)


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counts for the summary sheet."""

    total: int
    passed: int
    failed: int
    not_run: int
    generated_on: str

    @property
    def pass_rate(self) -> str:
        if not self.total:
            return "N/A"
        return f"{self.passed / self.total * 100:.1f}%"

    def as_rows(self) -> List[tuple]:
        return [
            ("Total Test Cases", self.total),
            ("Passed", self.passed),
            ("Failed", self.failed),
            ("Not Run", self.not_run),
            ("Pass Rate", self.pass_rate),
            ("Generated On", self.generated_on),
        ]


def load_ledger(path: Path, log: Optional[logging.Logger] = None) -> Dict[str, Outcome]:
    """
    Map scenario titles from a previous run to PASS or FAIL.

    A missing or unreadable ledger is not an error: a note is logged and an
    empty mapping returned, so every case reports as Not Run.
    """
    log = log or logger
    path = Path(path)
    if not path.exists():
        log.info("Note: Could not load test results, status will be marked as 'Not Run'")
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.info(f"Note: Could not load test results ({exc}), status will be marked as 'Not Run'")
        return {}

    if not isinstance(data, dict):
        log.info("Note: Test results have an unexpected shape, status will be marked as 'Not Run'")
        return {}

    ledger = {entry.title: entry.outcome for entry in ledger_entries(data)}
    log.debug(f"Loaded {len(ledger)} ledger entries from {path}")
    return ledger


def ledger_entries(data: Dict) -> List[LedgerEntry]:
    """Read every titled spec of a ledger document as PASS (truthy ``ok``) or FAIL."""
    return [
        LedgerEntry(title=spec["title"], outcome=Outcome.PASS if spec.get("ok") else Outcome.FAIL)
        for spec in collect_specs(data)
        if isinstance(spec.get("title"), str)
    ]


def join_outcomes(catalog: Sequence[CatalogCase], ledger: Dict[str, Outcome]) -> List[ReportRow]:
    """Attach each catalog case's outcome, looked up by its synthesized title."""
    return [ReportRow(case=case, status=ledger.get(case.title, Outcome.NOT_RUN)) for case in catalog]


def summarize(rows: Sequence[ReportRow], now: Optional[datetime] = None) -> RunSummary:
    now = now or datetime.now(timezone.utc)
    return RunSummary(
        total=len(rows),
        passed=sum(1 for row in rows if row.status is Outcome.PASS),
        failed=sum(1 for row in rows if row.status is Outcome.FAIL),
        not_run=sum(1 for row in rows if row.status is Outcome.NOT_RUN),
        generated_on=now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


def _set_widths(sheet, widths: Sequence[int]) -> None:
    for index, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width


def write_results_workbook(
    rows: Sequence[ReportRow],
    summary: RunSummary,
    output_path: Path,
) -> Path:
    """Write the detail and summary sheets, replacing any existing file."""
    workbook = Workbook()
    detail = workbook.active
    detail.title = DETAIL_SHEET
    detail.append(list(DETAIL_HEADERS))
    for row in rows:
        detail.append(row.as_cells())
    _set_widths(detail, DETAIL_WIDTHS)

    summary_sheet = workbook.create_sheet(SUMMARY_SHEET)
    summary_sheet.append(list(SUMMARY_HEADERS))
    for metric, value in summary.as_rows():
        summary_sheet.append([metric, value])
    _set_widths(summary_sheet, SUMMARY_WIDTHS)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output
