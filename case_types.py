"""Typed objects for transliteration test cases, run results and report rows."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional


def synthesize_title(case_id: str, label: str, fallback: str, expected: str) -> str:
    """Build the scenario title used as the join key between a run and its report.

    Both the scenario generator and the result reporter must go through this
    function; any difference in formatting turns every joined row into
    ``Not Run``.
    """
    return f"{case_id}: {label or fallback} → {expected}"


class Outcome(str, Enum):
    """Joined status of a case in the result workbook."""

    PASS = "PASS"
    FAIL = "FAIL"
    NOT_RUN = "Not Run"


@dataclass(frozen=True)
class TestCase:
    """One normalized row of the fixture spreadsheet."""

    __test__ = False

    tc_id: str
    test_case_name: str
    input_length_type: str
    input: str
    expected_output: str
    actual_output: str = ""
    status: str = ""
    accuracy_justification: str = ""
    what_is_covered: str = ""

    @property
    def title(self) -> str:
        return synthesize_title(self.tc_id, self.test_case_name, self.input, self.expected_output)

    def is_runnable(self) -> bool:
        """Check that both the id and the input carry non-blank text."""
        return bool(self.tc_id.strip()) and bool(self.input.strip())


@dataclass(frozen=True)
class CatalogCase:
    """Entry of the canonical case list read by the result reporter."""

    id: str
    singlish: str
    expected_sinhala: str
    category: str = "General"
    description: str = ""

    @property
    def title(self) -> str:
        return synthesize_title(self.id, self.description, self.singlish, self.expected_sinhala)


@dataclass(frozen=True)
class LedgerEntry:
    """Outcome of one scenario from a previous run."""

    title: str
    outcome: Outcome


@dataclass(frozen=True)
class ReportRow:
    """One row of the detail sheet: a catalog case plus its joined outcome."""

    case: CatalogCase
    status: Outcome

    def as_cells(self) -> List[str]:
        return [
            self.case.id,
            self.case.category,
            self.case.singlish,
            self.case.expected_sinhala,
            self.case.description,
            self.status.value,
        ]


@dataclass
class ScenarioResult:
    """Outcome of a single browser scenario."""

    title: str
    success: bool
    started_at: datetime
    finished_at: datetime
    reason: str = ""
    case_id: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None
    browser_type: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.finished_at - self.started_at).total_seconds())

    @property
    def status(self) -> str:
        return "passed" if self.success else "failed"


@dataclass
class SuiteResult:
    """Aggregated results for a suite run."""

    results: List[ScenarioResult]
    started_at: datetime
    finished_at: datetime
    title: str = "Sinhala Transliteration Tests"

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def pass_rate(self) -> float:
        return (self.passed / self.total * 100) if self.total else 0.0

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.finished_at - self.started_at).total_seconds())

    @property
    def failed_tests(self) -> List[ScenarioResult]:
        return [r for r in self.results if not r.success]
