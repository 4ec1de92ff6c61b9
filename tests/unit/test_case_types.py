"""Unit tests for case_types module."""
from __future__ import annotations

from datetime import datetime

import pytest

from case_types import (
    CatalogCase,
    Outcome,
    ReportRow,
    ScenarioResult,
    SuiteResult,
    TestCase,
    synthesize_title,
)


class TestSynthesizeTitle:
    """Tests for the shared title format."""

    def test_uses_label(self):
        assert synthesize_title("TC01", "basic", "mama", "මම") == "TC01: basic → මම"

    def test_falls_back_when_label_empty(self):
        assert synthesize_title("TC01", "", "mama", "මම") == "TC01: mama → මම"

    def test_fixture_and_catalog_titles_agree(self):
        case = TestCase(
            tc_id="TC01",
            test_case_name="basic",
            input_length_type="S",
            input="mama",
            expected_output="මම",
        )
        entry = CatalogCase(id="TC01", singlish="mama", expected_sinhala="මම", description="basic")
        assert case.title == entry.title == "TC01: basic → මම"


class TestTestCase:
    """Tests for TestCase dataclass."""

    def test_defaults(self):
        case = TestCase(tc_id="TC01", test_case_name="", input_length_type="", input="a", expected_output="")
        assert case.status == ""
        assert case.what_is_covered == ""

    def test_is_runnable(self):
        base = dict(test_case_name="", input_length_type="", expected_output="")
        assert TestCase(tc_id="TC01", input="mama", **base).is_runnable()
        assert not TestCase(tc_id="TC01", input="\t ", **base).is_runnable()
        assert not TestCase(tc_id=" ", input="mama", **base).is_runnable()

    def test_immutable(self, sample_case: TestCase):
        with pytest.raises(AttributeError):
            sample_case.input = "oya"


class TestReportRow:
    def test_as_cells(self):
        entry = CatalogCase(id="TC01", singlish="mama", expected_sinhala="මම", category="Pronoun")
        row = ReportRow(case=entry, status=Outcome.NOT_RUN)
        assert row.as_cells() == ["TC01", "Pronoun", "mama", "මම", "", "Not Run"]


class TestSuiteResult:
    """Tests for SuiteResult aggregation."""

    def test_counts(self, sample_suite_result: SuiteResult):
        assert sample_suite_result.total == 3
        assert sample_suite_result.passed == 2
        assert sample_suite_result.failed == 1
        assert sample_suite_result.pass_rate == pytest.approx(66.666, rel=1e-3)
        assert sample_suite_result.duration_seconds == 12.0
        assert [r.case_id for r in sample_suite_result.failed_tests] == ["TC02"]

    def test_empty_suite(self):
        now = datetime(2024, 1, 1)
        suite = SuiteResult(results=[], started_at=now, finished_at=now)
        assert suite.pass_rate == 0.0

    def test_scenario_status(self):
        now = datetime(2024, 1, 1)
        result = ScenarioResult(title="t", success=False, started_at=now, finished_at=now)
        assert result.status == "failed"
        assert result.duration_seconds == 0.0
