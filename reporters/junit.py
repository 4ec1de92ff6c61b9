"""JUnit XML report generator for CI integration."""
from __future__ import annotations

import html
from datetime import datetime, timezone
from pathlib import Path

from case_types import ScenarioResult, SuiteResult
from reporters.base import BaseReporter, ReportFormat


class JUnitReporter(BaseReporter):
    """Generate JUnit XML reports for CI/CD integration."""

    @property
    def format(self) -> ReportFormat:
        return ReportFormat.JUNIT

    def _escape_xml(self, text: str) -> str:
        """Escape special XML characters."""
        return html.escape(str(text), quote=True)

    def _format_timestamp(self, dt: datetime) -> str:
        """Format datetime for JUnit XML."""
        return dt.strftime("%Y-%m-%dT%H:%M:%S")

    def _build_testcase_xml(self, result: ScenarioResult) -> str:
        """Build XML for a single scenario."""
        lines = []

        classname = "translit.e2e"
        name = self._escape_xml(result.title)
        time_sec = f"{result.duration_seconds:.3f}"

        lines.append(
            f'    <testcase classname="{classname}" name="{name}" time="{time_sec}">'
        )
        if not result.success:
            failure_msg = self._escape_xml(result.reason)
            failure_type = "OutputMismatch" if result.actual is not None else "ScenarioFailure"

            lines.append(f'      <failure message="{failure_msg}" type="{failure_type}"><![CDATA[')
            lines.append(f"Scenario: {result.title}")
            if result.case_id:
                lines.append(f"Case ID: {result.case_id}")
            if result.expected is not None:
                lines.append(f"Expected: {result.expected}")
            if result.actual is not None:
                lines.append(f"Actual: {result.actual}")
            lines.append(f"Failure Reason: {result.reason}")
            lines.append("]]></failure>")
        lines.append("    </testcase>")

        return "\n".join(lines)

    def generate_suite(self, suite: SuiteResult, output_dir: Path) -> Path:
        """Generate combined JUnit XML report for a suite run."""
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        target = output_dir / f"junit-{timestamp}.xml"

        lines = ['<?xml version="1.0" encoding="UTF-8"?>']
        lines.append(
            f'<testsuite name="{self._escape_xml(suite.title)}" '
            f'tests="{suite.total}" '
            f'failures="{suite.failed}" '
            f'errors="0" '
            f'skipped="0" '
            f'time="{suite.duration_seconds:.3f}" '
            f'timestamp="{self._format_timestamp(suite.started_at)}">'
        )

        lines.append("  <properties>")
        lines.append('    <property name="reporter" value="translit-e2e-junit"/>')
        lines.append(
            f'    <property name="generated_at" value="{datetime.now(timezone.utc).isoformat()}"/>'
        )
        lines.append("  </properties>")

        for result in suite.results:
            lines.append(self._build_testcase_xml(result))

        lines.append("</testsuite>")

        target.write_text("\n".join(lines), encoding="utf-8")
        return target
