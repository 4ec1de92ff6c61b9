"""JSON run ledger generator.

The ledger groups scenarios into suites of specs, each spec carrying its
title and an ``ok`` flag. The result reporter reads it back to join
outcomes onto the canonical case list.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from case_types import ScenarioResult, SuiteResult
from reporters.base import BaseReporter, ReportFormat


class JSONReporter(BaseReporter):
    """Generate the machine-readable pass/fail ledger."""

    def __init__(self, target_path: Optional[Path] = None):
        self.target_path = target_path

    @property
    def format(self) -> ReportFormat:
        return ReportFormat.JSON

    def _spec_to_dict(self, result: ScenarioResult) -> Dict[str, Any]:
        """Convert ScenarioResult to JSON-serializable dict."""
        return {
            "title": result.title,
            "ok": result.success,
            "case_id": result.case_id,
            "reason": result.reason,
            "expected": result.expected,
            "actual": result.actual,
            "started_at": result.started_at.isoformat(),
            "duration_seconds": round(result.duration_seconds, 3),
        }

    def _suite_to_dict(self, suite: SuiteResult) -> Dict[str, Any]:
        return {
            "title": suite.title,
            "specs": [self._spec_to_dict(r) for r in suite.results],
        }

    def generate_suite(self, suite: SuiteResult, output_dir: Path) -> Path:
        """Write the ledger to ``target_path``, or a timestamped file under ``output_dir``."""
        if self.target_path is not None:
            target = Path(self.target_path)
        else:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
            target = output_dir / f"suite-{timestamp}.json"
        target.parent.mkdir(parents=True, exist_ok=True)

        report_data = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "report_version": "1.0",
            "suites": [self._suite_to_dict(suite)],
            "stats": {
                "total": suite.total,
                "passed": suite.passed,
                "failed": suite.failed,
                "pass_rate": round(suite.pass_rate, 2),
                "duration_seconds": round(suite.duration_seconds, 2),
            },
            "failed_tests": [
                {"title": r.title, "reason": r.reason}
                for r in suite.failed_tests
            ],
        }

        target.write_text(json.dumps(report_data, indent=2, ensure_ascii=False), encoding="utf-8")
        return target


def collect_specs(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Flatten the specs of a suite node and all of its nested suites."""
    specs: List[Dict[str, Any]] = []
    for spec in _as_list(node.get("specs")):
        if isinstance(spec, dict):
            specs.append(spec)
    for child in _as_list(node.get("suites")):
        if isinstance(child, dict):
            specs.extend(collect_specs(child))
    return specs


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []
