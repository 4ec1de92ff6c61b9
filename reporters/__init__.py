"""Report generators for suite runs and the results workbook."""
from reporters.base import BaseReporter, ReportFormat
from reporters.excel import RunSummary, join_outcomes, ledger_entries, load_ledger, summarize, write_results_workbook
from reporters.json_reporter import JSONReporter
from reporters.junit import JUnitReporter

__all__ = [
    "BaseReporter",
    "ReportFormat",
    "JSONReporter",
    "JUnitReporter",
    "RunSummary",
    "join_outcomes",
    "ledger_entries",
    "load_ledger",
    "summarize",
    "write_results_workbook",
]
