"""Base reporter interface for suite runs."""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from case_types import SuiteResult


class ReportFormat(str, Enum):
    """Supported run report formats."""
    JSON = "json"
    JUNIT = "junit"
    ALL = "all"


class BaseReporter(ABC):
    """Abstract base class for run report generators."""

    @abstractmethod
    def generate_suite(self, suite: SuiteResult, output_dir: Path) -> Path:
        """
        Generate a combined report for a suite run.

        Args:
            suite: Aggregated scenario results
            output_dir: Directory to write report to

        Returns:
            Path to the generated report file
        """
        pass

    @property
    @abstractmethod
    def format(self) -> ReportFormat:
        """Return the report format this reporter generates."""
        pass
