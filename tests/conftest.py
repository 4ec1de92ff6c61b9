"""Pytest fixtures for the transliteration E2E suite."""
from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest
from openpyxl import Workbook

from case_types import ScenarioResult, SuiteResult, TestCase

FIXTURE_HEADER = [
    "TC ID",
    "Test case name",
    "Input length type",
    "Input",
    "Expected output",
    "Actual output",
    "Status",
    "Accuracy justification / Description of issue type",
    "What is covered by the test",
]


class FakeElement:
    """Stand-in for a DOM node behind a Playwright locator."""

    def __init__(self, tag: str = "textarea", value: str = "", text: Optional[str] = None, visible: bool = True):
        self.tag = tag
        self.value = value
        self.text = text
        self.visible = visible
        self.page: Optional["FakePage"] = None


class FakeLocator:
    """Async subset of playwright.async_api.Locator used by the suite."""

    def __init__(self, page: "FakePage", selector: str, elements: List[FakeElement]):
        self.page = page
        self.selector = selector
        self.elements = elements

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> first", self.elements[:1])

    @property
    def last(self) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> last", self.elements[-1:])

    def nth(self, index: int) -> "FakeLocator":
        picked = self.elements[index:index + 1]
        return FakeLocator(self.page, f"{self.selector} >> nth={index}", picked)

    def _one(self) -> FakeElement:
        if not self.elements:
            raise TimeoutError(f"No element matches {self.selector}")
        return self.elements[0]

    async def count(self) -> int:
        return len(self.elements)

    async def is_visible(self) -> bool:
        return bool(self.elements) and self.elements[0].visible

    async def evaluate(self, expression: str) -> Any:
        return self._one().tag

    async def input_value(self) -> str:
        return self._one().value

    async def text_content(self) -> Optional[str]:
        return self._one().text

    async def click(self) -> None:
        self.page.events.append(("click", self.selector))

    async def clear(self) -> None:
        self.page.events.append(("clear", self.selector))
        await self._set_value("")

    async def fill(self, text: str) -> None:
        self.page.events.append(("fill", self.selector, text))
        await self._set_value(text)

    async def _set_value(self, text: str) -> None:
        element = self._one()
        element.value = text
        self.page.on_input(element, text)


class FakePage:
    """Selector-keyed page double; typing runs ``transliterate`` into the output element."""

    def __init__(
        self,
        selectors: Dict[str, List[FakeElement]],
        output: Optional[FakeElement] = None,
        transliterate: Optional[Callable[[str], str]] = None,
    ):
        self.selectors = selectors
        self.output = output
        self.transliterate = transliterate
        self.events: List[tuple] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector, list(self.selectors.get(selector, [])))

    def on_input(self, element: FakeElement, text: str) -> None:
        if self.output is None or element is self.output or self.transliterate is None:
            return
        converted = self.transliterate(text) if text else ""
        if self.output.tag in ("textarea", "input"):
            self.output.value = converted
        else:
            self.output.text = converted

    async def goto(self, url: str, wait_until: str = "load", timeout: float = 30000) -> None:
        self.events.append(("goto", url))

    async def wait_for_load_state(self, state: str = "load", timeout: float = 30000) -> None:
        self.events.append(("load_state", state))

    async def wait_for_timeout(self, timeout: float) -> None:
        self.events.append(("wait", timeout))


def make_widget_page(
    transliterate: Optional[Callable[[str], str]] = None,
    output_tag: str = "textarea",
) -> FakePage:
    """A page with an input textarea and a read-only output surface."""
    source = FakeElement("textarea")
    if output_tag == "textarea":
        target = FakeElement("textarea")
        selectors = {
            "textarea:first-of-type": [source],
            "textarea:nth-of-type(2)": [target],
            "textarea": [source, target],
        }
    else:
        target = FakeElement(output_tag, text="")
        selectors = {
            "textarea:first-of-type": [source],
            "textarea": [source],
            "#sinhala-output": [target],
        }
    return FakePage(selectors, output=target, transliterate=transliterate)


def write_fixture_workbook(path: Path, rows: Sequence[Sequence[Any]], header: Sequence[str] = FIXTURE_HEADER) -> Path:
    """Write a fixture spreadsheet with a header row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Test Cases"
    sheet.append(list(header))
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)
    return path


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_case() -> TestCase:
    return TestCase(
        tc_id="TC01",
        test_case_name="basic",
        input_length_type="S",
        input="mama",
        expected_output="මම",
    )


@pytest.fixture
def sample_rows() -> List[List[Any]]:
    """Fixture rows with a duplicate id, a blank input and a missing id."""
    return [
        ["TC01", "basic", "S", "mama", "මම", None, None, "Accurate", "Pronoun"],
        ["TC02", "greeting", "S", "ayubowan", "ආයුබෝවන්", None, None, None, None],
        ["TC01", "duplicate", "S", "oya", "ඔයා", None, None, None, None],
        ["TC03", "blank", "S", "  ", "", None, None, None, None],
        [None, "no id", "S", "api", "අපි", None, None, None, None],
        ["TC04", None, "M", "mama gedara yanawa", "මම ගෙදර යනවා", None, None, None, None],
    ]


@pytest.fixture
def fixture_workbook(temp_dir: Path, sample_rows: List[List[Any]]) -> Path:
    return write_fixture_workbook(temp_dir / "test-data.xlsx", sample_rows)


@pytest.fixture
def sample_suite_result() -> SuiteResult:
    """Two passing scenarios and one mismatch."""
    return SuiteResult(
        results=[
            ScenarioResult(
                title="TC01: basic → මම",
                success=True,
                started_at=datetime(2024, 1, 1, 10, 0, 0),
                finished_at=datetime(2024, 1, 1, 10, 0, 4),
                reason="passed",
                case_id="TC01",
                expected="මම",
                actual="මම",
            ),
            ScenarioResult(
                title="TC02: greeting → ආයුබෝවන්",
                success=False,
                started_at=datetime(2024, 1, 1, 10, 0, 4),
                finished_at=datetime(2024, 1, 1, 10, 0, 9),
                reason="Output mismatch: expected 'ආයුබෝවන්', got 'අයුබොවන්'",
                case_id="TC02",
                expected="ආයුබෝවන්",
                actual="අයුබොවන්",
            ),
            ScenarioResult(
                title="UI: Long text handling",
                success=True,
                started_at=datetime(2024, 1, 1, 10, 0, 9),
                finished_at=datetime(2024, 1, 1, 10, 0, 12),
                reason="passed",
            ),
        ],
        started_at=datetime(2024, 1, 1, 10, 0, 0),
        finished_at=datetime(2024, 1, 1, 10, 0, 12),
    )
