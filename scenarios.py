"""Scenario generation: one browser check per fixture case plus fixed UI checks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from playwright.async_api import Page

from browser import goto, wait_for_load_state
from case_types import TestCase
from config import TargetConfig
from exceptions import OutputMismatchError, ScenarioError
from interactions import assert_visible, get_element_text, type_and_wait
from locators import find_input_element, find_output_element

SUITE_TITLE = "Sinhala Transliteration Tests"
LONG_TEXT_INPUT = "mama gedara yanawa honda dawasak"

ScenarioBody = Callable[[Page], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class Scenario:
    """A named, self-contained check run against a fresh page.

    ``run`` returns the observed output text when there is one.
    """

    title: str
    run: ScenarioBody
    case_id: Optional[str] = None
    expected: Optional[str] = None
    group: str = "cases"


async def open_app(page: Page, target: TargetConfig) -> None:
    """Load the application root and wait for it to finish hydrating."""
    await goto(page, f"{target.base_url}/", timeout=target.navigation_timeout_ms)
    await wait_for_load_state(page, "networkidle", timeout=target.navigation_timeout_ms)
    await page.wait_for_timeout(target.hydration_delay_ms)


def build_case_scenario(case: TestCase, target: TargetConfig) -> Scenario:
    """Type the case input and require the trimmed output to equal the expected text."""
    title = case.title

    async def run(page: Page) -> Optional[str]:
        await open_app(page, target)

        input_element = await find_input_element(page)
        await assert_visible(input_element, target.input_timeout_ms)
        await type_and_wait(page, input_element, case.input, target.settle_delay_ms)

        output_element = await find_output_element(page)
        await assert_visible(output_element, target.output_timeout_ms)
        actual = (await get_element_text(output_element)).strip()

        if actual != case.expected_output:
            raise OutputMismatchError(case.expected_output, actual, title=title)
        return actual

    return Scenario(
        title=title,
        run=run,
        case_id=case.tc_id,
        expected=case.expected_output,
    )


def build_ui_scenarios(target: TargetConfig) -> List[Scenario]:
    """Fixed checks of the widget's behaviour that do not depend on fixture data."""

    async def realtime_update(page: Page) -> Optional[str]:
        await open_app(page, target)
        input_element = await find_input_element(page)
        await assert_visible(input_element, target.input_timeout_ms)
        await type_and_wait(page, input_element, "test", target.settle_delay_ms)

        output_element = await find_output_element(page)
        await assert_visible(output_element, target.output_timeout_ms)
        return None

    async def empty_input(page: Page) -> Optional[str]:
        await open_app(page, target)
        input_element = await find_input_element(page)
        await assert_visible(input_element, target.input_timeout_ms)

        await input_element.clear()
        await page.wait_for_timeout(target.clear_settle_ms)

        output_element = await find_output_element(page)
        actual = (await get_element_text(output_element)).strip()
        if actual:
            raise OutputMismatchError("", actual, title="UI: Empty input handling")
        return actual

    async def long_text(page: Page) -> Optional[str]:
        await open_app(page, target)
        input_element = await find_input_element(page)
        await assert_visible(input_element, target.input_timeout_ms)
        await type_and_wait(page, input_element, LONG_TEXT_INPUT, target.settle_delay_ms)

        output_element = await find_output_element(page)
        await assert_visible(output_element, target.output_timeout_ms)
        actual = (await get_element_text(output_element)).strip()
        if not actual:
            raise ScenarioError(
                "Long input produced no output",
                {"input": LONG_TEXT_INPUT},
            )
        return actual

    return [
        Scenario(title="UI: Real-time transliteration updates", run=realtime_update, group="ui"),
        Scenario(title="UI: Empty input handling", run=empty_input, expected="", group="ui"),
        Scenario(title="UI: Long text handling", run=long_text, group="ui"),
    ]


def generate_scenarios(
    cases: Sequence[TestCase],
    target: TargetConfig,
    include_ui: bool = True,
) -> List[Scenario]:
    """Build the full scenario list in fixture order, UI checks last."""
    scenarios = [build_case_scenario(case, target) for case in cases]
    if include_ui:
        scenarios.extend(build_ui_scenarios(target))
    return scenarios
