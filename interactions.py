"""Typing into and reading from located widget fields."""
from __future__ import annotations

from playwright.async_api import Locator, Page, expect

TEXT_ENTRY_TAGS = frozenset({"textarea", "input"})


async def assert_visible(element: Locator, timeout_ms: float) -> None:
    """Fail with Playwright's assertion error if the element stays hidden past the timeout."""
    await expect(element).to_be_visible(timeout=timeout_ms)


async def type_and_wait(page: Page, element: Locator, text: str, settle_ms: float) -> None:
    """Focus, clear and fill the field, then give the widget time to re-render."""
    await element.click()
    await element.clear()
    await element.fill(text)
    await page.wait_for_timeout(settle_ms)


async def get_element_text(element: Locator) -> str:
    """Read a field's value, or the rendered text for non-input elements."""
    tag_name = await element.evaluate("(el) => el.tagName.toLowerCase()")

    if tag_name in TEXT_ENTRY_TAGS:
        return await element.input_value()
    return (await element.text_content()) or ""
