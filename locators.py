"""Heuristic discovery of the transliteration input and output fields.

The page under test exposes no stable identifiers, so each field is
looked up through an ordered list of selectors. The first selector whose
first match exists and is visible wins; otherwise a structural fallback
is returned and the caller's visibility assertion reports the failure.
"""
from __future__ import annotations

import logging
from typing import Sequence

from playwright.async_api import Locator, Page

logger = logging.getLogger("locators")

TEXT_ENTRY = "textarea"

INPUT_SELECTORS: tuple[str, ...] = (
    "textarea:first-of-type",
    'textarea[placeholder*="Singlish" i]',
    'textarea[placeholder*="English" i]',
    'textarea[placeholder*="type" i]',
    "#singlish-input",
    ".input-area textarea",
    'div[class*="input"] textarea',
    "textarea",
)

OUTPUT_SELECTORS: tuple[str, ...] = (
    "textarea:nth-of-type(2)",
    'textarea[placeholder*="Sinhala" i]',
    "textarea[readonly]",
    "#sinhala-output",
    ".output-area textarea",
    'div[class*="output"] textarea',
)


async def first_visible(page: Page, selectors: Sequence[str]) -> Locator | None:
    """Return the first match of the first selector that is present and visible."""
    for selector in selectors:
        element = page.locator(selector).first
        if await element.count() > 0 and await element.is_visible():
            logger.debug(f"Matched selector {selector!r}")
            return element
    return None


async def find_input_element(page: Page) -> Locator:
    """Locate the field the Singlish text is typed into."""
    element = await first_visible(page, INPUT_SELECTORS)
    if element is not None:
        return element
    logger.debug("No input selector matched, falling back to the first textarea")
    return page.locator(TEXT_ENTRY).first


async def find_output_element(page: Page) -> Locator:
    """Locate the surface that shows the Sinhala output."""
    element = await first_visible(page, OUTPUT_SELECTORS)
    if element is not None:
        return element

    text_entries = page.locator(TEXT_ENTRY)
    if await text_entries.count() >= 2:
        logger.debug("No output selector matched, falling back to the second textarea")
        return text_entries.nth(1)

    logger.debug("No output selector matched, falling back to the last textarea")
    return text_entries.last
