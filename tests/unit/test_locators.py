"""Unit tests for locators module."""
from __future__ import annotations

import asyncio

from conftest import FakeElement, FakePage
from locators import INPUT_SELECTORS, OUTPUT_SELECTORS, find_input_element, find_output_element


class TestFindInputElement:
    """Tests for input field discovery."""

    def test_prefers_first_strategy(self):
        first = FakeElement()
        page = FakePage({"textarea:first-of-type": [first], "textarea": [first, FakeElement()]})
        element = asyncio.run(find_input_element(page))
        assert element.elements == [first]
        assert element.selector.startswith("textarea:first-of-type")

    def test_skips_hidden_match(self):
        hidden = FakeElement(visible=False)
        by_placeholder = FakeElement()
        page = FakePage({
            "textarea:first-of-type": [hidden],
            'textarea[placeholder*="English" i]': [by_placeholder],
        })
        element = asyncio.run(find_input_element(page))
        assert element.elements == [by_placeholder]

    def test_conventional_id(self):
        by_id = FakeElement()
        page = FakePage({"#singlish-input": [by_id]})
        assert asyncio.run(find_input_element(page)).elements == [by_id]

    def test_fallback_is_first_textarea_even_if_hidden(self):
        hidden = FakeElement(visible=False)
        page = FakePage({"textarea": [hidden, FakeElement(visible=False)]})
        element = asyncio.run(find_input_element(page))
        assert element.elements == [hidden]

    def test_fallback_with_no_match_still_returns_locator(self):
        element = asyncio.run(find_input_element(FakePage({})))
        assert asyncio.run(element.count()) == 0

    def test_strategy_order(self):
        assert INPUT_SELECTORS[0] == "textarea:first-of-type"
        assert INPUT_SELECTORS[-1] == "textarea"


class TestFindOutputElement:
    """Tests for output field discovery."""

    def test_prefers_second_textarea_selector(self):
        second = FakeElement()
        page = FakePage({"textarea:nth-of-type(2)": [second], "textarea[readonly]": [FakeElement()]})
        assert asyncio.run(find_output_element(page)).elements == [second]

    def test_readonly_strategy(self):
        readonly = FakeElement()
        page = FakePage({"textarea[readonly]": [readonly]})
        assert asyncio.run(find_output_element(page)).elements == [readonly]

    def test_display_container_by_id(self):
        container = FakeElement(tag="div", text="මම")
        page = FakePage({"#sinhala-output": [container]})
        assert asyncio.run(find_output_element(page)).elements == [container]

    def test_fallback_prefers_second_textarea(self):
        a, b, c = FakeElement(visible=False), FakeElement(visible=False), FakeElement(visible=False)
        page = FakePage({"textarea": [a, b, c]})
        assert asyncio.run(find_output_element(page)).elements == [b]

    def test_fallback_single_textarea_uses_last(self):
        only = FakeElement(visible=False)
        page = FakePage({"textarea": [only]})
        assert asyncio.run(find_output_element(page)).elements == [only]

    def test_no_bare_textarea_strategy(self):
        assert "textarea" not in OUTPUT_SELECTORS
