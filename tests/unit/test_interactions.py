"""Unit tests for interactions module."""
from __future__ import annotations

import asyncio

from conftest import FakeElement, FakePage
from interactions import get_element_text, type_and_wait


class TestTypeAndWait:
    def test_focus_clear_fill_then_settle(self):
        field = FakeElement(value="old text")
        page = FakePage({"#in": [field]})
        locator = page.locator("#in")

        asyncio.run(type_and_wait(page, locator, "mama", 1500))

        assert [event[0] for event in page.events] == ["click", "clear", "fill", "wait"]
        assert page.events[-1] == ("wait", 1500)
        assert field.value == "mama"


class TestGetElementText:
    def test_textarea_reads_value(self):
        page = FakePage({"#out": [FakeElement("textarea", value="මම", text="ignored")]})
        assert asyncio.run(get_element_text(page.locator("#out"))) == "මම"

    def test_input_reads_value(self):
        page = FakePage({"#out": [FakeElement("input", value="ඔයා")]})
        assert asyncio.run(get_element_text(page.locator("#out"))) == "ඔයා"

    def test_container_reads_text_content(self):
        page = FakePage({"#out": [FakeElement("div", value="ignored", text=" මම ")]})
        assert asyncio.run(get_element_text(page.locator("#out"))) == " මම "

    def test_missing_text_content_is_empty(self):
        page = FakePage({"#out": [FakeElement("div", text=None)]})
        assert asyncio.run(get_element_text(page.locator("#out"))) == ""
