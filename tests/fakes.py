"""In-memory stand-ins for Playwright frames and element handles."""

from __future__ import annotations

from playwright.sync_api import Error as PlaywrightError


class FakeElement:
    def __init__(self, text="", attrs=None, frame=None, click_error=None):
        self.text = text
        self.attrs = attrs or {}
        self.frame = frame
        self.click_error = click_error
        self.clicks = 0

    def text_content(self):
        return self.text

    def get_attribute(self, name):
        return self.attrs.get(name)

    def content_frame(self):
        return self.frame

    def click(self, timeout=None):
        if self.click_error is not None:
            raise self.click_error
        self.clicks += 1

    def __repr__(self):
        return f"FakeElement({self.text!r})"


class FakeFrame:
    def __init__(self, elements=None, children=None, url="about:blank", name="", broken=False):
        self.elements = elements or {}
        self.children = children or []
        self.url = url
        self.name = name
        self.broken = broken
        self.detached = False

    @property
    def child_frames(self):
        return list(self.children)

    def query_selector_all(self, selector):
        if self.broken:
            raise PlaywrightError("Frame was detached")
        return list(self.elements.get(selector, []))

    def query_selector(self, selector):
        found = self.query_selector_all(selector)
        return found[0] if found else None

    def is_detached(self):
        return self.detached

    def __repr__(self):
        return f"FakeFrame({self.name!r})"


class FakePage:
    def __init__(self, main_frame):
        self.main_frame = main_frame


def create_button(text="Create", **attrs):
    return FakeElement(text=text, attrs=attrs)
