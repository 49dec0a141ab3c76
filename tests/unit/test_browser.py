from pathlib import Path
from types import SimpleNamespace

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from route_crawler.render.browser import PlaywrightRenderer  # type: ignore[import]
from tests.helpers.crawler_imports import CrawlerConfig, RenderError

PAGE_HTML = '<a href="/about">About</a><a href="https://out.test/">Out</a><img src="/logo.png">'


class FakePage:
    def __init__(self, goto_error=None, screenshot_error=None):
        self.goto_error = goto_error
        self.screenshot_error = screenshot_error
        self.url = "about:blank"
        self.gotos = []
        self.default_timeout = None
        self.closed = False

    def set_default_navigation_timeout(self, timeout):
        self.default_timeout = timeout

    def goto(self, url, wait_until, timeout):
        self.gotos.append((url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    def screenshot(self, full_page):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"png" if full_page else b""

    def content(self):
        return PAGE_HTML

    def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.closed = False

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.context_options = None
        self.closed = False

    def new_context(self, **options):
        self.context_options = options
        return FakeContext(self.page)

    def close(self):
        self.closed = True


class FakeManager:
    def __init__(self, page, launch_error=None):
        self.browser = FakeBrowser(page)
        self.launch_error = launch_error
        self.stopped = 0
        self.launch_kwargs = None
        self.playwright = SimpleNamespace(
            chromium=SimpleNamespace(launch=self._launch),
            devices={"iPhone X": {"viewport": {"width": 375, "height": 812}, "is_mobile": True}},
        )

    def _launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser

    def start(self):
        return self.playwright

    def stop(self):
        self.stopped += 1


def _config(**overrides) -> CrawlerConfig:
    values = dict(
        output_dir=Path("/tmp/shots"),
        report_path=Path("/tmp/report.json"),
        headless=True,
        navigation_timeout_ms=1500,
    )
    values.update(overrides)
    return CrawlerConfig(**values)


def _renderer(page, config=None, launch_error=None, **kwargs):
    manager = FakeManager(page, launch_error=launch_error)
    renderer = PlaywrightRenderer(config or _config(), playwright_factory=lambda: manager, **kwargs)
    return renderer, manager


def test_load_returns_links_and_capture():
    page = FakePage()
    renderer, manager = _renderer(page)

    with renderer:
        rendered = renderer.load("https://x.test/")

    assert page.gotos == [("https://x.test/", "load", 1500)]
    assert page.default_timeout == 1500
    assert manager.launch_kwargs == {"headless": True}
    assert rendered.link_candidates == ("/about",)
    assert rendered.capture.screenshot == b"png"
    assert rendered.capture.html == PAGE_HTML
    assert rendered.capture.media_urls == ()
    assert page.closed is True
    assert manager.stopped == 1


def test_collect_media_resolves_against_page_url():
    renderer, _ = _renderer(FakePage(), collect_media=True, capture_html=False)

    with renderer:
        rendered = renderer.load("https://x.test/feed")

    assert rendered.capture.media_urls == ("https://x.test/logo.png",)
    assert rendered.capture.html is None


def test_navigation_timeout_becomes_render_error():
    page = FakePage(goto_error=PlaywrightTimeoutError("Timeout 1500ms exceeded."))
    renderer, _ = _renderer(page)

    with renderer, pytest.raises(RenderError) as excinfo:
        renderer.load("https://x.test/slow")

    assert excinfo.value.route == "https://x.test/slow"
    assert "timed out" in excinfo.value.reason


def test_capture_error_becomes_render_error():
    page = FakePage(screenshot_error=PlaywrightError("Target closed"))
    renderer, _ = _renderer(page)

    with renderer, pytest.raises(RenderError) as excinfo:
        renderer.load("https://x.test/")

    assert "capture failed" in excinfo.value.reason


def test_load_before_start_is_a_render_error():
    renderer, _ = _renderer(FakePage())

    with pytest.raises(RenderError):
        renderer.load("https://x.test/")


def test_mobile_device_descriptor_is_applied():
    renderer, manager = _renderer(FakePage(), config=_config(device="iPhone X"))

    renderer.start()
    renderer.close()

    assert manager.browser.context_options["is_mobile"] is True


def test_unknown_device_falls_back_to_desktop():
    renderer, manager = _renderer(FakePage(), config=_config(device="Nokia 3310"))

    renderer.start()
    renderer.close()

    assert manager.browser.context_options == {}


def test_start_failure_releases_playwright_and_propagates():
    renderer, manager = _renderer(FakePage(), launch_error=PlaywrightError("Executable doesn't exist"))

    with pytest.raises(PlaywrightError):
        renderer.start()

    assert manager.stopped == 1
    assert renderer.page is None


def test_close_is_idempotent():
    renderer, manager = _renderer(FakePage())
    renderer.start()

    renderer.close()
    renderer.close()

    assert manager.stopped == 1
