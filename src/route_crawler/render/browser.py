"""Playwright-backed renderer sharing one page across every visit."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..core.artifacts import CaptureBundle, RenderedPage
from ..core.config import CrawlerConfig
from ..core.errors import RenderError
from .extract import extract_link_candidates, extract_media_urls

logger = logging.getLogger(__name__)


class PlaywrightRenderer:
    """Loads routes in a single Chromium tab and captures them.

    The browser, context and page are acquired once in :meth:`start` and
    released once in :meth:`close`; :meth:`load` only navigates the shared
    page.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        capture_screenshot: bool = True,
        capture_html: bool = True,
        collect_media: bool = False,
        wait_until: Optional[str] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ) -> None:
        self.config = config
        self.capture_screenshot = capture_screenshot
        self.capture_html = capture_html
        self.collect_media = collect_media
        self.wait_until = wait_until or config.wait_until
        self._playwright_factory = playwright_factory
        self._manager: Any = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def page(self) -> Optional[Page]:
        return self._page

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._page is not None:
            return

        try:
            self._manager = self._playwright_factory()
            self._playwright = self._manager.start()
            self._browser = self._playwright.chromium.launch(headless=self.config.headless)
            logger.info("Browser opened")

            self._context = self._browser.new_context(**self._context_options())
            self._page = self._context.new_page()
            self._page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
            logger.info("Tab opened")
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        if self._page is not None:
            logger.info("Tab closing")
        for resource in (self._page, self._context, self._browser):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError:
                logger.debug("Ignoring error while releasing %r", resource, exc_info=True)
        self._page = self._context = self._browser = None

        if self._manager is not None:
            logger.info("Browser closing")
            try:
                self._manager.stop()
            except PlaywrightError:
                logger.debug("Ignoring error while stopping Playwright", exc_info=True)
        self._manager = self._playwright = None

    def __enter__(self) -> "PlaywrightRenderer":
        self.start()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def load(self, route: str) -> RenderedPage:
        page = self._page
        if page is None:
            raise RenderError(route, "renderer not started")

        timeout = self.config.navigation_timeout_ms
        try:
            page.goto(route, wait_until=self.wait_until, timeout=timeout)
        except PlaywrightTimeoutError as exc:
            raise RenderError(route, f"navigation timed out after {timeout} ms") from exc
        except PlaywrightError as exc:
            raise RenderError(route, f"navigation failed: {exc.message}") from exc

        try:
            screenshot = page.screenshot(full_page=True) if self.capture_screenshot else None
            html = page.content()
        except PlaywrightError as exc:
            raise RenderError(route, f"capture failed: {exc.message}") from exc

        current_url = page.url or route
        media = extract_media_urls(html, current_url) if self.collect_media else []
        return RenderedPage(
            url=current_url,
            link_candidates=tuple(extract_link_candidates(html)),
            capture=CaptureBundle(
                screenshot=screenshot,
                html=html if self.capture_html else None,
                media_urls=tuple(media),
            ),
        )

    def _context_options(self) -> dict[str, Any]:
        if not self.config.device:
            return {}

        assert self._playwright is not None
        try:
            return dict(self._playwright.devices[self.config.device])
        except KeyError:
            logger.warning("Unknown device %r; using desktop viewport", self.config.device)
            return {}
