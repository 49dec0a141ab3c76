"""Depth-first crawl of same-origin routes with per-route failure isolation."""

from __future__ import annotations

import hashlib
import logging
import threading
from typing import List, Optional

from ..core.artifacts import CrawlReport, RouteFailure
from ..core.diagnostics import CrawlDiagnostics
from ..core.errors import RenderError, SessionError, SinkError
from ..render.protocols import ArtifactSink, Renderer
from .frontier import Frontier
from .pacing import Pacer
from .routes import domain_namespace, route_key
from .state import CrawlRuntimeState, SessionState
from .targeting import RouteFilter

logger = logging.getLogger(__name__)

DEFAULT_PACING_DELAY = 1.024


class CrawlOrchestrator:
    """Drives one crawl session from a seed URL to completion.

    Routes are visited one at a time from an explicit stack. The children
    discovered on a page are pushed in reverse so they are popped in
    discovery order, and each child's whole subtree is finished before its
    next sibling starts.
    """

    def __init__(
        self,
        renderer: Renderer,
        sink: ArtifactSink,
        *,
        route_filter: Optional[RouteFilter] = None,
        pacer: Optional[Pacer] = None,
        diagnostics: Optional[CrawlDiagnostics] = None,
        cancel_event: Optional[threading.Event] = None,
        max_routes: int = 0,
        namespace: Optional[str] = None,
    ) -> None:
        self.renderer = renderer
        self.sink = sink
        self.route_filter = route_filter or RouteFilter()
        self.pacer = pacer or Pacer(DEFAULT_PACING_DELAY, cancel_event=cancel_event)
        self.diagnostics = diagnostics or CrawlDiagnostics()
        self.cancel_event = cancel_event
        self.max_routes = max_routes
        self.namespace = namespace

        self.frontier = Frontier()
        self.runtime = CrawlRuntimeState()
        self.report = CrawlReport()
        self._released = False
        self._key_owners: dict[str, str] = {}

    @property
    def state(self) -> SessionState:
        return self.runtime.state

    # ------------------------------------------------------------------
    # Core workflow
    # ------------------------------------------------------------------
    def run(self, seed: str) -> CrawlReport:
        if self.runtime.state is not SessionState.IDLE:
            raise SessionError("A crawl session can only be run once")

        seed_route = self.frontier.seed(seed)
        if self.namespace is None:
            self.namespace = domain_namespace(seed_route)
        self.report.seed_url = seed_route

        self.runtime.transition(SessionState.RUNNING)
        self.diagnostics.session(f"Crawl starting on {seed_route}")
        try:
            self.renderer.start()
        except Exception as exc:
            self.runtime.transition(SessionState.FAILED)
            self._release()
            self._finalize_report()
            raise SessionError(f"Renderer could not be started: {exc}") from exc

        try:
            self._prepare_namespace()
            self._traverse(seed_route)
        finally:
            self._release()
            self._finalize_report()

        self.diagnostics.session(
            f"Crawl {self.runtime.state.value}: {self.runtime.visited_count} route(s) visited"
        )
        return self.report

    def _traverse(self, seed_route: str) -> None:
        stack: List[str] = [seed_route]

        while stack:
            if self._cancelled():
                self.runtime.transition(SessionState.CANCELLED)
                return

            route = stack.pop()
            if self.frontier.is_visited(route):
                continue

            if self.max_routes and self.runtime.visited_count >= self.max_routes:
                self.report.truncated = True
                break

            self.pacer.wait()
            if self._cancelled():
                self.runtime.transition(SessionState.CANCELLED)
                return

            children = self._visit(route)
            stack.extend(reversed(children))

            if self.frontier.is_complete():
                break

        self.runtime.transition(SessionState.COMPLETE)

    def _visit(self, route: str) -> List[str]:
        """Visits one route and returns the absolute routes to expand next."""

        url = self.frontier.qualify(route)
        position = f"{self.frontier.position(route)}/{len(self.frontier)}"

        self.diagnostics.visiting(position, url)
        self.frontier.mark_visited(url)
        self.runtime.visit_order.append(url)

        try:
            page = self.renderer.load(url)
        except RenderError as exc:
            self._record_failure(url, "render", exc)
            return []
        except Exception as exc:
            logger.debug("Unexpected renderer error for %s", url, exc_info=True)
            self._record_failure(url, "render", exc)
            return []

        key_path = self._key_path(url)
        try:
            self.sink.store(key_path, page.capture)
        except SinkError as exc:
            self._record_failure(url, "sink", exc)
        except Exception as exc:
            logger.debug("Unexpected sink error for %s", url, exc_info=True)
            self._record_failure(url, "sink", exc)
        else:
            self.runtime.stored_keys.append(key_path)
            self.diagnostics.captured(position, url, key_path)

        added = self.frontier.discover(page.link_candidates)
        self.diagnostics.found(position, url, added)

        allowed, denied = self.route_filter.partition(added)
        for denied_route in denied:
            self.frontier.mark_skipped(denied_route)
            self.diagnostics.skipped(self.frontier.qualify(denied_route), "filtered route")

        return [self.frontier.qualify(child) for child in allowed]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _prepare_namespace(self) -> None:
        assert self.namespace is not None
        try:
            self.sink.ensure_path(self.namespace)
        except SinkError as exc:
            self._record_failure(self.namespace, "sink", exc)
        except Exception as exc:
            logger.debug("Unexpected sink error for %s", self.namespace, exc_info=True)
            self._record_failure(self.namespace, "sink", exc)

    def _key_path(self, url: str) -> str:
        """Artifact key for ``url``; distinct routes never share a key."""

        key_path = f"{self.namespace}/{route_key(url)}"
        owner = self._key_owners.setdefault(key_path, url)
        if owner != url:
            digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:8]
            key_path = f"{key_path}-{digest}"
            self._key_owners[key_path] = url
        return key_path

    def _record_failure(self, route: str, stage: str, error: BaseException) -> None:
        if stage == "render":
            self.runtime.render_failures += 1
        else:
            self.runtime.sink_failures += 1
        self.report.failures.append(RouteFailure(route=route, stage=stage, message=str(error)))
        self.diagnostics.failed(route, error)

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self.renderer.close()
        except Exception:
            logger.warning("Renderer did not close cleanly", exc_info=True)

    def _finalize_report(self) -> None:
        frontier = self.frontier
        self.report.state = self.runtime.state.value
        self.report.discovered_routes = [frontier.qualify(route) for route in frontier.routes]
        self.report.visited_routes = list(self.runtime.visit_order)
        self.report.skipped_routes = [
            frontier.qualify(route)
            for route in frontier.routes
            if frontier.qualify(route) in frontier.skipped
        ]
        self.report.stored_keys = list(self.runtime.stored_keys)
