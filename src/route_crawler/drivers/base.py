"""Bounded, single-level fan-out over a fixed list of pages."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from ..core.artifacts import FixedListReport, RenderedPage, RouteFailure
from ..core.diagnostics import CrawlDiagnostics
from ..core.errors import RenderError, SessionError, SinkError
from ..crawl.pacing import Pacer
from ..render.protocols import ArtifactSink, Renderer

logger = logging.getLogger(__name__)

DEFAULT_PACING_DELAY = 1.024


@dataclass(frozen=True)
class FixedTarget:
    """One page of a fixed list and where its capture is stored."""

    name: str
    url: str
    key_path: str


class FixedListDriver:
    """Visits each target once, paced, without discovery or dedup state.

    Subclasses provide :meth:`targets` and may override :meth:`namespace`
    and :meth:`on_captured`.
    """

    label = "fixed-list"

    def __init__(
        self,
        renderer: Renderer,
        sink: ArtifactSink,
        *,
        pacer: Optional[Pacer] = None,
        diagnostics: Optional[CrawlDiagnostics] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.renderer = renderer
        self.sink = sink
        self.pacer = pacer or Pacer(DEFAULT_PACING_DELAY, cancel_event=cancel_event)
        self.diagnostics = diagnostics or CrawlDiagnostics()
        self.cancel_event = cancel_event

    def targets(self) -> List[FixedTarget]:
        raise NotImplementedError

    def namespace(self) -> Optional[str]:
        return None

    def on_captured(self, target: FixedTarget, page: RenderedPage) -> None:
        """Hook invoked after a target was rendered and stored."""

    # ------------------------------------------------------------------
    # Core workflow
    # ------------------------------------------------------------------
    def run(self) -> FixedListReport:
        targets = self.targets()
        report = FixedListReport(label=self.label)

        try:
            self.renderer.start()
        except Exception as exc:
            self._close()
            raise SessionError(f"Renderer could not be started: {exc}") from exc

        try:
            namespace = self.namespace()
            if namespace:
                try:
                    self.sink.ensure_path(namespace)
                except SinkError as exc:
                    self._record_failure(report, namespace, "sink", exc)
                except Exception as exc:
                    logger.debug("Unexpected sink error for %s", namespace, exc_info=True)
                    self._record_failure(report, namespace, "sink", exc)

            for target in targets:
                if self._cancelled():
                    report.cancelled = True
                    break
                self.pacer.wait()
                if self._cancelled():
                    report.cancelled = True
                    break
                self._visit(target, report)
        finally:
            self._close()

        return report

    def _visit(self, target: FixedTarget, report: FixedListReport) -> None:
        position = f"{self.label} | {target.name}"
        self.diagnostics.visiting(position, target.url)
        report.visited_urls.append(target.url)

        try:
            page = self.renderer.load(target.url)
        except RenderError as exc:
            self._record_failure(report, target.url, "render", exc)
            return
        except Exception as exc:
            logger.debug("Unexpected renderer error for %s", target.url, exc_info=True)
            self._record_failure(report, target.url, "render", exc)
            return

        if page.capture.media_urls:
            report.media_urls[target.url] = list(page.capture.media_urls)

        try:
            self.sink.store(target.key_path, page.capture)
        except SinkError as exc:
            self._record_failure(report, target.url, "sink", exc)
            return
        except Exception as exc:
            logger.debug("Unexpected sink error for %s", target.url, exc_info=True)
            self._record_failure(report, target.url, "sink", exc)
            return

        report.stored_keys.append(target.key_path)
        self.diagnostics.captured(position, target.url, target.key_path)
        self.on_captured(target, page)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _record_failure(
        self,
        report: FixedListReport,
        route: str,
        stage: str,
        error: BaseException,
    ) -> None:
        report.failures.append(RouteFailure(route=route, stage=stage, message=str(error)))
        self.diagnostics.failed(route, error)

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _close(self) -> None:
        try:
            self.renderer.close()
        except Exception:
            logger.warning("Renderer did not close cleanly", exc_info=True)
