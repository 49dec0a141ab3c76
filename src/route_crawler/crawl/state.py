from __future__ import annotations

import enum
from dataclasses import dataclass, field


class SessionState(str, enum.Enum):
    """Lifecycle of one crawl session."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in {SessionState.COMPLETE, SessionState.CANCELLED, SessionState.FAILED}


@dataclass(slots=True)
class CrawlRuntimeState:
    """Mutable runtime bookkeeping for the orchestrator."""

    state: SessionState = SessionState.IDLE
    visit_order: list[str] = field(default_factory=list)
    stored_keys: list[str] = field(default_factory=list)
    render_failures: int = 0
    sink_failures: int = 0

    @property
    def visited_count(self) -> int:
        return len(self.visit_order)

    def transition(self, target: SessionState) -> None:
        if self.state.is_terminal:
            return
        self.state = target
