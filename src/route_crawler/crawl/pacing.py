"""Fixed cooldown inserted between sequential visits."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(slots=True)
class Pacer:
    """Waits ``delay`` seconds before every visit except the first one.

    When a cancellation event is supplied the wait returns early as soon as
    the event is set.
    """

    delay: float
    sleep: Callable[[float], None] = time.sleep
    cancel_event: Optional[threading.Event] = None
    _primed: bool = field(default=False, init=False)

    def wait(self) -> None:
        if not self._primed:
            self._primed = True
            return
        if self.delay <= 0:
            return
        if self.cancel_event is not None:
            self.cancel_event.wait(self.delay)
            return
        self.sleep(self.delay)

    def reset(self) -> None:
        self._primed = False
