"""Route discovery and depth-first traversal."""

from .frontier import Frontier
from .orchestrator import CrawlOrchestrator
from .pacing import Pacer
from .state import SessionState
from .targeting import RouteFilter

__all__ = ["CrawlOrchestrator", "Frontier", "Pacer", "RouteFilter", "SessionState"]
