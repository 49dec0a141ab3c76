"""Configuration loading utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PACING_DELAY_MS = 1024
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_OUTPUT_DIR = "screenshots"
DEFAULT_REPORT_NAME = "crawl_report.json"

_TRUE_VALUES = {"1", "true", "yes"}


@dataclass(slots=True)
class CrawlerConfig:
    """Holds runtime options for a crawl, search or feed run."""

    output_dir: Path
    report_path: Path
    headless: bool = True
    pacing_delay_ms: int = DEFAULT_PACING_DELAY_MS
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    wait_until: str = "load"
    device: Optional[str] = None
    skip_auth_routes: bool = True
    max_routes: int = 0

    @property
    def pacing_delay(self) -> float:
        return self.pacing_delay_ms / 1000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_configuration(
    *,
    output_dir: Optional[str] = None,
    report_name: Optional[str] = None,
    headless: Optional[bool] = None,
    pacing_delay_ms: Optional[int] = None,
    navigation_timeout_ms: Optional[int] = None,
    device: Optional[str] = None,
    skip_auth_routes: bool = True,
    max_routes: int = 0,
) -> CrawlerConfig:
    """Builds a ``CrawlerConfig`` from CLI input and environment variables."""

    load_dotenv()  # Loads .env values if present

    if headless is None:
        headless = os.getenv("HEADLESS", "true").lower() in _TRUE_VALUES

    return CrawlerConfig(
        output_dir=Path(output_dir or os.getenv("OUTPUT_DIR") or DEFAULT_OUTPUT_DIR).resolve(),
        report_path=Path(report_name or os.getenv("REPORT_PATH") or DEFAULT_REPORT_NAME).resolve(),
        headless=headless,
        pacing_delay_ms=(
            pacing_delay_ms
            if pacing_delay_ms is not None
            else _env_int("PACING_DELAY_MS", DEFAULT_PACING_DELAY_MS)
        ),
        navigation_timeout_ms=(
            navigation_timeout_ms
            if navigation_timeout_ms is not None
            else _env_int("NAVIGATION_TIMEOUT_MS", DEFAULT_NAVIGATION_TIMEOUT_MS)
        ),
        device=device or os.getenv("DEVICE") or None,
        skip_auth_routes=skip_auth_routes,
        max_routes=max_routes,
    )
