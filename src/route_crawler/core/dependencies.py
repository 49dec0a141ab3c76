"""Checks that the Playwright tooling and a browser build are available."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

PLAYWRIGHT_CLI: tuple[str, list[str]] = ("playwright", ["playwright", "--version"])
BROWSER_NAME = "chromium"


def check_tool(command: list[str]) -> bool:
    """Returns ``True`` if the command is on PATH and exits cleanly."""

    if shutil.which(command[0]) is None:
        return False

    try:
        subprocess.run(command, capture_output=True, text=True, check=True)
    except (subprocess.CalledProcessError, OSError):
        return False
    return True


def browser_installed(browser_name: str = BROWSER_NAME) -> bool:
    """Returns ``True`` when Playwright has downloaded the given browser."""

    try:
        with sync_playwright() as playwright:
            executable = getattr(playwright, browser_name).executable_path
    except PlaywrightError:
        return False
    return bool(executable) and Path(executable).exists()


def verify_dependencies(
    checks: Iterable[tuple[str, Callable[[], bool]]] | None = None,
) -> dict[str, bool]:
    """Runs each check and returns a mapping of name to result."""

    if checks is None:
        name, command = PLAYWRIGHT_CLI
        checks = (
            (name, lambda: check_tool(command)),
            (BROWSER_NAME, browser_installed),
        )

    return {name: check() for name, check in checks}
