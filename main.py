#!/usr/bin/env python3
"""Run the crawler straight from a source checkout: ``python main.py -c URL``."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

SRC_PATH = Path(__file__).resolve().parent / "src"


def main(argv: Optional[Sequence[str]] = None) -> int:
    if SRC_PATH.is_dir() and str(SRC_PATH) not in sys.path:
        sys.path.insert(0, str(SRC_PATH))

    from route_crawler.cli import run_cli

    return run_cli(argv)


if __name__ == "__main__":
    sys.exit(main())
