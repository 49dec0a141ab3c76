"""Command line interface for the route crawler."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
import time
from typing import Optional, Sequence

from .core.config import CrawlerConfig, load_configuration
from .core.dependencies import verify_dependencies
from .core.diagnostics import CrawlDiagnostics
from .core.errors import InvalidSeedError, SessionError
from .crawl.orchestrator import CrawlOrchestrator
from .crawl.pacing import Pacer
from .crawl.targeting import RouteFilter
from .drivers.feed import FeedDriver
from .drivers.search import ProfileSearchDriver
from .render.browser import PlaywrightRenderer
from .sink.filesystem import FilesystemSink

MOBILE_DEVICE = "iPhone X"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl a domain, search a username or harvest a feed, capturing every page"
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-c", "--crawl", metavar="URL", help="Crawl linked pages on a domain and screenshot them")
    mode.add_argument("-s", "--search", metavar="USERNAME", help="Screenshot a username's social media profiles")
    mode.add_argument(
        "-f", "--feed", metavar="URL", action="append", help="Harvest media from a feed page (repeatable)"
    )
    parser.add_argument("-i", "--mobile", action="store_true", help=f"Emulate a mobile device ({MOBILE_DEVICE})")
    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the browser headless (default comes from .env/HEADLESS)",
    )
    parser.add_argument("--delay", type=int, default=None, help="Pause between visits in ms (default 1024)")
    parser.add_argument("--timeout", type=int, default=None, help="Navigation timeout in ms (default 30000)")
    parser.add_argument("--output", default=None, help="Directory for captured artifacts (default screenshots/)")
    parser.add_argument("--report", default=None, help="JSON report path (default crawl_report.json)")
    parser.add_argument(
        "--allow-auth-routes",
        action="store_true",
        help="Also visit login/sign-in/sign-up/register routes",
    )
    parser.add_argument("--max-routes", type=int, default=0, help="Stop after this many visits (0 = no limit)")
    parser.add_argument("--skip-checks", action="store_true", help="Do not verify the Playwright installation")
    parser.add_argument("-d", "--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )


def print_dependency_status() -> bool:
    status = verify_dependencies()
    for name, ok in status.items():
        print(f"[{'+' if ok else '!'}] {name} {'found' if ok else 'not found'}")
    if not all(status.values()):
        print("[!] Run `pip install playwright && playwright install chromium` first.")
        return False
    return True


def install_interrupt_handler(cancel_event: threading.Event) -> None:
    def _handle(_signum, _frame):
        print("\n[!] Interrupted, finishing the current page...")
        cancel_event.set()

    signal.signal(signal.SIGINT, _handle)


def build_config(args: argparse.Namespace) -> CrawlerConfig:
    return load_configuration(
        output_dir=args.output,
        report_name=args.report,
        headless=args.headless,
        pacing_delay_ms=args.delay,
        navigation_timeout_ms=args.timeout,
        device=MOBILE_DEVICE if args.mobile else None,
        skip_auth_routes=not args.allow_auth_routes,
        max_routes=args.max_routes,
    )


def run_crawl(config: CrawlerConfig, seed: str, cancel_event: threading.Event) -> int:
    renderer = PlaywrightRenderer(config)
    orchestrator = CrawlOrchestrator(
        renderer,
        FilesystemSink(config.output_dir),
        route_filter=RouteFilter() if config.skip_auth_routes else RouteFilter.allow_all(),
        pacer=Pacer(config.pacing_delay, cancel_event=cancel_event),
        diagnostics=CrawlDiagnostics(),
        cancel_event=cancel_event,
        max_routes=config.max_routes,
    )

    report = orchestrator.run(seed)
    report.save(config.report_path)

    print(f"[+] Report saved to {config.report_path}")
    print(f"    State              : {report.state}")
    print(f"    Routes discovered  : {len(report.discovered_routes)}")
    print(f"    Routes visited     : {len(report.visited_routes)}")
    print(f"    Routes skipped     : {len(report.skipped_routes)}")
    print(f"    Artifacts stored   : {len(report.stored_keys)}")
    print(f"    Failures           : {len(report.failures)}")
    return 0


def run_search(config: CrawlerConfig, username: str, cancel_event: threading.Event) -> int:
    driver = ProfileSearchDriver(
        username,
        PlaywrightRenderer(config, wait_until="networkidle"),
        FilesystemSink(config.output_dir),
        pacer=Pacer(config.pacing_delay, cancel_event=cancel_event),
        cancel_event=cancel_event,
    )
    report = driver.run()
    report.save(config.report_path)

    print(f"[+] Report saved to {config.report_path}")
    print(f"    Profiles captured  : {len(report.stored_keys)}/{len(report.visited_urls)}")
    for failure in report.failures:
        print(f"    ! {failure.route}: {failure.message}")
    return 0


def run_feed(config: CrawlerConfig, feed_urls: Sequence[str], cancel_event: threading.Event) -> int:
    driver = FeedDriver(
        feed_urls,
        PlaywrightRenderer(config, collect_media=True, wait_until="networkidle"),
        FilesystemSink(config.output_dir),
        pacer=Pacer(config.pacing_delay, cancel_event=cancel_event),
        cancel_event=cancel_event,
    )
    report = driver.run()
    report.save(config.report_path)

    print(f"[+] Report saved to {config.report_path}")
    for url, media in report.media_urls.items():
        print(f"    {url}: {len(media)} media reference(s)")
    for failure in report.failures:
        print(f"    ! {failure.route}: {failure.message}")
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.debug)
    config = build_config(args)

    if not args.skip_checks:
        print("[*] Checking dependencies...")
        if not print_dependency_status():
            return 1

    cancel_event = threading.Event()
    install_interrupt_handler(cancel_event)

    started = time.monotonic()
    try:
        if args.crawl:
            print(f"[*] Crawl starting on {args.crawl}")
            status = run_crawl(config, args.crawl, cancel_event)
        elif args.search:
            print(f"[*] Search starting for {args.search}")
            status = run_search(config, args.search, cancel_event)
        else:
            print(f"[*] Feed extraction starting on {len(args.feed)} page(s)")
            status = run_feed(config, args.feed, cancel_event)
    except (InvalidSeedError, ValueError) as exc:
        print(f"[!] {exc}")
        return 1
    except SessionError as exc:
        print(f"[!] Session failed: {exc}")
        return 1

    print(f"[*] Finished in {time.monotonic() - started:.1f}s")
    return status


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
