"""Command-line interface for the DeFi analytics dashboard."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .models import CATEGORY_ALL, Category, DashboardView
from .report import render_dashboard, render_error
from .services import RefreshController
from .sources import build_source

CATEGORY_CHOICES = [CATEGORY_ALL, *(c.value for c in Category)]


def _positive_seconds(text: str) -> float:
    """argparse type for a refresh interval; rejects zero and negatives."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid interval: {text!r}") from None
    if not value > 0:
        raise argparse.ArgumentTypeError(f"interval must be positive, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="defi-analytics",
        description="DeFi portfolio and market analytics dashboard",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    summary_parser = sub.add_parser("summary", help="Refresh once and print the dashboard")
    summary_parser.add_argument(
        "--category",
        default=None,
        choices=CATEGORY_CHOICES,
        help="Protocol category (overrides config)",
    )
    summary_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the view model as JSON",
    )

    watch_parser = sub.add_parser("watch", help="Auto-refresh and print on every update")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=_positive_seconds,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )
    watch_parser.add_argument(
        "--category",
        default=None,
        choices=CATEGORY_CHOICES,
        help="Protocol category (overrides config)",
    )

    return parser


def _build_controller(
    config: AppConfig, args: argparse.Namespace
) -> RefreshController:
    dashboard = config.dashboard
    interval = getattr(args, "interval", None)
    if interval is None:
        interval = dashboard.refresh_interval_seconds
    return RefreshController(
        build_source(config.source),
        config.wallet.address,
        interval=interval,
        category=args.category or dashboard.default_category,
        arbitrage_limit=dashboard.arbitrage_limit,
        auto_refresh=dashboard.auto_refresh,
    )


async def _summary(config: AppConfig, args: argparse.Namespace) -> int:
    controller = _build_controller(config, args)
    await controller.refresh_now()

    if controller.view is None:
        if controller.last_error is not None:
            print(render_error(controller.last_error), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(controller.view.to_dict(), indent=2))
    else:
        print(render_dashboard(controller.view, config.wallet.label, config.wallet.address))
    return 0


async def _watch(config: AppConfig, args: argparse.Namespace) -> int:
    controller = _build_controller(config, args)

    def show(view: DashboardView) -> None:
        print(render_dashboard(view, config.wallet.label, config.wallet.address))
        print()

    controller.subscribe(show)

    async with controller:
        if not await controller.refresh_now() and controller.last_error is not None:
            print(render_error(controller.last_error), file=sys.stderr)
        controller.start()
        await asyncio.Event().wait()
    return 0


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "summary":
        return await _summary(config, args)
    if args.command == "watch":
        return await _watch(config, args)

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(asyncio.run(_run(args)))
    except KeyboardInterrupt:
        sys.exit(130)
