"""Crypto portfolio tracker CLI.

Provides commands for:
- assets: List supported cryptocurrencies
- add: Record a new holding
- remove: Delete a holding
- list: Show holdings valued at current prices
- export: Write holdings to CSV or JSON
- watch: Keep prices refreshed and re-render on every update
"""
from __future__ import annotations

import argparse
import math
import threading
from pathlib import Path
from typing import List, Optional

from common.config_loader import DEFAULT_CONFIG_PATH, TrackerConfig, load_config
from common.errors import NothingToExportError, ValidationError
from common.logging_config import setup_logging
from portfolio.catalog import ASSET_CATALOG
from portfolio.tracker import CryptoTracker
from reporting.summary import holding_lines, portfolio_summary


def positive_float(value: str) -> float:
    """argparse type for strictly positive numbers."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a finite number greater than zero: {value!r}")
    return number


def build_tracker(args) -> CryptoTracker:
    """Load configuration, set up logging and restore saved holdings."""
    cfg: TrackerConfig = load_config(args.config)
    setup_logging(args.log_level or cfg.log_level, cfg.log_file)
    tracker = CryptoTracker.from_config(cfg)
    tracker.start(schedule=False)
    return tracker


def render(tracker: CryptoTracker) -> None:
    """Print the error banner, holdings and portfolio summary."""
    cache = tracker.cache
    if cache.error:
        print(f"!! {cache.error}")
    if cache.last_updated:
        print(f"Last updated: {cache.last_updated.astimezone():%H:%M:%S}")

    print("\nHoldings:")
    for line in holding_lines(tracker.valuations()):
        print("  " + line)

    print("\nSummary:")
    for k, v in portfolio_summary(tracker.summary()).items():
        print(f"  {k}: {v}")


def cmd_assets(args) -> int:
    """Handle assets command: print the supported asset catalog."""
    print("Supported assets:")
    for asset in ASSET_CATALOG.values():
        print(f"  {asset.asset_id:<12} {asset.symbol:<5} {asset.name}")
    return 0


def cmd_add(args) -> int:
    """Handle add command: validate and store a new holding."""
    tracker = build_tracker(args)
    try:
        holding = tracker.add_holding(args.asset, args.amount, args.price)
    except ValidationError as e:
        print("Please fill in all fields")
        print(f"Error: {e}")
        return 1
    print(f"Added holding {holding.id}: {holding.amount} {holding.asset_id} @ ${holding.purchase_price:,.2f}")
    return 0


def cmd_remove(args) -> int:
    """Handle remove command: delete a holding after confirmation."""
    tracker = build_tracker(args)
    holding = tracker.store.get(args.id)
    if holding is None:
        print(f"No holding with id {args.id}")
        return 0

    if not args.yes:
        answer = input("Are you sure you want to delete this holding? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.")
            return 0

    tracker.remove_holding(args.id)
    print(f"Removed holding {args.id}")
    return 0


def cmd_list(args) -> int:
    """Handle list command: refresh prices once and show the portfolio."""
    tracker = build_tracker(args)
    tracker.refresh_prices()
    render(tracker)
    return 0


def cmd_export(args) -> int:
    """Handle export command: refresh prices once and write an export file."""
    tracker = build_tracker(args)
    if len(tracker.store):
        tracker.refresh_prices()
        if tracker.cache.error:
            print(f"Warning: {tracker.cache.error}")

    try:
        export = tracker.export(args.format)
    except NothingToExportError as e:
        print(str(e))
        return 1

    out = Path(args.output or export.filename)
    out.write_text(export.content, encoding="utf-8")
    print(f"Exported {len(tracker.store)} holdings to {out} ({export.content_type})")
    return 0


def cmd_watch(args) -> int:
    """Handle watch command: refresh on a timer until interrupted."""
    tracker = build_tracker(args)
    if args.interval is not None:
        tracker.scheduler.interval = args.interval

    def on_change(cache) -> None:
        if not cache.loading:
            print("\n" + "=" * 50)
            render(tracker)

    tracker.cache.add_listener(on_change)
    tracker.scheduler.start()
    print(f"Refreshing every {tracker.scheduler.interval:g}s (Ctrl+C to stop)")
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        tracker.stop(timeout=5)
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Crypto portfolio tracker: holdings, live prices and P&L",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments for all commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Tracker config file")
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level",
    )

    # Assets command
    assets_p = sub.add_parser("assets", parents=[common], help="List supported assets")
    assets_p.set_defaults(func=cmd_assets)

    # Add command
    add_p = sub.add_parser("add", parents=[common], help="Record a new holding")
    add_p.add_argument("--asset", required=True, help="Asset id (see 'assets')")
    add_p.add_argument("--amount", required=True, help="Quantity held")
    add_p.add_argument("--price", required=True, help="Purchase price per unit in USD")
    add_p.set_defaults(func=cmd_add)

    # Remove command
    rm = sub.add_parser("remove", parents=[common], help="Delete a holding")
    rm.add_argument("--id", type=int, required=True, help="Holding id")
    rm.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    rm.set_defaults(func=cmd_remove)

    # List command
    ls = sub.add_parser("list", parents=[common], help="Show holdings at current prices")
    ls.set_defaults(func=cmd_list)

    # Export command
    ex = sub.add_parser("export", parents=[common], help="Export holdings")
    ex.add_argument("--format", choices=["csv", "json"], default="csv", help="Export format")
    ex.add_argument("--output", default=None, help="Output path (default: crypto-portfolio.<format>)")
    ex.set_defaults(func=cmd_export)

    # Watch command
    w = sub.add_parser("watch", parents=[common], help="Refresh prices periodically")
    w.add_argument("--interval", type=positive_float, default=None, help="Refresh interval in seconds")
    w.set_defaults(func=cmd_watch)

    args = p.parse_args(argv)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
