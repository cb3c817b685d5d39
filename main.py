# =============================================================================
# TELEWIND
# Module: main.py
# Purpose: CLI entry point
# =============================================================================
#
# USAGE:
# python main.py parse --speed 4.5            # one-shot: replay the page
# python main.py run-bot                      # run monitor + Telegram bot
#
# OPTIONS:
# --url        Anemometer page (default from config)
# --speed      Speed threshold in m/s (default from config)
# --sector     Sector name, e.g. NORTH_180
# --json       Print parse rows as JSON lines
# --config     YAML config file (default: config/telewind.yaml)
# --verbose    Enable debug logging
#
# =============================================================================

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from collector.client import AnemometerClient
from collector.errors import ObservationSourceError
from core.sector import Sector
from core.wind_tracker import WindTracker
from shared.config import ConfigError, MonitorConfig, load_config
from shared.logging_config import setup_logging

logger = logging.getLogger("telewind")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="telewind",
        description="Telewind - sustained wind alerts from an anemometer page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py parse
  python main.py parse --speed 4.0 --sector EAST_90
  python main.py run-bot --verbose
        """,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--url", "-u", type=str, default=None, help="Anemometer page URL")
    common.add_argument("--speed", "-s", type=float, default=None, help="Speed threshold (m/s)")
    common.add_argument("--config", type=Path, default=None, help="YAML config file")
    common.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    actions = parser.add_subparsers(dest="action", required=True)

    parse = actions.add_parser("parse", parents=[common], help="Parse remote URL once")
    parse.add_argument(
        "--sector",
        type=str,
        default="EAST_90",
        help="Sector name for the replay (default: EAST_90)",
    )
    parse.add_argument("--json", action="store_true", help="Print one JSON object per row")

    actions.add_parser("run-bot", parents=[common], help="Run the Telegram bot")

    return parser.parse_args(argv)


def apply_overrides(config: MonitorConfig, args: argparse.Namespace) -> MonitorConfig:
    if args.url:
        config.source_url = args.url
    if args.speed is not None:
        config.speed_threshold = args.speed
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def run_parse(config: MonitorConfig, sector: Sector, as_json: bool = False) -> int:
    """Fetch the page once and replay it through a fresh tracker."""
    client = AnemometerClient(config.source_url, timeout=config.request_timeout)
    try:
        observations = client.fetch_observations()
    except ObservationSourceError as e:
        logger.error(f"Unable to read observations: {e}")
        return 1

    tracker = WindTracker(
        sector=sector,
        speed_threshold=config.speed_threshold,
        candidate_steps=2,
        cooldown_steps=2,
    )

    for observation in sorted(observations, key=lambda o: o.time):
        event_fired = tracker.step(observation)
        if as_json:
            row = observation.to_dict()
            row.update(event_fired=event_fired, state=repr(tracker.state))
            print(json.dumps(row, ensure_ascii=False))
        else:
            print(f"{observation} {str(event_fired).lower():>6}    {tracker.state!r}")

    return 0


def run_bot(config: MonitorConfig) -> int:
    """Run the subscription listener and the monitor loop."""
    from app.orchestrator import WindMonitor
    from notifications.subscriptions import SubscriptionStore
    from shared.telegram_bot import TelegramCommandListener

    if not config.telegram_token:
        raise ConfigError("TELEGRAM_BOT_TOKEN not set")

    subscriptions = SubscriptionStore(config.database_url)
    listener = TelegramCommandListener(config.telegram_token, subscriptions)
    listener.start()

    try:
        WindMonitor.from_config(config, subscriptions).run()
    finally:
        # The listener writes through the store, close it only once the thread is gone
        if listener.stop():
            subscriptions.close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
        sector = Sector.from_name(args.sector) if args.action == "parse" else config.sector
    except ValueError as e:
        setup_logging(level=logging.INFO)
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(level=config.log_level)

    try:
        if args.action == "parse":
            return run_parse(config, sector, as_json=args.json)
        return run_bot(config)

    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 130

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
