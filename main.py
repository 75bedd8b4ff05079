#!/usr/bin/env python3
"""
Screen Guard - Main Entry Point
Locks the touchscreen until a U-shaped swipe or the emergency tap sequence.
"""

import argparse
import logging
import threading

from screen_guard.config.settings import GestureConfig, GuardConfig, load_config
from screen_guard.core.listener import TouchListener
from screen_guard.utils.logger import GuardLogger


def parse_args():
    parser = argparse.ArgumentParser(description="Lock the touchscreen behind a U-shaped swipe.")
    parser.add_argument("--config", help="JSON file overriding gesture zones and thresholds")
    parser.add_argument("--debug-log", action="store_true",
                        help=f"Mirror guard events to {GuardConfig.DEBUG_LOG_FILE}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log phase transitions")
    return parser.parse_args()


def main():
    """Main entry point for the screen guard."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = load_config(args.config) if args.config else GestureConfig()
    guard_logger = GuardLogger(GuardConfig.DEBUG_LOG_FILE if args.debug_log else None)

    unlocked = threading.Event()
    listener = TouchListener(config, on_unlock=lambda signal: unlocked.set(),
                             guard_logger=guard_logger)

    if not listener.start():
        return

    try:
        while not unlocked.wait(GuardConfig.POLL_INTERVAL):
            pass
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()


if __name__ == "__main__":
    main()
