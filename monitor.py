#!/usr/bin/env python3
"""
Real-time U-shape progress monitor.
Shows the classifier phase and emergency tap count as you touch the screen.
"""

import time

from screen_guard.config.settings import GuardConfig
from screen_guard.core.listener import TouchListener
from screen_guard.gestures.u_shape_classifier import Phase

PHASE_ICONS = {
    Phase.IDLE: "⚪",
    Phase.DESCENDING: "⬇️ ",
    Phase.CROSSING: "➡️ ",
    Phase.ASCENDING: "⬆️ ",
    Phase.COMPLETE: "✅",
}


class PhaseMonitor:
    def __init__(self):
        self.listener = TouchListener()
        self.running = False

    def start(self):
        """Start monitoring gesture progress."""
        if not self.listener.start():
            return False

        self.running = True
        print("🎯 U-Shape Progress Monitor Started")
        print("=" * 50)
        print("📱 Start top-left, go down, across, and up on the right")
        print("🖱️  Press Ctrl+C to stop")
        print()

        try:
            self._monitor_loop()
        except KeyboardInterrupt:
            pass
        self.stop()
        return True

    def stop(self):
        """Stop monitoring."""
        self.running = False
        self.listener.stop()
        print("\n✅ Monitoring stopped")

    def _monitor_loop(self):
        """Main monitoring loop."""
        last_status = None

        while self.running and self.listener.is_running:
            router = self.listener.router
            status = (router.phase, router.engaged, router.emergency_count)

            if status != last_status:
                self._display_status(*status)
                last_status = status

            time.sleep(GuardConfig.POLL_INTERVAL)

    def _display_status(self, phase, engaged, emergency_count):
        """Display the current progress on one line."""
        print("\r" + " " * 80 + "\r", end="")
        required = self.listener.router.config.emergency_required_taps
        touch = engaged or "no touch"
        print(f"{PHASE_ICONS[phase]} {phase.value:<10} | {touch:<9} | "
              f"emergency {emergency_count}/{required}", end="", flush=True)


def main():
    """Main entry point."""
    monitor = PhaseMonitor()
    monitor.start()


if __name__ == "__main__":
    main()
