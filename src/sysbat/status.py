"""
Battery status line for terminals, status bars and conky.
Prints the combined battery percentage followed by the local time.
"""

import sys
import time
from datetime import datetime

from .sysfs import PowerStatus, POWER_SUPPLY_DIR

# Configuration
UPDATE_INTERVAL = 3  # seconds between refreshes
CLOCK_FORMAT = "%Y-%m-%d %H:%M"


class Clock:
    """Local wall-clock time, refreshed on update()."""

    def __init__(self, now=None):
        self.now = now if now is not None else datetime.now()

    def update(self):
        self.now = datetime.now()

    def __str__(self):
        return self.now.strftime(CLOCK_FORMAT)


class StatusBar:
    """Power status and clock rendered as a single line."""

    def __init__(self, power_status: PowerStatus, clock: Clock):
        self.power_status = power_status
        self.clock = clock

    def update(self):
        """Refresh batteries, then the clock. OSError from the scan propagates."""
        self.power_status.update()
        self.clock.update()

    def __str__(self):
        return f"{self.power_status} {self.clock}"


def once():
    """Print a single status line."""
    try:
        print(StatusBar(PowerStatus.read_from_sysfs(POWER_SUPPLY_DIR), Clock()))
    except OSError as e:
        print(f"Error reading batteries: {e}", file=sys.stderr)
        sys.exit(1)


def main():
    """Entry point for the status line loop."""
    try:
        status = StatusBar(PowerStatus.read_from_sysfs(POWER_SUPPLY_DIR), Clock())
    except OSError as e:
        print(f"Error reading batteries: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        while True:
            try:
                status.update()
            except OSError as e:
                # Keep the last good reading, just move the clock on
                print(f"Error reading batteries: {e}", file=sys.stderr)
                status.clock.update()
            print(status, flush=True)
            time.sleep(UPDATE_INTERVAL)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
