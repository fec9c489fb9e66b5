"""
sysbat - Battery level from the Linux power-supply class.

This package provides:
- Battery discovery and uevent parsing under /sys/class/power_supply
- Combined charge percentage across all batteries
- Console status line
- System tray indicator
"""

__version__ = "1.0.0"

from .sysfs import (
    BatteryRecord,
    BatteryRecordBuilder,
    ChargingState,
    PowerStatus,
    battery_percent,
    find_battery_uevents,
    parse_uevent,
    read_battery,
    read_batteries,
    POWER_SUPPLY_DIR,
)

__all__ = [
    "BatteryRecord",
    "BatteryRecordBuilder",
    "ChargingState",
    "PowerStatus",
    "battery_percent",
    "find_battery_uevents",
    "parse_uevent",
    "read_battery",
    "read_batteries",
    "POWER_SUPPLY_DIR",
]
