#!/usr/bin/env python3
"""
Battery Tray Indicator.
Shows the combined percentage of every battery in the power-supply class.
"""

import sys

import gi
gi.require_version("Gtk", "3.0")
gi.require_version("AyatanaAppIndicator3", "0.1")
from gi.repository import Gtk, AyatanaAppIndicator3, GLib

from .sysfs import PowerStatus, POWER_SUPPLY_DIR

UPDATE_INTERVAL = 5  # seconds


def get_battery_icon(percent, charging: bool) -> str:
    """Get appropriate battery icon name."""
    if percent is None:
        return "battery-missing"

    if percent >= 80:
        level = "full"
    elif percent >= 50:
        level = "good"
    elif percent >= 20:
        level = "low"
    else:
        level = "empty"

    if charging:
        return f"battery-{level}-charging"
    return f"battery-{level}"


class BatteryIndicator:
    """System tray indicator showing battery status."""

    def __init__(self, root=POWER_SUPPLY_DIR):
        self.indicator = AyatanaAppIndicator3.Indicator.new(
            "sysbat", "battery-missing", AyatanaAppIndicator3.IndicatorCategory.HARDWARE
        )
        self.indicator.set_status(AyatanaAppIndicator3.IndicatorStatus.ACTIVE)
        self.indicator.set_title("Battery: --%")

        self.power_status = PowerStatus(root=root)
        self._build_menu()

        GLib.timeout_add_seconds(UPDATE_INTERVAL, self.update)
        self.update()

    def _build_menu(self):
        """Build the indicator menu."""
        self.menu = Gtk.Menu()

        self.percent_item = Gtk.MenuItem(label="Battery: --%")
        self.percent_item.set_sensitive(False)
        self.menu.append(self.percent_item)

        self.state_item = Gtk.MenuItem(label="State: --")
        self.state_item.set_sensitive(False)
        self.menu.append(self.state_item)

        self.count_item = Gtk.MenuItem(label="Batteries: --")
        self.count_item.set_sensitive(False)
        self.menu.append(self.count_item)

        self.menu.append(Gtk.SeparatorMenuItem())

        quit_item = Gtk.MenuItem(label="Quit")
        quit_item.connect("activate", self.quit)
        self.menu.append(quit_item)

        self.menu.show_all()
        self.indicator.set_menu(self.menu)

    def update(self) -> bool:
        """Rescan batteries and refresh the indicator."""
        try:
            self.power_status.update()
        except OSError as e:
            # Previous reading stays in place
            print(f"Update error: {e}", file=sys.stderr)
            self.indicator.set_label("ERR", "")
            return True

        percent = self.power_status.percent()
        charging = self.power_status.is_charging()
        icon = get_battery_icon(percent, charging)
        text = "--" if percent is None else f"{percent}%"

        self.indicator.set_icon_full(icon, str(self.power_status))
        self.indicator.set_label(text, "")
        self.indicator.set_title(str(self.power_status))

        self.percent_item.set_label(str(self.power_status))
        self.state_item.set_label(f"State: {'Charging' if charging else 'On battery'}")
        self.count_item.set_label(f"Batteries: {len(self.power_status.batteries)}")

        return True

    def quit(self, widget):
        Gtk.main_quit()


def main():
    """Entry point for the tray indicator."""
    indicator = BatteryIndicator()
    Gtk.main()


if __name__ == "__main__":
    main()
