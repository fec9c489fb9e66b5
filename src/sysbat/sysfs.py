"""
Battery state from the kernel power-supply class.
Finds BAT* devices, parses their uevent files and combines every
battery into a single charge percentage.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

log = logging.getLogger(__name__)

# Kernel interface
POWER_SUPPLY_DIR = Path("/sys/class/power_supply")
BATTERY_PREFIX = "BAT"
UEVENT_NAME = "uevent"

STATUS_KEY = "POWER_SUPPLY_STATUS"
ENERGY_FULL_KEY = "POWER_SUPPLY_ENERGY_FULL"
ENERGY_NOW_KEY = "POWER_SUPPLY_ENERGY_NOW"

_ENERGY_RE = re.compile(r"\+?[0-9]+")


class ChargingState(Enum):
    DISCHARGING = "Discharging"
    CHARGING = "Charging"
    NOT_CHARGING = "Not charging"

    @classmethod
    def from_uevent(cls, value: str) -> Optional["ChargingState"]:
        """Map a POWER_SUPPLY_STATUS value, None if it is not recognised."""
        return CHARGING_STATES.get(value)


CHARGING_STATES = {
    "Not charging": ChargingState.NOT_CHARGING,
    "Discharging": ChargingState.DISCHARGING,
    "Charging": ChargingState.CHARGING,
}


@dataclass(frozen=True)
class BatteryRecord:
    charging: ChargingState
    energy_full: int
    energy_now: int


@dataclass
class BatteryRecordBuilder:
    """Collects uevent fields; build() only succeeds once all three are set."""

    charging: Optional[ChargingState] = None
    energy_full: Optional[int] = None
    energy_now: Optional[int] = None

    def set_charging(self, charging: ChargingState):
        self.charging = charging

    def set_energy_full(self, energy_full: int):
        self.energy_full = energy_full

    def set_energy_now(self, energy_now: int):
        self.energy_now = energy_now

    def build(self) -> Optional[BatteryRecord]:
        if self.charging is None or self.energy_full is None or self.energy_now is None:
            return None
        return BatteryRecord(
            charging=self.charging,
            energy_full=self.energy_full,
            energy_now=self.energy_now,
        )


def parse_energy(value: str) -> Optional[int]:
    """Parse a non-negative integer energy value."""
    if not _ENERGY_RE.fullmatch(value):
        return None
    return int(value)


def battery_uevent_path(entry: Path) -> Optional[Path]:
    """Return the uevent path for a BAT* entry, None for anything else."""
    name = entry.name
    try:
        # Undecodable names come back from the OS with surrogate escapes
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    if not name.startswith(BATTERY_PREFIX):
        return None
    return entry / UEVENT_NAME


def find_battery_uevents(root: Path = POWER_SUPPLY_DIR) -> List[Path]:
    """
    List the uevent files of every battery under the power-supply directory.

    Raises:
        OSError: if the directory cannot be listed
    """
    paths = []
    for entry in Path(root).iterdir():
        path = battery_uevent_path(entry)
        if path is not None:
            paths.append(path)
    return paths


def parse_uevent(stream: Iterable[Union[str, bytes]]) -> Optional[BatteryRecord]:
    """
    Parse one device's uevent contents.

    Malformed lines, unknown keys and unparsable values are ignored; a value
    that fails to parse never clears an earlier good one. Undecodable or
    unreadable content drops the device.

    Args:
        stream: open text or binary file, or any iterable of lines

    Returns:
        BatteryRecord when status and both energy fields were found, else None
    """
    builder = BatteryRecordBuilder()
    try:
        for raw in stream:
            line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            parts = line.split("=")
            if len(parts) != 2:
                continue
            key, value = parts

            if key == STATUS_KEY:
                charging = ChargingState.from_uevent(value)
                if charging is not None:
                    builder.set_charging(charging)
            elif key == ENERGY_FULL_KEY:
                energy = parse_energy(value)
                if energy is not None:
                    builder.set_energy_full(energy)
            elif key == ENERGY_NOW_KEY:
                energy = parse_energy(value)
                if energy is not None:
                    builder.set_energy_now(energy)
    except (OSError, UnicodeDecodeError):
        return None
    return builder.build()


def read_battery(path: Path) -> Optional[BatteryRecord]:
    """
    Read a single battery's uevent file.

    Raises:
        OSError: if the file cannot be opened
    """
    with open(path, "rb") as f:
        record = parse_uevent(f)
    if record is None:
        log.debug("No complete battery record in %s", path)
    return record


def read_batteries(root: Path = POWER_SUPPLY_DIR) -> Tuple[BatteryRecord, ...]:
    """Scan every battery under root; incomplete devices are left out."""
    records = []
    for path in find_battery_uevents(root):
        record = read_battery(path)
        if record is not None:
            records.append(record)
    return tuple(records)


def battery_percent(records: Iterable[BatteryRecord]) -> Optional[int]:
    """
    Combined charge of all batteries in percent.

    The result is truncated, not rounded, and is not clamped: devices that
    report more energy than their capacity give readings above 100.

    Returns:
        Percentage, or None when there is no capacity to divide by
    """
    energy_now = 0
    energy_full = 0
    for record in records:
        energy_now += record.energy_now
        energy_full += record.energy_full
    if energy_full == 0:
        return None
    return 100 * energy_now // energy_full


class PowerStatus:
    """All batteries found on the last successful scan."""

    def __init__(self, batteries: Iterable[BatteryRecord] = (), root: Path = POWER_SUPPLY_DIR):
        self.root = Path(root)
        self.batteries = tuple(batteries)

    @classmethod
    def read_from_sysfs(cls, root: Path = POWER_SUPPLY_DIR) -> "PowerStatus":
        return cls(read_batteries(root), root=root)

    def update(self):
        """
        Rescan all batteries.

        The record set is swapped in one assignment after the whole scan
        succeeds; on OSError the previous records are kept.
        """
        self.batteries = read_batteries(self.root)

    def percent(self) -> Optional[int]:
        return battery_percent(self.batteries)

    def is_charging(self) -> bool:
        return any(b.charging is ChargingState.CHARGING for b in self.batteries)

    def __eq__(self, other):
        if not isinstance(other, PowerStatus):
            return NotImplemented
        return self.root == other.root and self.batteries == other.batteries

    def __repr__(self):
        return f"PowerStatus(root={str(self.root)!r}, batteries={self.batteries!r})"

    def __str__(self):
        percent = self.percent()
        if percent is None:
            return "No battery detected"
        return f"Battery: {percent}%"
