from pathlib import Path

import pytest


def write_device(root: Path, name: str, uevent: str) -> Path:
    device = root / name
    device.mkdir()
    (device / "uevent").write_text(uevent)
    return device


def battery_uevent(status="Discharging", full=50, now=25) -> str:
    return (
        "POWER_SUPPLY_NAME=BAT0\n"
        "POWER_SUPPLY_TYPE=Battery\n"
        f"POWER_SUPPLY_STATUS={status}\n"
        "POWER_SUPPLY_PRESENT=1\n"
        f"POWER_SUPPLY_ENERGY_FULL={full}\n"
        f"POWER_SUPPLY_ENERGY_NOW={now}\n"
    )


@pytest.fixture
def power_supply(tmp_path: Path) -> Path:
    root = tmp_path / "power_supply"
    root.mkdir()
    return root
