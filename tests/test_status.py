from datetime import datetime
from pathlib import Path

import pytest

from sysbat import status
from sysbat.status import Clock, StatusBar
from sysbat.sysfs import PowerStatus

from conftest import battery_uevent, write_device


def test_clock_format():
    assert str(Clock(datetime(2024, 3, 9, 7, 5))) == "2024-03-09 07:05"


def test_status_bar_line(power_supply: Path):
    write_device(power_supply, "BAT0", battery_uevent(full=200, now=101))
    bar = StatusBar(PowerStatus.read_from_sysfs(power_supply), Clock(datetime(2024, 1, 2, 3, 4)))
    assert str(bar) == "Battery: 50% 2024-01-02 03:04"


def test_status_bar_no_battery(power_supply: Path):
    bar = StatusBar(PowerStatus.read_from_sysfs(power_supply), Clock(datetime(2024, 1, 2, 3, 4)))
    assert str(bar) == "No battery detected 2024-01-02 03:04"


def test_status_bar_update_refreshes_clock(power_supply: Path):
    write_device(power_supply, "BAT0", battery_uevent())
    clock = Clock(datetime(2000, 1, 1))
    bar = StatusBar(PowerStatus.read_from_sysfs(power_supply), clock)

    bar.update()
    assert clock.now.year > 2000


def test_status_bar_update_propagates_scan_error(tmp_path: Path):
    clock = Clock(datetime(2000, 1, 1))
    bar = StatusBar(PowerStatus(root=tmp_path / "missing"), clock)

    with pytest.raises(OSError):
        bar.update()
    assert clock.now == datetime(2000, 1, 1)


def test_once_prints_line(power_supply: Path, monkeypatch, capsys):
    write_device(power_supply, "BAT0", battery_uevent(full=4, now=3))
    monkeypatch.setattr(status, "POWER_SUPPLY_DIR", power_supply)

    status.once()
    assert capsys.readouterr().out.startswith("Battery: 75% ")


def test_once_missing_directory(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setattr(status, "POWER_SUPPLY_DIR", tmp_path / "missing")

    with pytest.raises(SystemExit):
        status.once()
    assert "Error reading batteries" in capsys.readouterr().err


def test_main_keeps_last_reading_when_refresh_fails(power_supply: Path, monkeypatch, capsys):
    device = write_device(power_supply, "BAT0", battery_uevent(full=100, now=42))
    monkeypatch.setattr(status, "POWER_SUPPLY_DIR", power_supply)
    ticks = []

    def fake_sleep(seconds):
        ticks.append(seconds)
        if len(ticks) == 1:
            (device / "uevent").unlink()
            device.rmdir()
            power_supply.rmdir()
        else:
            raise KeyboardInterrupt

    monkeypatch.setattr(status.time, "sleep", fake_sleep)
    status.main()

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("Battery: 42% ") for line in lines)
    assert "Error reading batteries" in captured.err
    assert ticks == [status.UPDATE_INTERVAL, status.UPDATE_INTERVAL]
