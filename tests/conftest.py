from collections.abc import Callable
from pathlib import Path

import pytest
from loguru import logger

from batstat.config import Settings

UEVENT_TEMPLATE = (
    "POWER_SUPPLY_NAME={name}\n"
    "POWER_SUPPLY_TYPE=Battery\n"
    "POWER_SUPPLY_STATUS={status}\n"
    "POWER_SUPPLY_PRESENT=1\n"
    "POWER_SUPPLY_CAPACITY={capacity}\n"
    "POWER_SUPPLY_MODEL_NAME=5B10W13930\n"
)


@pytest.fixture
def power_supply_root(tmp_path: Path) -> Path:
    """Empty stand-in for /sys/class/power_supply."""
    root = tmp_path / "power_supply"
    root.mkdir()
    return root


@pytest.fixture
def settings(power_supply_root: Path) -> Settings:
    return Settings(power_supply_root=power_supply_root)


@pytest.fixture
def make_battery(power_supply_root: Path) -> Callable[..., Path]:
    """Create a battery entry with a uevent file; pass ``uevent`` to override its text."""

    def _make(
        name: str = "BAT0",
        capacity: int | str = 55,
        status: str = "Discharging",
        uevent: str | None = None,
    ) -> Path:
        battery = power_supply_root / name
        battery.mkdir(exist_ok=True)
        text = uevent if uevent is not None else UEVENT_TEMPLATE.format(name=name, status=status, capacity=capacity)
        (battery / "uevent").write_text(text, encoding="utf-8")
        return battery

    return _make


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams once a test finishes."""
    yield
    logger.remove()
