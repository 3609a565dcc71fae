"""
Locating and reading the kernel battery status record.

The kernel exposes each power supply as a directory under
/sys/class/power_supply. Batteries are named BAT0, BAT1, ... and carry a
``uevent`` file of KEY=VALUE lines describing their current state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
import re
from types import MappingProxyType

from loguru import logger

from .config import Settings

CAPACITY_KEY = "POWER_SUPPLY_CAPACITY"
STATUS_KEY = "POWER_SUPPLY_STATUS"
CHARGING_STATUSES = frozenset({"Charging", "Full"})
# Optional sign and ASCII digits only, nothing around them
CAPACITY_PATTERN = re.compile(r"[+-]?[0-9]+")


class BatteryError(Exception):
    """Base class for battery lookup failures."""


class BatteryNotFoundError(BatteryError):
    def __init__(self) -> None:
        super().__init__("No battery found.")


class BatteryReadError(BatteryError):
    """The status descriptor exists but could not be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(str(cause))
        self.path = path


@dataclass(frozen=True)
class BatteryRecord:
    capacity: int
    charging: bool
    info: Mapping[str, str] = field(default_factory=dict)


def find_battery_path(settings: Settings | None = None) -> Path | None:
    """
    Return the first battery directory that carries a status descriptor.

    Candidates are matched in sorted order so BAT0 wins over BAT1. Returns
    None when nothing qualifies; callers decide whether that is fatal.
    """
    settings = settings or Settings()
    for candidate in sorted(settings.power_supply_root.glob(settings.battery_glob)):
        if (candidate / settings.descriptor_name).exists():
            logger.debug("Using battery at {}", candidate)
            return candidate
    logger.debug("No battery matching {} under {}", settings.battery_glob, settings.power_supply_root)
    return None


def parse_uevent(text: str) -> dict[str, str]:
    """Split KEY=VALUE lines at the first '='. Lines without one are skipped."""
    info: dict[str, str] = {}
    for line in text.split("\n"):
        key, sep, value = line.partition("=")
        if sep:
            info[key] = value
    return info


def _parse_capacity(raw: str | None) -> int:
    if raw is None:
        logger.debug("{} missing, defaulting to 0", CAPACITY_KEY)
        return 0
    if CAPACITY_PATTERN.fullmatch(raw) is None:
        logger.debug("Unparseable {}={!r}, defaulting to 0", CAPACITY_KEY, raw)
        return 0
    return int(raw)


def record_from_info(info: Mapping[str, str]) -> BatteryRecord:
    capacity = _parse_capacity(info.get(CAPACITY_KEY))
    charging = info.get(STATUS_KEY) in CHARGING_STATUSES
    return BatteryRecord(capacity=capacity, charging=charging, info=MappingProxyType(dict(info)))


def read_battery_info(path: Path, settings: Settings | None = None) -> BatteryRecord:
    """
    Read and parse the status descriptor of the battery at ``path``.

    Malformed fields degrade to defaults (capacity 0, not charging). Only a
    failure to read the file at all is an error.

    Raises:
        BatteryReadError: If the descriptor cannot be read.
    """
    settings = settings or Settings()
    descriptor = path / settings.descriptor_name
    try:
        # Bytes keep any "\r" that universal newlines would strip
        text = descriptor.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise BatteryReadError(descriptor, e) from e
    return record_from_info(parse_uevent(text))
