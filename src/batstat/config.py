from pathlib import Path
from typing import Literal

from pydantic import BaseModel, confloat

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Runtime settings for batstat. Built in code, never read from disk."""

    model_config = {"frozen": True}

    power_supply_root: Path = Path("/sys/class/power_supply")
    """Directory the kernel exposes power supplies under."""

    battery_glob: str = "BAT*"
    """Pattern matched against entries of power_supply_root."""

    descriptor_name: str = "uevent"
    """KEY=VALUE status file that must exist inside a battery entry."""

    refresh_interval_s: confloat(gt=0) = 1.0
    """Seconds between redraws of the interactive display."""

    log_level: LogLevel = "WARNING"
