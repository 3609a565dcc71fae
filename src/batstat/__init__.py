from .battery import (
    BatteryError,
    BatteryNotFoundError,
    BatteryReadError,
    BatteryRecord,
    find_battery_path,
    parse_uevent,
    read_battery_info,
)
from .config import Settings
from .formatter import format_info, format_stats
from .icons import battery_icon, battery_icon_tui

__version__ = "0.1.0"

__all__ = [
    "BatteryError",
    "BatteryNotFoundError",
    "BatteryReadError",
    "BatteryRecord",
    "Settings",
    "__version__",
    "battery_icon",
    "battery_icon_tui",
    "find_battery_path",
    "format_info",
    "format_stats",
    "parse_uevent",
    "read_battery_info",
]
