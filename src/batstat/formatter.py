from collections.abc import Sequence

from .battery import BatteryRecord
from .icons import battery_icon, battery_icon_tui


def format_stats(
    record: BatteryRecord,
    *,
    show_icon: bool = False,
    show_tui_icon: bool = False,
    show_percentage: bool = False,
    number: bool = False,
    args: Sequence[str] = (),
) -> str:
    """
    Assemble the one-line output of ``batstat stats``.

    The steps below run in order and can overlap: ``stats -i -- -i`` prints the
    icon twice. Scripts depend on that output, so keep the order as is.
    """
    if show_icon:
        icon = battery_icon(record.capacity, record.charging)
    elif show_tui_icon:
        icon = battery_icon_tui(record.capacity, record.charging)
    else:
        icon = ""

    parts: list[str] = []
    if number:
        if show_icon or show_tui_icon:
            parts.append(f"{icon} ")
        return "".join(parts)

    # Legacy tokens passed after "--"
    for arg in args:
        if arg == "-i":
            parts.append(f"{icon} ")
        if arg == "-p":
            parts.append(f"{record.capacity}% ")
    if show_icon or show_tui_icon:
        parts.append(f"{icon} ")
    if show_percentage:
        parts.append(f"{record.capacity}%")
    if not (show_icon or show_tui_icon) and not show_percentage:
        parts.append(str(record.capacity))
    return "".join(parts)


def format_summary(record: BatteryRecord) -> str:
    return f"Battery: {battery_icon(record.capacity, record.charging)} {record.capacity}%"


def format_info(record: BatteryRecord) -> list[str]:
    """Summary line followed by every raw attribute as ``key: value``."""
    return [format_summary(record), *(f"{key}: {value}" for key, value in record.info.items())]
