THRESHOLDS: tuple[int, ...] = (100, 90, 80, 70, 60, 50, 40, 30, 20, 10, 0)

CHARGING_ICON = "🔋⚡"
HIGH_ICON = "🔋"
LOW_ICON = "🪫"
CRITICAL_ICON = "⚠️"
UNKNOWN_ICON = "❓"

# (threshold, glyph) pairs in descending threshold order
CHARGING_ICONS: tuple[tuple[int, str], ...] = tuple((t, CHARGING_ICON) for t in THRESHOLDS)
DISCHARGING_ICONS: tuple[tuple[int, str], ...] = tuple(
    (t, HIGH_ICON if t >= 30 else LOW_ICON if t >= 10 else CRITICAL_ICON) for t in THRESHOLDS
)

GAUGE_CELLS = 10
GAUGE_FILL = "="
GAUGE_BLANK = " "


def battery_icon(level: int, charging: bool) -> str:
    """Pick a symbolic glyph for the first threshold at or below ``level``."""
    table = CHARGING_ICONS if charging else DISCHARGING_ICONS
    for threshold, icon in table:
        if level >= threshold:
            return icon
    return UNKNOWN_ICON


def battery_icon_tui(level: int, charging: bool) -> str:
    """
    Render a ten cell ASCII gauge, e.g. ``Battery: [====      ]``.

    ``level`` is not clamped: above 100 the gauge grows past ten cells,
    below 0 it is all blanks.
    """
    label = "Charging: " if charging else "Battery: "
    full_blocks = level // GAUGE_CELLS
    empty_blocks = GAUGE_CELLS - full_blocks
    return f"{label}[{GAUGE_FILL * full_blocks}{GAUGE_BLANK * empty_blocks}]"
