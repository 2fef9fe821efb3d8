"""
Deterministic location label -> colour mapping.

The same label always maps to the same palette entry, across processes and
sessions, so marker colours and the location legend stay consistent.
"""
from typing import NamedTuple, Optional, Tuple


class LocationColor(NamedTuple):
    primary: str
    secondary: str


NEUTRAL_LOCATION_COLOR = LocationColor("#6b7280", "#4b5563")

LOCATION_PALETTE: Tuple[LocationColor, ...] = (
    LocationColor("#8b5cf6", "#6d28d9"),  # purple
    LocationColor("#3b82f6", "#1d4ed8"),  # blue
    LocationColor("#10b981", "#047857"),  # green
    LocationColor("#f59e0b", "#d97706"),  # amber
    LocationColor("#ef4444", "#b91c1c"),  # red
    LocationColor("#06b6d4", "#0e7490"),  # cyan
    LocationColor("#14b8a6", "#0f766e"),  # teal
    LocationColor("#f97316", "#c2410c"),  # orange
    LocationColor("#ec4899", "#be185d"),  # pink
    LocationColor("#6366f1", "#4338ca"),  # indigo
    LocationColor("#a855f7", "#7e22ce"),  # violet
    LocationColor("#22c55e", "#15803d"),  # lime
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def location_hash(label: str) -> int:
    """
    Signed 32-bit `h * 31 + code_unit` string hash over UTF-16 code units.
    """
    result = 0
    encoded = label.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        result = _to_int32((result << 5) - result + code_unit)
    return result


def get_location_color(location: Optional[str]) -> LocationColor:
    """
    Get the colour pair for a location label.

    Args:
        location: Location label, or None

    Returns:
        Palette entry chosen by the label hash, or the neutral pair when the
        label is missing or empty
    """
    if not location:
        return NEUTRAL_LOCATION_COLOR
    return LOCATION_PALETTE[abs(location_hash(location)) % len(LOCATION_PALETTE)]
