"""Fault presentation formatting - Pure functions.

This module derives display attributes (color, slip rate, description)
from fault records. All functions are pure, total, and never raise.
"""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from fault_proximity.core.fault import FaultFeature


FAULT_TYPE_COLORS = {
    "Dextral": "#8B5CF6",  # Purple
    "Sinistral": "#F59E0B",  # Amber
    "Reverse": "#DC2626",  # Red
    "Normal": "#059669",  # Emerald
    "Dextral-Normal": "#7C3AED",  # Violet
    "Transform": "#2563EB",  # Blue
    "Strike-slip": "#9333EA",
    "Thrust": "#B91C1C",  # Dark red
}

DEFAULT_FAULT_COLOR = "#6B7280"  # Gray

UNKNOWN = "Unknown"
UNNAMED_FAULT = "Unnamed Fault"

# Matches "(3.4," in net_slip_rate strings like "(3.4,1.2,5.0)"
_SLIP_RATE_PATTERN = re.compile(r"\(([\d.]+),")


@dataclass(frozen=True)
class FaultDisplayInfo:
    """Human-readable fault attributes.

    Attributes:
        name: Fault name
        slip_type: Motion classification (e.g., "Dextral")
        slip_rate: Formatted slip rate (e.g., "3.4 mm/yr")
        catalog: Source catalog name
        color: Hex display color for the slip type
        description: One-line summary
    """
    name: str
    slip_type: str
    slip_rate: str
    catalog: str
    color: str
    description: str

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serializable dict."""
        return asdict(self)


def get_fault_type_color(slip_type: Any) -> str:
    """Get the display color for a slip type.

    Pure function.
    """
    if not isinstance(slip_type, str):
        return DEFAULT_FAULT_COLOR

    return FAULT_TYPE_COLORS.get(slip_type.strip(), DEFAULT_FAULT_COLOR)


def parse_slip_rate(net_slip_rate: Any) -> float | None:
    """Extract the leading numeric slip rate (mm/yr) from free text.

    Pure function.

    Args:
        net_slip_rate: Text such as "(3.4,1.2,5.0)"

    Returns:
        Rate in mm/yr, or None if the text doesn't match
    """
    if not net_slip_rate or not isinstance(net_slip_rate, str):
        return None

    match = _SLIP_RATE_PATTERN.search(net_slip_rate)
    if not match:
        return None

    try:
        return float(match.group(1))
    except ValueError:
        return None


def format_slip_rate(net_slip_rate: Any) -> str:
    """Format a free-text slip rate for display.

    Pure function.
    """
    rate = parse_slip_rate(net_slip_rate)
    if rate is None:
        return UNKNOWN
    return f"{rate:g} mm/yr"


def _get_properties(fault: Any) -> Mapping[str, Any]:
    """Get the properties mapping of a FaultFeature or raw GeoJSON feature."""
    if isinstance(fault, FaultFeature):
        return fault.properties
    if isinstance(fault, dict):
        props = fault.get("properties")
        if isinstance(props, dict):
            return props
    return {}


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def describe(fault: Any) -> FaultDisplayInfo:
    """Derive display attributes for a fault.

    Pure function. Missing or malformed properties fall back to defaults.

    Args:
        fault: FaultFeature or raw GeoJSON feature dict

    Returns:
        FaultDisplayInfo
    """
    props = _get_properties(fault)

    name = _text_or_default(props.get("name"), UNNAMED_FAULT)
    slip_type = _text_or_default(props.get("slip_type"), UNKNOWN)
    slip_rate = format_slip_rate(props.get("net_slip_rate"))
    catalog = _text_or_default(props.get("catalog_name"), UNKNOWN)

    return FaultDisplayInfo(
        name=name,
        slip_type=slip_type,
        slip_rate=slip_rate,
        catalog=catalog,
        color=get_fault_type_color(slip_type),
        description=f"{name} ({slip_type}) - {slip_rate}",
    )


_SLIP_TYPE_DESCRIPTIONS = {
    "dextral": "Slides sideways (right-lateral) like a zipper",
    "sinistral": "Slides sideways (left-lateral) like a zipper",
    "reverse": "Pushes up and together like a bulldozer",
    "thrust": "Pushes up and together like a bulldozer",
    "normal": "Drops down and apart like a trapdoor",
    "dextral-normal": "Slides sideways and drops down",
    "sinistral-normal": "Slides sideways and drops down",
    "dextral-reverse": "Slides sideways and pushes up",
    "sinistral-reverse": "Slides sideways and pushes up",
}


def translate_slip_type(slip_type: Any) -> str:
    """Describe a slip type in plain language.

    Pure function.
    """
    if not isinstance(slip_type, str) or not slip_type:
        return "Movement type unknown"

    description = _SLIP_TYPE_DESCRIPTIONS.get(slip_type.lower())
    if description is None:
        return f"{slip_type} fault movement"
    return description


def get_activity_level(slip_rate_mm_per_year: float | None) -> str:
    """Classify fault activity from its slip rate.

    Pure function.
    """
    if not slip_rate_mm_per_year or slip_rate_mm_per_year <= 0:
        return "Inactive"

    rate = slip_rate_mm_per_year
    if rate < 0.1:
        return "Very Slow"
    elif rate < 1:
        return "Slow"
    elif rate < 10:
        return "Moderate"
    elif rate < 50:
        return "Active"
    else:
        return "Very Active"
