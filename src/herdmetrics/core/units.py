"""Unit conversion utilities using pint.

All internal data is stored in metric (SI) units:
- Mass: kilograms (kg)
- Gain rates: kilograms per day (kg/day)

Records may arrive in any mass unit pint understands (kg, lb, g, ...).
They are converted to kg once, when the snapshot is loaded.

Display units are controlled by settings.display_units:
- "metric": Display as stored (kg)
- "imperial": Convert to pounds (lb)
"""

import pint

from herdmetrics.core.config import settings

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None

# Unit spellings seen in farm exports that pint does not parse directly
UNIT_ALIASES = {
    "kgs": "kg",
    "lbs": "lb",
    "kilograms": "kg",
    "pounds": "lb",
}


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Mass Conversions
# =============================================================================


def to_kg(value: float, unit: str = "kg") -> float:
    """Convert a mass in any pint-parseable unit to kilograms.

    Args:
        value: Mass magnitude
        unit: Unit name or symbol (e.g. "kg", "lb", "LB", "lbs")

    Returns:
        Mass in kilograms

    Raises:
        ValueError: If the unit is unknown or is not a mass unit
    """
    ureg = get_ureg()
    name = unit.strip().lower()
    name = UNIT_ALIASES.get(name, name)
    try:
        quantity = ureg.Quantity(float(value), name)
        return quantity.to(ureg.kilogram).magnitude
    except pint.errors.PintError as e:
        raise ValueError(f"Unsupported mass unit '{unit}'") from e


def kg_to_display(kg: float) -> tuple[float, str]:
    """Convert kilograms to display units.

    Args:
        kg: Mass in kilograms

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    ureg = get_ureg()

    if settings.display_units == "imperial":
        pounds = (kg * ureg.kilogram).to(ureg.pound).magnitude
        return (pounds, "lb")
    return (kg, "kg")


# =============================================================================
# Formatting
# =============================================================================


def format_weight(kg: float, decimals: int = 1) -> str:
    """Format a mass for display.

    Args:
        kg: Mass in kilograms
        decimals: Number of decimal places

    Returns:
        Formatted string like "260.0 kg" or "573.2 lb"
    """
    value, unit = kg_to_display(kg)
    return f"{value:,.{decimals}f} {unit}"


def format_gain_rate(kg_per_day: float, decimals: int = 3) -> str:
    """Format a daily gain rate for display.

    Args:
        kg_per_day: Gain in kg/day (may be negative)
        decimals: Number of decimal places

    Returns:
        Formatted string like "0.066 kg/day" or "0.145 lb/day"
    """
    value, unit = kg_to_display(kg_per_day)
    return f"{value:.{decimals}f} {unit}/day"


def get_weight_unit() -> str:
    """Get the mass unit symbol for current display settings."""
    return "lb" if settings.display_units == "imperial" else "kg"


def is_imperial() -> bool:
    """Check if display units are imperial."""
    return settings.display_units == "imperial"
