"""Core module - configuration and unit handling."""

from herdmetrics.core import units
from herdmetrics.core.config import Settings, get_cache_dir, settings
from herdmetrics.core.units import (
    format_gain_rate,
    format_weight,
    get_weight_unit,
    is_imperial,
    kg_to_display,
    to_kg,
)

__all__ = [
    "units",
    "Settings",
    "settings",
    "get_cache_dir",
    # Unit conversion helpers
    "to_kg",
    "kg_to_display",
    "format_weight",
    "format_gain_rate",
    "get_weight_unit",
    "is_imperial",
]
