"""Turning raw form values into engine inputs"""

import math
import re

from .engine import ProcessParameters
from .factors import REFERENCE_TABLE

DEFAULT_PARAMETERS = {
    "capacity": 100.0,
    "cycle_minutes": 60.0,
    "operating_days": 320.0,
    "steel_charge_ratio": 1.087,
    "scrap_ratio": 0.7,
}

# Commas are only accepted as thousands separators: "1,234.5" but not "1,5"
THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")

PARAMETER_LABELS = {
    "capacity": "Furnace capacity (t)",
    "cycle_minutes": "Cycle time (min)",
    "operating_days": "Operating days per year",
    "steel_charge_ratio": "Steel charge ratio (t/t)",
    "scrap_ratio": "Scrap ratio (0-1)",
}


def coerce_float(value, default=0.0):
    """Best-effort float conversion that falls back to ``default`` instead of raising"""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(" ", "")
        if not text:
            return default
        if "," in text:
            if not THOUSANDS.match(text):
                return default
            text = text.replace(",", "")
        try:
            number = float(text)
        except ValueError:
            return default
    return number if math.isfinite(number) else default


def parameters_from_mapping(values):
    """Build ProcessParameters from a mapping of raw field values"""
    return ProcessParameters(**{
        key: coerce_float(values.get(key, default), default=0.0)
        for key, default in DEFAULT_PARAMETERS.items()
    })


def intensities_from_mapping(values, table=REFERENCE_TABLE):
    """Coerce every entered material's intensity, defaulting blanks to 0

    Keys not present in ``table`` are passed through so the engine can flag
    them as unknown.
    """
    intensities = {m.name: 0.0 for m in table.entered_materials()}
    for name, raw in values.items():
        intensities[name] = coerce_float(raw)
    return intensities
