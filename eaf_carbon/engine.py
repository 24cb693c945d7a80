"""EAF emissions calculation engine.

``calculate`` is a pure function of its inputs. It runs the steps below in
order and only logs once every figure exists:

1. furnace cycles per day from the cycle time
2. daily and annual steel output (tonnes)
3. charge split into hot metal and scrap ratios
4. yearly amount per material, converted to the emission factor's base unit
5. emissions per material
6. total emissions
7. emission intensity per tonne of steel
8. ranking, with a top-N subset for charts

Bad inputs are replaced with safe values and reported as warnings on the
result, so a caller always gets something it can render.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import CalculationWarning, UnknownMaterialError
from .factors import HOT_METAL, REFERENCE_TABLE, SCRAP
from .units import Scale, Tonnage

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440.0
TOP_N = 5


@dataclass(frozen=True)
class ProcessParameters:
    capacity: float = 100.0  # t steel per heat
    cycle_minutes: float = 60.0  # tap-to-tap
    operating_days: float = 320.0
    steel_charge_ratio: float = 1.087  # t charge per t steel
    scrap_ratio: float = 0.7  # scrap share of the charge


@dataclass(frozen=True)
class DerivedFigures:
    daily_furnace_cycles: float
    daily_output: Tonnage
    annual_output: Tonnage
    annual_charge_demand: Tonnage
    iron_ratio: float
    scrap_amount_ratio: float


@dataclass(frozen=True)
class EmissionEntry:
    name: str
    label: str
    unit: str
    amount: float  # per year, in unit
    emission: float  # t CO2 per year
    per_ton: float  # kg CO2 per t steel


@dataclass(frozen=True)
class CreditEntry:
    name: str
    label: str
    unit: str
    amount: float
    avoided: float  # t CO2 per year


@dataclass(frozen=True)
class CalculationResult:
    parameters: ProcessParameters
    derived: DerivedFigures
    amounts: Mapping[str, float] = field(hash=False)
    emissions: Tuple[EmissionEntry, ...]
    credits: Tuple[CreditEntry, ...]
    total_emissions: float
    avoided_emissions: float
    emission_intensity_per_ton: float  # t CO2 per t steel
    warnings: Tuple[CalculationWarning, ...] = ()

    @property
    def ok(self):
        return not self.warnings

    @property
    def net_emissions(self):
        return self.total_emissions - self.avoided_emissions

    @property
    def net_intensity_per_ton(self):
        tonnes = self.derived.annual_output.tonnes
        if tonnes <= 0:
            return 0.0
        value = self.net_emissions / tonnes
        return value if math.isfinite(value) else 0.0

    def ranked(self):
        """All emission entries, largest first"""
        return sorted(self.emissions, key=lambda e: e.emission, reverse=True)

    def top(self, n=TOP_N):
        return self.ranked()[:n]

    def warnings_of(self, kind):
        return [w for w in self.warnings if w.kind is kind]


def _non_negative(value, name, warnings):
    if value is None or not math.isfinite(value) or value < 0:
        warnings.append(CalculationWarning.invalid_parameter(
            name, f"{name} must be a non-negative number, got {value!r}; using 0"))
        return 0.0
    return float(value)


def _finite(value, name, warnings, material=None):
    """Replace an overflowed intermediate with 0"""
    if math.isfinite(value):
        return value
    warnings.append(CalculationWarning.invalid_parameter(
        name, f"{name} overflowed to {value!r} (inputs too large or too small); using 0",
        material=material))
    return 0.0


def _finite_tonnage(tonnage, name, warnings):
    return Tonnage(_finite(tonnage.value, name, warnings), tonnage.scale)


def _scrap_ratio(value, warnings):
    if value is None or not math.isfinite(value):
        warnings.append(CalculationWarning.invalid_parameter(
            "scrap_ratio", f"scrap_ratio must be a number, got {value!r}; using 0"))
        return 0.0
    if value < 0 or value > 1:
        clamped = min(max(value, 0.0), 1.0)
        warnings.append(CalculationWarning.invalid_parameter(
            "scrap_ratio", f"scrap_ratio {value} is outside [0, 1]; using {clamped}"))
        return clamped
    return float(value)


def furnace_cycles_per_day(cycle_minutes, warnings):
    if cycle_minutes is None or not math.isfinite(cycle_minutes) or cycle_minutes <= 0:
        warnings.append(CalculationWarning.invalid_parameter(
            "cycle_minutes", f"cycle time must be greater than 0 minutes, got {cycle_minutes!r}"))
        return 0.0
    return _finite(MINUTES_PER_DAY / cycle_minutes, "cycle_minutes", warnings)


def derive_figures(parameters, warnings):
    """Steps 1-3: throughput, output volumes and the charge split"""
    capacity = _non_negative(parameters.capacity, "capacity", warnings)
    days = _non_negative(parameters.operating_days, "operating_days", warnings)
    charge_ratio = _non_negative(parameters.steel_charge_ratio, "steel_charge_ratio", warnings)
    scrap_ratio = _scrap_ratio(parameters.scrap_ratio, warnings)

    cycles = furnace_cycles_per_day(parameters.cycle_minutes, warnings)
    daily_output = Tonnage(_finite(capacity * cycles, "daily_output", warnings))
    annual_output = _finite_tonnage(daily_output * days, "annual_output", warnings)
    charge_demand = _finite_tonnage(annual_output * charge_ratio, "annual_charge_demand", warnings)

    return DerivedFigures(
        daily_furnace_cycles=cycles,
        daily_output=daily_output,
        annual_output=annual_output,
        annual_charge_demand=charge_demand,
        iron_ratio=charge_ratio * (1 - scrap_ratio),
        scrap_amount_ratio=charge_ratio * scrap_ratio,
    )


def material_amounts(intensities, derived, table, warnings):
    """Step 4: yearly amount per material in the factor's base unit"""
    annual_tonnes = derived.annual_output.tonnes
    amounts = {}
    for name, intensity in intensities.items():
        try:
            material = table.lookup(name)
        except UnknownMaterialError:
            warnings.append(CalculationWarning.unknown_material(name))
            continue
        if material.derived:
            continue
        if intensity is None or not math.isfinite(intensity) or intensity < 0:
            warnings.append(CalculationWarning.invalid_parameter(
                "intensity", f"intensity for {name} must be non-negative, got {intensity!r}; using 0",
                material=name))
            intensity = 0.0
        amounts[name] = _finite(intensity * annual_tonnes / material.unit_divisor, "intensity", warnings,
                                material=name)

    # Charge materials always come from the process parameters
    amounts[HOT_METAL] = _finite(derived.iron_ratio * annual_tonnes, "hot_metal", warnings, material=HOT_METAL)
    amounts[SCRAP] = _finite(derived.scrap_amount_ratio * annual_tonnes, "scrap", warnings, material=SCRAP)
    return amounts


def calculate(parameters, intensities, table=REFERENCE_TABLE):
    """Recompute every derived figure from scratch

    :param parameters: ProcessParameters for this run
    :param intensities: mapping of material name to consumption per tonne of
        steel, in the material's display unit
    :param table: reference table supplying units and emission factors
    :return: CalculationResult
    """
    warnings = []
    derived = derive_figures(parameters, warnings)
    amounts = material_amounts(intensities, derived, table, warnings)
    annual_tonnes = derived.annual_output.tonnes

    emissions = []
    credits = []
    for name, amount in amounts.items():
        try:
            material = table.lookup(name)
        except UnknownMaterialError:
            # hot metal or scrap missing from a custom table
            warnings.append(CalculationWarning.unknown_material(name))
            continue
        value = _finite(amount * material.emission_factor, "emission", warnings, material=name)
        if material.credit:
            credits.append(CreditEntry(name, material.label, material.base_unit, amount, value))
            continue
        per_ton = 0.0
        if annual_tonnes > 0:
            per_ton = _finite(value * 1000.0 / annual_tonnes, "per_ton", warnings, material=name)
        emissions.append(EmissionEntry(name, material.label, material.base_unit, amount, value, per_ton))

    total = _finite(sum(e.emission for e in emissions), "total_emissions", warnings)
    avoided = _finite(sum(c.avoided for c in credits), "avoided_emissions", warnings)
    intensity = _finite(total / annual_tonnes, "emission_intensity", warnings) if annual_tonnes > 0 else 0.0

    result = CalculationResult(
        parameters=parameters,
        derived=derived,
        amounts=MappingProxyType(amounts),
        emissions=tuple(emissions),
        credits=tuple(credits),
        total_emissions=total,
        avoided_emissions=avoided,
        emission_intensity_per_ton=intensity,
        warnings=tuple(warnings),
    )

    logger.debug(
        "Annual output %.2f %s (%.4f %s), total %.2f t CO2, intensity %.4f t CO2/t",
        annual_tonnes, Scale.TONNES.suffix,
        derived.annual_output.to(Scale.TEN_THOUSAND_TONNES).value, Scale.TEN_THOUSAND_TONNES.suffix,
        total, intensity,
    )
    for warning in result.warnings:
        logger.warning("%s: %s", warning.kind.value, warning.message)
    return result
