"""Error taxonomy for the EAF carbon calculator.

Domain conditions found while calculating (bad parameters, unknown materials)
are recovered inside the engine and surfaced as ``CalculationWarning`` records.
Only table construction and report export raise out to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EAFCarbonError(Exception):
    """Base class for calculator errors"""


class DuplicateMaterialError(EAFCarbonError, ValueError):
    """Raised when a reference table is built with a repeated material name"""

    def __init__(self, name):
        super().__init__(f"Material '{name}' is defined more than once in the reference table")
        self.name = name


class UnknownMaterialError(EAFCarbonError, KeyError):
    """Raised by a reference table lookup for a material it does not hold"""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown material '{self.name}'"


class ExportError(EAFCarbonError):
    """Raised when the PDF report cannot be rasterised or assembled"""


class WarningKind(Enum):
    INVALID_PARAMETER = "invalid_parameter"
    UNKNOWN_MATERIAL = "unknown_material"


@dataclass(frozen=True)
class CalculationWarning:
    kind: WarningKind
    message: str
    field: Optional[str] = None
    material: Optional[str] = None

    @classmethod
    def invalid_parameter(cls, field, message, material=None):
        return cls(WarningKind.INVALID_PARAMETER, message, field=field, material=material)

    @classmethod
    def unknown_material(cls, material):
        return cls(
            WarningKind.UNKNOWN_MATERIAL,
            f"'{material}' has no emission factor and was counted as zero",
            material=material,
        )
