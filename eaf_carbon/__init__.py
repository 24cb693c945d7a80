"""Carbon emissions estimates for electric-arc-furnace steelmaking"""

from .engine import (
    CalculationResult,
    CreditEntry,
    DerivedFigures,
    EmissionEntry,
    ProcessParameters,
    TOP_N,
    calculate,
)
from .errors import (
    CalculationWarning,
    DuplicateMaterialError,
    EAFCarbonError,
    ExportError,
    UnknownMaterialError,
    WarningKind,
)
from .factors import REFERENCE_TABLE, Material, ReferenceTable, build_reference_table
from .units import Scale, Tonnage

__version__ = "1.0.0"
