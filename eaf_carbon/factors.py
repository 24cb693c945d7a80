"""Reference emission factors for EAF steelmaking materials"""

from dataclasses import dataclass
from types import MappingProxyType

from .errors import DuplicateMaterialError, UnknownMaterialError

HOT_METAL = "hot_metal"
SCRAP = "scrap"


@dataclass(frozen=True)
class Material:
    name: str
    label: str
    display_unit: str
    unit_divisor: float
    emission_factor: float  # t CO2 per base_unit
    base_unit: str = "t"
    derived: bool = False
    credit: bool = False


class ReferenceTable:
    """Read-only material table keyed by material name"""

    def __init__(self, materials):
        self._materials = MappingProxyType(dict(materials))

    def lookup(self, name):
        try:
            return self._materials[name]
        except KeyError:
            raise UnknownMaterialError(name) from None

    def __contains__(self, name):
        return name in self._materials

    def __iter__(self):
        return iter(self._materials.values())

    def __len__(self):
        return len(self._materials)

    def entered_materials(self):
        """Materials the user types an intensity for"""
        return [m for m in self._materials.values() if not m.derived]


def build_reference_table(materials):
    """Build a ReferenceTable, refusing duplicate material names"""
    table = {}
    for material in materials:
        if material.name in table:
            raise DuplicateMaterialError(material.name)
        table[material.name] = material
    return ReferenceTable(table)


# Factors in t CO2 per base unit:
#   Nm3 for gas, t for solids entered as kg/t (divisor 1000),
#   MWh for electricity entered as kWh/t (divisor 1000)
DEFAULT_MATERIALS = (
    Material("natural_gas", "Natural gas", "Nm³/t", 1.0, 0.00021650152, "Nm³"),
    Material(HOT_METAL, "Hot metal / pig iron", "t/t", 1.0, 1.73932, derived=True),
    Material("lime", "Lime", "kg/t", 1000.0, 1.023711),
    Material("light_burned_dolomite", "Light-burned dolomite", "kg/t", 1000.0, 1.023711),
    Material(SCRAP, "Scrap steel", "t/t", 1.0, 0.0154, derived=True),
    Material("electrode", "Graphite electrode", "kg/t", 1000.0, 3.663),
    Material("carburiser", "Carburiser / carbon powder", "kg/t", 1000.0, 3.6667),
    Material("alloy", "Alloy", "kg/t", 1000.0, 0.275),
    Material("electricity", "Electricity", "kWh/t", 1000.0, 0.5568, "MWh"),
    # 0.11 t CO2/GJ heat at 2.76 GJ per tonne of steam
    Material("recovered_steam", "Recovered steam", "kg/t", 1000.0, 0.3036, credit=True),
    Material("billet", "Purchased billet", "t/t", 1.0, 0.0154),
)

REFERENCE_TABLE = build_reference_table(DEFAULT_MATERIALS)
