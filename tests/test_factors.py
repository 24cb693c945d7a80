"""Tests for the reference emission-factor table."""

import pytest

from eaf_carbon.errors import DuplicateMaterialError, UnknownMaterialError
from eaf_carbon.factors import (
    DEFAULT_MATERIALS,
    HOT_METAL,
    REFERENCE_TABLE,
    SCRAP,
    Material,
    build_reference_table,
)


def test_default_table_has_one_entry_per_material():
    names = [m.name for m in DEFAULT_MATERIALS]
    assert len(names) == len(set(names))
    assert len(REFERENCE_TABLE) == len(names)


def test_lookup_returns_material():
    gas = REFERENCE_TABLE.lookup("natural_gas")
    assert gas.display_unit == "Nm³/t"
    assert gas.unit_divisor == 1.0
    assert gas.emission_factor == 0.00021650152


def test_lookup_of_missing_material_raises():
    with pytest.raises(UnknownMaterialError) as excinfo:
        REFERENCE_TABLE.lookup("unobtainium")
    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.name == "unobtainium"
    assert "unobtainium" in str(excinfo.value)


def test_duplicate_names_fail_loudly():
    lime = Material("lime", "Lime", "kg/t", 1000.0, 1.0)
    other_lime = Material("lime", "Lime (alt)", "kg/t", 1000.0, 0.5)
    with pytest.raises(DuplicateMaterialError) as excinfo:
        build_reference_table([lime, other_lime])
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.name == "lime"


def test_charge_materials_are_derived():
    assert REFERENCE_TABLE.lookup(HOT_METAL).derived
    assert REFERENCE_TABLE.lookup(SCRAP).derived
    entered = {m.name for m in REFERENCE_TABLE.entered_materials()}
    assert HOT_METAL not in entered
    assert SCRAP not in entered


def test_kg_and_kwh_units_use_a_1000_divisor():
    for material in REFERENCE_TABLE:
        if material.display_unit in ("kg/t", "kWh/t"):
            assert material.unit_divisor == 1000.0
        else:
            assert material.unit_divisor == 1.0


def test_factors_are_non_negative():
    assert all(m.emission_factor >= 0 for m in REFERENCE_TABLE)


def test_table_cannot_be_modified():
    with pytest.raises(TypeError):
        REFERENCE_TABLE._materials["lime"] = None


def test_membership_checks_by_name():
    assert "lime" in REFERENCE_TABLE
    assert "unobtainium" not in REFERENCE_TABLE
