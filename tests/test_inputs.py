"""Tests for form value coercion."""

import pytest

from eaf_carbon.engine import ProcessParameters
from eaf_carbon.factors import HOT_METAL, REFERENCE_TABLE, SCRAP
from eaf_carbon.inputs import (
    DEFAULT_PARAMETERS,
    coerce_float,
    intensities_from_mapping,
    parameters_from_mapping,
)


@pytest.mark.parametrize("raw, expected", [
    ("12", 12.0),
    (" 12.5 ", 12.5),
    ("1,234.5", 1234.5),
    ("12,345,678", 12345678.0),
    ("-1,000", -1000.0),
    ("-3", -3.0),
    ("1e3", 1000.0),
    (7, 7.0),
    (2.5, 2.5),
])
def test_coerce_float_parses_numbers(raw, expected):
    assert coerce_float(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12kg", None, "nan", "inf", float("nan"), True, object()])
def test_coerce_float_falls_back_to_default(raw):
    assert coerce_float(raw) == 0.0
    assert coerce_float(raw, default=1.5) == 1.5


def test_parameters_default_when_fields_missing():
    assert parameters_from_mapping({}) == ProcessParameters(**DEFAULT_PARAMETERS)


def test_parameters_non_numeric_field_becomes_zero():
    params = parameters_from_mapping({"cycle_minutes": "soon", "capacity": "120"})
    assert params.cycle_minutes == 0.0
    assert params.capacity == 120.0
    assert params.operating_days == 320.0


def test_intensities_cover_every_entered_material():
    intensities = intensities_from_mapping({})
    assert set(intensities) == {m.name for m in REFERENCE_TABLE.entered_materials()}
    assert all(v == 0.0 for v in intensities.values())
    assert HOT_METAL not in intensities
    assert SCRAP not in intensities


def test_intensities_coerce_and_pass_through_unknown_names():
    intensities = intensities_from_mapping({"lime": "45", "electrode": "", "mystery": "3"})
    assert intensities["lime"] == 45.0
    assert intensities["electrode"] == 0.0
    assert intensities["mystery"] == 3.0


@pytest.mark.parametrize("raw", ["1,5", "12,34", "0,75", "1,2345", ",5", "1,,000"])
def test_decimal_commas_are_rejected_not_read_as_thousands(raw):
    assert coerce_float(raw) == 0.0
    assert coerce_float(raw, default=2.0) == 2.0
