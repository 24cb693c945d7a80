import matplotlib

matplotlib.use("Agg")

import pytest

from eaf_carbon.engine import ProcessParameters, calculate


@pytest.fixture
def parameters():
    return ProcessParameters(
        capacity=100.0,
        cycle_minutes=60.0,
        operating_days=320.0,
        steel_charge_ratio=1.087,
        scrap_ratio=0.7,
    )


@pytest.fixture
def intensities():
    return {
        "natural_gas": 20.0,
        "lime": 40.0,
        "light_burned_dolomite": 10.0,
        "electrode": 1.5,
        "carburiser": 8.0,
        "alloy": 15.0,
        "electricity": 380.0,
        "recovered_steam": 0.0,
        "billet": 0.0,
    }


@pytest.fixture
def result(parameters, intensities):
    return calculate(parameters, intensities)
