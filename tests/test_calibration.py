import math

import pytest

from doc_ui.core.calibration import (
    CALIBRATION_PROFILES,
    CalibrationProfile,
    absorbance_proxy,
    estimate_doc,
    get_profile,
)


def test_reference_example():
    assert absorbance_proxy(150, 50) == 355
    assert estimate_doc(150, 50) == pytest.approx(0.02372, abs=1e-3)
    assert estimate_doc(150, 50) == pytest.approx(math.exp((355 - 199.92) / -41.45))


def test_default_profile_constants():
    p = get_profile()
    assert (p.offset, p.slope) == (199.92, -41.45)


def test_darker_water_means_more_doc():
    # lower water blue = more absorbance by the sample
    assert estimate_doc(60, 240) > estimate_doc(200, 240)


def test_custom_profile_is_used():
    p = CalibrationProfile("unit", offset=100.0, slope=-50.0)
    assert estimate_doc(100, 255, p) == pytest.approx(1.0)


def test_registered_b_ws_profile():
    p = CALIBRATION_PROFILES["b_ws"]
    assert estimate_doc(150, 50, p) == pytest.approx(math.exp((355 - 178.36) / -37.23))


def test_zero_slope_rejected():
    with pytest.raises(ValueError):
        CalibrationProfile("broken", 100.0, 0.0)


def test_unknown_profile():
    with pytest.raises(KeyError, match="silver_flowe_all"):
        get_profile("nope")
