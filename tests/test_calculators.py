"""
Calculation dispatcher tests — the five built-in formulas and error handling.

Tests:
1-4.   Fertilizer requirement
5-8.   Chicken feed daily
9-14.  Livestock medicine dosage
15-18. Harvest estimation
19-22. Planting cost
23-28. Dispatcher errors (slug, input shape, unknown formula)
29-31. Edge cases (very small / very large numbers, precision)
32-35. Float range (overflowing results, oversized integers)
"""

import math

import pytest

from tanihitung.calculators.dispatcher import calculate, validate_input
from tanihitung.calculators.livestock_medicine_dosage import LivestockMedicineDosageInput
from tanihitung.errors import BadRequestError, UnknownFormulaError, ValidationFailedError


# ============================================================
# fertilizer-requirement
# ============================================================

def test_fertilizer_requirement():
    result = calculate("fertilizer-requirement", {"areaHa": 2.5, "doseKgPerHa": 100})
    assert result.result_value == 250
    assert result.unit_label == "kg"
    assert result.additional_results is None


def test_fertilizer_decimal_area():
    result = calculate("fertilizer-requirement", {"areaHa": 1.75, "doseKgPerHa": 120})
    assert result.result_value == 210
    assert result.unit_label == "kg"


@pytest.mark.parametrize("area", [-1, 0, "invalid", "2.5", None, True])
def test_fertilizer_invalid_area(area):
    with pytest.raises(ValidationFailedError, match=r"(?i)area.*positive") as exc:
        calculate("fertilizer-requirement", {"areaHa": area, "doseKgPerHa": 100})
    assert exc.value.field == "areaHa"


@pytest.mark.parametrize("dose", [0, "invalid"])
def test_fertilizer_invalid_dose(dose):
    with pytest.raises(ValidationFailedError, match=r"(?i)dose.*positive") as exc:
        calculate("fertilizer-requirement", {"areaHa": 2.5, "doseKgPerHa": dose})
    assert exc.value.field == "doseKgPerHa"


# ============================================================
# chicken-feed-daily
# ============================================================

def test_chicken_feed_daily():
    result = calculate("chicken-feed-daily", {"chickenCount": 50, "feedKgPerChickenPerDay": 0.12})
    assert result.result_value == pytest.approx(6)
    assert result.unit_label == "kg/day"
    assert result.additional_results is None


def test_chicken_feed_large_flock():
    result = calculate("chicken-feed-daily", {"chickenCount": 1000, "feedKgPerChickenPerDay": 0.15})
    assert result.result_value == pytest.approx(150)


def test_chicken_count_integral_float_accepted():
    """JSON 50.0 is still a whole number of chickens."""
    result = calculate("chicken-feed-daily", {"chickenCount": 50.0, "feedKgPerChickenPerDay": 0.1})
    assert result.result_value == pytest.approx(5)


@pytest.mark.parametrize("count", [-5, 5.5, "invalid", 0])
def test_chicken_feed_invalid_count(count):
    with pytest.raises(ValidationFailedError, match=r"(?i)chicken count.*positive integer"):
        calculate("chicken-feed-daily", {"chickenCount": count, "feedKgPerChickenPerDay": 0.12})


@pytest.mark.parametrize("feed", [0, -0.1])
def test_chicken_feed_invalid_feed(feed):
    with pytest.raises(ValidationFailedError, match=r"(?i)feed.*positive"):
        calculate("chicken-feed-daily", {"chickenCount": 50, "feedKgPerChickenPerDay": feed})


# ============================================================
# livestock-medicine-dosage
# ============================================================

def test_medicine_dosage_without_concentration():
    result = calculate("livestock-medicine-dosage", {"weightKg": 25, "doseMgPerKg": 10})
    assert result.result_value == 250
    assert result.unit_label == "mg"
    assert result.additional_results is None
    assert "additional_results" not in result.to_dict()


def test_medicine_dosage_with_concentration():
    result = calculate("livestock-medicine-dosage",
                       {"weightKg": 25, "doseMgPerKg": 10, "concentrationMgPerMl": 50})
    assert result.result_value == 250
    assert result.unit_label == "mg"
    assert result.additional_results == {"volumeMl": 5}


def test_medicine_dosage_high_precision():
    result = calculate("livestock-medicine-dosage",
                       {"weightKg": 22.5, "doseMgPerKg": 7.5, "concentrationMgPerMl": 25})
    assert result.result_value == 168.75
    assert result.additional_results["volumeMl"] == 6.75


def test_medicine_dosage_null_concentration_is_absent():
    result = calculate("livestock-medicine-dosage",
                       {"weightKg": 25, "doseMgPerKg": 10, "concentrationMgPerMl": None})
    assert result.additional_results is None


@pytest.mark.parametrize("concentration", [-5, 0, "50", math.inf])
def test_medicine_dosage_invalid_concentration(concentration):
    with pytest.raises(ValidationFailedError, match=r"(?i)concentration.*positive"):
        calculate("livestock-medicine-dosage",
                  {"weightKg": 25, "doseMgPerKg": 10, "concentrationMgPerMl": concentration})


def test_medicine_dosage_invalid_weight_and_dose():
    with pytest.raises(ValidationFailedError, match=r"(?i)weight.*positive"):
        calculate("livestock-medicine-dosage", {"weightKg": 0, "doseMgPerKg": 10})
    with pytest.raises(ValidationFailedError, match=r"(?i)weight.*positive"):
        calculate("livestock-medicine-dosage", {"weightKg": "heavy", "doseMgPerKg": 10})
    with pytest.raises(ValidationFailedError, match=r"(?i)dose.*positive"):
        calculate("livestock-medicine-dosage", {"weightKg": 25, "doseMgPerKg": -10})


def test_required_fields_checked_before_optional():
    """Both weight and concentration are bad — weight is reported."""
    with pytest.raises(ValidationFailedError) as exc:
        calculate("livestock-medicine-dosage",
                  {"concentrationMgPerMl": -1, "doseMgPerKg": 10, "weightKg": -1})
    assert exc.value.field == "weightKg"


# ============================================================
# harvest-estimation
# ============================================================

def test_harvest_estimation():
    result = calculate("harvest-estimation", {"areaHa": 3.0, "yieldTonPerHa": 5.5})
    assert result.result_value == 16.5
    assert result.unit_label == "ton"
    assert result.additional_results is None


def test_harvest_small_area():
    result = calculate("harvest-estimation", {"areaHa": 0.5, "yieldTonPerHa": 2.5})
    assert result.result_value == 1.25


def test_harvest_invalid_area():
    with pytest.raises(ValidationFailedError, match=r"(?i)area.*positive"):
        calculate("harvest-estimation", {"areaHa": 0, "yieldTonPerHa": 5})


def test_harvest_invalid_yield():
    with pytest.raises(ValidationFailedError, match=r"(?i)yield.*positive"):
        calculate("harvest-estimation", {"areaHa": 3, "yieldTonPerHa": -1})


# ============================================================
# planting-cost
# ============================================================

def test_planting_cost():
    result = calculate("planting-cost", {"areaHa": 2.0, "costRpPerHa": 1_500_000})
    assert result.result_value == 3_000_000
    assert result.unit_label == "Rp"
    assert result.additional_results is None


def test_planting_cost_large():
    result = calculate("planting-cost", {"areaHa": 10, "costRpPerHa": 2_000_000})
    assert result.result_value == 20_000_000


def test_planting_cost_invalid_area():
    with pytest.raises(ValidationFailedError, match=r"(?i)area.*positive"):
        calculate("planting-cost", {"areaHa": -2, "costRpPerHa": 1_500_000})


def test_planting_cost_invalid_cost():
    with pytest.raises(ValidationFailedError, match=r"(?i)cost.*positive"):
        calculate("planting-cost", {"areaHa": 2, "costRpPerHa": 0})


# ============================================================
# Dispatcher errors
# ============================================================

def test_unknown_slug():
    with pytest.raises(UnknownFormulaError, match=r"(?i)unknown calculator slug: unknown-calculator"):
        calculate("unknown-calculator", {"someInput": 10})


@pytest.mark.parametrize("slug", ["", None])
def test_missing_slug(slug):
    with pytest.raises(BadRequestError, match=r"(?i)slug.*required"):
        calculate(slug, {"someInput": 10})


@pytest.mark.parametrize("data", [None, "invalid", [1, 2], 42])
def test_invalid_input(data):
    with pytest.raises(BadRequestError, match=r"(?i)valid input.*required"):
        calculate("fertilizer-requirement", data)


def test_slug_checked_before_input():
    with pytest.raises(BadRequestError, match="slug is required"):
        calculate("", None)


def test_unknown_slug_is_not_a_validation_error():
    with pytest.raises(UnknownFormulaError) as exc:
        calculate("unknown-calculator", {})
    assert not isinstance(exc.value, ValidationFailedError)


def test_nan_and_infinity_rejected():
    for bad in (math.nan, math.inf, -math.inf):
        with pytest.raises(ValidationFailedError, match=r"(?i)area.*positive number"):
            calculate("fertilizer-requirement", {"areaHa": bad, "doseKgPerHa": 100})


# ============================================================
# Edge cases
# ============================================================

def test_very_small_numbers():
    result = calculate("fertilizer-requirement", {"areaHa": 0.001, "doseKgPerHa": 0.1})
    assert result.result_value == pytest.approx(0.0001)


def test_very_large_numbers():
    result = calculate("planting-cost", {"areaHa": 1000, "costRpPerHa": 10_000_000})
    assert result.result_value == 10_000_000_000


def test_precise_decimal_calculation():
    result = calculate("livestock-medicine-dosage",
                       {"weightKg": 33.33, "doseMgPerKg": 0.75, "concentrationMgPerMl": 12.5})
    assert result.result_value == pytest.approx(24.9975)
    assert result.additional_results["volumeMl"] == pytest.approx(1.9998, abs=1e-4)


def test_extra_fields_are_ignored():
    result = calculate("harvest-estimation", {"areaHa": 2, "yieldTonPerHa": 3, "note": "north field"})
    assert result.result_value == 6


def test_validate_input_returns_typed_input():
    parsed = validate_input("livestock-medicine-dosage", {"weightKg": 25, "doseMgPerKg": 10})
    assert parsed == LivestockMedicineDosageInput(weight_kg=25, dose_mg_per_kg=10,
                                                  concentration_mg_per_ml=None)


# ============================================================
# Float range
# ============================================================

def test_result_past_float_range_is_rejected():
    with pytest.raises(ValidationFailedError) as exc:
        calculate("fertilizer-requirement", {"areaHa": 1e300, "doseKgPerHa": 1e300})
    assert exc.value.field == "result_value"
    assert exc.value.to_dict()["kind"] == "validation_failed"


def test_additional_result_past_float_range_is_rejected():
    with pytest.raises(ValidationFailedError) as exc:
        calculate("livestock-medicine-dosage",
                  {"weightKg": 1e300, "doseMgPerKg": 1, "concentrationMgPerMl": 1e-300})
    assert exc.value.field == "volumeMl"


def test_int_too_large_for_float_rejected():
    with pytest.raises(ValidationFailedError, match=r"(?i)chicken count.*positive integer"):
        calculate("chicken-feed-daily", {"chickenCount": 10**400, "feedKgPerChickenPerDay": 0.12})
    with pytest.raises(ValidationFailedError, match=r"(?i)area.*positive number"):
        calculate("fertilizer-requirement", {"areaHa": 10**400, "doseKgPerHa": 100})


def test_large_int_input_uses_float_arithmetic():
    result = calculate("fertilizer-requirement", {"areaHa": 10**20, "doseKgPerHa": 2})
    assert isinstance(result.result_value, float)
    assert result.result_value == 2e20

    parsed = validate_input("chicken-feed-daily",
                            {"chickenCount": 10**20, "feedKgPerChickenPerDay": 0.12})
    assert parsed.chicken_count == 10**20
    assert isinstance(parsed.chicken_count, int)
