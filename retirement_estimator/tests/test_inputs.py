from __future__ import annotations

from math import isclose

import pytest

from retirement_estimator.config import ProjectionDefaults, Settings
from retirement_estimator.domain.inputs import (
    InputPreparationError,
    PlannerForm,
    build_projection_input,
    is_ready_for_projection,
    missing_fields,
    savings_rate,
)
from retirement_estimator.domain.units import Percentage, Ratio, percentage_to_ratio


def load_form(**overrides) -> PlannerForm:
    form = {
        "currentAge": 35,
        "retirementAge": 65,
        "annualIncome": 80000,
        "savings": [
            {"type": "rrsp", "amount": 30000},
            {"type": "tfsa", "amount": 20000},
            {"type": "", "amount": 0},
        ],
        "monthlyContributions": [
            {"type": "rrsp", "amount": 300},
            {"type": "tfsa", "amount": 200},
        ],
        "expectedReturnType": "balanced",
        "incomeReplacementPercent": 70,
    }
    form.update(overrides)
    return PlannerForm.model_validate(form)


def test_empty_form_reports_mandatory_fields():
    form = PlannerForm()

    assert missing_fields(form) == ["currentAge", "retirementAge", "annualIncome"]
    assert not is_ready_for_projection(form)


def test_zero_income_counts_as_missing():
    assert missing_fields(load_form(annualIncome=0)) == ["annualIncome"]


def test_retirement_age_must_follow_current_age():
    with pytest.raises(InputPreparationError) as excinfo:
        build_projection_input(load_form(retirementAge=30))

    assert any("retirementAge" in message for message in excinfo.value.errors)


def test_build_applies_entries_presets_and_defaults():
    projection_input = build_projection_input(load_form())

    assert projection_input.currentSavings == 50000.0
    assert projection_input.annualContribution == 6000.0
    assert projection_input.contributionGrowsWithIncome is False
    assert projection_input.preRetirementReturn == 0.065
    assert projection_input.retirementReturn == 0.065
    assert isclose(projection_input.incomeReplacementRatio, 0.70, rel_tol=1e-12)
    assert projection_input.cppBenefit == 1433.0
    assert projection_input.oasBenefit == 727.67
    assert projection_input.yearsInRetirement == 25
    assert projection_input.inflationRate == 0.025
    assert projection_input.incomeGrowthRate == 0.021


def test_percent_fields_are_converted_once():
    projection_input = build_projection_input(
        load_form(incomeGrowthRate=3, inflationRate=2, incomeReplacementPercent=85)
    )

    assert isclose(projection_input.incomeGrowthRate, 0.03, rel_tol=1e-12)
    assert isclose(projection_input.inflationRate, 0.02, rel_tol=1e-12)
    assert isclose(projection_input.incomeReplacementRatio, 0.85, rel_tol=1e-12)


def test_explicit_zero_benefits_are_kept():
    projection_input = build_projection_input(load_form(cppBenefit=0, oasBenefit=0, companyPension=500))

    assert projection_input.cppBenefit == 0.0
    assert projection_input.oasBenefit == 0.0
    assert projection_input.guaranteedMonthlyBenefit == 500.0


def test_savings_rate_mode_tracks_income():
    projection_input = build_projection_input(
        load_form(contributionMode="rate", savingsRatePercent=10)
    )

    assert isclose(projection_input.annualContribution, 8000.0, rel_tol=1e-12)
    assert projection_input.contributionGrowsWithIncome is True
    assert isclose(savings_rate(projection_input), 0.10, rel_tol=1e-12)


def test_explicit_returns_without_investment_approach():
    projection_input = build_projection_input(
        load_form(expectedReturnType=None, retirementReturn=4)
    )

    assert projection_input.preRetirementReturn == 0.06
    assert isclose(projection_input.retirementReturn, 0.04, rel_tol=1e-12)


@pytest.mark.parametrize(
    "lifestyle, ratio",
    [("conservative", 0.60), ("balanced", 0.70), ("maintain", 0.80)],
)
def test_lifestyle_presets(lifestyle, ratio):
    projection_input = build_projection_input(load_form(retirementLifestyle=lifestyle))

    assert projection_input.incomeReplacementRatio == ratio


def test_custom_ratio_outside_accepted_range_is_rejected():
    with pytest.raises(InputPreparationError) as excinfo:
        build_projection_input(load_form(retirementLifestyle="custom", incomeReplacementPercent=150))

    assert any("incomeReplacementPercent" in message for message in excinfo.value.errors)


def test_custom_defaults_table_is_used():
    settings = Settings(defaults=ProjectionDefaults(yearsInRetirement=30, cppBenefit=1000.0))

    projection_input = build_projection_input(load_form(), settings)

    assert projection_input.yearsInRetirement == 30
    assert projection_input.cppBenefit == 1000.0


def test_unknown_form_fields_are_rejected():
    with pytest.raises(ValueError):
        PlannerForm.model_validate({"currentAge": 30, "favouriteColour": "blue"})


def test_percentage_to_ratio_refuses_ratios():
    assert isclose(percentage_to_ratio(Percentage(70)), 0.7, rel_tol=1e-12)
    assert isinstance(percentage_to_ratio(Percentage(70)), Ratio)

    with pytest.raises(TypeError):
        percentage_to_ratio(Ratio(0.7))
