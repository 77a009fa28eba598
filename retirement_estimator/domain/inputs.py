from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from retirement_estimator.config import DEFAULT_SETTINGS, Settings
from retirement_estimator.constants import (
    MAX_CUSTOM_REPLACEMENT_RATIO,
    MIN_CUSTOM_REPLACEMENT_RATIO,
    MONTHS_PER_YEAR,
)
from retirement_estimator.domain.units import Percentage, Ratio, percentage_to_ratio
from retirement_estimator.schemas.projection import ProjectionInput

AccountType = Literal["rrsp", "tfsa", "otherRegistered", "nonRegistered"]


class InputPreparationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class SavingsEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Optional[AccountType] = None
    amount: float = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def blank_type_is_unset(cls, value):
        return value or None


class PlannerForm(BaseModel):
    """Raw wizard state. Rates are on the 0-100 scale, benefits are monthly."""

    model_config = ConfigDict(extra="forbid")

    # About you
    currentAge: Optional[int] = Field(default=None, ge=0, le=120)
    retirementAge: Optional[int] = Field(default=None, ge=0, le=120)
    yearsInRetirement: Optional[int] = Field(default=None, ge=1, le=80)
    province: Optional[str] = None
    maritalStatus: Optional[str] = None
    annualIncome: Optional[float] = None
    incomeGrowthRate: Optional[float] = None

    # Current savings
    savings: List[SavingsEntry] = Field(default_factory=list)
    monthlyContributions: List[SavingsEntry] = Field(default_factory=list)
    contributionMode: Literal["fixed", "rate"] = "fixed"
    savingsRatePercent: Optional[float] = None
    expectedReturnType: Optional[Literal["conservative", "balanced", "growth"]] = None
    preRetirementReturn: Optional[float] = None
    retirementReturn: Optional[float] = None

    # Income & goals
    retirementLifestyle: Optional[Literal["conservative", "balanced", "maintain", "custom"]] = None
    incomeReplacementPercent: Optional[float] = None
    cppBenefit: Optional[float] = None
    oasBenefit: Optional[float] = None
    companyPension: Optional[float] = None
    otherIncome: Optional[float] = None
    inflationRate: Optional[float] = None
    indexBenefits: bool = False

    @field_validator("expectedReturnType", "retirementLifestyle", mode="before")
    @classmethod
    def blank_choice_is_unset(cls, value):
        return value or None


def missing_fields(form: PlannerForm) -> List[str]:
    """Mandatory fields that are unset or zero."""
    return [
        name
        for name in ("currentAge", "retirementAge", "annualIncome")
        if not getattr(form, name)
    ]


def preparation_errors(form: PlannerForm) -> List[str]:
    errors = [f"{name} is required" for name in missing_fields(form)]

    if form.currentAge and form.retirementAge and form.retirementAge <= form.currentAge:
        errors.append("retirementAge must be greater than currentAge")

    if _uses_custom_ratio(form) and form.incomeReplacementPercent is not None:
        ratio = percentage_to_ratio(Percentage(form.incomeReplacementPercent))
        if not MIN_CUSTOM_REPLACEMENT_RATIO <= ratio <= MAX_CUSTOM_REPLACEMENT_RATIO:
            errors.append(
                f"incomeReplacementPercent must be between "
                f"{MIN_CUSTOM_REPLACEMENT_RATIO:.0%} and {MAX_CUSTOM_REPLACEMENT_RATIO:.0%}"
            )

    return errors


def is_ready_for_projection(form: PlannerForm) -> bool:
    return not preparation_errors(form)


def _uses_custom_ratio(form: PlannerForm) -> bool:
    return form.retirementLifestyle in (None, "custom")


def _ratio_or_default(value: Optional[float], default: float) -> Ratio:
    if value is None:
        return Ratio(default)
    return percentage_to_ratio(Percentage(value))


def _replacement_ratio(form: PlannerForm, settings: Settings) -> Ratio:
    if not _uses_custom_ratio(form):
        return Ratio(settings.lifestyle_ratios[form.retirementLifestyle])
    return _ratio_or_default(form.incomeReplacementPercent, settings.defaults.incomeReplacementRatio)


def _return_rates(form: PlannerForm, settings: Settings) -> tuple[Ratio, Ratio]:
    if form.expectedReturnType and form.expectedReturnType in settings.return_presets:
        preset = settings.return_presets[form.expectedReturnType]
        return Ratio(preset.preRetirementReturn), Ratio(preset.retirementReturn)
    return (
        _ratio_or_default(form.preRetirementReturn, settings.defaults.preRetirementReturn),
        _ratio_or_default(form.retirementReturn, settings.defaults.retirementReturn),
    )


def total_savings(entries: List[SavingsEntry]) -> float:
    return sum(entry.amount for entry in entries)


def build_projection_input(form: PlannerForm, settings: Settings = DEFAULT_SETTINGS) -> ProjectionInput:
    """
    Turn wizard state into an immutable ProjectionInput.

    Defaults from settings are applied here and nowhere else, and every
    percentage crosses to a ratio through percentage_to_ratio exactly once.
    """
    errors = preparation_errors(form)
    if errors:
        raise InputPreparationError(errors)

    defaults = settings.defaults
    income = float(form.annualIncome)

    if form.contributionMode == "rate":
        rate = _ratio_or_default(form.savingsRatePercent, 0.0)
        annual_contribution = rate * income
        grows_with_income = True
    else:
        annual_contribution = total_savings(form.monthlyContributions) * MONTHS_PER_YEAR
        grows_with_income = False

    pre_return, post_return = _return_rates(form, settings)

    return ProjectionInput(
        currentAge=form.currentAge,
        retirementAge=form.retirementAge,
        yearsInRetirement=form.yearsInRetirement or defaults.yearsInRetirement,
        currentIncome=income,
        currentSavings=total_savings(form.savings),
        annualContribution=annual_contribution,
        contributionGrowsWithIncome=grows_with_income,
        incomeReplacementRatio=_replacement_ratio(form, settings),
        cppBenefit=defaults.cppBenefit if form.cppBenefit is None else form.cppBenefit,
        oasBenefit=defaults.oasBenefit if form.oasBenefit is None else form.oasBenefit,
        companyPension=form.companyPension or 0.0,
        otherIncome=form.otherIncome or 0.0,
        indexBenefits=form.indexBenefits,
        preRetirementReturn=pre_return,
        retirementReturn=post_return,
        incomeGrowthRate=_ratio_or_default(form.incomeGrowthRate, defaults.incomeGrowthRate),
        inflationRate=_ratio_or_default(form.inflationRate, defaults.inflationRate),
    )


def savings_rate(projection_input: ProjectionInput) -> Ratio:
    """First-year contribution as a fraction of current income."""
    if projection_input.currentIncome <= 0:
        return Ratio(0.0)
    return Ratio(projection_input.annualContribution / projection_input.currentIncome)
