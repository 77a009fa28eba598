"""The single projection entry point: accumulation -> decumulation -> assessment."""

from __future__ import annotations

from typing import List, Optional

from retirement_estimator.config import RiskThresholds
from retirement_estimator.constants import MAX_AGE, MAX_YEARS_IN_RETIREMENT
from retirement_estimator.core.accumulation import accumulated_balance, simulate_accumulation
from retirement_estimator.core.assessment import assess
from retirement_estimator.core.decumulation import simulate_decumulation
from retirement_estimator.core.errors import (
    InvalidAgeRange,
    InvalidHorizon,
    ProjectionValidationError,
)
from retirement_estimator.schemas.projection import (
    AccumulationYear,
    ProjectionInput,
    ProjectionResult,
)


def check_structure(projection_input: ProjectionInput) -> None:
    """Raise before any simulation work if ages or horizon make no sense."""
    current_age = projection_input.currentAge
    retirement_age = projection_input.retirementAge
    years = projection_input.yearsInRetirement

    if current_age < 0:
        raise InvalidAgeRange(current_age, retirement_age, f"currentAge must not be negative, got {current_age}")
    if retirement_age > MAX_AGE:
        raise InvalidAgeRange(
            current_age, retirement_age, f"retirementAge must be at most {MAX_AGE}, got {retirement_age}"
        )
    if retirement_age <= current_age:
        raise InvalidAgeRange(current_age, retirement_age)
    if years <= 0:
        raise InvalidHorizon(years)
    if years > MAX_YEARS_IN_RETIREMENT:
        raise InvalidHorizon(years, f"yearsInRetirement must be at most {MAX_YEARS_IN_RETIREMENT}, got {years}")


def final_working_income(trajectory: List[AccumulationYear], current_income: float) -> float:
    if not trajectory:
        return float(current_income)
    return trajectory[-1].income


def project(
    projection_input: ProjectionInput,
    thresholds: Optional[RiskThresholds] = None,
) -> ProjectionResult:
    """
    Run the full projection for one scenario.

    Pure and deterministic: the same input always yields the same result,
    so callers may memoize on the input. Rates large enough to overflow a
    float over the run fail as a ProjectionValidationError.
    """
    check_structure(projection_input)
    thresholds = thresholds or RiskThresholds()
    p = projection_input

    try:
        accumulation = simulate_accumulation(
            current_age=p.currentAge,
            retirement_age=p.retirementAge,
            current_savings=p.currentSavings,
            annual_contribution=p.annualContribution,
            pre_retirement_return=p.preRetirementReturn,
            starting_income=p.currentIncome,
            income_growth_rate=p.incomeGrowthRate,
            contribution_grows_with_income=p.contributionGrowsWithIncome,
        )
    except OverflowError as exc:
        raise ProjectionValidationError(
            [f"incomeGrowthRate {p.incomeGrowthRate} overflows over {p.retirementAge - p.currentAge} working years"]
        ) from exc
    savings_at_retirement = accumulated_balance(accumulation, p.currentSavings)

    required_income = final_working_income(accumulation, p.currentIncome) * p.incomeReplacementRatio

    try:
        decumulation, depletion_age, final_balance = simulate_decumulation(
            retirement_age=p.retirementAge,
            years_in_retirement=p.yearsInRetirement,
            starting_balance=savings_at_retirement,
            required_first_year_income=required_income,
            inflation_rate=p.inflationRate,
            guaranteed_monthly_benefit=p.guaranteedMonthlyBenefit,
            retirement_return=p.retirementReturn,
            index_benefits=p.indexBenefits,
        )
    except OverflowError as exc:
        raise ProjectionValidationError(
            [f"inflationRate {p.inflationRate} overflows over {p.yearsInRetirement} retirement years"]
        ) from exc

    assessment = assess(accumulation, decumulation, depletion_age, thresholds)

    return ProjectionResult(
        accumulationTrajectory=accumulation,
        decumulationTrajectory=decumulation,
        totalSavingsAtRetirement=savings_at_retirement,
        requiredAnnualIncome=required_income,
        averageWithdrawalRate=assessment.averageWithdrawalRate,
        depletionAge=depletion_age,
        finalBalance=final_balance,
        fundsLastThroughRetirement=depletion_age is None,
        riskLevel=assessment.riskLevel,
    )


__all__ = ["check_structure", "final_working_income", "project"]
