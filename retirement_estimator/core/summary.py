"""Headline figures for the results display and the report generator.

Everything here is read off a ProjectionResult; no growth is recomputed.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from retirement_estimator.config import RiskThresholds
from retirement_estimator.constants import MONTHS_PER_YEAR
from retirement_estimator.core.projection import final_working_income
from retirement_estimator.domain.inputs import savings_rate
from retirement_estimator.schemas.projection import ProjectionInput, ProjectionResult, RiskLevel

INDICATOR_COLORS = {
    RiskLevel.SAFE: "green",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.HIGH_RISK: "red",
}


class OutcomeSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    yearsToRetirement: int
    finalWorkingIncome: float
    targetMonthlyIncome: float
    guaranteedMonthlyBenefit: float
    netRequiredMonthlyWithdrawal: float
    firstYearWithdrawal: float
    sustainableMonthlyIncome: float
    coverageRatio: float
    savingsRate: float
    statusMessage: str
    indicatorColor: Literal["green", "yellow", "red"]


def status_message(result: ProjectionResult) -> str:
    if result.fundsLastThroughRetirement:
        return f"Funds last entire retirement with ${round(result.finalBalance):,} remaining"
    return f"Funds depleted at age {result.depletionAge}"


def summarize(
    projection_input: ProjectionInput,
    result: ProjectionResult,
    thresholds: Optional[RiskThresholds] = None,
) -> OutcomeSummary:
    thresholds = thresholds or RiskThresholds()

    target_monthly = result.requiredAnnualIncome / MONTHS_PER_YEAR
    benefits_monthly = projection_input.guaranteedMonthlyBenefit
    net_monthly = max(0.0, target_monthly - benefits_monthly)

    # income the retirement balance supports at the SAFE withdrawal rate
    sustainable_monthly = result.totalSavingsAtRetirement * thresholds.safe_max / MONTHS_PER_YEAR
    if net_monthly > 0:
        coverage = min(1.0, max(0.0, sustainable_monthly / net_monthly))
    else:
        coverage = 1.0

    first_withdrawal = (
        result.decumulationTrajectory[0].annualWithdrawal if result.decumulationTrajectory else 0.0
    )

    return OutcomeSummary(
        yearsToRetirement=projection_input.retirementAge - projection_input.currentAge,
        finalWorkingIncome=final_working_income(
            result.accumulationTrajectory, projection_input.currentIncome
        ),
        targetMonthlyIncome=target_monthly,
        guaranteedMonthlyBenefit=benefits_monthly,
        netRequiredMonthlyWithdrawal=net_monthly,
        firstYearWithdrawal=first_withdrawal,
        sustainableMonthlyIncome=sustainable_monthly,
        coverageRatio=coverage,
        savingsRate=savings_rate(projection_input),
        statusMessage=status_message(result),
        indicatorColor=INDICATOR_COLORS[result.riskLevel],
    )
