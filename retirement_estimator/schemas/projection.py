"""Data contracts for the projection engine."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from retirement_estimator.constants import MAX_REPLACEMENT_RATIO


class ProjectionInput(BaseModel):
    """Immutable snapshot of every assumption a projection run needs.

    All rates are ratios (0.065 for 6.5%). Benefit amounts are monthly.
    Currency fields are clamped to zero rather than rejected; ages and the
    retirement horizon are checked by ``project``.

    Assumptions carry no defaults here: ``build_projection_input`` fills the
    gaps from ``ProjectionDefaults``. Only the toggles and the optional
    benefit components default.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAge: int
    retirementAge: int
    yearsInRetirement: int

    currentIncome: float
    currentSavings: float
    annualContribution: float
    contributionGrowsWithIncome: bool = False

    incomeReplacementRatio: float

    cppBenefit: float
    oasBenefit: float
    companyPension: float = 0.0
    otherIncome: float = 0.0
    indexBenefits: bool = False

    preRetirementReturn: float
    retirementReturn: float
    incomeGrowthRate: float
    inflationRate: float

    @field_validator(
        "currentIncome",
        "currentSavings",
        "annualContribution",
        "cppBenefit",
        "oasBenefit",
        "companyPension",
        "otherIncome",
    )
    @classmethod
    def _clamp_negative_amounts(cls, value: float) -> float:
        return max(0.0, value)

    @field_validator("incomeReplacementRatio")
    @classmethod
    def _clamp_replacement_ratio(cls, value: float) -> float:
        return min(max(0.0, value), MAX_REPLACEMENT_RATIO)

    @property
    def guaranteedMonthlyBenefit(self) -> float:
        return self.cppBenefit + self.oasBenefit + self.companyPension + self.otherIncome


class AccumulationYear(BaseModel):
    """Single working year of the accumulation phase."""

    model_config = ConfigDict(frozen=True)

    age: int
    income: float
    contribution: float
    openingBalance: float
    closingBalance: float


class DecumulationYear(BaseModel):
    """Single retirement year of the withdrawal phase."""

    model_config = ConfigDict(frozen=True)

    age: int
    requiredAnnualIncome: float
    guaranteedBenefitIncome: float
    annualWithdrawal: float
    withdrawalRate: float
    openingBalance: float = Field(ge=0)
    closingBalance: float = Field(ge=0)
    # part of annualWithdrawal the portfolio could not fund this year
    unmetNeed: float = 0.0


class RiskLevel(str, Enum):
    SAFE = "SAFE"
    MODERATE = "MODERATE"
    HIGH_RISK = "HIGH_RISK"


class Assessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    riskLevel: RiskLevel
    averageWithdrawalRate: float


class ProjectionResult(BaseModel):
    """Everything the results display and report generator consume."""

    model_config = ConfigDict(frozen=True)

    accumulationTrajectory: List[AccumulationYear]
    decumulationTrajectory: List[DecumulationYear]
    totalSavingsAtRetirement: float
    requiredAnnualIncome: float
    averageWithdrawalRate: float
    depletionAge: Optional[int] = None
    finalBalance: float
    fundsLastThroughRetirement: bool
    riskLevel: RiskLevel


__all__ = [
    "ProjectionInput",
    "AccumulationYear",
    "DecumulationYear",
    "RiskLevel",
    "Assessment",
    "ProjectionResult",
]
