"""Sustainability verdict over the two trajectories."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from retirement_estimator.config import RiskThresholds
from retirement_estimator.schemas.projection import (
    AccumulationYear,
    Assessment,
    DecumulationYear,
    RiskLevel,
)

_SEVERITY = {RiskLevel.SAFE: 0, RiskLevel.MODERATE: 1, RiskLevel.HIGH_RISK: 2}


def classify_withdrawal_rate(rate: float, thresholds: Optional[RiskThresholds] = None) -> RiskLevel:
    thresholds = thresholds or RiskThresholds()
    if rate <= thresholds.safe_max:
        return RiskLevel.SAFE
    if rate <= thresholds.moderate_max:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH_RISK


def average_withdrawal_rate(trajectory: Sequence[DecumulationYear]) -> float:
    """Mean rate over the years in which money was actually drawn from the portfolio."""
    rates = [
        row.withdrawalRate
        for row in trajectory
        if row.openingBalance > 0 and row.annualWithdrawal > 0
    ]
    if not rates:
        return 0.0
    return math.fsum(rates) / len(rates)


def _worse(a: RiskLevel, b: RiskLevel) -> RiskLevel:
    return a if _SEVERITY[a] >= _SEVERITY[b] else b


def assess(
    accumulation_trajectory: Sequence[AccumulationYear],
    decumulation_trajectory: Sequence[DecumulationYear],
    depletion_age: Optional[int],
    thresholds: Optional[RiskThresholds] = None,
) -> Assessment:
    """
    Classify the plan from its average withdrawal rate.

    Depletion overrides the rate: running out of money is at least MODERATE,
    and HIGH_RISK when it happens within the first half of retirement.
    """
    thresholds = thresholds or RiskThresholds()
    rate = average_withdrawal_rate(decumulation_trajectory)
    level = classify_withdrawal_rate(rate, thresholds)

    if depletion_age is not None and decumulation_trajectory:
        retirement_age = decumulation_trajectory[0].age
        horizon = len(decumulation_trajectory)
        floor = RiskLevel.HIGH_RISK if depletion_age - retirement_age < horizon / 2 else RiskLevel.MODERATE
        level = _worse(level, floor)

    return Assessment(riskLevel=level, averageWithdrawalRate=rate)
