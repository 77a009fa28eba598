"""Accumulation phase: savings growth over the working years."""

from __future__ import annotations

from typing import List, Sequence

from retirement_estimator.schemas.projection import AccumulationYear


def simulate_accumulation(
    current_age: int,
    retirement_age: int,
    current_savings: float,
    annual_contribution: float,
    pre_retirement_return: float,
    starting_income: float,
    income_growth_rate: float,
    contribution_grows_with_income: bool = False,
) -> List[AccumulationYear]:
    """
    Build one record per working age, current_age..retirement_age - 1.

    Order of operations (per year), ordinary annuity convention:
      1) Apply GROWTH to the opening balance only.
      2) Credit the contribution at year end (not grown this year).

    With contribution_grows_with_income the contribution follows income,
    annual_contribution * (1 + income_growth_rate)^year; otherwise it stays
    at the nominal annual_contribution for the whole run.
    """
    schedule: List[AccumulationYear] = []

    balance = float(current_savings)
    for year, age in enumerate(range(current_age, retirement_age)):
        income_factor = (1.0 + income_growth_rate) ** year
        income = starting_income * income_factor
        contribution = annual_contribution * income_factor if contribution_grows_with_income else annual_contribution

        opening = balance
        # floored: a return below -100% cannot leave a negative balance
        balance = max(0.0, opening * (1.0 + pre_retirement_return) + contribution)

        schedule.append(
            AccumulationYear(
                age=age,
                income=income,
                contribution=contribution,
                openingBalance=opening,
                closingBalance=balance,
            )
        )

    return schedule


def accumulated_balance(schedule: Sequence[AccumulationYear], current_savings: float) -> float:
    """Balance at retirement; an empty schedule leaves the savings untouched."""
    if not schedule:
        return float(current_savings)
    return schedule[-1].closingBalance


def future_value(
    present_value: float,
    annual_contribution: float,
    rate: float,
    years: int,
) -> float:
    """Closed form of the same ordinary annuity the simulator iterates.

    FV = PV * (1 + r)^n + C * ((1 + r)^n - 1) / r, or PV + C * n when r == 0.
    """
    if years <= 0:
        return float(present_value)
    growth = (1.0 + rate) ** years
    if rate == 0:
        return present_value + annual_contribution * years
    return present_value * growth + annual_contribution * (growth - 1.0) / rate
