"""Decumulation phase: withdrawals through retirement."""

from __future__ import annotations

from typing import List, Optional, Tuple

from retirement_estimator.constants import MONTHS_PER_YEAR
from retirement_estimator.schemas.projection import DecumulationYear


def simulate_decumulation(
    retirement_age: int,
    years_in_retirement: int,
    starting_balance: float,
    required_first_year_income: float,
    inflation_rate: float,
    guaranteed_monthly_benefit: float,
    retirement_return: float,
    index_benefits: bool = False,
) -> Tuple[List[DecumulationYear], Optional[int], float]:
    """
    Draw the portfolio down for years_in_retirement years.

    Conventions (per year):
      1) Required income = first-year requirement grown by inflation.
      2) Guaranteed benefits are nominally flat unless index_benefits,
         in which case they grow with the same inflation.
      3) Withdrawal = max(0, required - benefits).
      4) Growth on the opening balance, then the withdrawal at year end;
         the balance is floored at zero.

    The trajectory always has years_in_retirement rows. Once depleted, later
    rows show a zero balance and the whole withdrawal as unmet need.

    Returns (trajectory, depletion_age or None, final_balance).
    """
    rows: List[DecumulationYear] = []
    depletion_age: Optional[int] = None

    balance = max(0.0, float(starting_balance))
    base_benefits = guaranteed_monthly_benefit * MONTHS_PER_YEAR

    for year in range(years_in_retirement):
        age = retirement_age + year
        inflation_factor = (1.0 + inflation_rate) ** year

        required = required_first_year_income * inflation_factor
        benefits = base_benefits * inflation_factor if index_benefits else base_benefits
        withdrawal = max(0.0, required - benefits)

        opening = balance
        available = max(0.0, opening * (1.0 + retirement_return))
        balance = max(0.0, available - withdrawal)
        unmet = max(0.0, withdrawal - available)

        rate = withdrawal / opening if opening > 0 else 0.0

        if depletion_age is None and balance <= 0 and withdrawal > 0:
            depletion_age = age

        rows.append(
            DecumulationYear(
                age=age,
                requiredAnnualIncome=required,
                guaranteedBenefitIncome=benefits,
                annualWithdrawal=withdrawal,
                withdrawalRate=rate,
                openingBalance=opening,
                closingBalance=balance,
                unmetNeed=unmet,
            )
        )

    return rows, depletion_age, balance
