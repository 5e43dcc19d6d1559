"""Financial calculation functions.

Loan payment, amortization and borrower insurance for leveraged SCPI purchases.
"""

from __future__ import annotations

import numpy_financial as npf
import pandas as pd

from patrimoine_sim.core.constants import INSURANCE_BRACKETS, INSURANCE_RATE_SENIOR
from patrimoine_sim.core.exceptions import InvalidParameterError

SCHEDULE_COLUMNS = [
    "mois",
    "capital_restant_debut",
    "interet",
    "principal",
    "assurance",
    "paiement_total",
    "capital_restant_fin",
]


def calc_loan_payment(
    principal: float,
    annual_rate_pct: float,
    years: int,
) -> float:
    """Calculate the fixed monthly payment of an amortizing loan (principal + interest).

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate as percentage (e.g., 5.35 for 5.35%)
        years: Loan term in years

    Returns:
        Monthly payment amount in €, 0 for a non-positive principal

    Raises:
        InvalidParameterError: If the term is not positive or the rate is negative
    """
    if principal <= 0:
        return 0.0
    if years <= 0:
        raise InvalidParameterError("years", years, "loan term must be positive")
    if annual_rate_pct < 0:
        raise InvalidParameterError("annual_rate_pct", annual_rate_pct, "rate cannot be negative")

    monthly_rate = (annual_rate_pct / 100.0) / 12.0
    n_months = years * 12

    if monthly_rate == 0:
        return principal / n_months

    return float(-npf.pmt(monthly_rate, n_months, principal))


def amortize(remaining_debt: float, payment: float, monthly_rate: float) -> float:
    """Apply one monthly payment to the outstanding debt and return what is left."""
    interest = remaining_debt * monthly_rate
    principal_portion = payment - interest
    return max(0.0, remaining_debt - principal_portion)


def get_insurance_rate(age: int) -> float:
    """Annual borrower insurance rate (% of borrowed capital) for a given age."""
    for max_age, rate in INSURANCE_BRACKETS:
        if age <= max_age:
            return rate
    return INSURANCE_RATE_SENIOR


def calc_monthly_insurance(principal: float, annual_insurance_pct: float) -> float:
    """Calculate monthly insurance premium on the initial borrowed capital."""
    if principal <= 0:
        return 0.0
    return (principal * (annual_insurance_pct / 100.0)) / 12.0


def amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    years: int,
    annual_insurance_pct: float = 0.0,
) -> pd.DataFrame:
    """Generate the full monthly amortization table of a loan.

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate %
        years: Loan term in years
        annual_insurance_pct: Annual insurance rate %

    Returns:
        DataFrame with one row per month and columns:
        mois, capital_restant_debut, interet, principal, assurance,
        paiement_total, capital_restant_fin
    """
    if principal <= 0:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    monthly_rate = (annual_rate_pct / 100.0) / 12.0
    pmt_pi = calc_loan_payment(principal, annual_rate_pct, years)
    pmt_ins = calc_monthly_insurance(principal, annual_insurance_pct)

    rows = []
    balance = principal
    for month in range(1, years * 12 + 1):
        interest = balance * monthly_rate
        new_balance = amortize(balance, pmt_pi, monthly_rate)
        rows.append({
            "mois": month,
            "capital_restant_debut": balance,
            "interet": interest,
            "principal": balance - new_balance,
            "assurance": pmt_ins,
            "paiement_total": pmt_pi + pmt_ins,
            "capital_restant_fin": new_balance,
        })
        balance = new_balance

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
