"""Pure loan calculators."""

from .financial import (
    amortization_schedule,
    amortize,
    calc_loan_payment,
    calc_monthly_insurance,
    get_insurance_rate,
)

__all__ = [
    "amortization_schedule",
    "amortize",
    "calc_loan_payment",
    "calc_monthly_insurance",
    "get_insurance_rate",
]
