"""Projection services."""

from .aggregator import (
    compute_blended_return,
    compute_milestones,
    compute_monthly_effort,
    compute_passive_income,
    compute_simulation,
    livret_label,
)
from .defaults import (
    default_av,
    default_horizon,
    default_per,
    default_scpi,
    default_scpi_credit,
)
from .simulation import (
    BANK_PROFILE,
    ENVELOPE_RULES,
    SOLUTION_PROFILE,
    EnvelopeRules,
    FeeProfile,
    round_half_up,
    scpi_credit_effort,
    scpi_credit_payment,
    simulate,
    simulate_fee_curves,
    simulate_livret,
    simulate_scpi_credit,
)

__all__ = [
    "BANK_PROFILE",
    "ENVELOPE_RULES",
    "SOLUTION_PROFILE",
    "EnvelopeRules",
    "FeeProfile",
    "compute_blended_return",
    "compute_milestones",
    "compute_monthly_effort",
    "compute_passive_income",
    "compute_simulation",
    "default_av",
    "default_horizon",
    "default_per",
    "default_scpi",
    "default_scpi_credit",
    "livret_label",
    "round_half_up",
    "scpi_credit_effort",
    "scpi_credit_payment",
    "simulate",
    "simulate_fee_curves",
    "simulate_livret",
    "simulate_scpi_credit",
]
