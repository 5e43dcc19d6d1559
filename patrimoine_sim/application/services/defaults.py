"""Default envelope configurations offered to a new user.

Factories return fresh objects so callers can mutate them freely.
"""

from __future__ import annotations

from patrimoine_sim.core.constants import (
    AV_PER_ENTRY_FEES,
    AV_PER_MGMT_FEES,
    TAUX_PRELEVEMENTS_SOCIAUX,
)
from patrimoine_sim.core.settings import get_settings
from patrimoine_sim.domain.models import EnvelopeConfig, SCPICreditConfig


def default_scpi() -> EnvelopeConfig:
    return EnvelopeConfig(
        enabled=True,
        initial_capital=10_000,
        monthly_contribution=200,
        rate=5.5,
        reinvest_dividends=True,
        entry_fees=8,
        jouissance_months=3,
        social_charges=0,
        tmi=30,
    )


def default_scpi_credit() -> SCPICreditConfig:
    return SCPICreditConfig(
        enabled=False,
        loan_amount=100_000,
        down_payment=0,
        interest_rate=5.35,
        loan_years=25,
        rate=5.5,
        entry_fees=8,
        borrower_age=35,
    )


def default_av() -> EnvelopeConfig:
    return EnvelopeConfig(
        enabled=True,
        initial_capital=10_000,
        monthly_contribution=200,
        rate=4,
        reinvest_dividends=False,
        entry_fees=AV_PER_ENTRY_FEES,
        mgmt_fees=AV_PER_MGMT_FEES,
        social_charges=TAUX_PRELEVEMENTS_SOCIAUX,
        tmi=30,
    )


def default_per() -> EnvelopeConfig:
    return EnvelopeConfig(
        enabled=True,
        initial_capital=5_000,
        monthly_contribution=150,
        rate=4,
        reinvest_dividends=False,
        entry_fees=AV_PER_ENTRY_FEES,
        mgmt_fees=AV_PER_MGMT_FEES,
        social_charges=0,
        tmi=30,
    )


def default_horizon() -> int:
    """Horizon in years shown before the user picks one."""
    return get_settings().default_horizon_years
