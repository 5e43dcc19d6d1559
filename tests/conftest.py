"""Pytest fixtures for patrimoine_sim tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from patrimoine_sim.application.services.defaults import (  # noqa: E402
    default_av,
    default_per,
    default_scpi,
    default_scpi_credit,
)
from patrimoine_sim.core.settings import get_settings  # noqa: E402
from patrimoine_sim.domain.models import EnvelopeConfig, SCPICreditConfig  # noqa: E402


@pytest.fixture
def make_envelope():
    """Factory for a simple envelope with round numbers (6% yield, no fees)."""
    def _make(**overrides) -> EnvelopeConfig:
        values = {
            "enabled": True,
            "initial_capital": 10_000.0,
            "monthly_contribution": 0.0,
            "rate": 6.0,
            "reinvest_dividends": True,
            "entry_fees": 0.0,
            "mgmt_fees": 0.0,
            "jouissance_months": 0,
            "social_charges": 0.0,
            "tmi": 30.0,
        }
        values.update(overrides)
        return EnvelopeConfig(**values)
    return _make


@pytest.fixture
def make_credit():
    """Factory for a leveraged SCPI position: 100k€ borrowed at 5.35% over 25 years."""
    def _make(**overrides) -> SCPICreditConfig:
        values = {
            "enabled": True,
            "loan_amount": 100_000.0,
            "down_payment": 0.0,
            "interest_rate": 5.35,
            "loan_years": 25,
            "rate": 5.5,
            "entry_fees": 10.0,
            "borrower_age": 30,
        }
        values.update(overrides)
        return SCPICreditConfig(**values)
    return _make


@pytest.fixture
def portfolio():
    """Default configurations of the four envelopes, credit enabled."""
    credit = default_scpi_credit()
    credit.enabled = True
    return {
        "scpi": default_scpi(),
        "scpi_credit": credit,
        "av": default_av(),
        "per": default_per(),
    }


@pytest.fixture
def disabled_portfolio(portfolio):
    """Same portfolio with every envelope switched off."""
    for config in portfolio.values():
        config.enabled = False
    return portfolio


@pytest.fixture
def fresh_settings():
    """Reset cached settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
