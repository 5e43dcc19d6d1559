"""Envelope configuration models.

An envelope is a savings vehicle (SCPI shares, assurance-vie, PER) with its
own fee, tax and yield rules. Configurations are owned by the caller and
read-only from the engine's point of view.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EnvelopeType(str, Enum):
    """Kind of envelope, drives fee, yield and tax behaviour."""

    SCPI = "scpi"
    SCPI_CREDIT = "scpi-credit"
    AV = "av"
    PER = "per"


class EnvelopeConfig(BaseModel):
    """Configuration of a cash-funded envelope (SCPI comptant, AV, PER).

    Amounts, yield and tax bracket have no default: callers pass them, usually
    through the factories in ``application.services.defaults``.
    """

    enabled: bool = Field(default=True, description="Include this envelope in aggregation")

    # Cash flows
    initial_capital: float = Field(ge=0, description="Initial deposit in €")
    monthly_contribution: float = Field(ge=0, description="Monthly deposit in €")

    # Yield
    rate: float = Field(ge=0, le=100, description="Gross annual yield %")
    reinvest_dividends: bool = Field(default=True, description="SCPI only: compound distributions")

    # Fees
    entry_fees: float = Field(default=0.0, ge=0, le=100, description="Fees on each deposit %")
    mgmt_fees: float = Field(default=0.0, ge=0, le=100, description="Annual management fees % (AV/PER)")
    jouissance_months: int = Field(default=0, ge=0, description="SCPI only: months without yield")

    # Taxation
    social_charges: float = Field(default=0.0, ge=0, le=100, description="AV only: social charges on gains %")
    tmi: float = Field(ge=0, le=100, description="PER only: marginal tax bracket %")

    model_config = {
        "validate_assignment": True,
    }


class SCPICreditConfig(BaseModel):
    """Configuration of SCPI shares financed by an amortizing loan."""

    enabled: bool = Field(default=False, description="Include this envelope in aggregation")

    # Financing
    loan_amount: float = Field(default=0.0, ge=0, description="Borrowed capital in €")
    down_payment: float = Field(default=0.0, ge=0, description="Personal contribution in €")
    interest_rate: float = Field(default=0.0, ge=0, le=100, description="Annual loan rate %")
    loan_years: int = Field(default=25, gt=0, description="Loan term in years")
    borrower_age: int = Field(default=35, ge=18, le=100, description="Drives the insurance rate")

    # Fund
    rate: float = Field(default=0.0, ge=0, le=100, description="Gross annual SCPI yield %")
    entry_fees: float = Field(default=0.0, ge=0, le=100, description="Fees on the whole position %")

    model_config = {
        "validate_assignment": True,
    }

    @property
    def total_investment(self) -> float:
        """Full leveraged position before fees."""
        return self.loan_amount + self.down_payment

    @property
    def loan_months(self) -> int:
        return self.loan_years * 12
