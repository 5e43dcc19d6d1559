"""Projection result models.

Results are rebuilt from scratch on every call. Money amounts keep full
floating-point precision, except chart records which are rounded to whole euros.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import BaseModel, Field, computed_field

from patrimoine_sim.core.constants import CHART_MONTH
from patrimoine_sim.domain.models.envelope import EnvelopeType


class SimResult(BaseModel):
    """Month-by-month projection of a single envelope."""

    data_points: list[float] = Field(default_factory=list, description="Capital per month, index 0 = month 0")
    capital: float = Field(default=0.0, description="Final capital in €")
    total_invested: float = Field(default=0.0, description="Cash put in by the investor in €")
    gross_gains: float = Field(default=0.0, description="Gains before exit taxation in €")
    net_gains: float = Field(default=0.0, description="Gains after exit taxation in €")
    per_tax_savings: float = Field(default=0.0, description="PER entry tax rebate in €")
    distributed_dividends: float = Field(default=0.0, description="Non-reinvested SCPI distributions in €")


class SCPICreditResult(SimResult):
    """Projection of a loan-financed SCPI position.

    ``data_points`` are net of outstanding debt, ``capital`` is the gross
    share value unless the projector was asked for net-of-debt reporting.
    """

    monthly_payment: float = Field(default=0.0, description="Loan payment + insurance in €")
    monthly_dividend: float = Field(default=0.0, description="Monthly SCPI distribution in €")
    monthly_insurance: float = Field(default=0.0, description="Monthly borrower insurance in €")
    insurance_rate: float = Field(default=0.0, description="Annual insurance rate %")
    cashflow: float = Field(default=0.0, description="Dividend minus payment in €")
    total_loan_cost: float = Field(default=0.0, description="Interest + insurance over the loan in €")
    net_shares: float = Field(default=0.0, description="Share value after entry fees in €")
    debt_points: list[float] = Field(default_factory=list, description="Remaining debt per month")


class LivretResult(BaseModel):
    """Projection of the baseline savings account."""

    data_points: list[float] = Field(default_factory=list)
    capital: float = 0.0
    total_invested: float = 0.0
    gains: float = 0.0


class LivretContribution(BaseModel):
    """Cash flows one envelope would have put on the baseline account."""

    initial_capital: float = Field(default=0.0, ge=0)
    monthly_contribution: float = Field(default=0.0, ge=0)


class SimEntry(BaseModel):
    """An envelope projection tagged for display."""

    label: str
    color: str
    type: EnvelopeType
    result: SCPICreditResult | SimResult


class RateContribution(BaseModel):
    """Share of one envelope in the blended return."""

    envelope: str
    rate: float
    weight: float
    contribution: float


class CreditPhases(BaseModel):
    """Effective annual rate of the leveraged SCPI before and after loan payoff."""

    during_credit: float
    after_credit: float


class BlendedReturnData(BaseModel):
    """Capital-weighted average return across active envelopes."""

    overall_rate: float = 0.0
    contributions: list[RateContribution] = Field(default_factory=list)
    scpi_credit_phases: CreditPhases | None = None


class Milestone(BaseModel):
    """Notable month on the chart (end of grace period, loan payoff)."""

    month: int
    label: str
    color: str


class FeeCurves(BaseModel):
    """Same cash flows projected under two fee/yield profiles."""

    bank_curve: list[float] = Field(default_factory=list)
    solution_curve: list[float] = Field(default_factory=list)
    crossover_month: int | None = Field(None, description="First month the solution catches up")

    @computed_field
    @property
    def final_difference(self) -> float:
        """Solution minus bank at the end of the comparison."""
        if not self.bank_curve:
            return 0.0
        return self.solution_curve[-1] - self.bank_curve[-1]


class AggregatedResults(BaseModel):
    """Combined projection of every enabled envelope plus the baseline."""

    sims: list[SimEntry] = Field(default_factory=list)
    livret: LivretResult = Field(default_factory=LivretResult)
    chart_data: list[dict[str, Any]] = Field(default_factory=list)

    total_invested: float = 0.0
    total_final: float = 0.0
    total_net: float = 0.0
    per_savings: float = 0.0

    blended_return: BlendedReturnData = Field(default_factory=BlendedReturnData)
    passive_income: float = Field(default=0.0, description="Monthly SCPI distributions at horizon in €")
    monthly_effort: float = Field(default=0.0, description="Real monthly cash effort in €")
    milestones: list[Milestone] = Field(default_factory=list)

    @computed_field
    @property
    def livret_difference(self) -> float:
        """Extra capital compared with the baseline account."""
        return self.total_final - self.livret.capital

    @computed_field
    @property
    def livret_difference_pct(self) -> float:
        if self.livret.capital <= 0:
            return 0.0
        return self.livret_difference / self.livret.capital * 100.0

    def find(self, envelope_type: EnvelopeType) -> SimEntry | None:
        """Return the projection of a given envelope type, if enabled."""
        return next((s for s in self.sims if s.type == envelope_type), None)

    def chart_frame(self) -> pd.DataFrame:
        """Chart records as a DataFrame indexed by month."""
        if not self.chart_data:
            return pd.DataFrame(columns=[CHART_MONTH]).set_index(CHART_MONTH)
        return pd.DataFrame(self.chart_data).set_index(CHART_MONTH)
