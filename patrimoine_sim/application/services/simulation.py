"""Envelope projection engine.

Month-by-month projections for cash-funded envelopes (SCPI, AV, PER), the
loan-financed SCPI position, the baseline savings account and the fee
comparison curves. All functions are pure: inputs are never mutated and
every call returns fresh results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from patrimoine_sim.core.constants import (
    BANK_ENTRY_FEES,
    BANK_MGMT_FEES,
    BANK_RATE,
    SCPI_REVALUATION,
    SOLUTION_ENTRY_FEES,
    SOLUTION_MGMT_FEES,
    SOLUTION_RATE,
)
from patrimoine_sim.core.exceptions import InvalidParameterError
from patrimoine_sim.core.logging import get_logger
from patrimoine_sim.domain.calculator.financial import (
    amortize,
    calc_loan_payment,
    calc_monthly_insurance,
    get_insurance_rate,
)
from patrimoine_sim.domain.models import (
    EnvelopeConfig,
    EnvelopeType,
    FeeCurves,
    LivretContribution,
    LivretResult,
    SCPICreditConfig,
    SCPICreditResult,
    SimResult,
)

log = get_logger(__name__)


@dataclass(frozen=True)
class EnvelopeRules:
    """Per-type behaviour of a cash-funded envelope."""

    grace_period: bool = False
    management_fees: bool = False
    revaluation: bool = False
    distributes_dividends: bool = False
    social_charges: bool = False
    retirement_rebate: bool = False


ENVELOPE_RULES: dict[EnvelopeType, EnvelopeRules] = {
    EnvelopeType.SCPI: EnvelopeRules(grace_period=True, revaluation=True, distributes_dividends=True),
    EnvelopeType.AV: EnvelopeRules(management_fees=True, social_charges=True),
    EnvelopeType.PER: EnvelopeRules(management_fees=True, retirement_rebate=True),
}


@dataclass(frozen=True)
class FeeProfile:
    """Fee and yield conditions of a wrapper contract (all in %)."""

    entry_fees: float
    mgmt_fees: float
    rate: float


BANK_PROFILE = FeeProfile(entry_fees=BANK_ENTRY_FEES, mgmt_fees=BANK_MGMT_FEES, rate=BANK_RATE)
SOLUTION_PROFILE = FeeProfile(entry_fees=SOLUTION_ENTRY_FEES, mgmt_fees=SOLUTION_MGMT_FEES, rate=SOLUTION_RATE)


def _check_horizon(years: int) -> int:
    if years <= 0:
        raise InvalidParameterError("years", years, "horizon must be at least one year")
    return years * 12


def simulate(
    config: EnvelopeConfig,
    years: int,
    envelope_type: EnvelopeType | str,
    *,
    revaluation_pct: float = SCPI_REVALUATION,
) -> SimResult:
    """Project a cash-funded envelope month by month.

    Each deposit is net of entry fees before it starts compounding. SCPI
    capital earns nothing during the grace period, may distribute its yield
    instead of compounding it, and is revalued monthly. AV and PER capital
    bears monthly management fees.

    AV social charges are levied on positive gross gains only: a loss is
    reported unchanged in ``net_gains`` rather than scaled down.

    Args:
        config: Envelope parameters
        years: Horizon in years
        envelope_type: SCPI, AV or PER
        revaluation_pct: Annual SCPI share revaluation %

    Returns:
        SimResult with ``years * 12 + 1`` data points
    """
    envelope_type = EnvelopeType(envelope_type)
    rules = ENVELOPE_RULES.get(envelope_type)
    if rules is None:
        raise InvalidParameterError(
            "envelope_type", envelope_type.value, "use simulate_scpi_credit for leveraged SCPI"
        )
    months = _check_horizon(years)

    fee_factor = 1.0 - config.entry_fees / 100.0
    monthly_rate = config.rate / 100.0 / 12.0
    mgmt_monthly = config.mgmt_fees / 100.0 / 12.0 if rules.management_fees else 0.0
    revalo_monthly = revaluation_pct / 100.0 / 12.0 if rules.revaluation else 0.0
    grace_months = config.jouissance_months if rules.grace_period else 0
    distribute = rules.distributes_dividends and not config.reinvest_dividends

    if grace_months > months:
        log.debug("jouissance_exceeds_horizon", jouissance_months=grace_months, months=months)

    capital = config.initial_capital * fee_factor
    total_invested = config.initial_capital
    distributed = 0.0
    data_points = [capital]

    for m in range(1, months + 1):
        capital += config.monthly_contribution * fee_factor
        total_invested += config.monthly_contribution

        if m <= grace_months:
            data_points.append(capital)
            continue

        gains = capital * monthly_rate
        if distribute:
            distributed += gains
        else:
            capital += gains

        capital *= 1.0 - mgmt_monthly
        capital *= 1.0 + revalo_monthly
        data_points.append(capital)

    gross_gains = capital + distributed - total_invested
    net_gains = gross_gains
    if rules.social_charges and gross_gains > 0:
        net_gains = gross_gains * (1.0 - config.social_charges / 100.0)

    per_tax_savings = total_invested * (config.tmi / 100.0) if rules.retirement_rebate else 0.0

    return SimResult(
        data_points=data_points,
        capital=capital,
        total_invested=total_invested,
        gross_gains=gross_gains,
        net_gains=net_gains,
        per_tax_savings=per_tax_savings,
        distributed_dividends=distributed,
    )


def scpi_credit_payment(config: SCPICreditConfig) -> tuple[float, float, float]:
    """Monthly financing breakdown of a leveraged SCPI position.

    Returns:
        Tuple of (loan payment, insurance, total payment)
    """
    loan_payment = calc_loan_payment(config.loan_amount, config.interest_rate, config.loan_years)
    insurance = calc_monthly_insurance(config.loan_amount, get_insurance_rate(config.borrower_age))
    return loan_payment, insurance, loan_payment + insurance


def scpi_credit_effort(config: SCPICreditConfig) -> float:
    """Monthly out-of-pocket amount while the loan runs (payment not covered by dividends)."""
    _, _, total_payment = scpi_credit_payment(config)
    net_shares = config.total_investment * (1.0 - config.entry_fees / 100.0)
    dividend = net_shares * config.rate / 100.0 / 12.0
    return max(0.0, total_payment - dividend)


def simulate_scpi_credit(
    config: SCPICreditConfig,
    years: int,
    *,
    revaluation_pct: float = SCPI_REVALUATION,
    net_of_debt_capital: bool = False,
) -> SCPICreditResult:
    """Project SCPI shares bought with an amortizing loan.

    Entry fees are taken once on the whole position. The chart series is the
    share value net of outstanding debt, so it starts negative whenever the
    down payment does not cover the fees. The reported ``capital`` is the
    gross share value, or the net value with ``net_of_debt_capital``.

    Args:
        config: Loan and fund parameters
        years: Horizon in years
        revaluation_pct: Annual SCPI share revaluation %
        net_of_debt_capital: Report final capital net of remaining debt

    Returns:
        SCPICreditResult with ``years * 12 + 1`` data points
    """
    months = _check_horizon(years)
    loan_months = config.loan_months

    net_shares = config.total_investment * (1.0 - config.entry_fees / 100.0)
    insurance_rate = get_insurance_rate(config.borrower_age)
    loan_payment, monthly_insurance, monthly_payment = scpi_credit_payment(config)

    loan_rate = config.interest_rate / 100.0 / 12.0
    revalo_monthly = revaluation_pct / 100.0 / 12.0

    shares_value = net_shares
    remaining_debt = config.loan_amount
    data_points: list[float] = []
    debt_points: list[float] = []

    for m in range(months + 1):
        data_points.append(shares_value - remaining_debt)
        debt_points.append(remaining_debt)
        if m == months:
            break
        shares_value *= 1.0 + revalo_monthly
        if remaining_debt > 0 and m < loan_months:
            remaining_debt = amortize(remaining_debt, loan_payment, loan_rate)
        else:
            remaining_debt = 0.0

    monthly_dividend = net_shares * config.rate / 100.0 / 12.0
    cashflow = monthly_dividend - monthly_payment
    total_loan_cost = monthly_payment * loan_months - config.loan_amount
    total_out_of_pocket = config.down_payment + max(0.0, -cashflow) * min(loan_months, months)

    if cashflow < 0:
        log.debug("scpi_credit_negative_cashflow", cashflow=round(cashflow, 2), loan_months=loan_months)

    capital = shares_value - remaining_debt if net_of_debt_capital else shares_value
    gains = capital - total_out_of_pocket

    return SCPICreditResult(
        data_points=data_points,
        capital=capital,
        total_invested=total_out_of_pocket,
        gross_gains=gains,
        net_gains=gains,
        per_tax_savings=0.0,
        monthly_payment=monthly_payment,
        monthly_dividend=monthly_dividend,
        monthly_insurance=monthly_insurance,
        insurance_rate=insurance_rate,
        cashflow=cashflow,
        total_loan_cost=total_loan_cost,
        net_shares=net_shares,
        debt_points=debt_points,
    )


def simulate_livret(
    configs: Iterable[LivretContribution],
    years: int,
    rate: float,
) -> LivretResult:
    """Compound the pooled cash flows of all envelopes on the baseline account.

    Each month the pooled contribution is deposited, then the monthly
    interest is credited.
    """
    months = _check_horizon(years)
    configs = list(configs)
    total_initial = sum(c.initial_capital for c in configs)
    total_monthly = sum(c.monthly_contribution for c in configs)
    monthly_rate = rate / 100.0 / 12.0

    capital = total_initial
    data_points = [capital]
    for _ in range(months):
        capital += total_monthly
        capital += capital * monthly_rate
        data_points.append(capital)

    total_invested = total_initial + total_monthly * months
    return LivretResult(
        data_points=data_points,
        capital=capital,
        total_invested=total_invested,
        gains=capital - total_invested,
    )


def _project_wrapper(
    initial_capital: float,
    monthly_contribution: float,
    years: int,
    profile: FeeProfile,
) -> list[float]:
    config = EnvelopeConfig(
        initial_capital=initial_capital,
        monthly_contribution=monthly_contribution,
        rate=profile.rate,
        entry_fees=profile.entry_fees,
        mgmt_fees=profile.mgmt_fees,
        tmi=0,
    )
    return simulate(config, years, EnvelopeType.AV).data_points


def simulate_fee_curves(
    initial_capital: float,
    monthly_contribution: float,
    years: int,
    bank: FeeProfile = BANK_PROFILE,
    solution: FeeProfile = SOLUTION_PROFILE,
) -> FeeCurves:
    """Project the same deposits under a bank contract and the proposed one.

    The crossover month is the first month from which the proposed contract
    is worth at least as much as the bank's, comparing whole euros.
    """
    months = _check_horizon(years)
    bank_curve = _project_wrapper(initial_capital, monthly_contribution, years, bank)
    solution_curve = _project_wrapper(initial_capital, monthly_contribution, years, solution)

    crossover = next(
        (
            i for i in range(1, months + 1)
            if round_half_up(solution_curve[i]) >= round_half_up(bank_curve[i])
        ),
        None,
    )
    return FeeCurves(bank_curve=bank_curve, solution_curve=solution_curve, crossover_month=crossover)


def round_half_up(value: float) -> int:
    """Round to the nearest whole euro, halves rounded up."""
    return math.floor(value + 0.5)
