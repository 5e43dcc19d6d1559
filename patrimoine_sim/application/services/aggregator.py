"""Portfolio aggregation.

Runs every enabled envelope, the baseline savings account on the same real
cash effort, and derives chart series, totals, blended return, passive
income and milestones.
"""

from __future__ import annotations

from math import isfinite

import numpy as np

from patrimoine_sim.core.constants import (
    CHART_INTERESTS,
    CHART_INVESTED,
    CHART_MONTH,
    CHART_TOTAL,
    ENVELOPE_COLORS,
    ENVELOPE_LABELS,
)
from patrimoine_sim.core.exceptions import InvalidParameterError, SimulationError
from patrimoine_sim.core.logging import get_logger
from patrimoine_sim.core.settings import get_settings
from patrimoine_sim.domain.models import (
    AggregatedResults,
    BlendedReturnData,
    CreditPhases,
    EnvelopeConfig,
    EnvelopeType,
    LivretContribution,
    Milestone,
    RateContribution,
    SCPICreditConfig,
    SCPICreditResult,
    SimEntry,
)
from patrimoine_sim.application.services.simulation import (
    round_half_up,
    scpi_credit_effort,
    simulate,
    simulate_livret,
    simulate_scpi_credit,
)

log = get_logger(__name__)

MILESTONE_JOUISSANCE = "Fin de jouissance SCPI"
MILESTONE_CREDIT = "Fin du crédit SCPI"


def livret_label(rate: float) -> str:
    """Chart key of the baseline series, e.g. 'Livret bancaire 1%'."""
    return f"Livret bancaire {rate:g}%"


def _entry(envelope_type: EnvelopeType, result) -> SimEntry:
    return SimEntry(
        label=ENVELOPE_LABELS[envelope_type.value],
        color=ENVELOPE_COLORS[envelope_type.value],
        type=envelope_type,
        result=result,
    )


def compute_monthly_effort(
    scpi: EnvelopeConfig,
    scpi_credit: SCPICreditConfig,
    av: EnvelopeConfig,
    per: EnvelopeConfig,
) -> float:
    """Real monthly cash the investor puts in across all enabled envelopes."""
    effort = sum(c.monthly_contribution for c in (scpi, av, per) if c.enabled)
    if scpi_credit.enabled:
        effort += scpi_credit_effort(scpi_credit)
    return effort


def compute_passive_income(sims: list[SimEntry], rates: dict[EnvelopeType, float]) -> float:
    """Monthly SCPI distributions the final capital would pay."""
    return sum(
        s.result.capital * rates[s.type] / 100.0 / 12.0
        for s in sims
        if s.type in (EnvelopeType.SCPI, EnvelopeType.SCPI_CREDIT)
    )


def compute_blended_return(
    sims: list[SimEntry],
    rates: dict[EnvelopeType, float],
    years: int,
    revaluation_pct: float,
    loan_months: int = 0,
) -> BlendedReturnData:
    """Capital-weighted average effective annual rate.

    Each envelope is weighted by the mean of what was put in and what it is
    worth at the horizon. SCPI rates include share revaluation. The leveraged
    SCPI earns its net cash yield on the shares while the loan runs, then its
    full yield once the loan is repaid.
    """
    if not sims:
        return BlendedReturnData()

    months = years * 12
    labels: list[str] = []
    effective_rates: list[float] = []
    weights: list[float] = []
    phases = None

    for s in sims:
        rate = rates[s.type]
        if s.type == EnvelopeType.SCPI:
            effective = rate + revaluation_pct
        elif s.type == EnvelopeType.SCPI_CREDIT:
            result: SCPICreditResult = s.result
            during = (
                result.cashflow * 12.0 / result.net_shares * 100.0 + revaluation_pct
                if result.net_shares > 0 else 0.0
            )
            after = rate + revaluation_pct
            phases = CreditPhases(during_credit=during, after_credit=after)
            credit_months = min(loan_months, months)
            effective = (during * credit_months + after * (months - credit_months)) / months
        else:
            effective = rate

        labels.append(s.label)
        effective_rates.append(effective)
        weights.append(max(0.0, (s.result.total_invested + s.result.capital) / 2.0))

    total_weight = sum(weights)
    if total_weight <= 0:
        return BlendedReturnData(scpi_credit_phases=phases)

    overall = float(np.average(effective_rates, weights=weights))
    contributions = [
        RateContribution(
            envelope=label,
            rate=rate,
            weight=weight / total_weight,
            contribution=rate * weight / total_weight,
        )
        for label, rate, weight in zip(labels, effective_rates, weights)
    ]
    return BlendedReturnData(overall_rate=overall, contributions=contributions, scpi_credit_phases=phases)


def compute_milestones(
    scpi: EnvelopeConfig,
    scpi_credit: SCPICreditConfig,
    years: int,
) -> list[Milestone]:
    """Chart markers that fall within the horizon."""
    months = years * 12
    milestones = []
    if scpi.enabled and 0 < scpi.jouissance_months <= months:
        milestones.append(Milestone(
            month=scpi.jouissance_months,
            label=MILESTONE_JOUISSANCE,
            color=ENVELOPE_COLORS[EnvelopeType.SCPI.value],
        ))
    if scpi_credit.enabled and scpi_credit.loan_months <= months:
        milestones.append(Milestone(
            month=scpi_credit.loan_months,
            label=MILESTONE_CREDIT,
            color=ENVELOPE_COLORS[EnvelopeType.SCPI_CREDIT.value],
        ))
    return milestones


def _build_chart_data(
    sims: list[SimEntry],
    livret_points: list[float],
    invested_flows: list[tuple[float, float, int]],
    months: int,
    livret_key: str,
) -> list[dict[str, float | int]]:
    chart_data = []
    for i in range(months + 1):
        point: dict[str, float | int] = {CHART_MONTH: i}
        total = 0.0
        for s in sims:
            value = s.result.data_points[i]
            point[s.label] = round_half_up(value)
            total += value

        invested = sum(initial + monthly * min(i, cap) for initial, monthly, cap in invested_flows)
        rounded_total = round_half_up(total)
        capital_invested = min(round_half_up(invested), rounded_total)

        point[CHART_INVESTED] = capital_invested
        point[CHART_INTERESTS] = max(0, rounded_total - capital_invested)
        point[CHART_TOTAL] = rounded_total
        point[livret_key] = round_half_up(livret_points[i])
        chart_data.append(point)
    return chart_data


def compute_simulation(
    scpi: EnvelopeConfig,
    scpi_credit: SCPICreditConfig,
    av: EnvelopeConfig,
    per: EnvelopeConfig,
    years: int,
    *,
    livret_rate: float | None = None,
    revaluation_pct: float | None = None,
) -> AggregatedResults:
    """Project every enabled envelope and compare with the baseline account.

    Args:
        scpi: SCPI bought cash
        scpi_credit: SCPI bought with a loan
        av: Assurance-vie
        per: Plan d'épargne retraite
        years: Horizon in years
        livret_rate: Baseline rate %, defaults to settings
        revaluation_pct: Annual SCPI revaluation %, defaults to settings

    Returns:
        AggregatedResults with ``years * 12 + 1`` chart records
    """
    settings = get_settings()
    if not 1 <= years <= settings.max_horizon_years:
        raise InvalidParameterError(
            "years", years, f"horizon must be between 1 and {settings.max_horizon_years}"
        )
    if livret_rate is None:
        livret_rate = settings.livret_rate_pct
    if revaluation_pct is None:
        revaluation_pct = settings.scpi_revaluation_pct

    months = years * 12
    sims: list[SimEntry] = []
    livret_inputs: list[LivretContribution] = []
    # (initial, monthly, months the monthly amount is paid)
    invested_flows: list[tuple[float, float, int]] = []
    rates: dict[EnvelopeType, float] = {}

    for envelope_type, config in (
        (EnvelopeType.SCPI, scpi),
        (EnvelopeType.SCPI_CREDIT, scpi_credit),
        (EnvelopeType.AV, av),
        (EnvelopeType.PER, per),
    ):
        if not config.enabled:
            continue
        rates[envelope_type] = config.rate

        if envelope_type == EnvelopeType.SCPI_CREDIT:
            result = simulate_scpi_credit(config, years, revaluation_pct=revaluation_pct)
            effort = max(0.0, result.monthly_payment - result.monthly_dividend)
            livret_inputs.append(LivretContribution(
                initial_capital=config.down_payment, monthly_contribution=effort,
            ))
            invested_flows.append((config.down_payment, effort, config.loan_months))
        else:
            result = simulate(config, years, envelope_type, revaluation_pct=revaluation_pct)
            livret_inputs.append(LivretContribution(
                initial_capital=config.initial_capital,
                monthly_contribution=config.monthly_contribution,
            ))
            invested_flows.append((config.initial_capital, config.monthly_contribution, months))

        if not isfinite(result.capital):
            raise SimulationError(f"Projection of {envelope_type.value} diverged (capital={result.capital})")
        sims.append(_entry(envelope_type, result))

    livret = simulate_livret(livret_inputs, years, livret_rate)
    chart_data = _build_chart_data(sims, livret.data_points, invested_flows, months, livret_label(livret_rate))

    per_entry = next((s for s in sims if s.type == EnvelopeType.PER), None)
    results = AggregatedResults(
        sims=sims,
        livret=livret,
        chart_data=chart_data,
        total_invested=sum(s.result.total_invested for s in sims),
        total_final=sum(s.result.capital for s in sims),
        total_net=sum(s.result.net_gains for s in sims),
        per_savings=per_entry.result.per_tax_savings if per_entry else 0.0,
        blended_return=compute_blended_return(
            sims, rates, years, revaluation_pct,
            loan_months=scpi_credit.loan_months if scpi_credit.enabled else 0,
        ),
        passive_income=compute_passive_income(sims, rates),
        monthly_effort=compute_monthly_effort(scpi, scpi_credit, av, per),
        milestones=compute_milestones(scpi, scpi_credit, years),
    )

    log.debug(
        "simulation_computed",
        years=years,
        envelopes=[s.type.value for s in sims],
        total_final=round(results.total_final, 2),
        livret_capital=round(livret.capital, 2),
    )
    return results
