"""Savings-envelope projection engine (SCPI, assurance-vie, PER)."""

from patrimoine_sim.application.services import (
    compute_monthly_effort,
    compute_simulation,
    simulate,
    simulate_fee_curves,
    simulate_livret,
    simulate_scpi_credit,
)
from patrimoine_sim.core.exceptions import (
    InvalidParameterError,
    PatrimoineSimError,
    SimulationError,
)
from patrimoine_sim.domain.calculator import (
    amortization_schedule,
    calc_loan_payment,
    get_insurance_rate,
)
from patrimoine_sim.domain.models import (
    AggregatedResults,
    EnvelopeConfig,
    EnvelopeType,
    SCPICreditConfig,
)

__all__ = [
    "AggregatedResults",
    "EnvelopeConfig",
    "EnvelopeType",
    "SCPICreditConfig",
    "amortization_schedule",
    "calc_loan_payment",
    "compute_monthly_effort",
    "compute_simulation",
    "get_insurance_rate",
    "simulate",
    "simulate_fee_curves",
    "simulate_livret",
    "simulate_scpi_credit",
    # Exceptions
    "InvalidParameterError",
    "PatrimoineSimError",
    "SimulationError",
]
