"""Data models for patrimoine_sim."""

from .envelope import EnvelopeConfig, EnvelopeType, SCPICreditConfig
from .results import (
    AggregatedResults,
    BlendedReturnData,
    CreditPhases,
    FeeCurves,
    LivretContribution,
    LivretResult,
    Milestone,
    RateContribution,
    SCPICreditResult,
    SimEntry,
    SimResult,
)

__all__ = [
    "AggregatedResults",
    "BlendedReturnData",
    "CreditPhases",
    "EnvelopeConfig",
    "EnvelopeType",
    "FeeCurves",
    "LivretContribution",
    "LivretResult",
    "Milestone",
    "RateContribution",
    "SCPICreditConfig",
    "SCPICreditResult",
    "SimEntry",
    "SimResult",
]
