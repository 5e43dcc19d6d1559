"""Core infrastructure: errors, logging, settings and model constants."""

from .exceptions import (
    InvalidParameterError,
    PatrimoineSimError,
    SimulationError,
)
from .logging import configure_logging, get_logger
from .settings import AppSettings, get_settings

__all__ = [
    "AppSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Exceptions
    "PatrimoineSimError",
    "SimulationError",
    "InvalidParameterError",
]
