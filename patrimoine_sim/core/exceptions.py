"""Custom exceptions for patrimoine_sim.

Domain-specific exception types for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any


class PatrimoineSimError(Exception):
    """Base exception for all patrimoine_sim errors."""
    pass


# --- Calculation Errors ---

class SimulationError(PatrimoineSimError):
    """Error during an envelope projection."""
    pass


class InvalidParameterError(PatrimoineSimError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)
