"""Exception types raised by the state-vector engine."""

from __future__ import annotations


class QuantumEngineError(ValueError):
    """Base class for all engine failures."""


class ParseError(QuantumEngineError):
    """A gate program contains a token that matches no known gate."""

    def __init__(self, token: str):
        super().__init__(f"Cannot parse token: {token}")
        self.token = token


class DimensionError(QuantumEngineError):
    """Qubit or basis index outside the valid range, or mismatched sizes."""


class NormalizationError(QuantumEngineError):
    """Attempt to normalize a vector with (near) zero norm."""
