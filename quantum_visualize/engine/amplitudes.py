"""Conversion between numpy state vectors and the {re, im} amplitude list.

UI collaborators exchange states as plain lists of ``{"re": .., "im": ..}``
dicts. The engine itself works on ``complex128`` numpy arrays.
"""

from __future__ import annotations

import math

import numpy as np

ZERO_TOLERANCE = 1e-10


def to_amplitude_list(state: np.ndarray) -> list[dict[str, float]]:
    return [{"re": float(c.real), "im": float(c.imag)} for c in state]


def from_amplitude_list(items) -> np.ndarray:
    """Build a state vector from ``{re, im}`` dicts. Missing keys count as 0."""
    data = np.zeros(len(items), dtype=np.complex128)
    for i, c in enumerate(items):
        data[i] = complex(c.get("re", 0) or 0, c.get("im", 0) or 0)
    return data


def magnitude(c: complex) -> float:
    return math.hypot(c.real, c.imag)


def phase(c: complex) -> float:
    """Argument of c in radians, in (-pi, pi]."""
    return math.atan2(c.imag, c.real)


def global_phase(state: np.ndarray) -> float:
    """Phase of the first non-negligible amplitude (0 for the zero vector)."""
    for c in state:
        if magnitude(c) > ZERO_TOLERANCE:
            return phase(c)
    return 0.0


def format_amplitude(c: complex) -> str:
    """Render an amplitude as ``re +/- |im|i`` with 3 decimals."""
    sign = "+" if c.imag >= 0 else "-"
    return f"{c.real:.3f} {sign} {abs(c.imag):.3f}i"
