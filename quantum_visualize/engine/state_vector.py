"""State vector initializers.

A state on n qubits is a ``complex128`` array of length 2^n; bit b of an
index is the value of qubit b. Every initializer returns a fresh array the
caller owns.
"""

from __future__ import annotations

import math

import numpy as np

from .errors import DimensionError, NormalizationError

MAX_QUBITS = 16


def _check_num_qubits(num_qubits: int):
    if num_qubits < 1 or num_qubits > MAX_QUBITS:
        raise DimensionError(f"num_qubits must be 1-{MAX_QUBITS}, got {num_qubits}")


def num_qubits_for(state: np.ndarray) -> int:
    """Qubit count implied by a state's length (must be a power of two)."""
    dim = len(state)
    if dim < 2 or dim & (dim - 1):
        raise DimensionError(f"State length must be a power of two >= 2, got {dim}")
    return dim.bit_length() - 1


def basis_state(num_qubits: int, index: int) -> np.ndarray:
    """Computational basis state |index>."""
    _check_num_qubits(num_qubits)
    dim = 1 << num_qubits
    if index < 0 or index >= dim:
        raise DimensionError(f"Basis index {index} out of range [0, {dim - 1}]")
    data = np.zeros(dim, dtype=np.complex128)
    data[index] = 1.0 + 0.0j
    return data


def zero_state(num_qubits: int) -> np.ndarray:
    return basis_state(num_qubits, 0)


def one_state(num_qubits: int) -> np.ndarray:
    """All qubits set: |11...1>."""
    return basis_state(num_qubits, (1 << num_qubits) - 1)


def ghz_state(num_qubits: int) -> np.ndarray:
    """(|00...0> + |11...1>) / sqrt(2)."""
    _check_num_qubits(num_qubits)
    data = np.zeros(1 << num_qubits, dtype=np.complex128)
    data[0] = 1 / math.sqrt(2)
    data[-1] = 1 / math.sqrt(2)
    return data


def bell_state(num_qubits: int = 2) -> np.ndarray:
    """|Phi+>. For n != 2 this is the same pattern as the GHZ state."""
    return ghz_state(num_qubits)


def w_state(num_qubits: int) -> np.ndarray:
    """Equal superposition of all single-excitation basis states."""
    _check_num_qubits(num_qubits)
    data = np.zeros(1 << num_qubits, dtype=np.complex128)
    amp = 1 / math.sqrt(num_qubits)
    for q in range(num_qubits):
        data[1 << q] = amp
    return data


def state_from_bloch_angles(theta: float, phi: float) -> np.ndarray:
    """Single-qubit state cos(theta/2)|0> + e^{i phi} sin(theta/2)|1>, angles in degrees."""
    t, p = math.radians(theta), math.radians(phi)
    return np.array([math.cos(t / 2),
                     np.exp(1j * p) * math.sin(t / 2)], dtype=np.complex128)


def normalize(state) -> np.ndarray:
    """Return ``state / ||state||``. Raises NormalizationError for a zero vector."""
    data = np.asarray(state, dtype=np.complex128)
    norm = math.sqrt(float(np.sum(np.abs(data) ** 2)))
    if norm < 1e-10:
        raise NormalizationError("State vector has zero norm and cannot be normalized")
    return data / norm


def custom_state(amplitudes) -> np.ndarray:
    """Normalized state from an explicit amplitude sequence."""
    data = np.asarray(amplitudes, dtype=np.complex128)
    num_qubits_for(data)
    return normalize(data)


INITIALIZERS = {
    "zero": zero_state,
    "one": one_state,
    "bell": bell_state,
    "ghz": ghz_state,
    "w": w_state,
}
