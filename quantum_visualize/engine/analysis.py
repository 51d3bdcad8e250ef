"""Subsystem marginals, entanglement measures and Dirac rendering.

All functions take a plain ``complex128`` state vector and the qubit count.
Bipartitions follow the row convention ``row = index // 2^(n - m)``: the
high ``m`` qubits form subsystem A, the low ``n - m`` qubits subsystem B.
"""

from __future__ import annotations

import math

import numpy as np

from .amplitudes import magnitude, phase
from .errors import DimensionError
from .measurement import MeasurementEngine

ZERO_TOLERANCE = 1e-10


def _split(num_qubits: int, split: int | None) -> int:
    if split is None:
        split = num_qubits // 2
    if split < 0 or split > num_qubits:
        raise DimensionError(f"Split point {split} out of range [0, {num_qubits}]")
    return split


def _check_state(state: np.ndarray, num_qubits: int) -> np.ndarray:
    state = np.asarray(state, dtype=np.complex128)
    if state.shape != (1 << num_qubits,):
        raise DimensionError(
            f"State has {state.size} amplitudes, expected {1 << num_qubits}")
    return state


def _shannon_bits(probs) -> float:
    entropy = 0.0
    for p in probs:
        if p > ZERO_TOLERANCE:
            entropy -= p * math.log2(p)
    return float(entropy)


class StateAnalysis:
    """Static methods for quantitative analysis of quantum states."""

    # ---- Bipartite marginals ------------------------------------------------

    @staticmethod
    def reduced_probabilities(state, num_qubits: int,
                              split: int | None = None) -> np.ndarray:
        """Marginal distribution of subsystem A (length 2^split).

        ``split`` defaults to ``num_qubits // 2``.
        """
        state = _check_state(state, num_qubits)
        m = _split(num_qubits, split)
        subsystem_size = 1 << (num_qubits - m)
        probs = MeasurementEngine.probabilities(state)
        return probs.reshape(1 << m, subsystem_size).sum(axis=1)

    # ---- Entropy ------------------------------------------------------------

    @staticmethod
    def entanglement_entropy(state, num_qubits: int,
                             split: int | None = None) -> float:
        """Entropy in bits of the computational-basis marginal of subsystem A.

        This is the Shannon entropy of the diagonal of rho_A, not the
        eigenvalue spectrum. It matches the von Neumann entropy only when
        rho_A is diagonal in the computational basis; see
        ``exact_entanglement_entropy`` for the Schmidt-based value.
        """
        rho_a = StateAnalysis.reduced_probabilities(state, num_qubits, split)
        return _shannon_bits(rho_a)

    @staticmethod
    def schmidt_coefficients(state, num_qubits: int,
                             split: int | None = None) -> np.ndarray:
        state = _check_state(state, num_qubits)
        m = _split(num_qubits, split)
        psi = state.reshape(1 << m, 1 << (num_qubits - m))
        return np.linalg.svd(psi, compute_uv=False)

    @staticmethod
    def exact_entanglement_entropy(state, num_qubits: int,
                                   split: int | None = None) -> float:
        """Von Neumann entropy of rho_A from the Schmidt coefficients."""
        s = StateAnalysis.schmidt_coefficients(state, num_qubits, split)
        return _shannon_bits(s ** 2)

    @staticmethod
    def schmidt_rank(state, num_qubits: int, split: int | None = None) -> int:
        s = StateAnalysis.schmidt_coefficients(state, num_qubits, split)
        return int(np.sum(s > ZERO_TOLERANCE))

    @staticmethod
    def von_neumann_entropy_dm(rho: np.ndarray) -> float:
        """Von Neumann entropy S(rho) = -Tr(rho log2 rho) in bits."""
        eigvals = np.linalg.eigvalsh(rho)
        eigvals = eigvals[eigvals > 1e-15]
        return float(-np.sum(eigvals * np.log2(eigvals)))

    # ---- Partial trace ------------------------------------------------------

    @staticmethod
    def partial_trace(state, num_qubits: int, keep_qubits: list[int]) -> np.ndarray:
        """Reduced density matrix over ``keep_qubits``.

        The highest kept qubit is the most significant bit of the result's
        row index.
        """
        n = num_qubits
        state = _check_state(state, n)
        for q in keep_qubits:
            if q < 0 or q >= n:
                raise DimensionError(f"Qubit index {q} out of range [0, {n - 1}]")
        keep = sorted(set(keep_qubits), reverse=True)

        # Tensor axis a holds qubit n - 1 - a; ket axes follow at n + a.
        rho_tensor = np.outer(state, state.conj()).reshape([2] * (2 * n))
        labels = list(range(2 * n))
        for q in range(n):
            if q not in keep:
                labels[n + (n - 1 - q)] = labels[n - 1 - q]
        output = [labels[n - 1 - q] for q in keep]
        output += [labels[n + (n - 1 - q)] for q in keep]

        reduced = np.einsum(rho_tensor, labels, output)
        dim = 1 << len(keep)
        return reduced.reshape(dim, dim)

    # ---- Single-qubit views -------------------------------------------------

    @staticmethod
    def bloch_vector(state, num_qubits: int, qubit: int) -> tuple[float, float, float]:
        """(x, y, z) Bloch coordinates of one qubit."""
        rho = StateAnalysis.partial_trace(state, num_qubits, [qubit])
        x = 2.0 * np.real(rho[0, 1])
        y = 2.0 * np.imag(rho[1, 0])
        z = np.real(rho[0, 0] - rho[1, 1])
        return (float(x), float(y), float(z))

    @staticmethod
    def bloch_angles(state) -> tuple[float, float]:
        """(theta, phi) in degrees for a single-qubit pure state.

        phi is the relative phase arg(beta) - arg(alpha) wrapped to [0, 360).
        """
        state = _check_state(state, 1)
        alpha, beta = complex(state[0]), complex(state[1])
        theta = 2 * math.atan2(magnitude(beta), magnitude(alpha))
        phi = 0.0
        if magnitude(alpha) > ZERO_TOLERANCE and magnitude(beta) > ZERO_TOLERANCE:
            phi = phase(beta) - phase(alpha)
        elif magnitude(beta) > ZERO_TOLERANCE:
            phi = phase(beta)
        return math.degrees(theta), math.degrees(phi) % 360.0

    # ---- Comparison ---------------------------------------------------------

    @staticmethod
    def state_fidelity(psi, phi) -> float:
        """Fidelity between two pure state vectors: |<psi|phi>|^2."""
        return float(np.abs(np.vdot(psi, phi)) ** 2)

    # ---- Rendering ----------------------------------------------------------

    @staticmethod
    def to_dirac(state, num_qubits: int, threshold: float = 1e-4) -> str:
        """Human-readable ket sum, e.g. ``0.707|00⟩ + 0.707e^{i90.0°}|11⟩``.

        Terms with magnitude below ``threshold`` are dropped; the phase factor
        is omitted when it is within 0.1 degrees of zero.
        """
        terms = []
        for i, c in enumerate(np.asarray(state, dtype=np.complex128)):
            mag = magnitude(c)
            if mag < threshold:
                continue
            bits = format(i, f"0{num_qubits}b")
            ph = math.degrees(phase(c))
            term = f"{mag:.3f}"
            if abs(ph) > 0.1:
                term += f"e^{{i{ph:.1f}°}}"
            term += f"|{bits}⟩"
            terms.append(term)
        return " + ".join(terms) if terms else "0"
