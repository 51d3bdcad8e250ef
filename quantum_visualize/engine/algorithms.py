"""Single-pass drivers for the Deutsch-Jozsa, Grover, QFT and QPE demos.

Each driver builds an initial state, applies a fixed gate sequence, a
problem-specific oracle and a closing transform, then derives its answer
from the final probabilities. Qubit counts are clamped into the range the
demo supports; out-of-range indices raise DimensionError.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .errors import DimensionError
from .lifting import Operator
from .measurement import MeasurementEngine
from .program import apply_sequence
from .state_vector import basis_state, zero_state

logger = logging.getLogger(__name__)

DJ_ORACLES = ("constant0", "constant1", "parity")
CONSTANT_THRESHOLD = 0.99


def _clamp(value: int, low: int, high: int, label: str) -> int:
    clamped = max(low, min(high, int(value)))
    if clamped != value:
        logger.debug("%s=%s clamped to %d (allowed %d-%d)",
                     label, value, clamped, low, high)
    return clamped


def _hadamard_program(qubits) -> str:
    return " ".join(f"H{q}" for q in qubits)


@dataclass(frozen=True)
class DeutschJozsaResult:
    state: np.ndarray
    num_qubits: int
    oracle: str
    zero_probability: float
    is_constant: bool

    @property
    def verdict(self) -> str:
        return "constant" if self.is_constant else "balanced"


@dataclass(frozen=True)
class GroverResult:
    state: np.ndarray
    num_qubits: int
    target: int
    iterations: int
    best_index: int
    best_probability: float


@dataclass(frozen=True)
class QFTResult:
    state: np.ndarray
    num_qubits: int
    basis_index: int


@dataclass(frozen=True)
class QPEResult:
    state: np.ndarray
    num_qubits: int
    counting_qubits: int
    theta: float
    counting_distribution: np.ndarray
    best_bits: str
    best_probability: float
    estimate: float


class AlgorithmDriver:
    """Factory-style entry points for the algorithm demonstrations."""

    @staticmethod
    def deutsch_jozsa(num_inputs: int = 3, oracle: str = "constant0") -> DeutschJozsaResult:
        """Deutsch-Jozsa with the ancilla on qubit 0 and inputs on 1..n.

        oracle: 'constant0' (identity), 'constant1' (flip the ancilla) or
        'parity' (CNOT from every input qubit onto the ancilla).
        """
        if oracle not in DJ_ORACLES:
            raise ValueError(f"Unknown oracle type '{oracle}'. Use one of {', '.join(DJ_ORACLES)}.")
        n = _clamp(num_inputs, 1, 5, "num_inputs")
        total = n + 1
        logger.debug("Deutsch-Jozsa: inputs=%d oracle=%s", n, oracle)

        state = apply_sequence("X0", zero_state(total), total)
        state = apply_sequence(_hadamard_program(range(total)), state, total)

        if oracle == "constant1":
            state = apply_sequence("X0", state, total)
        elif oracle == "parity":
            state = apply_sequence(
                " ".join(f"CNOT{i}0" for i in range(1, n + 1)), state, total)

        state = apply_sequence(_hadamard_program(range(1, n + 1)), state, total)

        # Input register is bits 1..n; only indices 0 and 1 have it all zero.
        probs = MeasurementEngine.probabilities(state)
        input_mask = ((1 << total) - 1) ^ 1
        zero_probability = float(sum(p for idx, p in enumerate(probs)
                                     if idx & input_mask == 0))
        return DeutschJozsaResult(
            state=state,
            num_qubits=total,
            oracle=oracle,
            zero_probability=zero_probability,
            is_constant=zero_probability > CONSTANT_THRESHOLD,
        )

    @staticmethod
    def grover_iterations(num_qubits: int) -> int:
        return max(1, math.floor(math.pi / 4 * math.sqrt(1 << num_qubits)))

    @staticmethod
    def grover(num_qubits: int = 3, target: int = 3) -> GroverResult:
        """Grover search for a single marked basis index."""
        n = _clamp(num_qubits, 1, 5, "num_qubits")
        dim = 1 << n
        if target < 0 or target >= dim:
            raise DimensionError(f"Target index {target} out of range [0, {dim - 1}]")

        state = apply_sequence(_hadamard_program(range(n)), zero_state(n), n)
        oracle = Operator.phase_oracle(n, target)
        diffusion = Operator.diffusion(n)
        iterations = AlgorithmDriver.grover_iterations(n)
        logger.debug("Grover: n=%d target=%d iterations=%d", n, target, iterations)

        for _ in range(iterations):
            state = diffusion.apply(oracle.apply(state))

        best, best_p = MeasurementEngine.most_likely(state)
        return GroverResult(
            state=state,
            num_qubits=n,
            target=target,
            iterations=iterations,
            best_index=best,
            best_probability=best_p,
        )

    @staticmethod
    def qft(num_qubits: int = 3, basis_index: int = 3) -> QFTResult:
        """Apply the dense Fourier matrix to the basis state |k>."""
        n = _clamp(num_qubits, 1, 6, "num_qubits")
        state = basis_state(n, basis_index)
        logger.debug("QFT: n=%d k=%d", n, basis_index)
        return QFTResult(
            state=Operator.fourier(n).apply(state),
            num_qubits=n,
            basis_index=basis_index,
        )

    @staticmethod
    def qpe(counting_qubits: int = 3, theta: float = 0.3125) -> QPEResult:
        """Estimate theta for U|1> = e^{2 pi i theta}|1>.

        Counting register on qubits 0..m-1, target qubit at index m.
        """
        m = _clamp(counting_qubits, 1, 6, "counting_qubits")
        total = m + 1
        logger.debug("QPE: m=%d theta=%s", m, theta)

        state = basis_state(total, 1 << m)
        state = apply_sequence(_hadamard_program(range(m)), state, total)

        for j in range(m):
            angle = 2 * math.pi * theta * (1 << j)
            state = Operator.controlled_phase(j, m, angle, total).apply(state)

        inverse_qft = Operator.identity(1).tensor(Operator.fourier(m).dagger())
        state = inverse_qft.apply(state)

        # Index = target * 2^m + counting value.
        counting = MeasurementEngine.probabilities(state).reshape(2, 1 << m).sum(axis=0)
        best = int(np.argmax(counting))
        return QPEResult(
            state=state,
            num_qubits=total,
            counting_qubits=m,
            theta=theta,
            counting_distribution=counting,
            best_bits=format(best, f"0{m}b"),
            best_probability=float(counting[best]),
            estimate=best / (1 << m),
        )

    @staticmethod
    def list_algorithms() -> list[dict[str, str]]:
        """Returns list of available algorithm drivers."""
        return [
            {"name": "deutsch", "display": "Deutsch-Jozsa",
             "description": "Decide whether an oracle is constant or balanced"},
            {"name": "grover", "display": "Grover's Search",
             "description": "Amplify a single marked basis state"},
            {"name": "qft", "display": "Quantum Fourier Transform",
             "description": "Fourier amplitudes of a computational basis state"},
            {"name": "qpe", "display": "Quantum Phase Estimation",
             "description": "Estimate the eigenphase of a phase gate"},
        ]
