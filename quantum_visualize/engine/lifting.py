"""Dense n-qubit operators and the constructions that lift local gates.

Qubit 0 is the least-significant bit of a basis index. In every tensor
product the left (high-order) factor belongs to the highest qubit index,
so ``lift_single(g, n, t)`` is ``I (x) ... (x) g (x) ... (x) I`` with ``g``
at position ``n - 1 - t`` counted from the left.

Controlled gates and SWAP are built directly by walking all basis indices
and computing the destination index (or diagonal phase) with bit
operations. This handles non-adjacent qubits without permuting a 4x4 gate
through a chain of identities.
"""

from __future__ import annotations

import numpy as np

from .errors import DimensionError
from .gates import I_MATRIX, is_unitary


def _check_qubit(qubit: int, num_qubits: int):
    if qubit < 0 or qubit >= num_qubits:
        raise DimensionError(
            f"Qubit index {qubit} out of range [0, {num_qubits - 1}]")


def _check_pair(q1: int, q2: int, num_qubits: int):
    _check_qubit(q1, num_qubits)
    _check_qubit(q2, num_qubits)
    if q1 == q2:
        raise DimensionError(f"Two-qubit gate needs distinct qubits, got {q1} twice")


class Operator:
    """A 2^n x 2^n complex matrix acting on n-qubit state vectors."""

    def __init__(self, matrix: np.ndarray):
        matrix = np.asarray(matrix, dtype=np.complex128)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise DimensionError(f"Operator matrix must be square, got shape {matrix.shape}")
        dim = matrix.shape[0]
        if dim < 1 or dim & (dim - 1):
            raise DimensionError(f"Operator dimension must be a power of two, got {dim}")
        self._matrix = matrix
        self._num_qubits = dim.bit_length() - 1

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def dim(self) -> int:
        return self._matrix.shape[0]

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    # ---- Algebra ----------------------------------------------------------

    def tensor(self, other: Operator) -> Operator:
        """Kronecker product with ``self`` as the high-order factor."""
        return Operator(np.kron(self._matrix, other._matrix))

    def compose(self, other: Operator) -> Operator:
        """The operator that applies ``other`` first, then ``self``."""
        if other.dim != self.dim:
            raise DimensionError(
                f"Cannot compose operators of dimension {self.dim} and {other.dim}")
        return Operator(self._matrix @ other._matrix)

    def dagger(self) -> Operator:
        return Operator(self._matrix.conj().T)

    def is_unitary(self, atol: float = 1e-10) -> bool:
        return is_unitary(self._matrix, atol)

    def apply(self, state: np.ndarray) -> np.ndarray:
        """Left-multiply a state vector. Returns a new array."""
        state = np.asarray(state, dtype=np.complex128)
        if state.shape != (self.dim,):
            raise DimensionError(
                f"State of shape {state.shape} does not match operator dimension {self.dim}")
        return self._matrix @ state

    # ---- Constructors -----------------------------------------------------

    @classmethod
    def identity(cls, num_qubits: int) -> Operator:
        return cls(np.eye(1 << num_qubits, dtype=np.complex128))

    @classmethod
    def diagonal(cls, values) -> Operator:
        """Diagonal operator with one complex entry per basis index."""
        return cls(np.diag(np.asarray(values, dtype=np.complex128)))

    @classmethod
    def lift_single(cls, gate: np.ndarray, num_qubits: int, target: int) -> Operator:
        """Embed a 2x2 gate acting on ``target`` into the n-qubit space."""
        _check_qubit(target, num_qubits)
        if gate.shape != (2, 2):
            raise DimensionError(f"Single-qubit gate must be 2x2, got {gate.shape}")
        full = None
        for q in range(num_qubits - 1, -1, -1):
            factor = gate if q == target else I_MATRIX
            full = factor if full is None else np.kron(full, factor)
        return cls(full)

    @classmethod
    def cnot(cls, control: int, target: int, num_qubits: int) -> Operator:
        _check_pair(control, target, num_qubits)
        dim = 1 << num_qubits
        m = np.zeros((dim, dim), dtype=np.complex128)
        for s in range(dim):
            dest = s ^ (1 << target) if (s >> control) & 1 else s
            m[dest, s] = 1
        return cls(m)

    @classmethod
    def cz(cls, control: int, target: int, num_qubits: int) -> Operator:
        _check_pair(control, target, num_qubits)
        dim = 1 << num_qubits
        values = np.ones(dim, dtype=np.complex128)
        for s in range(dim):
            if (s >> control) & 1 and (s >> target) & 1:
                values[s] = -1
        return cls.diagonal(values)

    @classmethod
    def swap(cls, qubit1: int, qubit2: int, num_qubits: int) -> Operator:
        _check_pair(qubit1, qubit2, num_qubits)
        dim = 1 << num_qubits
        m = np.zeros((dim, dim), dtype=np.complex128)
        for s in range(dim):
            dest = s
            if ((s >> qubit1) & 1) != ((s >> qubit2) & 1):
                dest = s ^ (1 << qubit1) ^ (1 << qubit2)
            m[dest, s] = 1
        return cls(m)

    @classmethod
    def controlled_phase(cls, control: int, target: int, angle: float,
                         num_qubits: int) -> Operator:
        """Diagonal gate multiplying by e^{i*angle} where both bits are 1."""
        _check_pair(control, target, num_qubits)
        factor = complex(np.exp(1j * angle))
        values = np.ones(1 << num_qubits, dtype=np.complex128)
        for s in range(len(values)):
            if (s >> control) & 1 and (s >> target) & 1:
                values[s] = factor
        return cls.diagonal(values)

    @classmethod
    def fourier(cls, num_qubits: int) -> Operator:
        """Dense QFT matrix F[j, k] = e^{2 pi i j k / N} / sqrt(N)."""
        dim = 1 << num_qubits
        j, k = np.meshgrid(np.arange(dim), np.arange(dim), indexing="ij")
        return cls(np.exp(2j * np.pi * j * k / dim) / np.sqrt(dim))

    @classmethod
    def phase_oracle(cls, num_qubits: int, marked: int) -> Operator:
        """Diagonal oracle flipping the sign of basis state ``marked``."""
        dim = 1 << num_qubits
        if marked < 0 or marked >= dim:
            raise DimensionError(f"Marked index {marked} out of range [0, {dim - 1}]")
        values = np.ones(dim, dtype=np.complex128)
        values[marked] = -1
        return cls.diagonal(values)

    @classmethod
    def diffusion(cls, num_qubits: int) -> Operator:
        """Grover diffusion D = 2|s><s| - I for the uniform state |s>."""
        dim = 1 << num_qubits
        s = np.full(dim, 1 / np.sqrt(dim), dtype=np.complex128)
        return cls(2 * np.outer(s, s.conj()) - np.eye(dim, dtype=np.complex128))

    def __repr__(self) -> str:
        return f"Operator(num_qubits={self._num_qubits})"
