"""Gate program parsing and evaluation.

A program is a whitespace-separated list of case-insensitive tokens::

    X0 Y1 Z2 H0 S1 T2        single-qubit gates
    RX0(90) RY1(-45.5)       rotations, angle in degrees
    CNOT01 CZ12 SWAP02       two-qubit gates, one digit per qubit
    BELL GHZ W               special-state directives

Special-state directives replace the state outright and end evaluation:
any gates before or after them in the same program are discarded.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from .errors import DimensionError, ParseError
from .gates import (
    X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX, S_MATRIX, T_MATRIX,
    rx_matrix, ry_matrix, rz_matrix,
)
from .lifting import Operator
from .state_vector import bell_state, ghz_state, w_state

logger = logging.getLogger(__name__)


class GateKind(Enum):
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    T = "T"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    BELL = "BELL"
    GHZ = "GHZ"
    W = "W"


@dataclass(frozen=True)
class SingleQubitGate:
    kind: GateKind
    qubit: int


@dataclass(frozen=True)
class RotationGate:
    kind: GateKind
    qubit: int
    angle: float  # degrees


@dataclass(frozen=True)
class TwoQubitGate:
    kind: GateKind
    first: int  # control for CNOT/CZ
    second: int


@dataclass(frozen=True)
class SpecialState:
    kind: GateKind


GateOp = Union[SingleQubitGate, RotationGate, TwoQubitGate, SpecialState]

_ROTATION_RE = re.compile(r"^R([XYZ])(\d+)\(([-\d.]+)\)$")
_SPECIAL_RE = re.compile(r"^(BELL|GHZ|W)$")
_TWO_QUBIT_RE = re.compile(r"^(CNOT|CZ|SWAP)(\d)(\d)$")
_SINGLE_RE = re.compile(r"^([XYZHST])(\d+)$")


def parse_token(token: str) -> GateOp | None:
    """Parse one token. Returns None for an empty token."""
    tok = token.strip().upper()
    if not tok:
        return None

    m = _ROTATION_RE.match(tok)
    if m:
        try:
            angle = float(m.group(3))
        except ValueError:
            raise ParseError(token) from None
        return RotationGate(GateKind("R" + m.group(1)), int(m.group(2)), angle)

    m = _SPECIAL_RE.match(tok)
    if m:
        return SpecialState(GateKind(m.group(1)))

    m = _TWO_QUBIT_RE.match(tok)
    if m:
        return TwoQubitGate(GateKind(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = _SINGLE_RE.match(tok)
    if m:
        return SingleQubitGate(GateKind(m.group(1)), int(m.group(2)))

    raise ParseError(token)


def tokenize(program: str) -> list[str]:
    return program.split()


def parse_program(program: str) -> list[GateOp]:
    """Parse every token of a program, failing on the first bad one."""
    ops = []
    for tok in tokenize(program):
        op = parse_token(tok)
        if op is not None:
            ops.append(op)
    return ops


def _single_matrix(op: SingleQubitGate | RotationGate) -> np.ndarray:
    kind = op.kind
    if kind is GateKind.X:
        return X_MATRIX
    if kind is GateKind.Y:
        return Y_MATRIX
    if kind is GateKind.Z:
        return Z_MATRIX
    if kind is GateKind.H:
        return H_MATRIX
    if kind is GateKind.S:
        return S_MATRIX
    if kind is GateKind.T:
        return T_MATRIX
    if kind is GateKind.RX:
        return rx_matrix(op.angle)
    if kind is GateKind.RY:
        return ry_matrix(op.angle)
    if kind is GateKind.RZ:
        return rz_matrix(op.angle)
    raise ValueError(f"{kind.value} is not a single-qubit gate")


def operator_for(op: GateOp, num_qubits: int) -> Operator:
    """Lift a parsed gate to the full n-qubit operator."""
    if isinstance(op, (SingleQubitGate, RotationGate)):
        return Operator.lift_single(_single_matrix(op), num_qubits, op.qubit)
    if isinstance(op, TwoQubitGate):
        if op.kind is GateKind.CNOT:
            return Operator.cnot(op.first, op.second, num_qubits)
        if op.kind is GateKind.CZ:
            return Operator.cz(op.first, op.second, num_qubits)
        if op.kind is GateKind.SWAP:
            return Operator.swap(op.first, op.second, num_qubits)
    raise ValueError(f"{op!r} has no operator form")


def special_state(op: SpecialState, num_qubits: int) -> np.ndarray:
    if op.kind is GateKind.BELL:
        return bell_state(num_qubits)
    if op.kind is GateKind.GHZ:
        return ghz_state(num_qubits)
    if op.kind is GateKind.W:
        return w_state(num_qubits)
    raise ValueError(f"{op.kind.value} is not a special state")


def apply_sequence(program: str, initial, num_qubits: int) -> np.ndarray:
    """Evaluate a gate program against an initial state.

    Tokens are parsed and applied strictly left to right; a failure aborts
    the rest of the program. The input array is never modified.
    """
    state = np.array(initial, dtype=np.complex128)
    dim = 1 << num_qubits
    if state.shape != (dim,):
        raise DimensionError(
            f"Initial state has {state.size} amplitudes, expected {dim} for {num_qubits} qubits")

    tokens = tokenize(program)
    for pos, tok in enumerate(tokens):
        op = parse_token(tok)
        if op is None:
            continue
        if isinstance(op, SpecialState):
            if len(tokens) > 1:
                discarded = tokens[:pos] + tokens[pos + 1:]
                logger.warning("%s replaces the state; discarding tokens: %s",
                               op.kind.value, " ".join(discarded))
            return special_state(op, num_qubits)
        state = operator_for(op, num_qubits).apply(state)
    return state
