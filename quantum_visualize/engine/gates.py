"""Fixed and parametric 2x2 gate matrices.

Rotation angles are given in degrees and use the half-angle convention,
e.g. RX(180) equals -i * X.
"""

from __future__ import annotations

import math

import numpy as np


# --- Fixed single-qubit gate matrices ---

I_MATRIX = np.eye(2, dtype=np.complex128)

X_MATRIX = np.array([[0, 1],
                     [1, 0]], dtype=np.complex128)

Y_MATRIX = np.array([[0, -1j],
                     [1j, 0]], dtype=np.complex128)

Z_MATRIX = np.array([[1, 0],
                     [0, -1]], dtype=np.complex128)

H_MATRIX = np.array([[1, 1],
                     [1, -1]], dtype=np.complex128) / np.sqrt(2)

S_MATRIX = np.array([[1, 0],
                     [0, 1j]], dtype=np.complex128)

T_MATRIX = np.array([[1, 0],
                     [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)


# --- Parameterized single-qubit gate functions (degrees) ---

def rx_matrix(theta: float) -> np.ndarray:
    t = math.radians(theta)
    c, s = math.cos(t / 2), math.sin(t / 2)
    return np.array([[c, -1j * s],
                     [-1j * s, c]], dtype=np.complex128)


def ry_matrix(theta: float) -> np.ndarray:
    t = math.radians(theta)
    c, s = math.cos(t / 2), math.sin(t / 2)
    return np.array([[c, -s],
                     [s, c]], dtype=np.complex128)


def rz_matrix(theta: float) -> np.ndarray:
    t = math.radians(theta)
    return np.array([[np.exp(-1j * t / 2), 0],
                     [0, np.exp(1j * t / 2)]], dtype=np.complex128)


def is_unitary(matrix: np.ndarray, atol: float = 1e-10) -> bool:
    """True when matrix^dagger @ matrix is the identity within atol."""
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    product = matrix.conj().T @ matrix
    return bool(np.allclose(product, np.eye(matrix.shape[0]), atol=atol))
