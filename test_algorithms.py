"""Tests for the algorithm drivers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from quantum_visualize.engine.algorithms import AlgorithmDriver
from quantum_visualize.engine.errors import DimensionError


# ---- Deutsch-Jozsa --------------------------------------------------------

@pytest.mark.parametrize("oracle", ["constant0", "constant1"])
def test_deutsch_jozsa_constant_oracles(oracle):
    result = AlgorithmDriver.deutsch_jozsa(3, oracle)
    assert result.num_qubits == 4
    assert result.is_constant
    assert result.zero_probability == pytest.approx(1.0)


def test_deutsch_jozsa_parity_concentrates_on_all_ones():
    result = AlgorithmDriver.deutsch_jozsa(2, "parity")
    probs = np.abs(result.state) ** 2
    # Inputs on bits 1..2 all set: indices 6 and 7.
    assert probs[6] + probs[7] == pytest.approx(1.0)
    assert result.verdict == "balanced"


def test_deutsch_jozsa_clamps_inputs():
    assert AlgorithmDriver.deutsch_jozsa(0).num_qubits == 2
    assert AlgorithmDriver.deutsch_jozsa(9).num_qubits == 6


def test_deutsch_jozsa_unknown_oracle():
    with pytest.raises(ValueError, match="Unknown oracle type"):
        AlgorithmDriver.deutsch_jozsa(3, "random")


# ---- Grover ---------------------------------------------------------------

@pytest.mark.parametrize("n, target", [(2, 0), (3, 3), (4, 11), (5, 30)])
def test_grover_amplifies_target(n, target):
    result = AlgorithmDriver.grover(n, target)
    assert result.best_index == target
    assert result.best_probability > 0.9
    assert result.iterations == max(1, math.floor(math.pi / 4 * math.sqrt(2 ** n)))


def test_grover_single_qubit_runs_one_iteration():
    result = AlgorithmDriver.grover(1, 1)
    assert result.iterations == 1
    assert np.sum(np.abs(result.state) ** 2) == pytest.approx(1.0)


def test_grover_rejects_out_of_range_target():
    with pytest.raises(DimensionError):
        AlgorithmDriver.grover(3, 8)
    with pytest.raises(DimensionError):
        AlgorithmDriver.grover(3, -1)


def test_grover_clamps_qubits():
    assert AlgorithmDriver.grover(8, 3).num_qubits == 5


# ---- QFT ------------------------------------------------------------------

def test_qft_of_basis_state_has_linear_phases():
    result = AlgorithmDriver.qft(2, 1)
    assert np.allclose(result.state, [0.5, 0.5j, -0.5, -0.5j])


def test_qft_rejects_out_of_range_index():
    with pytest.raises(DimensionError):
        AlgorithmDriver.qft(2, 4)


def test_qft_clamps_qubits():
    assert AlgorithmDriver.qft(10, 0).num_qubits == 6


# ---- QPE ------------------------------------------------------------------

@pytest.mark.parametrize("m, theta, bits", [
    (3, 0.25, "010"),
    (4, 0.3125, "0101"),
    (2, 0.75, "11"),
    (1, 0.0, "0"),
])
def test_qpe_exact_phases(m, theta, bits):
    result = AlgorithmDriver.qpe(m, theta)
    assert result.num_qubits == m + 1
    assert result.best_bits == bits
    assert result.estimate == pytest.approx(theta)
    assert result.best_probability == pytest.approx(1.0)


def test_qpe_keeps_target_qubit_in_one():
    result = AlgorithmDriver.qpe(3, 0.25)
    probs = np.abs(result.state) ** 2
    # Target is bit 3: all weight sits on indices >= 8.
    assert probs[8:].sum() == pytest.approx(1.0)


def test_qpe_inexact_phase_picks_nearest_estimate():
    result = AlgorithmDriver.qpe(3, 0.3)
    assert result.best_bits == "010"
    assert result.counting_distribution.sum() == pytest.approx(1.0)
    assert 0.4 < result.best_probability < 1.0


def test_list_algorithms():
    names = [a["name"] for a in AlgorithmDriver.list_algorithms()]
    assert names == ["deutsch", "grover", "qft", "qpe"]
