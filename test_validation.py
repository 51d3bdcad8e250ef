"""Validation test harness -- basic correctness properties of the engine.

These tests verify identities that any correct state-vector engine must
satisfy. They run under pytest, or standalone:

Run: python test_validation.py
"""

from __future__ import annotations

import sys
import os
import math
import traceback

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import numpy as np

# ---- Engine imports -------------------------------------------------------
from quantum_visualize.engine.algorithms import AlgorithmDriver
from quantum_visualize.engine.amplitudes import from_amplitude_list, to_amplitude_list
from quantum_visualize.engine.errors import NormalizationError
from quantum_visualize.engine.measurement import MeasurementEngine
from quantum_visualize.engine.program import apply_sequence
from quantum_visualize.engine.state_vector import (
    zero_state, bell_state, ghz_state, w_state, normalize,
)


TOLERANCE = 1e-9
INV_SQRT2 = 1 / math.sqrt(2)


# =========================================================================
# Test 1: Probabilities of valid states sum to 1.0
# =========================================================================

def test_probabilities_sum_to_one():
    states = [
        zero_state(3),
        bell_state(2),
        ghz_state(4),
        w_state(5),
        apply_sequence("H0 RY1(33) CNOT01 T2 RX2(-71.5) SWAP02", zero_state(3), 3),
        AlgorithmDriver.grover(4, 11).state,
        AlgorithmDriver.qpe(4, 0.3).state,
    ]
    for state in states:
        total = float(MeasurementEngine.probabilities(state).sum())
        assert abs(total - 1.0) < TOLERANCE, f"sum = {total:.15f}"


# =========================================================================
# Test 2: Single-qubit gates on |0>
# =========================================================================

def test_hadamard_on_zero():
    state = apply_sequence("H0", zero_state(1), 1)
    assert np.allclose(state, [INV_SQRT2, INV_SQRT2], atol=TOLERANCE)
    assert np.all(np.abs(state.imag) < TOLERANCE)
    assert np.all(state.real >= 0)


def test_x_on_zero():
    state = apply_sequence("X0", zero_state(1), 1)
    assert np.allclose(state, [0, 1], atol=TOLERANCE)


def test_hadamard_is_self_inverse():
    state = apply_sequence("H0 H0", zero_state(1), 1)
    assert np.allclose(state, zero_state(1), atol=TOLERANCE)


# =========================================================================
# Test 3: CNOT respects the qubit-0-is-LSB convention
# =========================================================================

def test_cnot_flips_target_when_control_set():
    # Index 1 has qubit 0 (the control) set; CNOT01 flips qubit 1 -> index 3.
    initial = np.zeros(4, dtype=np.complex128)
    initial[1] = 1
    state = apply_sequence("CNOT01", initial, 2)
    assert np.allclose(state, [0, 0, 0, 1], atol=TOLERANCE)


def test_cnot_leaves_state_when_control_clear():
    # Index 2 has only qubit 1 set; control qubit 0 is clear.
    initial = np.zeros(4, dtype=np.complex128)
    initial[2] = 1
    state = apply_sequence("CNOT01", initial, 2)
    assert np.allclose(state, initial, atol=TOLERANCE)


# =========================================================================
# Test 4: Algorithm demonstrations reach their expected answers
# =========================================================================

def test_grover_finds_marked_index():
    result = AlgorithmDriver.grover(3, 5)
    assert result.iterations == math.floor(math.pi / 4 * math.sqrt(8))
    assert result.best_index == 5
    assert result.best_probability > 0.9


def test_qft_of_zero_is_flat():
    result = AlgorithmDriver.qft(2, 0)
    mags = np.abs(result.state)
    assert np.allclose(mags, 0.5, atol=TOLERANCE)


def test_deutsch_jozsa_constant_oracle():
    for n in range(1, 6):
        result = AlgorithmDriver.deutsch_jozsa(n, "constant0")
        assert result.zero_probability > 0.99
        assert result.verdict == "constant"


def test_deutsch_jozsa_parity_oracle():
    for n in range(1, 6):
        result = AlgorithmDriver.deutsch_jozsa(n, "parity")
        assert result.zero_probability <= 0.01
        assert result.verdict == "balanced"


# =========================================================================
# Test 5: Normalization and representation round trip
# =========================================================================

def test_normalize_zero_vector_fails():
    try:
        normalize(from_amplitude_list([{"re": 0, "im": 0}]))
    except NormalizationError:
        return
    raise AssertionError("normalizing a zero vector did not raise NormalizationError")


def test_amplitude_list_round_trip():
    state = apply_sequence("H0 RZ1(37) CNOT10 S0", zero_state(2), 2)
    restored = from_amplitude_list(to_amplitude_list(state))
    assert np.array_equal(restored, state)


# =========================================================================
# Main
# =========================================================================

def main():
    print("=" * 50)
    print("State Vector Engine Validation Test Harness")
    print("=" * 50)

    tests = [
        test_probabilities_sum_to_one,
        test_hadamard_on_zero,
        test_x_on_zero,
        test_hadamard_is_self_inverse,
        test_cnot_flips_target_when_control_set,
        test_cnot_leaves_state_when_control_clear,
        test_grover_finds_marked_index,
        test_qft_of_zero_is_flat,
        test_deutsch_jozsa_constant_oracle,
        test_deutsch_jozsa_parity_oracle,
        test_normalize_zero_vector_fails,
        test_amplitude_list_round_trip,
    ]

    passed = failed = 0
    for test_fn in tests:
        try:
            test_fn()
        except Exception:
            print(f"  [FAIL] {test_fn.__name__}")
            traceback.print_exc()
            failed += 1
        else:
            print(f"  [PASS] {test_fn.__name__}")
            passed += 1

    print("\n" + "=" * 50)
    print(f"Results: {passed}/{passed + failed} passed, {failed} failed")
    print("ALL TESTS PASSED" if failed == 0 else "SOME TESTS FAILED")
    print("=" * 50)

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
