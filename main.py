"""Quantum state-vector engine - command-line entry point.

Usage:
    python main.py run "H0 CNOT01" -n 2
    python main.py run "RY0(60)" -n 1 --measure --seed 7
    python main.py algorithm grover --qubits 3 --target 5
    python main.py algorithm qpe --qubits 3 --theta 0.25
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from quantum_visualize.core.config import EngineConfig
from quantum_visualize.core.serialization import StateSerializer
from quantum_visualize.engine.algorithms import AlgorithmDriver, DJ_ORACLES
from quantum_visualize.engine.amplitudes import format_amplitude
from quantum_visualize.engine.analysis import StateAnalysis
from quantum_visualize.engine.measurement import MeasurementEngine
from quantum_visualize.engine.program import apply_sequence
from quantum_visualize.engine.state_vector import INITIALIZERS

logger = logging.getLogger(__name__)


def _initial_state(source: str, num_qubits: int) -> np.ndarray:
    if source in INITIALIZERS:
        return INITIALIZERS[source](num_qubits)
    return StateSerializer.load(Path(source))


def _print_state(state: np.ndarray, num_qubits: int, threshold: float):
    print(f"State: {StateAnalysis.to_dirac(state, num_qubits, threshold)}")
    probs = MeasurementEngine.probabilities(state)
    for i, c in enumerate(state):
        bits = format(i, f"0{num_qubits}b")
        print(f"  {bits}: {abs(c):.3f} ({format_amplitude(c)})  {probs[i] * 100:.2f}%")
    if num_qubits > 1:
        entropy = StateAnalysis.entanglement_entropy(state, num_qubits)
        print(f"Entanglement entropy (split {num_qubits // 2}): {entropy:.4f} bits")


def _cmd_run(args, config: EngineConfig) -> int:
    n = args.qubits or config.default_qubits
    if n > config.max_qubits:
        logger.warning("%d qubits exceeds the configured maximum of %d",
                       n, config.max_qubits)
    initial = _initial_state(args.initial, n)
    state = apply_sequence(args.program, initial, n)
    _print_state(state, n, args.threshold or config.dirac_threshold)

    if args.measure:
        seed = args.seed if args.seed is not None else config.seed
        outcome = MeasurementEngine.measure(state, rng=np.random.default_rng(seed))
        print(f"Measured: |{format(outcome, f'0{n}b')}⟩")

    if args.save:
        StateSerializer.save(state, args.save)
        print(f"State saved to {args.save}")

    config.add_recent_program(args.program)
    try:
        config.save()
    except OSError:
        logger.debug("Could not persist config.", exc_info=True)
    return 0


def _cmd_algorithm(args, config: EngineConfig) -> int:
    threshold = args.threshold or config.dirac_threshold
    if args.name == "deutsch":
        result = AlgorithmDriver.deutsch_jozsa(args.qubits, args.oracle)
        _print_state(result.state, result.num_qubits, threshold)
        print(f"Verdict: {result.verdict} "
              f"(P(input register = 0) = {result.zero_probability * 100:.2f}%)")
    elif args.name == "grover":
        result = AlgorithmDriver.grover(args.qubits, args.target)
        _print_state(result.state, result.num_qubits, threshold)
        print(f"Most likely index: {result.best_index} "
              f"(probability {result.best_probability * 100:.2f}%, "
              f"{result.iterations} iterations)")
    elif args.name == "qft":
        result = AlgorithmDriver.qft(args.qubits, args.target)
        _print_state(result.state, result.num_qubits, threshold)
    else:
        result = AlgorithmDriver.qpe(args.qubits, args.theta)
        _print_state(result.state, result.num_qubits, threshold)
        print(f"Estimate: {result.best_bits} ~ {result.estimate} "
              f"(probability {result.best_probability * 100:.2f}%)")
    return 0


def _cmd_list(args, config: EngineConfig) -> int:
    for algo in AlgorithmDriver.list_algorithms():
        print(f"{algo['name']:<8} {algo['display']}: {algo['description']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quantum state-vector engine")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--threshold", type=float, default=None,
                        help="Hide Dirac terms below this magnitude")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Evaluate a gate program")
    run.add_argument("program", help='Whitespace-separated tokens, e.g. "H0 CNOT01"')
    run.add_argument("-n", "--qubits", type=int, default=None)
    run.add_argument("--initial", default="zero",
                     help="zero, one, bell, ghz, w, or a saved state file")
    run.add_argument("--measure", action="store_true")
    run.add_argument("--seed", type=int, default=None)
    run.add_argument("--save", type=str, default=None)
    run.set_defaults(func=_cmd_run)

    algo = sub.add_parser("algorithm", help="Run an algorithm demonstration")
    algo.add_argument("name", choices=["deutsch", "grover", "qft", "qpe"])
    algo.add_argument("--qubits", type=int, default=3,
                      help="Input qubits (deutsch), register size (grover, qft) "
                           "or counting qubits (qpe)")
    algo.add_argument("--oracle", choices=list(DJ_ORACLES), default="constant0")
    algo.add_argument("--target", type=int, default=3,
                      help="Marked index (grover) or input basis index (qft)")
    algo.add_argument("--theta", type=float, default=0.3125)
    algo.set_defaults(func=_cmd_algorithm)

    lst = sub.add_parser("list", help="List algorithm demonstrations")
    lst.set_defaults(func=_cmd_list)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = EngineConfig.load()
    level = logging.DEBUG if args.verbose else config.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args, config)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
