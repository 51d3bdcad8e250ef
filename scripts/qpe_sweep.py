"""Phase sweep for quantum phase estimation -- estimate and confidence vs theta.

Usage:
    python scripts/qpe_sweep.py --counting 4 --steps 17
    python scripts/qpe_sweep.py --counting 3 --min-theta 0.0 --max-theta 0.5 --output qpe.json
"""

from __future__ import annotations

import argparse
import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from quantum_visualize.engine.algorithms import AlgorithmDriver


def run_sweep(counting_qubits: int, thetas: np.ndarray) -> list[dict]:
    results = []
    for theta in thetas:
        result = AlgorithmDriver.qpe(counting_qubits, float(theta))
        results.append({
            "theta": float(theta),
            "best_bits": result.best_bits,
            "estimate": result.estimate,
            "best_probability": result.best_probability,
            "abs_error": abs(result.estimate - float(theta)),
        })
    return results


def main():
    parser = argparse.ArgumentParser(description="QPE phase sweep experiment")
    parser.add_argument("--counting", type=int, default=3)
    parser.add_argument("--min-theta", type=float, default=0.0)
    parser.add_argument("--max-theta", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=17)
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args()

    thetas = np.linspace(args.min_theta, args.max_theta, args.steps)
    print(f"Running QPE sweep: counting={args.counting}, "
          f"theta=[{args.min_theta:.3f}, {args.max_theta:.3f}], steps={args.steps}")

    output = {
        "experiment": "qpe_sweep",
        "counting_qubits": args.counting,
        "results": run_sweep(args.counting, thetas),
    }

    if args.output:
        with open(args.output, "w") as f:
            json.dump(output, f, indent=2)
        print(f"Results saved to {args.output}")
    else:
        print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
