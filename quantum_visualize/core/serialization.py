"""JSON save/load for state vectors."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from quantum_visualize.engine.amplitudes import from_amplitude_list, to_amplitude_list
from quantum_visualize.engine.state_vector import num_qubits_for


class StateSerializer:
    """JSON save/load for state vectors in the {re, im} amplitude format."""

    FILE_VERSION = "1.0"
    FILE_EXTENSION = ".qstate"

    @staticmethod
    def to_dict(state: np.ndarray) -> dict:
        return {
            "version": StateSerializer.FILE_VERSION,
            "num_qubits": num_qubits_for(state),
            "amplitudes": to_amplitude_list(state),
        }

    @staticmethod
    def from_dict(data: dict) -> np.ndarray:
        state = from_amplitude_list(data["amplitudes"])
        num_qubits_for(state)
        return state

    @staticmethod
    def save(state: np.ndarray, filepath: Path | str):
        filepath = Path(filepath)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(StateSerializer.to_dict(state), f, indent=2, ensure_ascii=False)

    @staticmethod
    def load(filepath: Path | str) -> np.ndarray:
        filepath = Path(filepath)
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return StateSerializer.from_dict(data)
