"""Application configuration management."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Persistent defaults for the command-line front end."""
    default_qubits: int = 2
    max_qubits: int = 6
    dirac_threshold: float = 1e-4
    seed: int | None = None
    log_level: str = "WARNING"
    recent_programs: list[str] = field(default_factory=list)

    _config_dir: Path = field(
        default_factory=lambda: Path.home() / ".quantum_visualize",
        repr=False)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def save(self):
        self._config_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "default_qubits": self.default_qubits,
            "max_qubits": self.max_qubits,
            "dirac_threshold": self.dirac_threshold,
            "seed": self.seed,
            "log_level": self.log_level,
            "recent_programs": self.recent_programs[:10],
        }
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> EngineConfig:
        config = cls()
        if config_dir is not None:
            config._config_dir = Path(config_dir)
        if config.config_path.exists():
            try:
                with open(config.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                for key, value in data.items():
                    if hasattr(config, key) and not key.startswith('_'):
                        setattr(config, key, value)
            except (json.JSONDecodeError, OSError):
                logger.warning("Ignoring unreadable config file %s",
                               config.config_path)
        return config

    def add_recent_program(self, program: str):
        if program in self.recent_programs:
            self.recent_programs.remove(program)
        self.recent_programs.insert(0, program)
        self.recent_programs = self.recent_programs[:10]
