"""Application configuration management."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Persistent application configuration."""
    default_qubits: int = 3
    history_limit: int = 50
    default_target: str = "qiskit"
    default_import_language: str = "qasm"
    simulation_method: str = "random"
    simulation_delay_ms: int = 0
    recent_files: list[str] = field(default_factory=list)

    _config_dir: Path = field(
        default_factory=lambda: Path.home() / ".qosmos",
        repr=False)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def save(self):
        self._config_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "default_qubits": self.default_qubits,
            "history_limit": self.history_limit,
            "default_target": self.default_target,
            "default_import_language": self.default_import_language,
            "simulation_method": self.simulation_method,
            "simulation_delay_ms": self.simulation_delay_ms,
            "recent_files": self.recent_files[:10],
        }
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> AppConfig:
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))
        if not config.config_path.exists():
            return config
        try:
            with open(config.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            logger.warning("Ignoring unreadable config file %s",
                           config.config_path, exc_info=True)
            return config
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a JSON object",
                           config.config_path)
            return config
        for key, value in data.items():
            if key.startswith('_') or not hasattr(config, key):
                continue
            if _valid(key, value):
                setattr(config, key, value)
            else:
                logger.warning("Ignoring invalid config value %s=%r", key, value)
        return config

    def add_recent_file(self, filepath: str):
        if filepath in self.recent_files:
            self.recent_files.remove(filepath)
        self.recent_files.insert(0, filepath)
        self.recent_files = self.recent_files[:10]


_INT_RANGES = {
    "default_qubits": (1, 6),
    "history_limit": (1, 1000),
    "simulation_delay_ms": (0, 60000),
}

_CHOICES = {
    "simulation_method": ("random", "statevector"),
}


def _valid(key: str, value) -> bool:
    if key in _INT_RANGES:
        low, high = _INT_RANGES[key]
        return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high
    if key in _CHOICES:
        return value in _CHOICES[key]
    if key == "recent_files":
        return isinstance(value, list) and all(isinstance(p, str) for p in value)
    return isinstance(value, str)
