"""JSON save/load for circuit documents."""

from __future__ import annotations

import datetime
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from qosmos.engine.circuit import Circuit, GatePlacement

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


@dataclass
class CircuitDocument:
    """A saved circuit.

    Only ``qubit_count`` and ``gates`` are needed to rebuild the circuit;
    the remaining fields are carried for the storage layer.
    """
    name: str
    qubit_count: int
    gates: list[GatePlacement] = field(default_factory=list)
    language: str = "qiskit"
    created_at: str = field(default_factory=_utc_now)
    owner_id: str | None = None

    @property
    def depth(self) -> int:
        return self.to_circuit().used_depth()

    @property
    def entangled(self) -> bool:
        return self.to_circuit().is_entangling()

    @classmethod
    def from_circuit(cls, circuit: Circuit, name: str, language: str = "qiskit",
                     owner_id: str | None = None) -> CircuitDocument:
        return cls(
            name=name,
            qubit_count=circuit.qubit_count,
            gates=list(circuit.placements),
            language=language,
            owner_id=owner_id,
        )

    def to_circuit(self) -> Circuit:
        return Circuit.from_dict({
            "qubitCount": self.qubit_count,
            "gates": [g.to_dict() for g in self.gates],
        })

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "qubitCount": self.qubit_count,
            "gates": [g.to_dict() for g in self.gates],
            "language": self.language,
            "createdAt": self.created_at,
            "ownerId": self.owner_id,
            "depth": self.depth,
            "entangled": self.entangled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CircuitDocument:
        # Older documents stored "title" and "qubits"
        return cls(
            name=data.get("name", data.get("title", "Untitled circuit")),
            qubit_count=int(data.get("qubitCount", data.get("qubits", 3))),
            gates=[GatePlacement.from_dict(g) for g in data.get("gates", [])],
            language=data.get("language", "qiskit"),
            created_at=data.get("createdAt", _utc_now()),
            owner_id=data.get("ownerId", data.get("userId")),
        )


class CircuitSerializer:
    """JSON save/load for circuit documents."""

    FILE_VERSION = "1.0"
    FILE_EXTENSION = ".qosmos"

    @staticmethod
    def save(document: CircuitDocument, filepath: Path | str) -> Path:
        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix(CircuitSerializer.FILE_EXTENSION)
        data = {"version": CircuitSerializer.FILE_VERSION, **document.to_dict()}
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug("Saved circuit '%s' to %s", document.name, filepath)
        return filepath

    @staticmethod
    def load(filepath: Path | str) -> CircuitDocument:
        filepath = Path(filepath)
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return CircuitDocument.from_dict(data)
