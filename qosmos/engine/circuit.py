"""Quantum circuit data model: a fixed-depth grid of gate placements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from .gates import DEFAULT_ANGLE, GateKind
from qosmos.core.errors import InvalidCoordinate

logger = logging.getLogger(__name__)

MIN_QUBITS = 1
MAX_QUBITS = 6
DEFAULT_QUBITS = 3
CIRCUIT_DEPTH = 8


@dataclass(frozen=True)
class GatePlacement:
    """One gate occupying one cell of the circuit grid.

    Two-qubit kinds act on ``qubit`` and ``qubit + 1``.  ``angle`` is only
    meaningful for rotations and stays ``None`` until the user sets one.
    """
    kind: GateKind
    qubit: int
    column: int
    angle: float | None = None

    @property
    def targets(self) -> list[int]:
        return list(range(self.qubit, self.qubit + self.kind.arity))

    @property
    def effective_angle(self) -> float | None:
        if not self.kind.is_parametric:
            return None
        return DEFAULT_ANGLE if self.angle is None else self.angle

    def to_dict(self) -> dict:
        d = {
            "kind": self.kind.value,
            "qubit": self.qubit,
            "column": self.column,
        }
        if self.angle is not None:
            d["angle"] = self.angle
        return d

    @classmethod
    def from_dict(cls, data: dict) -> GatePlacement:
        # Older documents used "type"/"gate" and nested "parameters"/"params"
        name = data.get("kind") or data.get("type") or data.get("gate")
        if name is None:
            raise ValueError(f"Gate entry has no kind: {data!r}")
        kind = GateKind.from_name(str(name))
        angle = data.get("angle")
        if angle is None:
            nested = data.get("parameters") or data.get("params") or {}
            if isinstance(nested, dict):
                angle = nested.get("angle")
        return cls(
            kind=kind,
            qubit=int(data["qubit"]),
            column=int(data.get("column", 0)),
            angle=float(angle) if angle is not None and kind.is_parametric else None,
        )


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the editable circuit state."""
    placements: tuple[GatePlacement, ...]
    qubit_count: int


@dataclass
class Circuit:
    """The gate-placement grid on ``qubit_count`` qubits and a fixed depth.

    At most one placement occupies a ``(qubit, column)`` cell; placing into an
    occupied cell replaces the occupant.
    """
    qubit_count: int = DEFAULT_QUBITS
    placements: list[GatePlacement] = field(default_factory=list)

    def __post_init__(self):
        self.qubit_count = max(MIN_QUBITS, min(MAX_QUBITS, int(self.qubit_count)))

    @property
    def depth(self) -> int:
        return CIRCUIT_DEPTH

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def gate_at(self, qubit: int, column: int) -> GatePlacement | None:
        index = self._index_of(qubit, column)
        return None if index is None else self.placements[index]

    def ordered_placements(self) -> list[GatePlacement]:
        """Placements in canonical execution order: by column, then qubit."""
        return sorted(self.placements, key=lambda p: (p.column, p.qubit))

    def gate_count(self) -> int:
        return len(self.placements)

    def used_depth(self) -> int:
        if not self.placements:
            return 0
        return max(p.column for p in self.placements) + 1

    def is_entangling(self) -> bool:
        return any(p.kind.arity == 2 for p in self.placements)

    def circuit_hash(self) -> int:
        """Hash of the circuit structure for invalidation checks."""
        parts: list = [self.qubit_count]
        for p in self.ordered_placements():
            parts.append((p.kind, p.qubit, p.column, p.angle))
        return hash(tuple(parts))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def place(self, kind: GateKind, qubit: int, column: int,
              angle: float | None = None) -> GatePlacement:
        """Put a gate into a cell, replacing whatever occupied it."""
        qubit, column = self._clamp(kind, qubit, column)
        placement = GatePlacement(
            kind=kind,
            qubit=qubit,
            column=column,
            angle=float(angle) if angle is not None and kind.is_parametric else None,
        )
        self._put(placement)
        return placement

    def remove(self, qubit: int, column: int) -> GatePlacement | None:
        index = self._index_of(qubit, column)
        if index is None:
            return None
        return self.placements.pop(index)

    def move(self, from_qubit: int, from_column: int,
             to_qubit: int, to_column: int) -> GatePlacement | None:
        """Move the gate in one cell to another, replacing the destination.

        Returns the placement at its new position, or ``None`` when the
        source cell is empty.
        """
        index = self._index_of(from_qubit, from_column)
        if index is None:
            return None
        source = self.placements[index]
        to_qubit, to_column = self._clamp(source.kind, to_qubit, to_column)
        if (to_qubit, to_column) == (source.qubit, source.column):
            return source
        del self.placements[index]
        moved = replace(source, qubit=to_qubit, column=to_column)
        self._put(moved)
        return moved

    def set_angle(self, qubit: int, column: int, angle: float) -> bool:
        index = self._index_of(qubit, column)
        if index is None or not self.placements[index].kind.is_parametric:
            return False
        self.placements[index] = replace(self.placements[index], angle=float(angle))
        return True

    def set_qubit_count(self, n: int) -> int:
        """Resize the register, dropping gates that would lose an operand."""
        n = max(MIN_QUBITS, min(MAX_QUBITS, int(n)))
        self.placements = [p for p in self.placements
                           if all(q < n for q in p.targets)]
        self.qubit_count = n
        return n

    def clear(self):
        self.placements.clear()

    # ------------------------------------------------------------------
    # Snapshots and documents
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(placements=tuple(self.placements),
                        qubit_count=self.qubit_count)

    def restore(self, snapshot: Snapshot):
        self.placements = list(snapshot.placements)
        self.qubit_count = snapshot.qubit_count

    def copy(self) -> Circuit:
        return Circuit(qubit_count=self.qubit_count,
                       placements=list(self.placements))

    def to_dict(self) -> dict:
        return {
            "qubitCount": self.qubit_count,
            "gates": [p.to_dict() for p in self.placements],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Circuit:
        """Rebuild a circuit, discarding entries that break the grid rules."""
        circuit = cls(qubit_count=data.get("qubitCount", data.get("qubits", DEFAULT_QUBITS)))
        for g_data in data.get("gates", []):
            placement = GatePlacement.from_dict(g_data)
            if not circuit._fits(placement):
                logger.warning("Dropping gate outside the grid: %s", g_data)
                continue
            circuit._put(placement)
        return circuit

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, qubit: int, column: int) -> int | None:
        for i, p in enumerate(self.placements):
            if p.qubit == qubit and p.column == column:
                return i
        return None

    def _put(self, placement: GatePlacement):
        index = self._index_of(placement.qubit, placement.column)
        if index is None:
            self.placements.append(placement)
        else:
            self.placements[index] = placement

    def _fits(self, placement: GatePlacement) -> bool:
        return (0 <= placement.column < self.depth
                and placement.qubit >= 0
                and placement.qubit + placement.kind.arity <= self.qubit_count)

    def _clamp(self, kind: GateKind, qubit: int, column: int) -> tuple[int, int]:
        """Pull pointer-derived coordinates back onto the grid."""
        highest = self.qubit_count - kind.arity
        if highest < 0:
            raise InvalidCoordinate(qubit, column, self.qubit_count)
        clamped = (max(0, min(highest, int(qubit))),
                   max(0, min(self.depth - 1, int(column))))
        if clamped != (qubit, column):
            logger.debug("Clamped %s cell (%d, %d) to (%d, %d)",
                         kind.name, qubit, column, *clamped)
        return clamped
