"""Shared machinery for the code emitters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from qosmos.engine.circuit import Circuit, GatePlacement
from qosmos.engine.gates import GateKind


def format_angle(angle: float) -> str:
    """Shortest text that reads back as exactly the same float."""
    return repr(float(angle))


class CodeEmitter(ABC):
    """Base class for a target-language backend.

    Subclasses provide ``INSTRUCTIONS``, a table with one ``str.format``
    template per GateKind.  Templates may use ``{q}`` (first operand),
    ``{q2}`` (second operand) and ``{angle}``.  A table that does not cover
    every kind is rejected when the subclass is defined.
    """

    key: str = ""
    label: str = ""
    extension: str = ".txt"
    editor_language: str = "plaintext"
    INSTRUCTIONS: dict[GateKind, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = set(GateKind) - set(cls.INSTRUCTIONS)
        if missing:
            names = ", ".join(sorted(k.name for k in missing))
            raise TypeError(f"{cls.__name__} has no instruction for: {names}")

    def generate(self, circuit: Circuit) -> str:
        lines = list(self.header(circuit))
        for placement in circuit.ordered_placements():
            instruction = self.instruction(placement, circuit.qubit_count)
            if instruction is not None:
                lines.append(instruction)
        lines.extend(self.epilogue(circuit))
        return "\n".join(lines) + "\n"

    def instruction(self, placement: GatePlacement, qubit_count: int) -> str | None:
        """Render one placement, or ``None`` when its second operand is missing."""
        if placement.qubit + placement.kind.arity > qubit_count:
            return None
        angle = placement.effective_angle
        return self.INSTRUCTIONS[placement.kind].format(
            q=placement.qubit,
            q2=placement.qubit + 1,
            angle=format_angle(angle) if angle is not None else "",
        )

    @abstractmethod
    def header(self, circuit: Circuit) -> list[str]:
        """Imports, declarations and anything before the first instruction."""

    @abstractmethod
    def epilogue(self, circuit: Circuit) -> list[str]:
        """Execute-and-report boilerplate after the last instruction."""
