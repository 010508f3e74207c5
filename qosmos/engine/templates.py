"""Built-in circuit templates."""

from __future__ import annotations

from typing import Callable

from .circuit import Circuit
from .gates import GateKind


class AlgorithmTemplate:
    """Factory for the starter circuits offered in the template gallery."""

    @staticmethod
    def bell_state() -> Circuit:
        """Bell state |Phi+> = (|00> + |11>) / sqrt(2)."""
        circuit = Circuit(qubit_count=2)
        circuit.place(GateKind.H, 0, 0)
        circuit.place(GateKind.CX, 0, 1)
        return circuit

    @staticmethod
    def superposition(num_qubits: int = 3) -> Circuit:
        """Uniform superposition: a Hadamard on every qubit."""
        circuit = Circuit(qubit_count=num_qubits)
        for q in range(circuit.qubit_count):
            circuit.place(GateKind.H, q, 0)
        return circuit

    @staticmethod
    def ghz_state(num_qubits: int = 3) -> Circuit:
        """GHZ state built from a CNOT ladder of nearest neighbours."""
        circuit = Circuit(qubit_count=num_qubits)
        circuit.place(GateKind.H, 0, 0)
        for q in range(circuit.qubit_count - 1):
            circuit.place(GateKind.CX, q, q + 1)
        return circuit

    @staticmethod
    def grover() -> Circuit:
        """Two-qubit Grover search with a single oracle/diffusion round."""
        circuit = Circuit(qubit_count=2)
        for q in (0, 1):
            circuit.place(GateKind.H, q, 0)
        circuit.place(GateKind.Z, 1, 1)
        for q in (0, 1):
            circuit.place(GateKind.H, q, 2)
            circuit.place(GateKind.X, q, 3)
        circuit.place(GateKind.CZ, 0, 4)
        for q in (0, 1):
            circuit.place(GateKind.X, q, 5)
            circuit.place(GateKind.H, q, 6)
        return circuit


TEMPLATES: dict[str, Callable[[], Circuit]] = {
    "bell-state": AlgorithmTemplate.bell_state,
    "superposition": AlgorithmTemplate.superposition,
    "ghz": AlgorithmTemplate.ghz_state,
    "grover": AlgorithmTemplate.grover,
}


def build_template(name: str) -> Circuit:
    builder = TEMPLATES.get(name)
    if builder is None:
        raise KeyError(f"Unknown template '{name}'")
    return builder()
