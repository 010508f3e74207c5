"""Gate registry mapping every GateKind to its GateDefinition (Singleton)."""

from __future__ import annotations

from .gates import (
    GateDefinition, GateKind, _const,
    I_MATRIX, X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX, S_MATRIX, T_MATRIX,
    CNOT_MATRIX, CZ_MATRIX, SWAP_MATRIX,
    rx_matrix, ry_matrix, rz_matrix,
)


class GateRegistry:
    """Singleton registry mapping gate kinds to GateDefinition objects."""

    _instance: GateRegistry | None = None

    def __init__(self):
        self._gates: dict[GateKind, GateDefinition] = {}

    @classmethod
    def instance(cls) -> GateRegistry:
        if cls._instance is None:
            cls._instance = cls()
            cls._instance._register_builtins()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _register_builtins(self):
        # Single-qubit fixed gates
        self.register(GateDefinition(
            kind=GateKind.H, display_name="Hadamard", symbol="H",
            color="#7c3aed", matrix_func=_const(H_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.X, display_name="Pauli-X", symbol="X",
            color="#8b5cf6", matrix_func=_const(X_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.Y, display_name="Pauli-Y", symbol="Y",
            color="#a78bfa", matrix_func=_const(Y_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.Z, display_name="Pauli-Z", symbol="Z",
            color="#6d28d9", matrix_func=_const(Z_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.S, display_name="Phase", symbol="S",
            color="#7c3aed", matrix_func=_const(S_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.T, display_name="T-gate", symbol="T",
            color="#c4b5fd", matrix_func=_const(T_MATRIX)))

        # Rotations
        self.register(GateDefinition(
            kind=GateKind.RX, display_name="X-Rotation", symbol="RX",
            color="#7c3aed", matrix_func=rx_matrix))
        self.register(GateDefinition(
            kind=GateKind.RY, display_name="Y-Rotation", symbol="RY",
            color="#a78bfa", matrix_func=ry_matrix))
        self.register(GateDefinition(
            kind=GateKind.RZ, display_name="Z-Rotation", symbol="RZ",
            color="#6d28d9", matrix_func=rz_matrix))

        # Two-qubit gates on (qubit, qubit + 1)
        self.register(GateDefinition(
            kind=GateKind.CX, display_name="CNOT", symbol="CX",
            color="#4c1d95", matrix_func=_const(CNOT_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.CZ, display_name="Controlled-Z", symbol="CZ",
            color="#4c1d95", matrix_func=_const(CZ_MATRIX)))
        self.register(GateDefinition(
            kind=GateKind.SWAP, display_name="Swap", symbol="⊗",
            color="#7c3aed", matrix_func=_const(SWAP_MATRIX)))

        # Measurement leaves the state untouched during evolution
        self.register(GateDefinition(
            kind=GateKind.MEASURE, display_name="Measure", symbol="M",
            color="#c7b3f6", matrix_func=_const(I_MATRIX)))

    def register(self, gate_def: GateDefinition):
        self._gates[gate_def.kind] = gate_def

    def get(self, kind: GateKind) -> GateDefinition:
        if kind not in self._gates:
            raise KeyError(f"Gate '{kind}' not found in registry")
        return self._gates[kind]

    def all_gates(self) -> list[GateDefinition]:
        return list(self._gates.values())

