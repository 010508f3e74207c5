"""Emitters for line-oriented assembly notations: OpenQASM 2.0 and Quil."""

from __future__ import annotations

from qosmos.engine.circuit import Circuit
from qosmos.engine.gates import GateKind

from .base import CodeEmitter


class QasmEmitter(CodeEmitter):
    """OpenQASM 2.0 with explicit ``qreg``/``creg`` declarations."""

    key = "qasm"
    label = "OpenQASM 2.0"
    extension = ".qasm"
    editor_language = "plaintext"
    INSTRUCTIONS = {
        GateKind.H: "h q[{q}];",
        GateKind.X: "x q[{q}];",
        GateKind.Y: "y q[{q}];",
        GateKind.Z: "z q[{q}];",
        GateKind.S: "s q[{q}];",
        GateKind.T: "t q[{q}];",
        GateKind.RX: "rx({angle}) q[{q}];",
        GateKind.RY: "ry({angle}) q[{q}];",
        GateKind.RZ: "rz({angle}) q[{q}];",
        GateKind.CX: "cx q[{q}],q[{q2}];",
        GateKind.CZ: "cz q[{q}],q[{q2}];",
        GateKind.SWAP: "swap q[{q}],q[{q2}];",
        GateKind.MEASURE: "measure q[{q}] -> c[{q}];",
    }

    def header(self, circuit: Circuit) -> list[str]:
        n = circuit.qubit_count
        return [
            "OPENQASM 2.0;",
            'include "qelib1.inc";',
            "",
            f"// Quantum circuit with {n} qubits and {circuit.gate_count()} gates",
            f"qreg q[{n}];",
            f"creg c[{n}];",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        last = circuit.qubit_count - 1
        return [
            "",
            f"// Execute on any OpenQASM 2.0 backend; results of q[0..{last}] "
            f"are read from c[0..{last}]",
        ]


class QuilEmitter(CodeEmitter):
    """One Quil instruction per line, qubits addressed by index."""

    key = "quil"
    label = "Quil"
    extension = ".quil"
    editor_language = "plaintext"
    INSTRUCTIONS = {
        GateKind.H: "H {q}",
        GateKind.X: "X {q}",
        GateKind.Y: "Y {q}",
        GateKind.Z: "Z {q}",
        GateKind.S: "S {q}",
        GateKind.T: "T {q}",
        GateKind.RX: "RX({angle}) {q}",
        GateKind.RY: "RY({angle}) {q}",
        GateKind.RZ: "RZ({angle}) {q}",
        GateKind.CX: "CNOT {q} {q2}",
        GateKind.CZ: "CZ {q} {q2}",
        GateKind.SWAP: "SWAP {q} {q2}",
        GateKind.MEASURE: "MEASURE {q} ro[{q}]",
    }

    def header(self, circuit: Circuit) -> list[str]:
        return [
            f"# Quil program with {circuit.qubit_count} qubits "
            f"and {circuit.gate_count()} gates",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        last = circuit.qubit_count - 1
        return [
            "",
            f"# Run with quilc and the QVM; qubits 0..{last} report into ro[0..{last}]",
        ]
