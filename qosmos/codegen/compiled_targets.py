"""Emitters for compiled languages: Q# and C++ with XACC."""

from __future__ import annotations

from qosmos.engine.circuit import Circuit
from qosmos.engine.gates import GateKind

from .base import CodeEmitter


class QSharpEmitter(CodeEmitter):
    """A typed Q# operation wrapped by an ``@EntryPoint()`` operation."""

    key = "qsharp"
    label = "Q#"
    extension = ".qs"
    editor_language = "csharp"
    INSTRUCTIONS = {
        GateKind.H: "        H(qubits[{q}]);",
        GateKind.X: "        X(qubits[{q}]);",
        GateKind.Y: "        Y(qubits[{q}]);",
        GateKind.Z: "        Z(qubits[{q}]);",
        GateKind.S: "        S(qubits[{q}]);",
        GateKind.T: "        T(qubits[{q}]);",
        GateKind.RX: "        Rx({angle}, qubits[{q}]);",
        GateKind.RY: "        Ry({angle}, qubits[{q}]);",
        GateKind.RZ: "        Rz({angle}, qubits[{q}]);",
        GateKind.CX: "        CNOT(qubits[{q}], qubits[{q2}]);",
        GateKind.CZ: "        CZ(qubits[{q}], qubits[{q2}]);",
        GateKind.SWAP: "        SWAP(qubits[{q}], qubits[{q2}]);",
        GateKind.MEASURE: "        set results w/= {q} <- M(qubits[{q}]);",
    }

    def header(self, circuit: Circuit) -> list[str]:
        n = circuit.qubit_count
        return [
            "namespace QuantumCircuit {",
            "    open Microsoft.Quantum.Canon;",
            "    open Microsoft.Quantum.Intrinsic;",
            "    open Microsoft.Quantum.Measurement;",
            "",
            f"    /// Quantum circuit with {n} qubits and {circuit.gate_count()} gates",
            "    operation RunQuantumCircuit() : Result[] {",
            f"        use qubits = Qubit[{n}];",
            f"        mutable results = [Zero, size = {n}];",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            "",
            "        // Measure all qubits",
            f"        for i in 0..{circuit.qubit_count - 1} {{",
            "            set results w/= i <- M(qubits[i]);",
            "        }",
            "        ResetAll(qubits);",
            "        return results;",
            "    }",
            "",
            "    @EntryPoint()",
            "    operation Main() : Result[] {",
            "        let results = RunQuantumCircuit();",
            '        Message($"Measurement results: {results}");',
            "        return results;",
            "    }",
            "}",
        ]


class XaccEmitter(CodeEmitter):
    """C++ program building an XACC composite instruction by instruction."""

    key = "xacc"
    label = "XACC (C++)"
    extension = ".cpp"
    editor_language = "cpp"
    INSTRUCTIONS = {
        GateKind.H: '    circuit->addInstruction(provider->createInstruction("H", {{{q}}}));',
        GateKind.X: '    circuit->addInstruction(provider->createInstruction("X", {{{q}}}));',
        GateKind.Y: '    circuit->addInstruction(provider->createInstruction("Y", {{{q}}}));',
        GateKind.Z: '    circuit->addInstruction(provider->createInstruction("Z", {{{q}}}));',
        GateKind.S: '    circuit->addInstruction(provider->createInstruction("S", {{{q}}}));',
        GateKind.T: '    circuit->addInstruction(provider->createInstruction("T", {{{q}}}));',
        GateKind.RX: '    circuit->addInstruction(provider->createInstruction("Rx", {{{q}}}, {{{angle}}}));',
        GateKind.RY: '    circuit->addInstruction(provider->createInstruction("Ry", {{{q}}}, {{{angle}}}));',
        GateKind.RZ: '    circuit->addInstruction(provider->createInstruction("Rz", {{{q}}}, {{{angle}}}));',
        GateKind.CX: '    circuit->addInstruction(provider->createInstruction("CNOT", {{{q}, {q2}}}));',
        GateKind.CZ: '    circuit->addInstruction(provider->createInstruction("CZ", {{{q}, {q2}}}));',
        GateKind.SWAP: '    circuit->addInstruction(provider->createInstruction("Swap", {{{q}, {q2}}}));',
        GateKind.MEASURE: '    circuit->addInstruction(provider->createInstruction("Measure", {{{q}}}));',
    }

    def header(self, circuit: Circuit) -> list[str]:
        return [
            '#include "xacc.hpp"',
            "#include <iostream>",
            "",
            "int main(int argc, char **argv) {",
            "    xacc::Initialize(argc, argv);",
            "",
            f"    // Quantum circuit with {circuit.qubit_count} qubits",
            '    auto provider = xacc::getIRProvider("quantum");',
            '    auto circuit = provider->createComposite("quantum_circuit");',
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            "",
            "    // Execute circuit",
            '    auto accelerator = xacc::getAccelerator("qpp");',
            f"    auto buffer = xacc::qalloc({circuit.qubit_count});",
            "    accelerator->execute(buffer, circuit);",
            "",
            '    std::cout << "Circuit executed successfully" << std::endl;',
            "    buffer->print();",
            "",
            "    xacc::Finalize();",
            "    return 0;",
            "}",
        ]
