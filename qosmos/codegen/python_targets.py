"""Emitters for Python SDKs: Qiskit, Cirq, Amazon Braket and PennyLane."""

from __future__ import annotations

from qosmos.engine.circuit import Circuit
from qosmos.engine.gates import GateKind

from .base import CodeEmitter


class QiskitEmitter(CodeEmitter):
    """Gate calls on a ``QuantumCircuit``, run on the Aer statevector simulator."""

    key = "qiskit"
    label = "Qiskit"
    extension = ".py"
    editor_language = "python"
    INSTRUCTIONS = {
        GateKind.H: "qc.h(qr[{q}])  # Hadamard",
        GateKind.X: "qc.x(qr[{q}])  # Pauli-X",
        GateKind.Y: "qc.y(qr[{q}])  # Pauli-Y",
        GateKind.Z: "qc.z(qr[{q}])  # Pauli-Z",
        GateKind.S: "qc.s(qr[{q}])  # Phase",
        GateKind.T: "qc.t(qr[{q}])  # T-gate",
        GateKind.RX: "qc.rx({angle}, qr[{q}])  # X-Rotation",
        GateKind.RY: "qc.ry({angle}, qr[{q}])  # Y-Rotation",
        GateKind.RZ: "qc.rz({angle}, qr[{q}])  # Z-Rotation",
        GateKind.CX: "qc.cx(qr[{q}], qr[{q2}])  # CNOT",
        GateKind.CZ: "qc.cz(qr[{q}], qr[{q2}])  # Controlled-Z",
        GateKind.SWAP: "qc.swap(qr[{q}], qr[{q2}])  # Swap",
        GateKind.MEASURE: "qc.measure(qr[{q}], cr[{q}])  # Measure",
    }

    def header(self, circuit: Circuit) -> list[str]:
        n = circuit.qubit_count
        return [
            "from qiskit import QuantumCircuit, QuantumRegister, ClassicalRegister",
            "from qiskit import transpile",
            "from qiskit_aer import AerSimulator",
            "",
            f"# Quantum circuit with {n} qubits",
            f"qr = QuantumRegister({n}, 'q')",
            f"cr = ClassicalRegister({n}, 'c')",
            "qc = QuantumCircuit(qr, cr)",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            "",
            "# Simulate the circuit",
            "qc.save_statevector()",
            "simulator = AerSimulator(method='statevector')",
            "result = simulator.run(transpile(qc, simulator), shots=1024).result()",
            "",
            "print('Statevector:', result.get_statevector(qc))",
            "print('Measurement results:', result.get_counts(qc))",
        ]


class CirqEmitter(CodeEmitter):
    """Operations appended to a ``cirq.Circuit`` over line qubits."""

    key = "cirq"
    label = "Cirq"
    extension = ".py"
    editor_language = "python"
    INSTRUCTIONS = {
        GateKind.H: "circuit.append(cirq.H(qubits[{q}]))",
        GateKind.X: "circuit.append(cirq.X(qubits[{q}]))",
        GateKind.Y: "circuit.append(cirq.Y(qubits[{q}]))",
        GateKind.Z: "circuit.append(cirq.Z(qubits[{q}]))",
        GateKind.S: "circuit.append(cirq.S(qubits[{q}]))",
        GateKind.T: "circuit.append(cirq.T(qubits[{q}]))",
        GateKind.RX: "circuit.append(cirq.rx({angle})(qubits[{q}]))",
        GateKind.RY: "circuit.append(cirq.ry({angle})(qubits[{q}]))",
        GateKind.RZ: "circuit.append(cirq.rz({angle})(qubits[{q}]))",
        GateKind.CX: "circuit.append(cirq.CNOT(qubits[{q}], qubits[{q2}]))",
        GateKind.CZ: "circuit.append(cirq.CZ(qubits[{q}], qubits[{q2}]))",
        GateKind.SWAP: "circuit.append(cirq.SWAP(qubits[{q}], qubits[{q2}]))",
        GateKind.MEASURE: "circuit.append(cirq.measure(qubits[{q}], key='m{q}'))",
    }

    def header(self, circuit: Circuit) -> list[str]:
        return [
            "import cirq",
            "",
            f"qubits = cirq.LineQubit.range({circuit.qubit_count})",
            "circuit = cirq.Circuit()",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            "",
            "# Simulate the circuit",
            "simulator = cirq.Simulator()",
            "result = simulator.simulate(circuit, qubit_order=qubits)",
            "",
            "print(circuit)",
            "print('Final state:', result.dirac_notation())",
        ]


class BraketEmitter(CodeEmitter):
    """Amazon Braket SDK calls, run on the local simulator."""

    key = "braket"
    label = "Amazon Braket"
    extension = ".py"
    editor_language = "python"
    INSTRUCTIONS = {
        GateKind.H: "circuit.h({q})",
        GateKind.X: "circuit.x({q})",
        GateKind.Y: "circuit.y({q})",
        GateKind.Z: "circuit.z({q})",
        GateKind.S: "circuit.s({q})",
        GateKind.T: "circuit.t({q})",
        GateKind.RX: "circuit.rx({q}, {angle})",
        GateKind.RY: "circuit.ry({q}, {angle})",
        GateKind.RZ: "circuit.rz({q}, {angle})",
        GateKind.CX: "circuit.cnot({q}, {q2})",
        GateKind.CZ: "circuit.cz({q}, {q2})",
        GateKind.SWAP: "circuit.swap({q}, {q2})",
        GateKind.MEASURE: "circuit.measure({q})",
    }

    def header(self, circuit: Circuit) -> list[str]:
        return [
            "from braket.circuits import Circuit",
            "from braket.devices import LocalSimulator",
            "",
            f"# Quantum circuit on qubits 0..{circuit.qubit_count - 1}",
            "circuit = Circuit()",
            "",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            "",
            "# Simulate the circuit",
            "device = LocalSimulator()",
            "result = device.run(circuit, shots=1024).result()",
            "",
            "print(circuit)",
            f"print('Measurement results for qubits 0..{circuit.qubit_count - 1}:', "
            "result.measurement_counts)",
        ]


class PennyLaneEmitter(CodeEmitter):
    """A QNode returning the Pauli-Z expectation value of every wire."""

    key = "pennylane"
    label = "PennyLane"
    extension = ".py"
    editor_language = "python"
    INSTRUCTIONS = {
        GateKind.H: "    qml.Hadamard(wires={q})",
        GateKind.X: "    qml.PauliX(wires={q})",
        GateKind.Y: "    qml.PauliY(wires={q})",
        GateKind.Z: "    qml.PauliZ(wires={q})",
        GateKind.S: "    qml.S(wires={q})",
        GateKind.T: "    qml.T(wires={q})",
        GateKind.RX: "    qml.RX({angle}, wires={q})",
        GateKind.RY: "    qml.RY({angle}, wires={q})",
        GateKind.RZ: "    qml.RZ({angle}, wires={q})",
        GateKind.CX: "    qml.CNOT(wires=[{q}, {q2}])",
        GateKind.CZ: "    qml.CZ(wires=[{q}, {q2}])",
        GateKind.SWAP: "    qml.SWAP(wires=[{q}, {q2}])",
        GateKind.MEASURE: "    qml.measure({q})",
    }

    def header(self, circuit: Circuit) -> list[str]:
        return [
            "import pennylane as qml",
            "",
            f"dev = qml.device('default.qubit', wires={circuit.qubit_count})",
            "",
            "",
            "@qml.qnode(dev)",
            "def circuit():",
        ]

    def epilogue(self, circuit: Circuit) -> list[str]:
        return [
            f"    return [qml.expval(qml.PauliZ(i)) for i in range({circuit.qubit_count})]",
            "",
            "",
            "result = circuit()",
            "print('Expectation values:', result)",
        ]
