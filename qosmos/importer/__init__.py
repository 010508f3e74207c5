"""Code import: line grammars for qasm, qiskit, cirq, qsharp and quil."""
