"""Validation test harness -- code generation and code import.

Every export target must render every gate kind, and every importable
language must read back what the matching emitter wrote.

Run: python test_translation.py   (or collect with pytest)
"""

from __future__ import annotations

import sys
import os
import tempfile
import traceback

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# ---- Translation imports --------------------------------------------------
from qosmos.engine.circuit import Circuit, GatePlacement
from qosmos.engine.gates import GateKind
from qosmos.codegen import generator
from qosmos.codegen.base import CodeEmitter
from qosmos.importer.angles import evaluate_angle
from qosmos.importer.importer import import_code, parse_instructions, supported_languages
from qosmos.core.config import AppConfig
from qosmos.core.errors import NoGatesFound, UnsupportedLanguage
from qosmos.controller.session import Session


TOLERANCE = 1e-12
PASS_COUNT = 0
FAIL_COUNT = 0

EXPECTED_EXTENSIONS = {
    "qiskit": ".py",
    "qasm": ".qasm",
    "cirq": ".py",
    "qsharp": ".qs",
    "braket": ".py",
    "quil": ".quil",
    "pennylane": ".py",
    "xacc": ".cpp",
}


def _report(name: str, passed: bool, details: str = ""):
    global PASS_COUNT, FAIL_COUNT
    status = "PASS" if passed else "FAIL"
    if passed:
        PASS_COUNT += 1
    else:
        FAIL_COUNT += 1
    print(f"  [{status}] {name}")
    if details and not passed:
        print(f"         {details}")
    assert passed, f"{name}: {details}"


def _mixed_circuit() -> Circuit:
    """One gate per column touching every family of gate."""
    circuit = Circuit(qubit_count=3)
    circuit.place(GateKind.H, 0, 0)
    circuit.place(GateKind.RX, 1, 1, angle=0.3)
    circuit.place(GateKind.CX, 0, 2)
    circuit.place(GateKind.CZ, 1, 3)
    circuit.place(GateKind.SWAP, 1, 4)
    circuit.place(GateKind.T, 2, 5)
    circuit.place(GateKind.MEASURE, 2, 6)
    circuit.place(GateKind.RZ, 0, 7)
    return circuit


def _signature(placements) -> list[tuple]:
    return [(p.kind, p.qubit, p.column, p.effective_angle)
            for p in sorted(placements, key=lambda p: (p.column, p.qubit))]


# =========================================================================
# Test 1: The QASM walkthrough
# =========================================================================

def test_qasm_walkthrough():
    """H at (0, 0) and CX at (0, 1) give two instruction lines that read back."""
    print("\nTest 1: QASM Walkthrough")
    print("-" * 40)

    circuit = Circuit(qubit_count=2)
    circuit.place(GateKind.H, 0, 0)
    circuit.place(GateKind.CX, 0, 1)
    code = generator.generate(circuit, "qasm")
    lines = code.splitlines()

    _report("header declares the registers",
            lines[0] == "OPENQASM 2.0;" and "qreg q[2];" in lines and "creg c[2];" in lines)
    instructions = [l for l in lines if l and not l.startswith(("//", "OPENQASM",
                                                                  "include", "qreg", "creg"))]
    _report(
        "exactly two instruction lines",
        instructions == ["h q[0];", "cx q[0],q[1];"],
        f"got {instructions}",
    )

    result = import_code(code, "qasm")
    _report(
        "import reads them back into columns 0 and 1",
        _signature(result.placements) == _signature(circuit.placements)
        and result.qubit_count == 2,
        f"got {result.placements}",
    )


# =========================================================================
# Test 2: Every target renders every gate kind
# =========================================================================

def test_targets_cover_all_kinds():
    print("\nTest 2: Target Coverage")
    print("-" * 40)

    _report("eight targets are registered",
            sorted(generator.available_targets()) == sorted(EXPECTED_EXTENSIONS))

    for target, extension in EXPECTED_EXTENSIONS.items():
        emitter = generator.get_emitter(target)
        _report(f"{target} uses {extension}", generator.file_extension(target) == extension)

        missing = []
        for kind in GateKind:
            circuit = Circuit(qubit_count=2)
            circuit.place(kind, 0, 0, angle=0.5)
            line = emitter.instruction(circuit.placements[0], circuit.qubit_count)
            if not line or line not in generator.generate(circuit, target).splitlines():
                missing.append(kind.name)
        _report(f"{target} renders all {len(GateKind)} kinds", not missing,
                f"missing {missing}")

    _report("editor languages",
            generator.display_language("qiskit") == "python"
            and generator.display_language("qsharp") == "csharp"
            and generator.display_language("xacc") == "cpp"
            and generator.display_language("quil") == "plaintext")

    try:
        class Incomplete(CodeEmitter):
            INSTRUCTIONS = {GateKind.H: "h {q}"}

            def header(self, circuit):
                return []

            def epilogue(self, circuit):
                return []
        accepted = True
    except TypeError:
        accepted = False
    _report("an emitter missing a gate kind is refused", not accepted)


# =========================================================================
# Test 3: Generation details
# =========================================================================

def test_generation_details():
    print("\nTest 3: Generation Details")
    print("-" * 40)

    circuit = _mixed_circuit()
    for target in generator.available_targets():
        first = generator.generate(circuit, target)
        _report(f"{target} output is deterministic",
                first == generator.generate(circuit.copy(), target))

    circuit = Circuit(qubit_count=1)
    circuit.place(GateKind.RY, 0, 0)
    _report("unset rotation is written as pi/2",
            "ry(1.5707963267948966) q[0];" in generator.generate(circuit, "qasm"))

    # Built directly so the clamp in Circuit.place does not apply
    circuit = Circuit(qubit_count=2, placements=[
        GatePlacement(GateKind.H, 0, 0),
        GatePlacement(GateKind.CX, 1, 1),
    ])
    for language in supported_languages():
        parsed = parse_instructions(generator.generate(circuit, language), language)
        _report(f"{language} skips a CX on the top qubit",
                [p.kind for p in parsed] == [GateKind.H], f"got {parsed}")
    _report("xacc writes no CNOT for it",
            '"CNOT"' not in generator.generate(circuit, "xacc"))

    try:
        generator.generate(circuit, "cobol")
        raised = False
    except UnsupportedLanguage:
        raised = True
    _report("unknown target raises UnsupportedLanguage", raised)

    with tempfile.TemporaryDirectory() as tmp:
        path = generator.export(_mixed_circuit(), "qsharp", os.path.join(tmp, "out", "prog"))
        _report("export adds the target extension",
                path.suffix == ".qs" and path.read_text(encoding="utf-8").startswith("namespace"))


# =========================================================================
# Test 3b: Emitted order follows columns, then qubits
# =========================================================================

def test_emitted_instruction_order():
    """Instructions come out by (column, qubit), whatever order the gates went in."""
    print("\nTest 3b: Emitted Instruction Order")
    print("-" * 40)

    circuit = Circuit(qubit_count=3)
    circuit.place(GateKind.T, 2, 5)
    circuit.place(GateKind.X, 1, 3)
    circuit.place(GateKind.RZ, 1, 6, angle=0.5)
    circuit.place(GateKind.H, 0, 0)
    circuit.place(GateKind.Y, 0, 3)
    expected_cells = [(0, 0), (0, 3), (1, 3), (2, 5), (1, 6)]

    for target in generator.available_targets():
        emitter = generator.get_emitter(target)
        expected = [emitter.instruction(circuit.gate_at(q, c), circuit.qubit_count)
                    for q, c in expected_cells]
        lines = generator.generate(circuit, target).splitlines()
        emitted = [line for line in lines if line in expected]
        _report(f"{target} emits gates in (column, qubit) order",
                emitted == expected, f"got {emitted}")


# =========================================================================
# Test 4: Importers read back what the emitters write
# =========================================================================

def test_import_round_trip():
    print("\nTest 4: Import Round Trip")
    print("-" * 40)

    circuit = _mixed_circuit()
    expected = _signature(circuit.placements)
    _report("five languages can be imported",
            sorted(supported_languages()) == ["cirq", "qasm", "qiskit", "qsharp", "quil"])

    for language in supported_languages():
        code = generator.generate(circuit, language)
        result = import_code(code, language)
        got = _signature(result.placements)
        _report(
            f"{language} round trip keeps kinds, qubits, columns and angles",
            got == expected and result.qubit_count == 3 and not result.dropped,
            f"got {got}",
        )


# =========================================================================
# Test 5: Import edge cases
# =========================================================================

def test_import_edge_cases():
    print("\nTest 5: Import Edge Cases")
    print("-" * 40)

    try:
        import_code("// nothing here\n\n// or here\n", "qasm")
        outcome = "none"
    except NoGatesFound:
        outcome = "no-gates"
    except UnsupportedLanguage:
        outcome = "unsupported"
    _report("comments only -> NoGatesFound", outcome == "no-gates", f"got {outcome}")

    try:
        import_code("h q[0];", "fortran")
        outcome = "none"
    except NoGatesFound:
        outcome = "no-gates"
    except UnsupportedLanguage:
        outcome = "unsupported"
    _report("unknown language -> UnsupportedLanguage", outcome == "unsupported",
            f"got {outcome}")

    result = import_code("\n".join(f"h q[{i % 2}];" for i in range(10)), "qasm")
    _report("gates past column 8 are dropped",
            len(result.placements) == 8 and len(result.dropped) == 2
            and result.recognised == 10)

    result = import_code("h q[0];\ncx q[5],q[6];", "qasm")
    _report("a gate that needs a 7th qubit is dropped and does not size the register",
            result.qubit_count == 1 and len(result.placements) == 1
            and len(result.dropped) == 1, f"got {result.qubit_count} qubits")

    result = import_code("h q[1];\nh q[40];", "qasm")
    _report("a stray high operand does not grow the register",
            result.qubit_count == 2 and len(result.dropped) == 1
            and result.to_circuit().qubit_count == 2)

    result = import_code("x q[0];\ncx q[4],q[5];", "qasm")
    _report("a kept gate on the top pair sizes the register to 6",
            result.qubit_count == 6 and not result.dropped)

    result = import_code("x q[4];", "qasm")
    _report("register grows to the highest operand", result.qubit_count == 5)

    result = import_code("qc.rx(np.pi/4, qr[0])\nqc.cnot(0, 1)", "qiskit")
    angle = result.placements[0].angle
    _report("qiskit angle expressions and bare indices",
            abs(angle - 0.7853981633974483) < TOLERANCE
            and result.placements[1].kind == GateKind.CX,
            f"got {result.placements}")

    result = import_code("Rx(PI() / 2.0, qubits[0]);\nControlled Z([qs[0]], qs[1]);",
                         "qsharp")
    _report("Q# PI() and Controlled Z",
            [p.kind for p in result.placements] == [GateKind.RX, GateKind.CZ])

    result = import_code(
        "q0, q1 = cirq.LineQubit.range(2)\n"
        "circuit.append(cirq.H(q0))\n"
        "circuit.append(cirq.CNOT(q0, q1))\n"
        "circuit.append(cirq.rx(0.5)(q1))\n"
        "circuit.append(cirq.measure(q_1, key='m1'))", "cirq")
    _report(
        "cirq qubit variables are read like indexed qubits",
        [(p.kind, p.qubit) for p in result.placements]
        == [(GateKind.H, 0), (GateKind.CX, 0), (GateKind.RX, 1), (GateKind.MEASURE, 1)]
        and result.qubit_count == 2,
        f"got {result.placements}",
    )

    result = import_code("circuit.append(cirq.rz(rads=mystery)(qubits[0]))", "cirq")
    _report("unreadable angle falls back to the default",
            result.placements[0].angle is None)


# =========================================================================
# Test 6: Angle expressions
# =========================================================================

def test_angle_expressions():
    print("\nTest 6: Angle Expressions")
    print("-" * 40)

    cases = {
        "1.25": 1.25,
        "pi/2": 1.5707963267948966,
        "-np.pi/4": -0.7853981633974483,
        "math.pi * 2": 6.283185307179586,
        "PI() / 2.0": 1.5707963267948966,
        "rads=0.5": 0.5,
        "2**-1": 0.5,
    }
    for text, value in cases.items():
        got = evaluate_angle(text)
        _report(f"{text!r}", got is not None and abs(got - value) < TOLERANCE, f"got {got}")

    for text in ("", "theta", "__import__('os')", "1/0", "True"):
        _report(f"{text!r} is rejected", evaluate_angle(text) is None)


# =========================================================================
# Test 7: Importing through a session
# =========================================================================

def test_session_import():
    print("\nTest 7: Session Import")
    print("-" * 40)

    session = Session(config=AppConfig())
    messages = []
    session.status_message.connect(lambda msg, level: messages.append((msg, level)))
    session.place(GateKind.H, 2, 4)
    before = session.circuit.snapshot()

    result = session.import_code("// empty\n", "qasm")
    _report("failed import keeps the circuit",
            result is None and session.circuit.snapshot() == before
            and messages[-1] == (str(NoGatesFound("qasm")), "error"))

    result = session.import_code("H 0\nCNOT 0 1\n", "quil")
    _report("successful import replaces the circuit",
            result is not None and session.circuit.qubit_count == 2
            and session.circuit.gate_count() == 2)
    _report("success message mentions the layout",
            messages[-1][1] == "success" and "one gate per column" in messages[-1][0])

    session.undo()
    _report("the import is a single undo step", session.circuit.snapshot() == before)

    session.target = "quil"
    _report("session target drives generation",
            session.generate_code().splitlines()[0].startswith("# Quil program"))
    try:
        session.target = "basic"
        raised = False
    except UnsupportedLanguage:
        raised = True
    _report("unknown session target is rejected", raised)


# =========================================================================
# Test 8: Command line
# =========================================================================

def test_command_line():
    print("\nTest 8: Command Line")
    print("-" * 40)

    import main as cli

    with tempfile.TemporaryDirectory() as tmp:
        saved = os.path.join(tmp, "bell.qosmos")
        _report("template writes a document",
                cli.main(["template", "bell-state", "--output", saved]) == 0
                and os.path.exists(saved))
        _report("generate prints code",
                cli.main(["generate", saved, "--target", "quil"]) == 0)
        _report("simulate prints a result",
                cli.main(["simulate", saved, "--method", "statevector"]) == 0)

        source = os.path.join(tmp, "prog.qasm")
        with open(source, "w", encoding="utf-8") as f:
            f.write("// comments only\n")
        _report("import of a gate-free file fails",
                cli.main(["import", source, "--language", "qasm"]) == 1)
        _report("missing circuit file fails",
                cli.main(["simulate", os.path.join(tmp, "nope.qosmos")]) == 1)
    _report("listings succeed", cli.main(["targets"]) == 0 and cli.main(["gates"]) == 0)


# =========================================================================
# Main runner
# =========================================================================

def main():
    global PASS_COUNT, FAIL_COUNT
    print("=" * 50)
    print("Qosmos Translation Test Harness")
    print("=" * 50)

    tests = [
        test_qasm_walkthrough,
        test_targets_cover_all_kinds,
        test_generation_details,
        test_emitted_instruction_order,
        test_import_round_trip,
        test_import_edge_cases,
        test_angle_expressions,
        test_session_import,
        test_command_line,
    ]

    for test_fn in tests:
        try:
            test_fn()
        except AssertionError:
            print(f"\n  [FAIL] {test_fn.__name__} stopped at the first failed check")
        except Exception:
            print(f"\n  [ERROR] {test_fn.__name__} raised an exception:")
            traceback.print_exc()
            FAIL_COUNT += 1

    print("\n" + "=" * 50)
    total = PASS_COUNT + FAIL_COUNT
    print(f"Results: {PASS_COUNT}/{total} passed, {FAIL_COUNT} failed")
    if FAIL_COUNT == 0:
        print("ALL TESTS PASSED")
    else:
        print("SOME TESTS FAILED")
    print("=" * 50)

    return 0 if FAIL_COUNT == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
