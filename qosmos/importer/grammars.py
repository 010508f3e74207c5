"""Per-language line grammars for lifting source text back into gates.

A grammar looks at one line at a time and either recognises a single gate
invocation or skips the line.  Skipping is the normal outcome for
comments, declarations, blank lines and anything unfamiliar.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from qosmos.engine.gates import GateKind

from .angles import evaluate_angle


@dataclass(frozen=True)
class ParsedInstruction:
    """A gate recognised on one source line, before it is given a column."""
    kind: GateKind
    operands: tuple[int, ...]
    angle: float | None = None

    @property
    def qubit(self) -> int:
        return self.operands[0]


# A rule turns a regex match into an instruction
Rule = tuple[re.Pattern, Callable[[re.Match], ParsedInstruction]]

_REG = r"\w+\[\s*(\d+)\s*\]"  # register element such as q[0] or qubits[3]
_OPERAND = r"(?:\w+\[\s*)?(\d+)\s*\]?"  # qr[0] or a bare index
_CIRQ_QUBIT = r"(?:\w+\[\s*|\bq_?)(\d+)\s*\]?"  # qubits[0] or a q0 variable


def _single(match: re.Match) -> ParsedInstruction:
    return ParsedInstruction(GateKind.from_name(match.group(1)), (int(match.group(2)),))


def _rotation(match: re.Match) -> ParsedInstruction:
    return ParsedInstruction(
        GateKind.from_name(match.group(1)),
        (int(match.group(3)),),
        evaluate_angle(match.group(2)),
    )


def _two_qubit(match: re.Match) -> ParsedInstruction:
    return ParsedInstruction(
        GateKind.from_name(match.group(1)),
        (int(match.group(2)), int(match.group(3))),
    )


def _controlled_z(match: re.Match) -> ParsedInstruction:
    return ParsedInstruction(GateKind.CZ, (int(match.group(1)), int(match.group(2))))


def _measure(match: re.Match) -> ParsedInstruction:
    return ParsedInstruction(GateKind.MEASURE, (int(match.group(1)),))


class Grammar:
    """Ordered list of line rules; the first matching rule wins."""

    key: str = ""
    comment_prefixes: tuple[str, ...] = ()
    rules: tuple[Rule, ...] = ()

    def parse_line(self, line: str) -> ParsedInstruction | None:
        line = self.strip_comment(line).strip()
        if not line:
            return None
        for pattern, build in self.rules:
            match = pattern.search(line)
            if match:
                return build(match)
        return None

    def strip_comment(self, line: str) -> str:
        for prefix in self.comment_prefixes:
            index = line.find(prefix)
            if index != -1:
                line = line[:index]
        return line


class QasmGrammar(Grammar):
    key = "qasm"
    comment_prefixes = ("//",)
    rules = (
        (re.compile(rf"^(h|x|y|z|s|t)\s+{_REG}\s*;?$", re.IGNORECASE), _single),
        (re.compile(rf"^(rx|ry|rz)\s*\(([^)]*)\)\s*{_REG}", re.IGNORECASE), _rotation),
        (re.compile(rf"^(cx|cnot|cz|swap)\s+{_REG}\s*,\s*{_REG}", re.IGNORECASE), _two_qubit),
        (re.compile(rf"^measure\s+{_REG}", re.IGNORECASE), _measure),
    )


class QiskitGrammar(Grammar):
    key = "qiskit"
    comment_prefixes = ("#",)
    rules = (
        (re.compile(rf"^\w+\.(h|x|y|z|s|t)\(\s*{_OPERAND}\s*\)"), _single),
        (re.compile(rf"^\w+\.(rx|ry|rz)\(\s*([^,]+?)\s*,\s*{_OPERAND}\s*\)"), _rotation),
        (re.compile(rf"^\w+\.(cx|cnot|cz|swap)\(\s*{_OPERAND}\s*,\s*{_OPERAND}\s*\)"),
         _two_qubit),
        (re.compile(rf"^\w+\.measure\(\s*{_OPERAND}"), _measure),
    )


class CirqGrammar(Grammar):
    key = "cirq"
    comment_prefixes = ("#",)
    rules = (
        (re.compile(rf"cirq\.(H|X|Y|Z|S|T)\(\s*{_CIRQ_QUBIT}\s*\)"), _single),
        (re.compile(rf"cirq\.(rx|ry|rz)\(([^)]*)\)\(\s*{_CIRQ_QUBIT}\s*\)"), _rotation),
        (re.compile(rf"cirq\.(CNOT|CX|CZ|SWAP)\(\s*{_CIRQ_QUBIT}\s*,\s*{_CIRQ_QUBIT}\s*\)"), _two_qubit),
        (re.compile(rf"cirq\.measure\(\s*{_CIRQ_QUBIT}"), _measure),
    )


class QSharpGrammar(Grammar):
    key = "qsharp"
    comment_prefixes = ("//",)
    rules = (
        (re.compile(rf"\b(CNOT|CX|CZ|SWAP)\(\s*{_REG}\s*,\s*{_REG}\s*\)"), _two_qubit),
        (re.compile(rf"\bControlled\s+Z\(\s*\[\s*{_REG}\s*\]\s*,\s*{_REG}\s*\)"),
         _controlled_z),
        (re.compile(rf"\b(Rx|Ry|Rz)\(\s*([^,]+?)\s*,\s*{_REG}\s*\)"), _rotation),
        (re.compile(rf"\b(H|X|Y|Z|S|T)\(\s*{_REG}\s*\)"), _single),
        (re.compile(rf"\bM\(\s*{_REG}\s*\)"), _measure),
    )


class QuilGrammar(Grammar):
    key = "quil"
    comment_prefixes = ("#",)
    rules = (
        (re.compile(r"^(H|X|Y|Z|S|T)\s+(\d+)$"), _single),
        (re.compile(r"^(RX|RY|RZ)\s*\(([^)]*)\)\s+(\d+)$"), _rotation),
        (re.compile(r"^(CNOT|CZ|SWAP)\s+(\d+)\s+(\d+)$"), _two_qubit),
        (re.compile(r"^MEASURE\s+(\d+)"), _measure),
    )


GRAMMARS: dict[str, Grammar] = {
    grammar.key: grammar
    for grammar in (
        QasmGrammar(),
        QiskitGrammar(),
        CirqGrammar(),
        QSharpGrammar(),
        QuilGrammar(),
    )
}
