"""Lift hand-written source text back into circuit placements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from qosmos.core.errors import NoGatesFound, UnsupportedLanguage
from qosmos.engine.circuit import (
    CIRCUIT_DEPTH, MAX_QUBITS, MIN_QUBITS, Circuit, GatePlacement,
)

from .grammars import GRAMMARS, Grammar, ParsedInstruction

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Placements recovered from source text plus the inferred register size.

    Columns follow source order: the n-th recognised line sits in column
    n - 1, so parallel structure in the source is not preserved.
    """
    placements: list[GatePlacement]
    qubit_count: int
    language: str
    recognised: int = 0
    dropped: list[ParsedInstruction] = field(default_factory=list)

    def to_circuit(self) -> Circuit:
        return Circuit(qubit_count=self.qubit_count, placements=list(self.placements))


def supported_languages() -> list[str]:
    return list(GRAMMARS)


def get_grammar(language: str) -> Grammar:
    grammar = GRAMMARS.get(language)
    if grammar is None:
        raise UnsupportedLanguage(language, supported_languages())
    return grammar


def parse_instructions(source_text: str, language: str) -> list[ParsedInstruction]:
    """Every recognised instruction in source order; other lines are skipped."""
    grammar = get_grammar(language)
    instructions = []
    for line in source_text.splitlines():
        parsed = grammar.parse_line(line)
        if parsed is not None:
            instructions.append(parsed)
    return instructions


def import_code(source_text: str, language: str) -> ImportResult:
    """Parse ``source_text`` written in ``language``.

    Raises:
        UnsupportedLanguage: no grammar exists for ``language``.
        NoGatesFound: the text contains no recognisable gate instruction.
    """
    instructions = parse_instructions(source_text, language)
    if not instructions:
        raise NoGatesFound(language)

    placements: list[GatePlacement] = []
    dropped: list[ParsedInstruction] = []
    highest = 0
    for column, parsed in enumerate(instructions):
        top = max(max(parsed.operands), parsed.qubit + parsed.kind.arity - 1)
        if column >= CIRCUIT_DEPTH or top >= MAX_QUBITS:
            dropped.append(parsed)
            continue
        highest = max(highest, top)
        placements.append(GatePlacement(
            kind=parsed.kind,
            qubit=parsed.qubit,
            column=column,
            angle=parsed.angle if parsed.kind.is_parametric else None,
        ))

    if not placements:
        raise NoGatesFound(language)
    # Only kept gates size the register
    qubit_count = max(MIN_QUBITS, highest + 1)
    if dropped:
        logger.warning("Dropped %d of %d %s instructions that do not fit the grid",
                       len(dropped), len(instructions), language)
    logger.debug("Imported %d gates on %d qubits from %s",
                 len(placements), qubit_count, language)
    return ImportResult(
        placements=placements,
        qubit_count=qubit_count,
        language=language,
        recognised=len(instructions),
        dropped=dropped,
    )
