"""Entry points for code generation across all backends."""

from __future__ import annotations

import logging
from pathlib import Path

from qosmos.core.errors import UnsupportedLanguage
from qosmos.engine.circuit import Circuit

from .base import CodeEmitter
from .assembly_targets import QasmEmitter, QuilEmitter
from .compiled_targets import QSharpEmitter, XaccEmitter
from .python_targets import (
    BraketEmitter, CirqEmitter, PennyLaneEmitter, QiskitEmitter,
)

logger = logging.getLogger(__name__)

_EMITTERS: dict[str, CodeEmitter] = {
    emitter.key: emitter
    for emitter in (
        QiskitEmitter(),
        QasmEmitter(),
        CirqEmitter(),
        QSharpEmitter(),
        BraketEmitter(),
        QuilEmitter(),
        PennyLaneEmitter(),
        XaccEmitter(),
    )
}


def available_targets() -> list[str]:
    return list(_EMITTERS)


def get_emitter(target: str) -> CodeEmitter:
    emitter = _EMITTERS.get(target)
    if emitter is None:
        raise UnsupportedLanguage(target, available_targets())
    return emitter


def generate(circuit: Circuit, target: str) -> str:
    """Render ``circuit`` as source text in the ``target`` notation.

    The output depends only on the circuit and target.  Two-qubit gates
    whose second operand lies outside the register are left out.
    """
    return get_emitter(target).generate(circuit)


def file_extension(target: str) -> str:
    return get_emitter(target).extension


def display_language(target: str) -> str:
    """Syntax-highlighting mode an editor should use for ``target``."""
    return get_emitter(target).editor_language


def export(circuit: Circuit, target: str, filepath: Path | str) -> Path:
    """Write generated code to ``filepath``, adding the target's extension if missing."""
    filepath = Path(filepath)
    if not filepath.suffix:
        filepath = filepath.with_suffix(file_extension(target))
    code = generate(circuit, target)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(code)
    logger.info("Exported %s code to %s", target, filepath)
    return filepath
