"""Qosmos circuit translator - command-line entry point.

Usage:
    python main.py targets
    python main.py gates
    python main.py generate bell.qosmos --target qasm --output bell.qasm
    python main.py import program.qasm --language qasm --output program.qosmos
    python main.py simulate bell.qosmos --method statevector --seed 42
    python main.py template bell-state --output bell.qosmos
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QCoreApplication

from qosmos.codegen import generator
from qosmos.controller.session import Session
from qosmos.core.config import AppConfig
from qosmos.engine.gate_registry import GateRegistry
from qosmos.engine.simulator import SIMULATION_METHODS
from qosmos.engine.templates import TEMPLATES
from qosmos.importer.importer import supported_languages

logger = logging.getLogger(__name__)


def _print_status(message: str, level: str):
    if level in ("warning", "error"):
        print(f"[{level}] {message}", file=sys.stderr)


def _open_session(config: AppConfig, path: str | None) -> Session | None:
    session = Session(config=config)
    session.status_message.connect(_print_status)
    if path is not None and not session.open_document(path):
        return None
    return session


def _cmd_targets(args, config: AppConfig) -> int:
    for key in generator.available_targets():
        emitter = generator.get_emitter(key)
        can_import = "import/export" if key in supported_languages() else "export"
        print(f"{key:<10} {emitter.extension:<6} {can_import:<14} {emitter.label}")
    return 0


def _cmd_gates(args, config: AppConfig) -> int:
    for gate in GateRegistry.instance().all_gates():
        kind = gate.kind
        flags = "angle" if kind.is_parametric else ""
        print(f"{kind.value:<8} {gate.symbol:<3} {kind.arity}q {flags:<6} {gate.display_name}")
    return 0


def _cmd_generate(args, config: AppConfig) -> int:
    session = _open_session(config, args.circuit)
    if session is None:
        return 1
    if args.output:
        path = session.export_code(args.output, target=args.target)
        if path is None:
            return 1
        config.add_recent_file(str(path))
        config.save()
        print(f"Code written to {path}")
        return 0
    code = session.generate_code(args.target)
    if code is None:
        return 1
    sys.stdout.write(code)
    return 0


def _cmd_import(args, config: AppConfig) -> int:
    session = _open_session(config, None)
    try:
        source = Path(args.source).read_text(encoding='utf-8')
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.source, exc)
        return 1
    result = session.import_code(source, args.language)
    if result is None:
        return 1
    print(f"Imported {len(result.placements)} gates on {result.qubit_count} qubits",
          file=sys.stderr)
    if args.output:
        path = session.save_document(args.output, name=args.name or Path(args.source).stem)
        if path is None:
            return 1
        config.add_recent_file(str(path))
        config.save()
        print(f"Circuit saved to {path}")
    else:
        print(json.dumps(session.to_document(args.name or Path(args.source).stem).to_dict(),
                         indent=2))
    return 0


def _cmd_simulate(args, config: AppConfig) -> int:
    session = _open_session(config, args.circuit)
    if session is None:
        return 1
    if not session.simulate(seed=args.seed, method=args.method):
        return 1
    result = session.wait_for_simulation()
    if result is None:
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def _cmd_template(args, config: AppConfig) -> int:
    session = _open_session(config, None)
    if not session.load_template(args.name):
        return 1
    if args.output:
        path = session.save_document(args.output, name=args.name)
        if path is None:
            return 1
        print(f"Template saved to {path}")
    else:
        print(json.dumps(session.to_document(args.name).to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate small quantum circuits between notations")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("targets", help="List export targets")
    p.set_defaults(func=_cmd_targets)

    p = sub.add_parser("gates", help="List the gate palette")
    p.set_defaults(func=_cmd_gates)

    p = sub.add_parser("generate", help="Generate code from a saved circuit")
    p.add_argument("circuit")
    p.add_argument("--target", choices=generator.available_targets(), default=None)
    p.add_argument("--output", type=str, default=None)
    p.set_defaults(func=_cmd_generate)

    p = sub.add_parser("import", help="Build a circuit from source code")
    p.add_argument("source")
    p.add_argument("--language", choices=supported_languages(), default=None)
    p.add_argument("--name", type=str, default=None)
    p.add_argument("--output", type=str, default=None)
    p.set_defaults(func=_cmd_import)

    p = sub.add_parser("simulate", help="Estimate probabilities and Bloch vectors")
    p.add_argument("circuit")
    p.add_argument("--method", choices=SIMULATION_METHODS, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.set_defaults(func=_cmd_simulate)

    p = sub.add_parser("template", help="Write a built-in template circuit")
    p.add_argument("name", choices=list(TEMPLATES))
    p.add_argument("--output", type=str, default=None)
    p.set_defaults(func=_cmd_template)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # simulate delivers its result through a queued signal
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    config = AppConfig.load()
    return args.func(args, config)


if __name__ == '__main__':
    sys.exit(main())
