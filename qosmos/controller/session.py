"""Editing session: owns the circuit model, its history and the language choices.

All circuit modifications go through the session so that each one is
recorded as exactly one undo step.  Dependents (code view, charts) listen to
``circuit_changed`` and pull fresh code or simulation data on demand.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PyQt6.QtCore import QEventLoop, QObject, QThread, QTimer, pyqtSignal, pyqtSlot

from qosmos.codegen import generator
from qosmos.core.config import AppConfig
from qosmos.core.errors import (
    HistoryExhausted, InvalidCoordinate, NoGatesFound, QubitCountOutOfRange,
    UnsupportedLanguage,
)
from qosmos.core.serialization import CircuitDocument, CircuitSerializer
from qosmos.engine.circuit import MAX_QUBITS, MIN_QUBITS, Circuit
from qosmos.engine.gates import GateKind
from qosmos.engine.simulator import SIMULATION_METHODS, SimulationResult
from qosmos.engine.templates import build_template
from qosmos.importer.importer import ImportResult, import_code, supported_languages

from .history import HistoryManager
from .simulation_worker import SimulationWorker

logger = logging.getLogger(__name__)


class Session(QObject):
    """One user's editing session.

    Status levels emitted through ``status_message`` are ``success``,
    ``info``, ``warning`` and ``error``.  Operations that cannot proceed
    report a status and return ``False``/``None`` instead of raising.
    """

    circuit_changed = pyqtSignal()
    status_message = pyqtSignal(str, str)   # (message, level)
    busy_changed = pyqtSignal(bool)
    simulation_finished = pyqtSignal(object)  # SimulationResult
    simulation_failed = pyqtSignal(str)

    def __init__(
        self,
        config: AppConfig | None = None,
        current_user: str | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._config = config or AppConfig()
        self._circuit = Circuit(qubit_count=self._config.default_qubits)
        self._history = HistoryManager(self._circuit.restore, self._config.history_limit, self)
        self._target = self._config.default_target
        self._import_language = self._config.default_import_language
        self._busy = False
        self._thread: QThread | None = None
        self._worker: SimulationWorker | None = None
        self._last_result: SimulationResult | None = None
        self.current_user = current_user

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def circuit(self) -> Circuit:
        return self._circuit

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def target(self) -> str:
        """Export language used by ``generate_code``."""
        return self._target

    @target.setter
    def target(self, key: str) -> None:
        generator.get_emitter(key)  # Raises UnsupportedLanguage
        self._target = key

    @property
    def import_language(self) -> str:
        return self._import_language

    @import_language.setter
    def import_language(self, key: str) -> None:
        if key not in supported_languages():
            raise UnsupportedLanguage(key, supported_languages())
        self._import_language = key

    # ------------------------------------------------------------------
    # Circuit editing
    # ------------------------------------------------------------------

    def place(self, kind: GateKind, qubit: int, column: int,
              angle: float | None = None) -> bool:
        """Put a gate into a cell; an occupied cell is overwritten."""
        return self._mutate(lambda: self._circuit.place(kind, qubit, column, angle))

    def remove(self, qubit: int, column: int) -> bool:
        return self._mutate(lambda: self._circuit.remove(qubit, column))

    def move(self, from_qubit: int, from_column: int,
             to_qubit: int, to_column: int) -> bool:
        return self._mutate(lambda: self._circuit.move(
            from_qubit, from_column, to_qubit, to_column))

    def set_angle(self, qubit: int, column: int, angle: float) -> bool:
        changed = self._mutate(lambda: self._circuit.set_angle(qubit, column, angle))
        if changed:
            self._notify("Parameters saved", "success")
        return changed

    def set_qubit_count(self, n: int) -> bool:
        """Resize the register; values outside 1..6 are refused with a notice."""
        if not MIN_QUBITS <= n <= MAX_QUBITS:
            self._notify(str(QubitCountOutOfRange(n, MIN_QUBITS, MAX_QUBITS)), "warning")
            return False
        return self._mutate(lambda: self._circuit.set_qubit_count(n),
                            f"Set qubit count to {n}")

    def add_qubit(self) -> bool:
        if self._circuit.qubit_count >= MAX_QUBITS:
            self._notify(f"Maximum {MAX_QUBITS} qubits supported", "warning")
            return False
        changed = self.set_qubit_count(self._circuit.qubit_count + 1)
        if changed:
            self._notify("Qubit added", "success")
        return changed

    def remove_qubit(self) -> bool:
        if self._circuit.qubit_count <= MIN_QUBITS:
            self._notify(f"Minimum {MIN_QUBITS} qubit required", "warning")
            return False
        changed = self.set_qubit_count(self._circuit.qubit_count - 1)
        if changed:
            self._notify("Qubit removed", "info")
        return changed

    def clear(self) -> bool:
        changed = self._mutate(self._circuit.clear)
        if changed:
            self._notify("Circuit cleared", "info")
        return changed

    def replace_circuit(self, circuit: Circuit) -> bool:
        """Swap in a whole new circuit as a single undoable step."""
        return self._mutate(lambda: self._circuit.restore(circuit.snapshot()))

    def load_template(self, name: str) -> bool:
        try:
            template = build_template(name)
        except KeyError as exc:
            self._notify(str(exc.args[0]), "warning")
            return False
        if not self._check_idle():
            return False
        # Reloading an identical circuit records nothing but still counts as loaded
        self.replace_circuit(template)
        self._notify(f"{name.replace('-', ' ')} template loaded", "success")
        return True

    # ------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self._step_history(self._history.undo, "undo", "Action undone")

    def redo(self) -> bool:
        return self._step_history(self._history.redo, "redo", "Action redone")

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def _step_history(self, step, action: str, done_message: str) -> bool:
        if not self._check_idle():
            return False
        if not step():
            self._notify(str(HistoryExhausted(action)), "warning")
            return False
        self.circuit_changed.emit()
        self._notify(done_message, "info")
        return True

    # ------------------------------------------------------------------
    # Code generation and import
    # ------------------------------------------------------------------

    def generate_code(self, target: str | None = None) -> str | None:
        target = target or self._target
        try:
            return generator.generate(self._circuit, target)
        except UnsupportedLanguage as exc:
            self._notify(str(exc), "error")
            return None

    def export_code(self, filepath: Path | str, target: str | None = None) -> Path | None:
        target = target or self._target
        try:
            path = generator.export(self._circuit, target, filepath)
        except UnsupportedLanguage as exc:
            self._notify(str(exc), "error")
            return None
        except OSError:
            logger.error("Failed to export code to %s", filepath, exc_info=True)
            self._notify(f"Could not write {filepath}", "error")
            return None
        self._notify(f"Exported {target} code to {path.name}", "success")
        return path

    def import_code(self, source_text: str, language: str | None = None) -> ImportResult | None:
        """Replace the circuit with the gates found in ``source_text``.

        Gates are laid out one per column in source order.  On failure the
        circuit is left untouched and an error status is emitted.
        """
        language = language or self._import_language
        if not self._check_idle():
            return None
        self._set_busy(True)
        try:
            self._notify("Parsing code...", "info")
            try:
                result = import_code(source_text, language)
            except (UnsupportedLanguage, NoGatesFound) as exc:
                self._notify(str(exc), "error")
                return None
        finally:
            self._set_busy(False)

        self.replace_circuit(result.to_circuit())
        message = (f"Successfully imported {len(result.placements)} gates on "
                   f"{result.qubit_count} qubits from {language} "
                   f"(one gate per column, original layout not preserved)")
        if result.dropped:
            message += f"; {len(result.dropped)} gates did not fit the grid"
        self._notify(message, "success")
        return result

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    @property
    def last_result(self) -> SimulationResult | None:
        return self._last_result

    def simulate(self, seed: int | None = None, method: str | None = None) -> bool:
        """Start a simulation of the current circuit on a background thread.

        The session stays busy until the worker reports back; the result
        arrives through ``simulation_finished`` (or ``simulation_failed``).
        Returns False when the run could not be started.
        """
        if not self._circuit.placements:
            self._notify("Add gates to circuit before simulation", "warning")
            return False
        if not self._check_idle():
            return False
        method = method or self._config.simulation_method
        if method not in SIMULATION_METHODS:
            self._notify(f"Unknown simulation method '{method}'", "error")
            return False

        self._last_result = None
        self._thread = QThread()
        self._worker = SimulationWorker()
        self._worker.configure(
            circuit=self._circuit.copy(),
            method=method,
            seed=seed,
            delay_ms=self._config.simulation_delay_ms,
        )
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_simulation_finished)
        self._worker.error.connect(self._on_simulation_error)
        self._worker.finished.connect(self._thread.quit)
        self._worker.error.connect(self._thread.quit)

        self._set_busy(True)
        self._notify("Running simulation...", "info")
        self._thread.start()
        return True

    def wait_for_simulation(self, timeout_ms: int = 30000) -> SimulationResult | None:
        """Process events until the running simulation reports back.

        Needs a QCoreApplication.  Returns the result, or None when the run
        failed or timed out.
        """
        if self._thread is None:
            return self._last_result
        loop = QEventLoop()
        self.simulation_finished.connect(loop.quit)
        self.simulation_failed.connect(loop.quit)
        timer = QTimer(loop)
        timer.setSingleShot(True)
        timer.timeout.connect(loop.quit)
        timer.start(timeout_ms)
        loop.exec()
        timer.stop()
        self.simulation_finished.disconnect(loop.quit)
        self.simulation_failed.disconnect(loop.quit)
        return self._last_result

    @pyqtSlot(object)
    def _on_simulation_finished(self, result: SimulationResult) -> None:
        self._cleanup_thread()
        self._last_result = result
        self._set_busy(False)
        self.simulation_finished.emit(result)
        self._notify("Simulation completed", "success")

    @pyqtSlot(str)
    def _on_simulation_error(self, message: str) -> None:
        self._cleanup_thread()
        self._set_busy(False)
        self.simulation_failed.emit(message)
        self._notify(f"Simulation failed: {message}", "error")

    def _cleanup_thread(self) -> None:
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait(3000)
        self._worker = None
        self._thread = None

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def to_document(self, name: str) -> CircuitDocument:
        return CircuitDocument.from_circuit(
            self._circuit, name, language=self._target, owner_id=self.current_user)

    def load_document(self, document: CircuitDocument) -> bool:
        """Replace the circuit with a saved one and restore its export language."""
        if not self._check_idle():
            return False
        self.replace_circuit(document.to_circuit())
        if document.language in generator.available_targets():
            self._target = document.language
        self._notify(f'Circuit "{document.name}" loaded successfully!', "success")
        return True

    def save_document(self, filepath: Path | str, name: str) -> Path | None:
        if not self._check_idle():
            return None
        self._set_busy(True)
        try:
            path = CircuitSerializer.save(self.to_document(name), filepath)
        except OSError:
            logger.error("Failed to save file: %s", filepath, exc_info=True)
            self._notify(f"Could not save {filepath}", "error")
            return None
        finally:
            self._set_busy(False)
        self._notify(f'Circuit "{name}" saved', "success")
        return path

    def open_document(self, filepath: Path | str) -> bool:
        if not self._check_idle():
            return False
        self._set_busy(True)
        try:
            document = CircuitSerializer.load(filepath)
        except (OSError, ValueError, KeyError):
            logger.error("Failed to open file: %s", filepath, exc_info=True)
            self._notify(f"Could not open {filepath}", "error")
            return False
        finally:
            self._set_busy(False)
        return self.load_document(document)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _mutate(self, action: Callable[[], object], description: str = "") -> bool:
        """Apply ``action`` to the circuit and push it as one undo step.

        Nothing is recorded when the action leaves the circuit unchanged.
        """
        if not self._check_idle():
            return False
        before = self._circuit.snapshot()
        try:
            action()
        except InvalidCoordinate as exc:
            self._circuit.restore(before)
            self._notify(str(exc), "warning")
            return False
        after = self._circuit.snapshot()
        if after == before:
            return False
        self._history.record(before, after, description)
        self.circuit_changed.emit()
        return True

    def _check_idle(self) -> bool:
        if self._busy:
            self._notify("Another operation is still running", "warning")
            return False
        return True

    def _set_busy(self, busy: bool) -> None:
        if busy != self._busy:
            self._busy = busy
            self.busy_changed.emit(busy)

    def _notify(self, message: str, level: str) -> None:
        if level == "error":
            logger.warning(message)
        else:
            logger.debug(message)
        self.status_message.emit(message, level)
