"""Worker object that runs a simulation on a background QThread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from qosmos.engine.circuit import Circuit
from qosmos.engine.simulator import Simulator

logger = logging.getLogger(__name__)


class SimulationWorker(QObject):
    """Runs one simulation and reports back through signals.

    The worker is moved to a QThread by its owner; ``run`` is connected to
    the thread's ``started`` signal.  The circuit handed to ``configure``
    should be a copy the caller no longer touches.
    """

    finished = pyqtSignal(object)   # SimulationResult
    error = pyqtSignal(str)

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._circuit: Circuit | None = None
        self._method = "random"
        self._seed: int | None = None
        self._delay_ms = 0

    def configure(self, circuit: Circuit, method: str = "random",
                  seed: int | None = None, delay_ms: int = 0) -> None:
        """Must be called before the thread starts."""
        self._circuit = circuit
        self._method = method
        self._seed = seed
        self._delay_ms = max(0, int(delay_ms))

    @pyqtSlot()
    def run(self) -> None:
        if self._circuit is None:
            self.error.emit("No circuit configured")
            return
        try:
            if self._delay_ms > 0:
                QThread.msleep(self._delay_ms)
            result = Simulator(self._method).run(self._circuit, seed=self._seed)
        except ValueError as exc:
            logger.error("Simulation failed.", exc_info=True)
            self.error.emit(str(exc))
            return
        self.finished.emit(result)
