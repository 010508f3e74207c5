"""Probability map and Bloch-vector estimates for a circuit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from .state_vector import StateVector
from .circuit import Circuit, GatePlacement
from .gate_registry import GateRegistry
from .gates import GateKind

logger = logging.getLogger(__name__)

SIMULATION_METHODS = ("random", "statevector")


@dataclass
class BlochVector:
    x: float
    y: float
    z: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass
class SimulationResult:
    """Basis-state probabilities and one Bloch vector per qubit."""
    probabilities: dict[str, float]
    bloch_vectors: list[BlochVector] = field(default_factory=list)
    method: str = "random"
    seed: int | None = None

    def to_dict(self) -> dict:
        return {
            "probabilities": dict(self.probabilities),
            "blochVectors": [v.to_dict() for v in self.bloch_vectors],
        }


def basis_states(num_qubits: int) -> list[str]:
    """All bitstrings of length ``num_qubits`` in ascending order."""
    return [format(i, f'0{num_qubits}b') for i in range(2 ** num_qubits)]


class Simulator:
    """Derives visualization data from a Circuit.

    ``random`` reproduces the reference placeholder: the values do not depend
    on the placed gates.  ``statevector`` evolves |0...0> through the
    placements in canonical order.  Both return the same result shape.
    """

    def __init__(self, method: str = "random"):
        if method not in SIMULATION_METHODS:
            raise ValueError(
                f"Unknown simulation method '{method}', "
                f"expected one of {SIMULATION_METHODS}")
        self._method = method
        self._gate_registry = GateRegistry.instance()

    @property
    def method(self) -> str:
        return self._method

    def run(self, circuit: Circuit,
            seed: int | None = None,
            rng: np.random.Generator | None = None) -> SimulationResult:
        """Simulate the circuit.

        Args:
            circuit: Circuit to simulate.
            seed: Optional seed for reproducibility (creates rng if not given).
            rng: Optional pre-seeded Generator (takes precedence over seed).
        """
        if rng is None:
            rng = np.random.default_rng(seed)

        logger.debug("Simulating %d gates on %d qubits (%s)",
                     circuit.gate_count(), circuit.qubit_count, self._method)
        if self._method == "statevector":
            probs, bloch = self._run_statevector(circuit)
        else:
            probs, bloch = self._run_random(circuit.qubit_count, rng)

        total = float(probs.sum())
        if total <= 0.0:
            # Every draw came out zero; fall back to a uniform distribution
            probs = np.full(len(probs), 1.0 / len(probs))
        else:
            probs = probs / total

        labels = basis_states(circuit.qubit_count)
        return SimulationResult(
            probabilities={label: float(p) for label, p in zip(labels, probs)},
            bloch_vectors=bloch,
            method=self._method,
            seed=seed,
        )

    def _run_random(self, num_qubits: int,
                    rng: np.random.Generator) -> tuple[np.ndarray, list[BlochVector]]:
        probs = rng.random(2 ** num_qubits)
        components = rng.uniform(-1.0, 1.0, size=(num_qubits, 3))
        bloch = [BlochVector(float(x), float(y), float(z)) for x, y, z in components]
        return probs, bloch

    def _run_statevector(self, circuit: Circuit) -> tuple[np.ndarray, list[BlochVector]]:
        state = StateVector(circuit.qubit_count)
        for placement in circuit.ordered_placements():
            self._apply_placement(state, placement, circuit.qubit_count)

        bloch = []
        for q in range(circuit.qubit_count):
            x, y, z = state.bloch_vector(q)
            bloch.append(BlochVector(
                float(np.clip(x, -1.0, 1.0)),
                float(np.clip(y, -1.0, 1.0)),
                float(np.clip(z, -1.0, 1.0)),
            ))
        return state.probabilities, bloch

    def _apply_placement(self, state: StateVector, placement: GatePlacement,
                         num_qubits: int):
        if placement.kind == GateKind.MEASURE:
            return
        targets = placement.targets
        if targets[-1] >= num_qubits:
            # Same rule as code generation: no second operand, no gate
            return
        gate_def = self._gate_registry.get(placement.kind)
        if placement.kind.is_parametric:
            matrix = gate_def.matrix_func(placement.effective_angle)
        else:
            matrix = gate_def.matrix_func()
        state.apply(matrix, targets)
