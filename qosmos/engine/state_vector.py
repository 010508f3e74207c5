"""Dense state vector for registers of at most a handful of qubits."""

from __future__ import annotations

import numpy as np


class StateVector:
    """Amplitudes of an n-qubit register, starting in |0...0>.

    The amplitudes are kept as a rank-n tensor with one axis of size 2 per
    qubit.  Axis 0 is qubit 0, which makes qubit 0 the leftmost character of
    a basis-state label.
    """

    def __init__(self, num_qubits: int):
        if num_qubits < 1:
            raise ValueError(f"num_qubits must be positive, got {num_qubits}")
        self._num_qubits = num_qubits
        self._tensor = np.zeros((2,) * num_qubits, dtype=np.complex128)
        self._tensor[(0,) * num_qubits] = 1.0

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def amplitudes(self) -> np.ndarray:
        """Flat amplitude array indexed by basis state."""
        return self._tensor.reshape(-1)

    @property
    def probabilities(self) -> np.ndarray:
        return np.abs(self.amplitudes) ** 2

    def apply(self, matrix: np.ndarray, qubits: list[int]):
        """Apply a 2^k x 2^k unitary to the listed qubits, first qubit most significant."""
        k = len(qubits)
        if matrix.shape != (2 ** k, 2 ** k):
            raise ValueError(f"Matrix of shape {matrix.shape} does not act on {k} qubits")
        if any(q < 0 or q >= self._num_qubits for q in qubits):
            raise ValueError(f"Qubits {qubits} outside a {self._num_qubits}-qubit register")

        # Bring the targets to the front, contract, and move them back
        front = np.moveaxis(self._tensor, qubits, list(range(k)))
        shape = front.shape
        block = matrix @ front.reshape(2 ** k, -1)
        self._tensor = np.moveaxis(block.reshape(shape), list(range(k)), qubits)

    def reduced_density_matrix(self, qubit: int) -> np.ndarray:
        """2x2 density matrix of one qubit with the rest traced out."""
        psi = np.moveaxis(self._tensor, qubit, 0).reshape(2, -1)
        return psi @ psi.conj().T

    def bloch_vector(self, qubit: int) -> tuple[float, float, float]:
        rho = self.reduced_density_matrix(qubit)
        x = 2.0 * rho[0, 1].real
        y = 2.0 * rho[1, 0].imag
        z = (rho[0, 0] - rho[1, 1]).real
        return float(x), float(y), float(z)

    def __repr__(self) -> str:
        return f"StateVector(num_qubits={self._num_qubits})"
