"""Gate kinds, gate matrix definitions and the GateDefinition dataclass."""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Callable
from enum import Enum


DEFAULT_ANGLE = np.pi / 2


class GateKind(Enum):
    """Closed set of gates that can be placed on the circuit grid.

    Values are the lowercase names used in persisted documents.
    """
    H = "h"
    X = "x"
    Y = "y"
    Z = "z"
    S = "s"
    T = "t"
    RX = "rx"
    RY = "ry"
    RZ = "rz"
    CX = "cx"
    CZ = "cz"
    SWAP = "swap"
    MEASURE = "measure"

    @classmethod
    def from_name(cls, name: str) -> GateKind:
        """Look up a kind by wire name, member name or a common alias."""
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown gate kind '{name}'")

    @property
    def arity(self) -> int:
        return 2 if self in _TWO_QUBIT else 1

    @property
    def is_parametric(self) -> bool:
        return self in _PARAMETRIC


_ALIASES = {
    "cnot": "cx",
    "m": "measure",
    "measurement": "measure",
}

_TWO_QUBIT = frozenset({GateKind.CX, GateKind.CZ, GateKind.SWAP})
_PARAMETRIC = frozenset({GateKind.RX, GateKind.RY, GateKind.RZ})


@dataclass(frozen=True)
class GateDefinition:
    """Immutable definition of a quantum gate."""
    kind: GateKind
    display_name: str
    symbol: str
    color: str
    matrix_func: Callable[..., np.ndarray]

    @property
    def num_qubits(self) -> int:
        return self.kind.arity

    @property
    def num_params(self) -> int:
        return 1 if self.kind.is_parametric else 0


# --- Fixed single-qubit gate matrices ---

I_MATRIX = np.eye(2, dtype=np.complex128)

X_MATRIX = np.array([[0, 1],
                      [1, 0]], dtype=np.complex128)

Y_MATRIX = np.array([[0, -1j],
                      [1j, 0]], dtype=np.complex128)

Z_MATRIX = np.array([[1, 0],
                      [0, -1]], dtype=np.complex128)

H_MATRIX = np.array([[1, 1],
                      [1, -1]], dtype=np.complex128) / np.sqrt(2)

S_MATRIX = np.array([[1, 0],
                      [0, 1j]], dtype=np.complex128)

T_MATRIX = np.array([[1, 0],
                      [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)


# --- Parameterized single-qubit gate functions ---

def rx_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -1j * s],
                      [-1j * s, c]], dtype=np.complex128)


def ry_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s],
                      [s, c]], dtype=np.complex128)


def rz_matrix(theta: float) -> np.ndarray:
    return np.array([[np.exp(-1j * theta / 2), 0],
                      [0, np.exp(1j * theta / 2)]], dtype=np.complex128)


# --- Fixed two-qubit gate matrices (first operand is the control) ---

CNOT_MATRIX = np.array([
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1],
    [0, 0, 1, 0]], dtype=np.complex128)

CZ_MATRIX = np.diag([1, 1, 1, -1]).astype(np.complex128)

SWAP_MATRIX = np.array([
    [1, 0, 0, 0],
    [0, 0, 1, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1]], dtype=np.complex128)


def _const(matrix: np.ndarray) -> Callable[..., np.ndarray]:
    """Wrap a constant matrix as a zero-parameter matrix function."""
    def f(*_args):
        return matrix
    return f
