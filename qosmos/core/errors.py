"""Exception taxonomy for circuit editing, translation and history."""

from __future__ import annotations


class QosmosError(Exception):
    """Base class for every error raised by the circuit core."""


class InvalidCoordinate(QosmosError):
    """A placement refers to a qubit outside the register."""

    def __init__(self, qubit: int, column: int, qubit_count: int):
        super().__init__(
            f"Cell (qubit={qubit}, column={column}) is outside a "
            f"{qubit_count}-qubit register")
        self.qubit = qubit
        self.column = column
        self.qubit_count = qubit_count


class UnsupportedLanguage(QosmosError):
    """No emitter or grammar exists for the requested language key."""

    def __init__(self, language: str, supported: list[str] | tuple[str, ...] = ()):
        message = f"Language '{language}' is not supported"
        if supported:
            message += f" (choose one of: {', '.join(supported)})"
        super().__init__(message)
        self.language = language
        self.supported = tuple(supported)


class NoGatesFound(QosmosError):
    """Source text was read without error but contained no gate instructions."""

    def __init__(self, language: str):
        super().__init__(f"No gates found in the {language} code")
        self.language = language


class UnderflowOverflow(QosmosError):
    """A bounded quantity was pushed past its limit."""


class QubitCountOutOfRange(UnderflowOverflow):

    def __init__(self, requested: int, minimum: int, maximum: int):
        super().__init__(
            f"Qubit count must be between {minimum} and {maximum}, got {requested}")
        self.requested = requested


class HistoryExhausted(UnderflowOverflow):

    def __init__(self, action: str):
        super().__init__(f"Nothing to {action}")
        self.action = action
