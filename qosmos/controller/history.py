"""Bounded undo/redo of circuit snapshots on a QUndoStack."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QUndoCommand, QUndoStack

from qosmos.engine.circuit import Snapshot

DEFAULT_HISTORY_LIMIT = 50


class SnapshotCommand(QUndoCommand):
    """Undoable command that swaps between the states before and after an edit."""

    def __init__(
        self,
        restore: Callable[[Snapshot], None],
        before: Snapshot,
        after: Snapshot,
        description: str = "",
    ):
        super().__init__(description or "Edit circuit")
        self._restore = restore
        self._before = before
        self._after = after

    @property
    def before(self) -> Snapshot:
        return self._before

    @property
    def after(self) -> Snapshot:
        return self._after

    def redo(self) -> None:
        self._restore(self._after)

    def undo(self) -> None:
        self._restore(self._before)


class HistoryManager:
    """Snapshot-based undo/redo for one circuit.

    Every edit is pushed as a ``SnapshotCommand`` after it has been applied
    to the circuit; ``restore`` is how the commands write a snapshot back.
    The stack keeps at most ``limit`` commands and drops the oldest first.
    Pushing a new command discards everything redoable, while consecutive
    redos replay the undone edits in order.
    """

    def __init__(
        self,
        restore: Callable[[Snapshot], None],
        limit: int = DEFAULT_HISTORY_LIMIT,
        parent: QObject | None = None,
    ):
        if limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self._restore = restore
        self._undo_stack = QUndoStack(parent)
        self._undo_stack.setUndoLimit(limit)

    @property
    def limit(self) -> int:
        return self._undo_stack.undoLimit()

    @property
    def undo_stack(self) -> QUndoStack:
        return self._undo_stack

    @property
    def undo_depth(self) -> int:
        return self._undo_stack.index()

    @property
    def redo_depth(self) -> int:
        return self._undo_stack.count() - self._undo_stack.index()

    def can_undo(self) -> bool:
        return self._undo_stack.canUndo()

    def can_redo(self) -> bool:
        return self._undo_stack.canRedo()

    def record(self, before: Snapshot, after: Snapshot, description: str = "") -> None:
        """Push an edit that has already turned ``before`` into ``after``."""
        # push() calls redo(), which writes ``after`` back unchanged
        self._undo_stack.push(SnapshotCommand(self._restore, before, after, description))

    def undo(self) -> bool:
        """Restore the state before the latest edit; False if there is none."""
        if not self._undo_stack.canUndo():
            return False
        self._undo_stack.undo()
        return True

    def redo(self) -> bool:
        if not self._undo_stack.canRedo():
            return False
        self._undo_stack.redo()
        return True

    def clear(self) -> None:
        self._undo_stack.clear()
