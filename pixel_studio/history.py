"""Undo/redo history of grid snapshots."""

from __future__ import annotations

from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import PixelGrid


class History:
    """Linear undo/redo stack.

    The first state after :meth:`reset` is the base: it can never be undone
    past.  Pushing a new state discards anything that could be redone.
    Grids are immutable, so snapshots are stored by reference.
    """

    def __init__(self, initial: PixelGrid | None = None) -> None:
        self._undo: list[PixelGrid] = []
        self._redo: list[PixelGrid] = []
        if initial is not None:
            self._undo.append(initial)

    def reset(self, grid: PixelGrid) -> None:
        """Start a fresh history whose base state is *grid*."""
        self._undo = [grid]
        self._redo = []

    def push(self, grid: PixelGrid) -> None:
        self._undo.append(grid)
        self._redo.clear()

    @property
    def current(self) -> PixelGrid:
        if not self._undo:
            raise InvalidArgument("History is empty")
        return self._undo[-1]

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> PixelGrid:
        """Step back one state (a no-op at the base state)."""
        if not self._undo:
            raise InvalidArgument("Nothing to undo: history is empty")
        if self.can_undo:
            self._redo.append(self._undo.pop())
        return self._undo[-1]

    def redo(self) -> PixelGrid:
        """Re-apply the most recently undone state (a no-op if none)."""
        if not self._undo:
            raise InvalidArgument("Nothing to redo: history is empty")
        if self._redo:
            self._undo.append(self._redo.pop())
        return self._undo[-1]

    def __len__(self) -> int:
        return len(self._undo)

    def __bool__(self) -> bool:
        return bool(self._undo)
