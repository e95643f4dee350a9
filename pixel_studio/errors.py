"""Error types raised by the engine and its wrappers."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a grid, kernel, matrix or generator parameter is invalid."""


class ScriptError(InvalidArgument):
    """A batch script could not be parsed or executed.

    Attributes:
        position: Index of the offending token (``None`` when unknown).
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (token {position})"
        super().__init__(message)
        self.position = position
