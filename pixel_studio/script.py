"""Batch-script interpreter.

A script is a whitespace-separated stream of commands::

    load photo.png
    blur sharpen
    mosaicing 500
    save photo_mosaic.png
    generate rainbowFlag 70 100 h
    save rainbow.png

The first command must be ``load`` or ``generate``.  The whole script is
parsed before anything runs, so a typo at the end never leaves half-written
output files behind.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from pixel_studio.errors import InvalidArgument, ScriptError
from pixel_studio.grid import PixelGrid
from pixel_studio.history import History
from pixel_studio.image_io import load_grid, save_grid
from pixel_studio.mosaic import mosaic
from pixel_studio.operations import TRANSFORMS
from pixel_studio.patterns import PATTERNS

logger = logging.getLogger(__name__)

_INT = re.compile(r"-?\d+", re.ASCII)

# Argument kinds of each ``generate`` target: "int" or "direction".
GENERATE_ARGS: dict[str, tuple[str, ...]] = {
    "rainbowFlag": ("int", "int", "direction"),
    "checkerboard": ("int",),
    "frenchFlag": ("int", "int"),
    "swissFlag": ("int", "int"),
    "greeceFlag": ("int", "int"),
}

_USAGE = {
    "rainbowFlag": "height(int), width(int) and direction('h' or 'v')",
    "checkerboard": "square size(int)",
    "frenchFlag": "height(int) and width(int)",
    "swissFlag": "height(int) and width(int)",
    "greeceFlag": "height(int) and width(int)",
}


@dataclass(frozen=True)
class Command:
    """One parsed script command.

    Attributes:
        name:     ``load``, ``save``, ``mosaicing``, ``generate`` or a
            transform name.
        args:     Parsed arguments (file name, ints, pattern name ...).
        position: Index of the command's first token in the script.
    """

    name: str
    args: tuple[str | int, ...] = ()
    position: int = 0


class _Tokens:
    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self.pos = 0

    def __bool__(self) -> bool:
        return self.pos < len(self._tokens)

    def next(self, message: str) -> str:
        if not self:
            raise ScriptError(message, self.pos)
        token = self._tokens[self.pos]
        self.pos += 1
        return token

    def next_int(self, message: str) -> int:
        token = self.next(message)
        if not _INT.fullmatch(token):
            raise ScriptError(message, self.pos - 1)
        return int(token)

    def peek(self) -> str | None:
        return self._tokens[self.pos] if self else None


def parse_script(text: str) -> list[Command]:
    """Tokenise and validate *text* into a list of :class:`Command`.

    Raises:
        ScriptError: on an unknown command or a missing/invalid argument.
    """
    tokens = _Tokens(text)
    first = tokens.peek()
    if first is None:
        raise ScriptError("Script is empty")
    if first not in ("load", "generate"):
        raise ScriptError("Script must start with 'load' or 'generate'", 0)

    commands: list[Command] = []
    while tokens:
        position = tokens.pos
        name = tokens.next("Expected a command")

        if name in ("load", "save"):
            msg = f"'{name}' must be followed by a file name"
            filename = tokens.next(msg)
            if "." not in filename:
                raise ScriptError(f"'{name}' must be followed by a valid file name", position)
            commands.append(Command(name, (filename,), position))
        elif name in TRANSFORMS:
            commands.append(Command(name, (), position))
        elif name == "mosaicing":
            count = tokens.next_int(
                "Please specify an integer number of seeds following 'mosaicing'",
            )
            commands.append(Command(name, (count,), position))
        elif name == "generate":
            commands.append(_parse_generate(tokens, position))
        else:
            raise ScriptError(f"Unknown command '{name}'", position)

    return commands


def _parse_generate(tokens: _Tokens, position: int) -> Command:
    target = tokens.next("What do you want to generate? Specify it after 'generate'")
    kinds = GENERATE_ARGS.get(target)
    if kinds is None:
        available = ", ".join(GENERATE_ARGS)
        raise ScriptError(
            f"Cannot generate '{target}'. Available: {available}", tokens.pos - 1,
        )

    usage = f"Please generate {target} with {_USAGE[target]}"
    args: list[str | int] = [target]
    for kind in kinds:
        if kind == "int":
            args.append(tokens.next_int(usage))
        else:
            direction = tokens.next(usage)
            if direction not in ("h", "v"):
                raise ScriptError(
                    "Direction of the rainbow flag must be 'h' or 'v'", tokens.pos - 1,
                )
            args.append(direction)
    return Command("generate", tuple(args), position)


def dump_script(commands: list[Command]) -> str:
    """Render *commands* back to script text, one command per line."""
    lines = [" ".join([c.name, *(str(a) for a in c.args)]) for c in commands]
    return "\n".join(lines) + "\n"


class ScriptRunner:
    """Executes parsed commands against an undo history.

    Args:
        history:  History to record results in (a fresh one by default).
        rng:      Random source for ``mosaicing``; a Generator, an int seed,
            or ``None`` for a non-deterministic generator.
        base_dir: Directory that relative ``load``/``save`` paths resolve
            against (defaults to the working directory).
    """

    def __init__(
        self,
        history: History | None = None,
        rng: np.random.Generator | int | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self.history = history if history is not None else History()
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def run(self, text: str) -> PixelGrid:
        """Parse and execute a whole script; return the final grid."""
        commands = parse_script(text)
        logger.info("Running script with %d commands", len(commands))
        for command in commands:
            self.execute(command)
        return self.history.current

    def execute(self, command: Command) -> None:
        logger.debug("Executing %s %s", command.name, command.args)
        try:
            self._dispatch(command)
        except ScriptError:
            raise
        except InvalidArgument as exc:
            raise ScriptError(str(exc), command.position) from exc

    def _dispatch(self, command: Command) -> None:
        name, args = command.name, command.args

        if name == "load":
            path = self._resolve(str(args[0]))
            try:
                grid = load_grid(path)
            except OSError as exc:
                raise ScriptError(f"Error reading file {path}", command.position) from exc
            self.history.reset(grid)
        elif name == "save":
            path = self._resolve(str(args[0]))
            grid = self.history.current
            try:
                save_grid(grid, path)
            except (OSError, ValueError) as exc:
                raise ScriptError(f"Error writing file {path}", command.position) from exc
            logger.info("Saved %s", path)
        elif name in TRANSFORMS:
            self.history.push(TRANSFORMS[name](self.history.current))
        elif name == "mosaicing":
            self.history.push(mosaic(self.history.current, int(args[0]), self.rng))
        elif name == "generate":
            target, *params = args
            self.history.push(PATTERNS[str(target)](*params))
        else:
            raise ScriptError(f"Unknown command '{name}'", command.position)

    def _resolve(self, filename: str) -> Path:
        path = Path(filename)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path
