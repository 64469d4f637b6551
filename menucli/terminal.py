"""Line editing on a terminal: keys in, command lines out."""

from __future__ import annotations

import enum
import sys
from typing import TextIO


class KeyType(enum.Enum):
    """The kinds of key an input device can report."""

    ASCII = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    BACKSPACE = enum.auto()
    CANC = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    RET = enum.auto()
    EOF = enum.auto()
    IGNORED = enum.auto()


class Symbol(enum.Enum):
    """What a key press means to the session."""

    NOTHING = enum.auto()
    COMMAND = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    TAB = enum.auto()
    EOF = enum.auto()


class Terminal:
    """Keeps the line being edited and echoes the edits to ``out``.

    ``before_input`` and ``after_input`` are written around echoed user
    input, for instance to colour it.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        before_input: str = "",
        after_input: str = "",
    ) -> None:
        self._out = out
        self.before_input = before_input
        self.after_input = after_input
        self._line = ""
        self._position = 0  # next writing position in the line

    @property
    def position(self) -> int:
        return self._position

    def _write(self, *parts: str) -> None:
        stream = self._out if self._out is not None else sys.stdout
        stream.write("".join(parts))
        stream.flush()

    def reset_cursor(self) -> None:
        self._position = 0

    def set_line(self, new_line: str) -> None:
        """Replace the edited line with ``new_line``, cursor at its end."""
        self._write(self.before_input, "\b" * self._position, new_line, self.after_input)
        excess = len(self._line) - len(new_line)
        if excess > 0:
            # blank out the tail of the longer old line, then go back
            self._write(" " * excess, "\b" * excess)
        self._line = new_line
        self._position = len(new_line)

    def get_line(self) -> str:
        return self._line

    def keypressed(self, key: KeyType, char: str = "") -> tuple[Symbol, str]:
        """Apply a key press; return its meaning and, for a command, the line."""
        line, pos = self._line, self._position

        if key is KeyType.EOF:
            return Symbol.EOF, ""
        if key is KeyType.UP:
            return Symbol.UP, ""
        if key is KeyType.DOWN:
            return Symbol.DOWN, ""
        if key is KeyType.RET:
            self._write("\r\n")
            self._line = ""
            self._position = 0
            return Symbol.COMMAND, line

        if key is KeyType.BACKSPACE:
            if pos > 0:
                pos -= 1
                line = line[:pos] + line[pos + 1:]
                self._write("\b", line[pos:], " ", "\b" * (len(line) - pos + 1))
        elif key is KeyType.LEFT:
            if pos > 0:
                self._write("\b")
                pos -= 1
        elif key is KeyType.RIGHT:
            if pos < len(line):
                self._write(self.before_input, line[pos], self.after_input)
                pos += 1
        elif key is KeyType.ASCII:
            if char == "\t":
                return Symbol.TAB, ""
            self._write(
                self.before_input,
                char,
                line[pos:],
                self.after_input,
                "\b" * (len(line) - pos),
            )
            line = line[:pos] + char + line[pos:]
            pos += len(char)
        elif key is KeyType.CANC:
            if pos < len(line):
                self._write(line[pos + 1:], " ", "\b" * (len(line) - pos))
                line = line[:pos] + line[pos + 1:]
        elif key is KeyType.END:
            self._write(self.before_input, line[pos:], self.after_input)
            pos = len(line)
        elif key is KeyType.HOME:
            self._write("\b" * pos)
            pos = 0

        self._line, self._position = line, pos
        return Symbol.NOTHING, ""