"""Turns key presses into session actions: commands, history, completion."""

from __future__ import annotations

import os
from collections.abc import Sequence

from .session import CliSession
from .terminal import KeyType, Symbol, Terminal


def common_prefix(items: Sequence[str]) -> str:
    """Return the longest prefix shared by every string in ``items``."""
    return os.path.commonprefix(list(items))


class InputHandler:
    """Feeds key presses through a terminal into a session."""

    def __init__(self, session: CliSession, terminal: Terminal | None = None) -> None:
        self.session = session
        self.terminal = terminal if terminal is not None else Terminal()

    def keypressed(self, key: KeyType, char: str = "") -> None:
        symbol, text = self.terminal.keypressed(key, char)
        self._handle(symbol, text)

    def _handle(self, symbol: Symbol, text: str) -> None:
        session, terminal = self.session, self.terminal
        if symbol is Symbol.EOF:
            session.exit()
        elif symbol is Symbol.COMMAND:
            session.feed(text)
            session.prompt()
        elif symbol is Symbol.DOWN:
            terminal.set_line(session.next_cmd())
        elif symbol is Symbol.UP:
            terminal.set_line(session.previous_cmd(terminal.get_line()))
        elif symbol is Symbol.TAB:
            self._complete()

    def _complete(self) -> None:
        session, terminal = self.session, self.terminal
        line = terminal.get_line()
        completions = session.get_completions(line)
        if not completions:
            return
        if len(completions) == 1:
            terminal.set_line(completions[0] + " ")
            return
        prefix = common_prefix(completions)
        if len(prefix) > len(line):
            terminal.set_line(prefix)
            return
        session.out.write("\n")
        session.out.write("".join(f"\t{c}" for c in completions))
        session.out.write("\n")
        session.prompt()
        terminal.reset_cursor()
        terminal.set_line(line)