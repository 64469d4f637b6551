"""The command line interface and the sessions that talk to it."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from .commands import Menu
from .history import History
from .storage import HistoryStorage, VolatileHistoryStorage

ExitAction = Callable[[TextIO], Any]
ExceptionHandler = Callable[[TextIO, str, Exception], Any]


class OutStream:
    """An output stream that writes to every registered stream at once."""

    def __init__(self) -> None:
        self._streams: list[TextIO] = []

    def write(self, msg: object) -> int:
        """Write ``msg`` to every registered stream."""
        text = str(msg)
        for out in list(self._streams):
            out.write(text)
        return len(text)

    def flush(self) -> None:
        for out in list(self._streams):
            flush = getattr(out, "flush", None)
            if flush is not None:
                flush()

    def register(self, out: TextIO) -> None:
        self._streams.append(out)

    def unregister(self, out: TextIO) -> None:
        """Remove every registration of ``out``."""
        self._streams = [s for s in self._streams if s is not out]


class Cli:
    """A command line interface built on a root menu.

    ``exit_action`` is called with the session output stream whenever a
    session exits; ``exception_handler`` is called with the output stream,
    the command line and the exception raised by a command handler.
    """

    _cout = OutStream()

    def __init__(
        self,
        root_menu: Menu,
        history_storage: HistoryStorage | None = None,
    ) -> None:
        self.root_menu = root_menu
        self._history_storage = (
            history_storage if history_storage is not None else VolatileHistoryStorage()
        )
        self.exit_action: ExitAction | None = None
        self.exception_handler: ExceptionHandler | None = None

    @classmethod
    def cout(cls) -> OutStream:
        """The stream that writes on every open session."""
        return cls._cout

    def on_exit(self, out: TextIO) -> None:
        if self.exit_action is not None:
            self.exit_action(out)

    def handle_exception(self, out: TextIO, cmd: str, exc: Exception) -> None:
        """Report an exception raised while running ``cmd``."""
        if self.exception_handler is not None:
            self.exception_handler(out, cmd, exc)
        else:
            out.write(f"{exc}\n")

    def store_commands(self, cmds: Iterable[str]) -> None:
        self._history_storage.store(cmds)

    def get_commands(self) -> list[str]:
        return self._history_storage.commands()


class CliSession:
    """One user's conversation with a :class:`Cli`.

    The prompt is written to ``prompt_out`` (standard output by default);
    command output goes to ``out``.
    """

    def __init__(
        self,
        cli: Cli,
        out: TextIO,
        history_size: int = 100,
        *,
        prompt_out: TextIO | None = None,
        help_cmd: bool = True,
        exit_cmd: bool = True,
        history_cmd: bool = True,
    ) -> None:
        self.cli = cli
        self.out = out
        self.current: Menu = cli.root_menu
        self.exit_action: ExitAction = lambda _out: None
        self._prompt_out = prompt_out
        self._history = History(history_size)
        self._prompt_printed = False
        self._closed = False
        self._global_menu = Menu()

        self._history.load_commands(cli.get_commands())
        Cli.cout().register(out)

        if help_cmd:
            self._global_menu.insert("help", lambda _out: self.help(), "This help message")
        if exit_cmd:
            self._global_menu.insert("exit", lambda _out: self.exit(), "Quit the session")
        if history_cmd:
            self._global_menu.insert(
                "history", lambda _out: self.show_history(), "Show the history"
            )

    def __enter__(self) -> CliSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop receiving output written to :meth:`Cli.cout`."""
        if not self._closed:
            Cli.cout().unregister(self.out)
            self._closed = True

    def _prompt_stream(self) -> TextIO:
        return self._prompt_out if self._prompt_out is not None else sys.stdout

    def _prompt_text(self) -> str:
        return f"{self.current.prompt()}> "

    def feed(self, cmd: str) -> None:
        """Run the command line ``cmd``."""
        self._prompt_printed = False
        words = cmd.split()
        if not words:
            return

        self._history.new_command(cmd)

        try:
            found = self._global_menu.scan_cmds(words, self)
            if not found:
                found = self.current.scan_cmds(words, self)
            if not found:
                self.out.write(f"Wrong command: {cmd}\n")
        except Exception as exc:  # a handler may raise anything
            self.cli.handle_exception(self.out, cmd, exc)

    def prompt(self) -> None:
        """Print the prompt unless it is already shown."""
        if self._prompt_printed:
            return
        stream = self._prompt_stream()
        stream.write(self._prompt_text())
        stream.flush()
        self._prompt_printed = True

    def clear_prompt(self) -> None:
        """Move the cursor back over a shown prompt."""
        if not self._prompt_printed:
            return
        stream = self._prompt_stream()
        stream.write("\b" * len(self._prompt_text()))
        stream.flush()
        self._prompt_printed = False

    def help(self) -> None:
        self.out.write("Commands available:\n")
        self._global_menu.main_help(self.out)
        self.current.main_help(self.out)

    def exit(self) -> None:
        """Run the exit actions and save this session's commands."""
        self.exit_action(self.out)
        self.cli.on_exit(self.out)
        self.cli.store_commands(self._history.get_commands())

    def show_history(self) -> None:
        self._history.show(self.out)

    def previous_cmd(self, line: str) -> str:
        return self._history.previous(line)

    def next_cmd(self) -> str:
        return self._history.next()

    def get_completions(self, current_line: str) -> list[str]:
        """Sorted, distinct completions of ``current_line``."""
        line = current_line.lstrip()
        found = self._global_menu.get_completions(line)
        found.extend(self.current.get_completions(line))
        return sorted(set(found))