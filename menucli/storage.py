"""Policies for storing the command history shared by all sessions."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable


class HistoryStorage(ABC):
    """Where the commands of closed sessions are kept."""

    @abstractmethod
    def store(self, cmds: Iterable[str]) -> None:
        """Append ``cmds`` (oldest first) to the stored history."""

    @abstractmethod
    def commands(self) -> list[str]:
        """Return the stored commands, oldest first."""

    @abstractmethod
    def clear(self) -> None:
        """Forget every stored command."""


class VolatileHistoryStorage(HistoryStorage):
    """History kept in memory for as long as the program runs."""

    def __init__(self, max_size: int = 1000) -> None:
        self._commands: deque[str] = deque(maxlen=max_size)

    def store(self, cmds: Iterable[str]) -> None:
        self._commands.extend(cmds)

    def commands(self) -> list[str]:
        return list(self._commands)

    def clear(self) -> None:
        self._commands.clear()


class FileHistoryStorage(HistoryStorage):
    """History kept in a text file, one command per line."""

    def __init__(self, file_name: str | os.PathLike[str], max_size: int = 1000) -> None:
        self._file_name = file_name
        self._max_size = max_size

    def store(self, cmds: Iterable[str]) -> None:
        commands = self.commands()
        commands.extend(cmds)
        if len(commands) > self._max_size:
            del commands[: len(commands) - self._max_size]
        with open(self._file_name, "w", encoding="utf-8", newline="") as f:
            f.writelines(f"{line}\n" for line in commands)

    def commands(self) -> list[str]:
        try:
            with open(self._file_name, encoding="utf-8", newline="") as f:
                return [line.removesuffix("\n") for line in f]
        except OSError:
            return []

    def clear(self) -> None:
        with open(self._file_name, "w", encoding="utf-8"):
            pass