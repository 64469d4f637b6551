"""Commands, menus and the handles that enable, disable or remove them.

A session object passed to :meth:`Command.execute` must provide an ``out``
attribute (a writable text stream) and a ``current`` attribute that a menu
sets to itself when the user enters it.
"""

from __future__ import annotations

import functools
import types
import typing
import weakref
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TextIO

_TYPE_NAMES: dict[Any, str] = {
    bool: "<bool>",
    int: "<int>",
    float: "<double>",
    str: "<string>",
}

_STRING_ANNOTATIONS: dict[str, Any] = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "list": list,
    "list[str]": list[str],
    "List[str]": list[str],
    "typing.List[str]": list[str],
}

_TRUE_WORDS = frozenset({"true", "1"})
_FALSE_WORDS = frozenset({"false", "0"})


def _is_string_list(annotation: Any) -> bool:
    if annotation is list:
        return True
    if typing.get_origin(annotation) is list:
        args = typing.get_args(annotation)
        return not args or args[0] is str
    return False


def type_desc(annotation: Any) -> str:
    """Return the help description of a parameter type, or ``""`` if unknown."""
    if _is_string_list(annotation):
        return "<list of strings>"
    return _TYPE_NAMES.get(annotation, "")


def _from_string(annotation: Any, text: str) -> Any:
    """Convert ``text`` to ``annotation``; raise ValueError when it cannot."""
    if annotation is bool:
        word = text.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {text!r}")
    if annotation is str:
        return text
    if annotation in (int, float):
        return annotation(text)
    if not callable(annotation):
        raise ValueError(f"cannot convert to {annotation!r}")
    try:
        return annotation(text)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def _resolve(annotation: Any) -> Any:
    if isinstance(annotation, str):
        return _STRING_ANNOTATIONS.get(annotation.replace(" ", ""), annotation)
    return annotation


def _positional_parameters(func: Callable[..., Any]) -> list[Any]:
    """Return the annotations of the positional parameters still to be passed."""
    skip = 0
    target: Any = func
    while True:
        if isinstance(target, types.MethodType):
            skip += 1
            target = target.__func__
        elif isinstance(target, functools.partial):
            skip += len(target.args)
            target = target.func
        elif hasattr(target, "__code__"):
            break
        elif callable(target) and hasattr(type(target), "__call__") and not isinstance(target, type):
            call = type(target).__call__
            if not hasattr(call, "__code__"):
                raise TypeError(f"cannot inspect the parameters of {func!r}")
            skip += 1
            target = call
        else:
            raise TypeError(f"cannot inspect the parameters of {func!r}")
    code = target.__code__
    names = code.co_varnames[: code.co_argcount]
    annotations = getattr(target, "__annotations__", {}) or {}
    return [_resolve(annotations.get(name, str)) for name in names[skip:]]


def _parameter_types(func: Callable[..., Any]) -> list[Any]:
    """Return the types of the parameters that follow the output stream."""
    positional = _positional_parameters(func)
    if not positional:
        raise TypeError("a command handler must take the output stream as first parameter")
    return positional[1:]


class _CommandList(list):
    """A list of commands that can be referenced weakly."""


class Command(ABC):
    """Something the user can type: a plain command or a menu."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @abstractmethod
    def execute(self, cmd_line: Sequence[str], session: Any) -> bool:
        """Run the command if ``cmd_line`` matches it; return whether it did."""

    @abstractmethod
    def help(self, out: TextIO) -> None:
        """Write the help line of the command to ``out``."""

    def get_completion_recursive(self, line: str) -> list[str]:
        """Return the completions of ``line`` this command offers."""
        if not self._enabled:
            return []
        if self.name.startswith(line):
            return [self.name]
        return []


def get_completions(cmds: Iterable[Command], current_line: str) -> list[str]:
    """Collect the completions of ``current_line`` from every command."""
    return [c for cmd in cmds for c in cmd.get_completion_recursive(current_line)]


class CmdHandler:
    """A handle to an inserted command, usable after the menu owns it."""

    def __init__(self, cmd: Command | None = None, cmds: list[Command] | None = None) -> None:
        self._cmd = weakref.ref(cmd) if cmd is not None else None
        self._cmds = weakref.ref(cmds) if cmds is not None else None

    def _command(self) -> Command | None:
        return self._cmd() if self._cmd is not None else None

    def enable(self) -> None:
        cmd = self._command()
        if cmd is not None:
            cmd.enable()

    def disable(self) -> None:
        cmd = self._command()
        if cmd is not None:
            cmd.disable()

    def remove(self) -> None:
        """Take the command out of the menu that holds it."""
        cmd = self._command()
        cmds = self._cmds() if self._cmds is not None else None
        if cmd is None or cmds is None:
            return
        for index, item in enumerate(cmds):
            if item is cmd:
                del cmds[index]
                return


def _write_help(
    out: TextIO, name: str, types_: Iterable[Any], par_desc: Sequence[str], description: str
) -> None:
    out.write(f" - {name}")
    if not par_desc:
        for annotation in types_:
            out.write(f" {type_desc(annotation)}")
    for desc in par_desc:
        out.write(f" <{desc}>")
    out.write(f"\n\t{description}\n")


class FunctionCommand(Command):
    """A command taking a fixed number of typed parameters."""

    def __init__(
        self,
        name: str,
        func: Callable[..., Any],
        description: str = "",
        par_desc: Sequence[str] = (),
    ) -> None:
        super().__init__(name)
        self._func = func
        self._types = _parameter_types(func)
        self.description = description
        self.par_desc = tuple(par_desc)

    def execute(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled:
            return False
        if len(cmd_line) != len(self._types) + 1:
            return False
        if cmd_line[0] != self.name:
            return False
        try:
            args = [_from_string(t, text) for t, text in zip(self._types, cmd_line[1:])]
        except ValueError:
            return False
        self._func(session.out, *args)
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        _write_help(out, self.name, self._types, self.par_desc, self.description)


class FreeformCommand(Command):
    """A command taking any number of string parameters as one list."""

    def __init__(
        self,
        name: str,
        func: Callable[[TextIO, list[str]], Any],
        description: str = "",
        par_desc: Sequence[str] = (),
    ) -> None:
        super().__init__(name)
        self._func = func
        self.description = description
        self.par_desc = tuple(par_desc)

    def execute(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled or not cmd_line:
            return False
        if cmd_line[0] != self.name:
            return False
        self._func(session.out, list(cmd_line[1:]))
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        _write_help(out, self.name, [list[str]], self.par_desc, self.description)


class Menu(Command):
    """A named group of commands and submenus."""

    def __init__(self, name: str = "", description: str = "(menu)") -> None:
        super().__init__(name)
        self.parent: Menu | None = None
        self.description = description
        self._cmds: list[Command] = _CommandList()

    @property
    def commands(self) -> list[Command]:
        return list(self._cmds)

    def insert(
        self,
        name: str,
        func: Callable[..., Any],
        help: str = "",
        par_desc: Sequence[str] = (),
    ) -> CmdHandler:
        """Add a command calling ``func(out, *params)``.

        A function whose only parameter after ``out`` is annotated as a list
        of strings receives every parameter typed by the user.
        """
        param_types = _parameter_types(func)
        cmd: Command
        if len(param_types) == 1 and _is_string_list(param_types[0]):
            cmd = FreeformCommand(name, func, help, par_desc)
        else:
            cmd = FunctionCommand(name, func, help, par_desc)
        return self.insert_command(cmd)

    def insert_command(self, cmd: Command) -> CmdHandler:
        """Add an already built command or submenu."""
        if isinstance(cmd, Menu):
            cmd.parent = self
        handler = CmdHandler(cmd, self._cmds)
        self._cmds.append(cmd)
        return handler

    def execute(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled or not cmd_line:
            return False
        if cmd_line[0] != self.name:
            return False
        if len(cmd_line) == 1:
            session.current = self
            return True
        sub_line = list(cmd_line[1:])
        return any(cmd.execute(sub_line, session) for cmd in list(self._cmds))

    def scan_cmds(self, cmd_line: Sequence[str], session: Any) -> bool:
        """Run the first matching command here, or in the parent menu."""
        if not self.enabled:
            return False
        if any(cmd.execute(cmd_line, session) for cmd in list(self._cmds)):
            return True
        return self.parent is not None and self.parent.execute(cmd_line, session)

    def prompt(self) -> str:
        return self.name

    def main_help(self, out: TextIO) -> None:
        """Write the help of every command reachable from this menu."""
        if not self.enabled:
            return
        for cmd in self._cmds:
            cmd.help(out)
        if self.parent is not None:
            self.parent.help(out)

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        out.write(f" - {self.name}\n\t{self.description}\n")

    def get_completions(self, current_line: str) -> list[str]:
        """Completions from the commands here and from the parent menu."""
        result = get_completions(self._cmds, current_line)
        if self.parent is not None:
            result.extend(self.parent.get_completion_recursive(current_line))
        return result

    def get_completion_recursive(self, line: str) -> list[str]:
        if line.startswith(self.name):
            rest = line[len(self.name):].lstrip()
            return [
                f"{self.name} {c}"
                for cmd in self._cmds
                for c in cmd.get_completion_recursive(rest)
            ]
        return super().get_completion_recursive(line)