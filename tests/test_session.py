import io
from typing import TextIO

import pytest

from menucli.commands import Menu
from menucli.session import Cli, CliSession, OutStream
from menucli.storage import VolatileHistoryStorage


def _build_menu() -> Menu:
    root = Menu("cli")
    root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")
    root.insert("answer", lambda out, x: out.write(f"The answer is: {x}\n"))

    def fail(out: TextIO) -> None:
        raise ValueError("Error in cmd")

    root.insert("error", fail, "Throw an exception in the command handler")
    sub = Menu("sub")
    sub.insert("demo", lambda out: out.write("This is a sample!\n"), "Print a demo string")
    root.insert_command(sub)
    return root


@pytest.fixture
def cli() -> Cli:
    return Cli(_build_menu())


def test_feed_runs_command(cli):
    out = io.StringIO()
    with CliSession(cli, out, prompt_out=io.StringIO()) as session:
        session.feed("hello")
    assert out.getvalue() == "Hello, world\n"


def test_feed_converts_parameters():
    root = Menu("cli")
    root.insert("add", lambda out, x: out.write(f"{x + 1}\n"), "")
    out = io.StringIO()

    def add(out: TextIO, x: int) -> None:
        out.write(f"{x + x}\n")

    root.insert("double", add)
    with CliSession(Cli(root), out) as session:
        session.feed("double 21")
    assert out.getvalue() == "42\n"


def test_wrong_command(cli):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.feed("nothing here")
    assert out.getvalue() == "Wrong command: nothing here\n"


def test_empty_line_ignored(cli):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.feed("   ")
        assert session.previous_cmd("") == ""
    assert out.getvalue() == ""


def test_default_exception_handler(cli):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.feed("error")
    assert out.getvalue() == "Error in cmd\n"


def test_custom_exception_handler(cli):
    seen = []
    cli.exception_handler = lambda out, cmd, exc: seen.append((cmd, str(exc)))
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.feed("error")
    assert seen == [("error", "Error in cmd")]


def test_prompt_printed_once_and_cleared(cli):
    prompt_out = io.StringIO()
    with CliSession(cli, io.StringIO(), prompt_out=prompt_out) as session:
        session.prompt()
        session.prompt()
        session.clear_prompt()
        session.clear_prompt()
    assert prompt_out.getvalue() == "cli> " + "\b" * len("cli> ")


def test_exit_runs_actions_and_stores_history():
    storage = VolatileHistoryStorage()
    cli = Cli(_build_menu(), storage)
    cli.exit_action = lambda out: out.write("Goodbye and thanks for all the fish.\n")
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.exit_action = lambda o: o.write("Closing App...\n")
        session.feed("hello")
        session.feed("answer 42")
        session.exit()
    assert out.getvalue().endswith(
        "Closing App...\nGoodbye and thanks for all the fish.\n"
    )
    assert storage.commands() == ["hello", "answer 42"]


def test_exit_command(cli):
    called = []
    cli.exit_action = lambda out: called.append(True)
    with CliSession(cli, io.StringIO()) as session:
        session.feed("exit")
    assert called == [True]


def test_history_loaded_from_storage():
    storage = VolatileHistoryStorage()
    storage.store(["first", "second"])
    with CliSession(Cli(_build_menu(), storage), io.StringIO()) as session:
        assert session.previous_cmd("") == "second"
        assert session.previous_cmd("second") == "first"
        assert session.next_cmd() == "second"


def test_show_history(cli):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.feed("hello")
        out.truncate(0)
        out.seek(0)
        session.show_history()
    assert out.getvalue() == "\nhello\n\n"


def test_help_lists_global_and_menu_commands(cli):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.help()
    text = out.getvalue()
    assert text.startswith("Commands available:\n")
    assert " - help\n\tThis help message\n" in text
    assert " - hello\n\tPrint hello world\n" in text
    assert " - sub\n\t(menu)\n" in text


def test_completions_sorted_and_unique():
    root = Menu("cli")
    root.insert("hello", lambda out: None)
    root.insert("help", lambda out: None)
    with CliSession(Cli(root), io.StringIO()) as session:
        result = session.get_completions("  he")
    assert result == ["hello", "help"]
    assert result == sorted(set(result))


def test_cout_broadcasts_to_open_sessions(cli):
    out1, out2 = io.StringIO(), io.StringIO()
    session1 = CliSession(cli, out1)
    with CliSession(cli, out2):
        Cli.cout().write("Hello, everybody\n")
    session1.close()
    Cli.cout().write("nobody\n")
    assert out1.getvalue() == "Hello, everybody\n"
    assert out2.getvalue() == "Hello, everybody\n"


def test_out_stream_register_unregister():
    stream = OutStream()
    a, b = io.StringIO(), io.StringIO()
    stream.register(a)
    stream.register(b)
    stream.write(7)
    stream.unregister(a)
    stream.write("x")
    assert a.getvalue() == "7"
    assert b.getvalue() == "7x"