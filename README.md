# menucli

`menucli` is a library for interactive command-line interfaces built from
menus. You register commands, which are plain Python callables, in a tree of
menus. Users move around that tree by typing command lines. A session keeps a
command history, offers tab completion, and can keep its history across runs.

## Modules

| Module | What it holds |
| --- | --- |
| `menucli.commands` | `Command`, `FunctionCommand`, `FreeformCommand`, `Menu`, `CmdHandler`, `get_completions`, `type_desc` |
| `menucli.session` | `Cli`, `CliSession`, `OutStream` |
| `menucli.history` | `History`, the per-session history |
| `menucli.storage` | `HistoryStorage`, `VolatileHistoryStorage`, `FileHistoryStorage` |
| `menucli.terminal` | `Terminal`, `KeyType`, `Symbol` |
| `menucli.inputhandler` | `InputHandler`, `common_prefix` |
| `menucli.scheduler` | `LoopScheduler` |

## Example

```python
import sys

from menucli.commands import Menu
from menucli.session import Cli, CliSession
from menucli.storage import FileHistoryStorage


def answer(out, x: int):
    out.write(f"The answer is: {x}\n")


root = Menu("cli")
root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")
root.insert("answer", answer, "Print the answer")

sub = Menu("sub")
sub.insert("demo", lambda out: out.write("This is a sample!\n"), "Print a demo string")
root.insert_command(sub)

cli = Cli(root, FileHistoryStorage(".cli_history"))
cli.exit_action = lambda out: out.write("Goodbye.\n")

with CliSession(cli, sys.stdout) as session:
    session.feed("hello")      # Hello, world
    session.feed("answer 42")  # The answer is: 42
    session.feed("sub")        # enter the submenu
    session.feed("demo")       # This is a sample!
    print(session.get_completions("he"))  # ['hello', 'help']
    session.exit()             # runs exit actions and stores the history
```

## Commands and menus

- `Menu.insert(name, func, help="", par_desc=())` registers a callable. The
  callable's first parameter is the session's output stream. The words typed
  after the command name are converted using the annotations of the remaining
  parameters: `int`, `float`, `str`, and `bool`, which accepts `true`, `false`,
  `1` or `0` in any case. An unannotated parameter receives the word as a string.
- A callable whose only parameter after the stream is annotated `list[str]`
  becomes a `FreeformCommand` and receives every typed word as a list.
- If the number of words is wrong, or a word cannot be converted, the command
  does not match. The next command is then tried, so a two-argument `add` and
  a three-argument `add` can sit side by side.
- `Menu.insert_command(cmd)` attaches an already built `Command` or a submenu.
  Typing a submenu's name on its own enters it. Typing the name followed by a
  command runs that command inside the submenu. Commands of the enclosing menu
  stay reachable from inside a submenu.
- Every insert returns a `CmdHandler`. Its `enable`, `disable` and `remove`
  change that command while the program runs. A disabled command neither runs,
  nor appears in help, nor appears in completions.
- Help lines show the parameter types, such as `<int>`, `<double>`, `<string>`,
  `<bool>` or `<list of strings>`, unless `par_desc` names the parameters.

Command lines are split on whitespace. There is no quoting.

## Sessions

`Cli(root_menu, history_storage=None)` holds the root menu and the shared
history storage. Without a storage it uses a `VolatileHistoryStorage`. You can
set two attributes on it:

- `exit_action(out)` is called when any session exits.
- `exception_handler(out, cmd, exc)` is called when a command raises. Without
  a handler, the exception message is written to the session's output.

`CliSession(cli, out, history_size=100, *, prompt_out=None, help_cmd=True,
exit_cmd=True, history_cmd=True)` is one user's conversation with the `Cli`:

- `feed(line)` runs a command line. An unknown command prints
  `Wrong command: ...`.
- The built-in `help`, `exit` and `history` commands can each be switched off.
- `prompt()` and `clear_prompt()` write to `prompt_out`, which defaults to
  standard output.
- `exit()` calls the session's own `exit_action`, then the `Cli`'s, then
  stores the commands issued in this session.
- `previous_cmd` and `next_cmd` browse the history.
- `get_completions(line)` returns sorted, distinct completions. These include
  paths into submenus, such as `sub demo`.
- Closing the session, or leaving its `with` block, unregisters it from
  `Cli.cout()`. That shared `OutStream` writes to every open session.

## History

`History` keeps a bounded list of commands and skips immediate repeats.
Browsing back with `previous` keeps the line being edited, and `next` returns
to it. Two storages keep history shared between sessions:

- `VolatileHistoryStorage(max_size=1000)` keeps it in memory.
- `FileHistoryStorage(path, max_size=1000)` keeps it in a text file, one
  command per line, so it survives restarts.

## Keyboard input

`Terminal` takes key presses as `KeyType` values, edits the current line and
echoes the edits. Each press returns a `Symbol`: a finished command, up, down,
tab, end of input, or nothing. `InputHandler(session, terminal=None)` connects
a `Terminal` to a `CliSession`. It feeds finished commands to the session,
browses history on up and down, and completes on tab. When there are several
completions, it first extends the line to their `common_prefix`. If that
prefix adds nothing, it lists the completions.

## Scheduling

`LoopScheduler` is a thread-safe task queue. `post` may be called from any
thread. Tasks run on the thread that calls `run`, `exec_one` or `poll_one`.
`stop` ends `run`.

## What the package does not do

- It does not read raw keys from a real terminal. You translate key presses
  into `KeyType` values and pass them to `InputHandler.keypressed`.
- It has no network server for remote sessions.
- It has no asynchronous reader for standard input.
- It installs no command to run.

## Requirements

Python 3.10 or later. There are no third-party runtime dependencies.