"""Interactive command line interpreter."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from minios import commands as cmd
from minios.commands import ESC_COLOR_DEFAULT, ESC_COLOR_ERROR, QuitShell

CLI_IBUF_SIZE = 1024
CLI_ARG_MAX_NR = 10
PROMPT = "sh >> "


@dataclass(frozen=True)
class CliCommand:
    """A built-in command."""

    name: str
    usage: str
    func: Callable[..., int]


DEFAULT_COMMANDS = (
    CliCommand("help", "-- list supported commmand.", cmd.do_help),
    CliCommand("clear", "-- clear screen", cmd.do_clear),
    CliCommand("echo", "[-n count] msg -- echo something", cmd.do_echo),
    CliCommand("ls", "ls -- list directory", cmd.do_ls),
    CliCommand("less", "less [-l] file -- show file", cmd.do_less),
    CliCommand("cp", "cp src dest", cmd.do_cp),
    CliCommand("rm", "rm file -- remove file", cmd.do_rm),
    CliCommand("date", "date -- get current time", cmd.do_date),
    CliCommand("quit", "quit from shell", cmd.do_quit),
)


def find_exec_file(filename: str) -> str | None:
    """Return ``filename`` or ``filename.elf`` if either is an existing file."""
    if os.path.isfile(filename):
        return filename
    candidate = f"{filename}.elf"
    if os.path.isfile(candidate):
        return candidate
    return None


def run_exec_file(path: str, argv: Sequence[str], stderr=None) -> int:
    """Run the program at ``path`` with ``argv``, wait for it and report its status."""
    stderr = stderr if stderr is not None else sys.stderr
    try:
        proc = subprocess.Popen(list(argv), executable=path)
    except OSError:
        stderr.write(f"exec failed: {path}\n")
        return -1
    status = proc.wait()
    stderr.write(f"cmd {path} result: {status}, pid: {proc.pid}\n")
    return status


class Shell:
    """A line-oriented shell with a table of built-in commands."""

    def __init__(
        self,
        prompt: str = PROMPT,
        commands: Iterable[CliCommand] | None = None,
        stdin=None,
        stdout=None,
        stderr=None,
    ) -> None:
        self.prompt = prompt
        self.commands = list(DEFAULT_COMMANDS if commands is None else commands)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def find_builtin(self, name: str) -> CliCommand | None:
        """Return the built-in command called ``name``, or None."""
        return next((c for c in self.commands if c.name == name), None)

    def run_builtin(self, command: CliCommand, argv: Sequence[str]) -> int:
        """Run a built-in command and report a negative result."""
        ret = command.func(self, list(argv))
        if ret < 0:
            self.stderr.write(f"{ESC_COLOR_ERROR}Error: {ret}\n{ESC_COLOR_DEFAULT}")
        return ret

    def run_line(self, line: str) -> int | None:
        """Execute one input line; returns the command status, or None if blank."""
        line = line.split("\r", 1)[0].split("\n", 1)[0]
        argv = [token for token in line.split(" ") if token][:CLI_ARG_MAX_NR]
        if not argv:
            return None

        command = self.find_builtin(argv[0])
        if command is not None:
            return self.run_builtin(command, argv)

        path = find_exec_file(argv[0])
        if path is not None:
            return run_exec_file(path, argv, self.stderr)

        self.stderr.write(f"{ESC_COLOR_ERROR}Unknown command: {argv[0]}\n{ESC_COLOR_DEFAULT}")
        return None

    def run(self) -> int:
        """Read and execute lines until quit or end of input; return the exit status."""
        try:
            while True:
                self.stdout.write(self.prompt)
                self.stdout.flush()
                line = self.stdin.readline(CLI_IBUF_SIZE - 1)
                if not line:
                    return 0
                self.run_line(line)
        except QuitShell as exc:
            return exc.status


def main(argv=None) -> int:
    """Start an interactive shell on the standard streams."""
    return Shell().run()


if __name__ == "__main__":
    sys.exit(main())