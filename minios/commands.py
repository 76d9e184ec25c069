"""Built-in shell commands.

Each command takes the running shell (anything with ``stdin``, ``stdout``,
``stderr`` and ``commands`` attributes) and the argument vector, and returns
0 on success or a negative number on failure.
"""

from __future__ import annotations

import getopt
import os
import re
import shutil
import time


def _esc(param: str, cmd: str) -> str:
    return f"\x1b[{param}{cmd}"


ESC_CLEAR_SCREEN = _esc("2", "J")
ESC_COLOR_ERROR = _esc("31", "m")
ESC_COLOR_DEFAULT = _esc("39", "m")


def esc_move_cursor(row: int, col: int) -> str:
    return f"\x1b[{row};{col}H"


_COPY_CHUNK = 255
_LINE_LIMIT = 254
_ATOI = re.compile(r"\s*([+-]?\d+)")


class QuitShell(Exception):
    """Raised to leave the shell with ``status``."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(status)
        self.status = status


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def do_help(shell, argv) -> int:
    """List the supported commands."""
    for command in shell.commands:
        shell.stdout.write(f"{command.name} {command.usage}\n")
    return 0


def do_clear(shell, argv) -> int:
    """Clear the screen and home the cursor."""
    shell.stdout.write(ESC_CLEAR_SCREEN)
    shell.stdout.write(esc_move_cursor(0, 0))
    return 0


def do_echo(shell, argv) -> int:
    """Echo a message, optionally ``-n count`` times; with no arguments echo a line of input."""
    if len(argv) == 1:
        line = shell.stdin.readline()
        if line.endswith("\n"):
            line = line[:-1]
        shell.stdout.write(line + "\n")
        return 0

    count = 1
    try:
        opts, rest = getopt.getopt(list(argv[1:]), "n:h")
    except getopt.GetoptError as err:
        shell.stderr.write(f"Unknown option: -{err.opt}\n")
        return -1
    for opt, value in opts:
        if opt == "-h":
            shell.stdout.write("echo any message.\n")
            shell.stdout.write("Usage: echo [-n count] message.\n")
            return 0
        if opt == "-n":
            count = _atoi(value)

    if not rest:
        shell.stderr.write("Message is Empty.\n")
        return -1
    for _ in range(count):
        shell.stdout.write(rest[0] + "\n")
    return 0


def do_ls(shell, argv) -> int:
    """List a directory (the current one by default)."""
    directory = argv[1] if len(argv) > 1 else "."
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        shell.stdout.write("open dir failed.\n")
        return -1
    for entry in entries:
        is_dir = entry.is_dir()
        size = 0 if is_dir else entry.stat().st_size
        shell.stdout.write(f"{'d' if is_dir else 'f'} {entry.name.lower()} {size}\n")
    return 0


def _wait_for_next(stdin) -> bool:
    """Read keys until 'n' (go on) or 'q'/end of input (stop)."""
    while True:
        ch = stdin.read(1)
        if ch == "n":
            return True
        if ch in ("q", ""):
            return False


def do_less(shell, argv) -> int:
    """Show a file; with ``-l`` one line at a time ('n' next, 'q' quit)."""
    try:
        opts, rest = getopt.getopt(list(argv[1:]), "lh")
    except getopt.GetoptError as err:
        shell.stderr.write(f"Unknown option: -{err.opt}\n")
        return -1
    line_mode = False
    for opt, _ in opts:
        if opt == "-h":
            shell.stdout.write("show file content.\n")
            shell.stdout.write("Usage: less [-l] file.\n")
            return 0
        if opt == "-l":
            line_mode = True

    if not rest:
        shell.stderr.write("File Not Found.\n")
        return -1

    path = rest[0]
    try:
        file = open(path, "r", encoding="utf-8", errors="replace")
    except OSError:
        shell.stderr.write(f"open file failed, {path}\n")
        return -1

    with file:
        if not line_mode:
            shutil.copyfileobj(file, shell.stdout)
        else:
            for line in iter(lambda: file.readline(_LINE_LIMIT), ""):
                shell.stdout.write(line)
                shell.stdout.flush()
                if not _wait_for_next(shell.stdin):
                    break
    return 0


def do_cp(shell, argv) -> int:
    """Copy ``src`` to ``dest``."""
    if len(argv) < 3:
        shell.stderr.write("Usage: cp src dest\n")
        return -1

    src = dst = None
    try:
        try:
            src = open(argv[1], "rb")
        except OSError:
            src = None
        try:
            dst = open(argv[2], "wb")
        except OSError:
            dst = None
        if src is None or dst is None:
            shell.stderr.write("open file failed.\n")
            return 0
        shutil.copyfileobj(src, dst, _COPY_CHUNK)
    finally:
        if src is not None:
            src.close()
        if dst is not None:
            dst.close()
    return 0


def do_rm(shell, argv) -> int:
    """Remove a file."""
    if len(argv) < 2:
        shell.stderr.write("no file.\n")
        return -1
    try:
        os.unlink(argv[1])
    except OSError:
        shell.stderr.write(f"rm file failed: {argv[1]}.\n")
        return -1
    return 0


def do_date(shell, argv) -> int:
    """Print the current time."""
    shell.stdout.write(time.ctime(time.time()) + "\n")
    return 0


def do_quit(shell, argv) -> int:
    """Flush pending output and leave the shell with status 0."""
    for stream in (shell.stdout, shell.stderr):
        stream.flush()
    status = 0
    raise QuitShell(status)