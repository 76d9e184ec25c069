import io
import re
from types import SimpleNamespace

import pytest

from minios.commands import (
    ESC_CLEAR_SCREEN,
    QuitShell,
    do_clear,
    do_cp,
    do_date,
    do_echo,
    do_help,
    do_less,
    do_ls,
    do_quit,
    do_rm,
    esc_move_cursor,
)


def make_shell(stdin="", commands=()):
    return SimpleNamespace(
        stdin=io.StringIO(stdin),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        commands=list(commands),
    )


def test_help_lists_commands():
    cmds = [SimpleNamespace(name="a", usage="-- first"), SimpleNamespace(name="b", usage="-- second")]
    sh = make_shell(commands=cmds)
    assert do_help(sh, ["help"]) == 0
    assert sh.stdout.getvalue() == "a -- first\nb -- second\n"


def test_clear_writes_escape_sequences():
    sh = make_shell()
    assert do_clear(sh, ["clear"]) == 0
    assert sh.stdout.getvalue() == "\x1b[2J" + esc_move_cursor(0, 0)
    assert ESC_CLEAR_SCREEN == "\x1b[2J"


def test_echo_repeats():
    sh = make_shell()
    assert do_echo(sh, ["echo", "-n", "3", "hi"]) == 0
    assert sh.stdout.getvalue() == "hi\nhi\nhi\n"


def test_echo_reads_stdin_without_args():
    sh = make_shell("hello\n")
    assert do_echo(sh, ["echo"]) == 0
    assert sh.stdout.getvalue() == "hello\n"


def test_echo_empty_message():
    sh = make_shell()
    assert do_echo(sh, ["echo", "-n", "2"]) == -1
    assert sh.stderr.getvalue() == "Message is Empty.\n"


def test_echo_unknown_option():
    sh = make_shell()
    assert do_echo(sh, ["echo", "-x", "msg"]) == -1
    assert "Unknown option" in sh.stderr.getvalue()


def test_echo_help():
    sh = make_shell()
    assert do_echo(sh, ["echo", "-h"]) == 0
    assert sh.stdout.getvalue() == "echo any message.\nUsage: echo [-n count] message.\n"


def test_echo_non_numeric_count_prints_nothing():
    sh = make_shell()
    assert do_echo(sh, ["echo", "-n", "abc", "hi"]) == 0
    assert sh.stdout.getvalue() == ""


def test_ls_lists_directory(tmp_path):
    (tmp_path / "B.TXT").write_bytes(b"abc")
    (tmp_path / "sub").mkdir()
    sh = make_shell()
    assert do_ls(sh, ["ls", str(tmp_path)]) == 0
    assert sh.stdout.getvalue().splitlines() == ["f b.txt 3", "d sub 0"]


def test_ls_missing_directory(tmp_path):
    sh = make_shell()
    assert do_ls(sh, ["ls", str(tmp_path / "nope")]) == -1
    assert sh.stdout.getvalue() == "open dir failed.\n"


def test_less_whole_file(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("one\ntwo\n")
    sh = make_shell()
    assert do_less(sh, ["less", str(path)]) == 0
    assert sh.stdout.getvalue() == "one\ntwo\n"


def test_less_line_mode_next_then_quit(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("one\ntwo\nthree\n")
    sh = make_shell("xnq")
    assert do_less(sh, ["less", "-l", str(path)]) == 0
    assert sh.stdout.getvalue() == "one\ntwo\n"


def test_less_without_file():
    sh = make_shell()
    assert do_less(sh, ["less"]) == -1
    assert sh.stderr.getvalue() == "File Not Found.\n"


def test_less_missing_file(tmp_path):
    missing = str(tmp_path / "none")
    sh = make_shell()
    assert do_less(sh, ["less", missing]) == -1
    assert sh.stderr.getvalue() == f"open file failed, {missing}\n"


def test_cp_copies(tmp_path):
    src = tmp_path / "a"
    dst = tmp_path / "b"
    data = bytes(range(256)) * 3
    src.write_bytes(data)
    sh = make_shell()
    assert do_cp(sh, ["cp", str(src), str(dst)]) == 0
    assert dst.read_bytes() == data


def test_cp_usage():
    sh = make_shell()
    assert do_cp(sh, ["cp", "x"]) == -1
    assert sh.stderr.getvalue() == "Usage: cp src dest\n"


def test_cp_missing_source_reports(tmp_path):
    sh = make_shell()
    assert do_cp(sh, ["cp", str(tmp_path / "none"), str(tmp_path / "out")]) == 0
    assert sh.stderr.getvalue() == "open file failed.\n"


def test_rm(tmp_path):
    path = tmp_path / "gone"
    path.write_text("x")
    sh = make_shell()
    assert do_rm(sh, ["rm", str(path)]) == 0
    assert not path.exists()
    assert do_rm(sh, ["rm", str(path)]) == -1
    assert sh.stderr.getvalue() == f"rm file failed: {path}.\n"


def test_rm_without_file():
    sh = make_shell()
    assert do_rm(sh, ["rm"]) == -1
    assert sh.stderr.getvalue() == "no file.\n"


def test_date_format():
    sh = make_shell()
    assert do_date(sh, ["date"]) == 0
    assert re.fullmatch(r"\w{3} \w{3} [ \d]\d \d\d:\d\d:\d\d \d{4}\n", sh.stdout.getvalue())


def test_quit_raises():
    with pytest.raises(QuitShell) as info:
        do_quit(make_shell(), ["quit"])
    assert info.value.status == 0