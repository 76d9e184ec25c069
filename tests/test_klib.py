import pytest

from minios.klib import (
    down2,
    filename_from_path,
    itoa,
    kformat,
    strings_count,
    up2,
)


def test_kformat_plain_text():
    assert kformat("hello") == "hello"


def test_kformat_decimal_and_string():
    assert kformat("task: %s, Unknown syscall: %d.", "init", 99) == (
        "task: init, Unknown syscall: 99."
    )


def test_kformat_hex_uppercase():
    assert kformat("end=0x%x", 255) == "end=0xFF"


def test_kformat_negative_hex_is_twos_complement():
    assert kformat("%x", -1) == "FFFFFFFF"


def test_kformat_char_and_none_string():
    assert kformat("[%c]%s|", ord("A"), None) == "[A]|"


def test_kformat_unknown_spec_dropped():
    assert kformat("a%qb%d", 7) == "ab7"


def test_itoa_bases():
    assert itoa(5, 2) == "101"
    assert itoa(8, 8) == "10"
    assert itoa(0, 10) == "0"
    assert itoa(-12, 10) == "-12"


def test_itoa_unsupported_base():
    assert itoa(10, 7) == ""


@pytest.mark.parametrize("base", [2, 8, 10, 16])
@pytest.mark.parametrize("num", [0, 1, 9, 15, 16, 255, 4096, 123456789])
def test_itoa_round_trip(num, base):
    assert int(itoa(num, base), base) == num


def test_align_examples():
    assert up2(1, 4096) == 4096
    assert up2(4096, 4096) == 4096
    assert down2(4097, 4096) == 4096


@pytest.mark.parametrize("size", [0, 1, 511, 512, 513, 70000])
@pytest.mark.parametrize("bound", [1, 8, 512, 4096])
def test_align_invariants(size, bound):
    up = up2(size, bound)
    down = down2(size, bound)
    assert up % bound == 0 and down % bound == 0
    assert down <= size <= up
    assert up - down in (0, bound)


def test_strings_count():
    assert strings_count(["a", "b", "c"]) == 3
    assert strings_count(["a", None, "c"]) == 1
    assert strings_count([]) == 0
    assert strings_count(None) == 0


def test_filename_from_path():
    assert filename_from_path("/bin/shell.elf") == "shell.elf"
    assert filename_from_path("shell.elf") == "shell.elf"
    assert filename_from_path("dir/") == ""