"""General kernel helpers: formatting, number conversion and alignment."""

from __future__ import annotations

from collections.abc import Iterable

_DIGITS = "0123456789ABCDEF"
_U32 = 0xFFFFFFFF


def itoa(num: int, base: int = 10) -> str:
    """Convert ``num`` to a string in ``base`` (2, 8, 10 or 16).

    Only base 10 renders negative numbers with a sign; other bases show the
    32-bit two's complement value. Unsupported bases yield an empty string.
    """
    if base not in (2, 8, 10, 16):
        return ""
    prefix = ""
    if base == 10 and num < 0:
        prefix = "-"
        unum = -num
    else:
        unum = num & _U32
    digits = []
    while True:
        digits.append(_DIGITS[unum % base])
        unum //= base
        if not unum:
            break
    return prefix + "".join(reversed(digits))


def kformat(fmt: str, *args: object) -> str:
    """Format ``fmt`` with the kernel's printf subset: %s, %d, %x and %c.

    Any other character after ``%`` is dropped without consuming an argument.
    """
    out: list[str] = []
    values = iter(args)
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            out.append(ch)
            continue
        spec = next(chars, None)
        if spec == "s":
            value = next(values)
            out.append("" if value is None else str(value))
        elif spec == "d":
            out.append(itoa(int(next(values)), 10))
        elif spec == "x":
            out.append(itoa(int(next(values)), 16))
        elif spec == "c":
            value = next(values)
            out.append(chr(value & 0xFF) if isinstance(value, int) else str(value)[:1])
    return "".join(out)


def down2(size: int, bound: int) -> int:
    """Round ``size`` down to a multiple of ``bound`` (a power of two)."""
    return size & ~(bound - 1) & _U32


def up2(size: int, bound: int) -> int:
    """Round ``size`` up to a multiple of ``bound`` (a power of two)."""
    return (size + bound - 1) & ~(bound - 1) & _U32


def strings_count(strings: Iterable[str | None] | None) -> int:
    """Count the strings before the first None (or the end)."""
    if strings is None:
        return 0
    count = 0
    for item in strings:
        if item is None:
            break
        count += 1
    return count


def filename_from_path(path: str) -> str:
    """Return the part of ``path`` after the last ``/``."""
    return path.rpartition("/")[2]