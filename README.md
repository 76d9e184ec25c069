# minios

Building blocks of a small hobby operating system, written in plain Python,
together with a command shell and a snake game that run in an ordinary
terminal.

## What is in it

- `minios.bitmap` — `Bitmap(bit_count, value)`, a fixed-size bit map with
  `get`, `is_set`, `set_range` and `alloc(count, value)`, which finds the first
  run of `count` bits equal to `value`, flips them and returns the run's start
  (or `None`). `byte_count(bit_count)` gives the bytes needed for that many bits.
- `minios.klib` — `kformat(fmt, *args)`, a formatter for `%s`, `%d`, `%x` and
  `%c`; `itoa(num, base)` for bases 2, 8, 10 and 16 (only base 10 shows a minus
  sign, other bases show the 32-bit two's complement); `down2` and `up2` for
  power-of-two alignment; `strings_count`, which counts items before the first
  `None`; and `filename_from_path`.
- `minios.linked_list` — `LinkedList`, a doubly linked list of `ListNode`
  objects, with `insert_first`, `insert_last`, `remove_first`, `remove_last`,
  `remove`, `first`, `last`, `is_empty`, `len()` and iteration.
- `minios.ktime` — `BrokenDownTime`, `bcd_to_bin`, `tm_from_cmos` (decodes BCD
  clock registers, makes the month zero-based, adds eight hours and moves the
  year into the 2000s when the century register is `0x20`) and `mktime`, which
  returns seconds since 1970-01-01.
- `minios.rbtree` — a red-black tree of caller-owned nodes: `RBTree` with
  `link_node`, `insert_color`, `insert` (orders by `key`), `erase_next`,
  `erase_prev`, `rotate_left`, `rotate_right`, `first` and in-order iteration;
  `RBNode`, `Color`, and the helpers `rb_next` and `rb_prev`.
- `minios.loader` — ELF32 handling: `parse_elf_header`,
  `parse_program_headers` and `load_elf(data, memory)`, which copies each
  loadable segment into a mutable byte buffer at its physical address,
  zero-fills the rest of the segment and returns the entry point; bad images
  raise `ElfError`. `detect_memory(entries)` turns BIOS memory-map entries
  (`SmapEntry`, decodable with `SmapEntry.from_bytes`) into a `BootInfo` of
  usable `RamRegion`s, looking at no more than ten entries.
- `minios.shell` and `minios.commands` — a line-oriented `Shell` with the
  built-in commands `help`, `clear`, `echo`, `ls`, `less`, `cp`, `rm`, `date`
  and `quit`.
- `minios.snake` — `SnakeGame`, a snake game drawn with ANSI escape sequences.

## Installing

```
pip install .
```

## Using the shell

```
minios-shell
```

The prompt is `sh >> `. Built-in commands:

- `help` — list the built-in commands.
- `clear` — clear the screen.
- `echo [-n count] msg` — print `msg`, `count` times; with no arguments, echo
  one line of input.
- `ls [dir]` — list a directory (the current one by default) as
  `d`/`f`, lower-cased name and size.
- `less [-l] file` — show a file; with `-l`, one line at a time (`n` for the
  next line, `q` to stop).
- `cp src dest` — copy a file.
- `rm file` — remove a file.
- `date` — print the current time.
- `quit` — leave the shell.

A word that is not a built-in is run as a program if a file of that name, or
of that name with `.elf` added, exists; the shell waits for it and reports its
exit status and process id. Otherwise it prints `Unknown command`. A failing
built-in prints `Error: <code>`. The shell also ends at end of input.

## Playing snake

```
minios-snake
```

Move with `a`, `w`, `s`, `d`; without a key press the snake keeps going in its
current direction. Eating food grows the snake; running into a wall or into
itself ends the round. Then press Enter to play again or `q` to quit.

## Library example

```python
from minios.bitmap import Bitmap

pages = Bitmap(16, 0)
start = pages.alloc(4, 0)   # first run of four clear bits
assert start == 0
assert pages.is_set(3)
```

## What it does not do

This is not a bootable kernel. There is no task scheduler, no system calls, no
file systems, no device drivers and no terminal emulation. The loader functions
work on byte buffers given to them: they do not read disks, switch processor
modes or enable paging. The shell and the snake game run on the host system's
files, processes and terminal.

## Running the tests

```
pip install .[test]
pytest
```