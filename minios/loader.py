"""Second-stage loader logic: memory detection and ELF kernel loading."""

from __future__ import annotations

import struct
from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass, field
from itertools import islice

BOOT_RAM_REGION_MAX = 10
SECTOR_SIZE = 512
SYS_KERNEL_LOAD_ADDR = 0x100000

KERNEL_START_SECTOR = 100
KERNEL_SECTOR_COUNT = 500

CR4_PSE = 1 << 4
CR0_PG = 1 << 31
PDE_P = 1 << 0
PDE_W = 1 << 1
PDE_PS = 1 << 7

SMAP_SIGNATURE = 0x534D4150
SMAP_TYPE_RAM = 1

EI_NIDENT = 16
ELF_MAGIC = b"\x7fELF"
ET_EXEC = 2
ET_386 = 3
PT_LOAD = 1

_EHDR = struct.Struct("<16sHHIIIIIHHHHHH")
_PHDR = struct.Struct("<IIIIIIII")
_SMAP = struct.Struct("<IIIIII")


class ElfError(ValueError):
    """Raised when an image is not a loadable ELF file."""


@dataclass(frozen=True)
class Elf32Header:
    """The ELF file header."""

    ident: bytes
    type: int
    machine: int
    version: int
    entry: int
    phoff: int
    shoff: int
    flags: int
    ehsize: int
    phentsize: int
    phnum: int
    shentsize: int
    shnum: int
    shstrndx: int

    SIZE = _EHDR.size


@dataclass(frozen=True)
class Elf32ProgramHeader:
    """One program header (segment description)."""

    type: int
    offset: int
    vaddr: int
    paddr: int
    filesz: int
    memsz: int
    flags: int
    align: int

    SIZE = _PHDR.size


@dataclass(frozen=True)
class SmapEntry:
    """One entry of the BIOS memory map; ``returned_bytes`` is 20 or 24."""

    base_low: int
    base_high: int
    length_low: int
    length_high: int
    type: int
    acpi: int = 0
    returned_bytes: int = 24

    @classmethod
    def from_bytes(cls, data: bytes) -> SmapEntry:
        """Decode a 20- or 24-byte memory map entry."""
        if len(data) not in (20, 24):
            raise ValueError("memory map entry must be 20 or 24 bytes")
        padded = bytes(data) + bytes(_SMAP.size - len(data))
        return cls(*_SMAP.unpack(padded), returned_bytes=len(data))


@dataclass(frozen=True)
class RamRegion:
    """A usable RAM region."""

    start: int
    size: int


@dataclass
class BootInfo:
    """Information the loader hands to the kernel."""

    ram_regions: list[RamRegion] = field(default_factory=list)

    @property
    def ram_region_count(self) -> int:
        return len(self.ram_regions)

    @property
    def total_size(self) -> int:
        return sum(region.size for region in self.ram_regions)


def parse_elf_header(data: bytes) -> Elf32Header:
    """Decode the ELF header at the start of ``data``."""
    if len(data) < _EHDR.size:
        raise ElfError("image too short for an ELF header")
    header = Elf32Header(*_EHDR.unpack_from(data, 0))
    if header.ident[:4] != ELF_MAGIC:
        raise ElfError("bad ELF magic")
    return header


def parse_program_headers(data: bytes, header: Elf32Header) -> list[Elf32ProgramHeader]:
    """Decode all program headers described by ``header``."""
    end = header.phoff + header.phnum * _PHDR.size
    if end > len(data):
        raise ElfError("program header table lies outside the image")
    return [
        Elf32ProgramHeader(*fields)
        for fields in _PHDR.iter_unpack(bytes(data[header.phoff:end]))
    ]


def load_elf(data: bytes, memory: MutableSequence[int]) -> int:
    """Copy the loadable segments of ``data`` into ``memory`` by physical address.

    The part of each segment beyond its file size is zero filled.
    Returns the entry point.
    """
    header = parse_elf_header(data)
    for phdr in parse_program_headers(data, header):
        if phdr.type != PT_LOAD:
            continue
        if phdr.offset + phdr.filesz > len(data):
            raise ElfError("segment data lies outside the image")
        if phdr.memsz < phdr.filesz:
            raise ElfError("segment memory size is smaller than its file size")
        if phdr.paddr + phdr.memsz > len(memory):
            raise ElfError("segment does not fit into memory")
        file_end = phdr.paddr + phdr.filesz
        memory[phdr.paddr:file_end] = data[phdr.offset:phdr.offset + phdr.filesz]
        memory[file_end:phdr.paddr + phdr.memsz] = bytes(phdr.memsz - phdr.filesz)
    return header.entry


def detect_memory(entries: Iterable[SmapEntry]) -> BootInfo:
    """Collect usable RAM regions from the BIOS memory map.

    At most BOOT_RAM_REGION_MAX entries are examined; extended entries whose
    ACPI bit 0 is clear are ignored, and only the low 32 bits are kept.
    """
    info = BootInfo()
    for entry in islice(entries, BOOT_RAM_REGION_MAX):
        if entry.returned_bytes > 20 and (entry.acpi & 0x1) == 0:
            continue
        if entry.type == SMAP_TYPE_RAM:
            info.ram_regions.append(RamRegion(entry.base_low, entry.length_low))
    return info