"""Kernel data structures, an ELF boot loader model, a command shell and a snake game."""

__version__ = "1.0.0"