"""RISC-V Sv39 paging model, ELF headers, shell parser, allocator and small Unix-style utilities."""

__version__ = "0.1.0"