# rvkit

rvkit is a small toolkit with no dependencies. It is built around a minimal
RISC-V teaching operating system. It models that system's address arithmetic
and Sv39 page tables in plain Python. It also provides the system's
user-level helpers and a set of small Unix-style utilities that run on the
host.

## Contents

- **`rvkit.riscv`** holds the system limits, the `O_*` open flags and the
  status and interrupt bits. It also has the PTE bits and the memory layout
  of the `virt` machine (`KERNBASE`, `PHYSTOP`, `TRAMPOLINE`, `TRAPFRAME`,
  `MAXVA`, and others). It provides the address helpers `pg_round_up`,
  `pg_round_down`, `pa2pte`, `pte2pa`, `pte_flags`, `px`, `make_satp` and
  `kstack`, and the PLIC register helpers `plic_senable`, `plic_spriority`
  and `plic_sclaim`.
- **`rvkit.elf`** decodes 64-bit little-endian ELF headers with
  `parse_elf_header` and `parse_program_header`. It encodes them with
  `ElfHeader.pack` and `ProgramHeader.pack`. `ProgramHeader.is_loadable`
  tells whether a segment has the load type. Input that is too short, or
  that has the wrong magic number, raises `ElfFormatError`.
- **`rvkit.vm`**:
  - `PhysicalMemory` is a page-granular memory with `alloc`, `free`,
    `read`, `write` and `free_pages`.
  - `PageTable` is a three-level Sv39 table stored in that memory. It
    provides `walk`, `walkaddr`, `map_pages`, `unmap`, `load_first`,
    `grow`, `shrink`, `free`, `copy_to`, `clear_user`, `copy_out`,
    `copy_in` and `copy_in_str`.
  - `make_kernel_pagetable` builds the direct-mapped kernel table.
  - A broken invariant raises `KernelPanic`. An allocation that fails
    raises `OutOfMemory`. A bad user address passed to the copy functions
    raises `ValueError`.
- **`rvkit.fmt`** implements a minimal printf dialect through
  `format_string` and `fprintf(stream, ...)`. It supports `%d`, `%u` and
  `%x`, each also with `l` and `ll`, plus `%p`, `%s` and `%%`.
  - Integers are printed as 32-bit values.
  - Hex digits are upper case.
  - An unknown conversion is copied out as written.
- **`rvkit.ulib`** provides `atoi`, `strcmp` (which compares unsigned
  bytes) and `gets(stream, limit)`.
- **`rvkit.umalloc`** provides `Heap`, a first-fit free-list allocator over
  a simulated break, with `malloc` and `free`. It raises `MemoryError` when
  its `capacity` is exhausted.
- **`rvkit.shparse`** parses shell command lines with `parse_command`.
  - The syntax covers words, `<`, `>`, `>>`, `|`, `;`, `&` and `( )`.
  - The result is a tree of `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd`
    and `BackCmd`.
  - Bad syntax, or more than nine arguments, raises `ShellSyntaxError`.
- **`rvkit.rand`** provides the Park–Miller step function `do_rand` and the
  seeded generator `ParkMiller`.
- **Utilities:** `rvkit.cat`, `rvkit.echo`, `rvkit.grep`, `rvkit.wc`,
  `rvkit.ls`, `rvkit.ln`, `rvkit.mkdir`, `rvkit.rm`, `rvkit.kill`, and the
  threading demo `rvkit.threadtest`.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest
```

## Library examples

```python
from rvkit.riscv import pg_round_up, pg_round_down
from rvkit.grep import match
from rvkit.fmt import format_string
from rvkit.shparse import parse_command, PipeCmd

assert pg_round_up(1) == 4096
assert pg_round_down(4097) == 4096

assert match("^a.c$", "abc")
assert not match("^a.c$", "abcd")

assert format_string("%d %x %s", -5, 255, "ok") == "-5 FF ok"

tree = parse_command("ls | grep x > out\n")
assert isinstance(tree, PipeCmd)
```

A user address space on simulated memory:

```python
from rvkit.riscv import PTE_W
from rvkit.vm import PhysicalMemory, PageTable

memory = PhysicalMemory()
table = PageTable(memory)
size = table.grow(0, 8192, PTE_W)   # pages are user-readable; add write access
table.copy_out(100, b"hello\0")
assert table.copy_in_str(100, 64) == b"hello"
table.free(size)
```

## Commands

```
rvkit-cat [FILE...]
rvkit-echo [WORD...]
rvkit-grep PATTERN [FILE...]
rvkit-wc [FILE...]
rvkit-ls [PATH...]
rvkit-ln OLD NEW
rvkit-mkdir DIR...
rvkit-rm NAME...
rvkit-kill PID...
rvkit-threadtest
```

`rvkit-cat`, `rvkit-grep` and `rvkit-wc` read standard input when they are
given no file. The other commands behave as follows:

- `rvkit-grep` supports only the operators `^ . * $`. It looks only at lines
  that end in a newline.
- `rvkit-wc` prints the counts of lines, words and bytes.
- `rvkit-ls` prints each entry's name, padded to 14 characters, followed by
  a type number (1 for a directory, 2 for a file, 3 for anything else), the
  inode number and the size.
- `rvkit-rm` removes files and empty directories.
- `rvkit-kill` sends a kill signal to host processes.
- `rvkit-mkdir` and `rvkit-rm` stop at the first name that fails.

## What it does not do

- rvkit is not an operating system. It has no scheduler, processes, traps,
  devices, file system or disk-image builder.
- The page tables and the heap work on simulated memory only.
- `rvkit.shparse` parses command lines but does not run them. There is no
  interactive shell.
- The utilities act on the host's files and processes.

## Running the tests

```
pytest
```