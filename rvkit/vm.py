"""Three-level Sv39 page tables kept in simulated physical memory."""

from .riscv import (
    KERNBASE,
    MAXVA,
    PGSIZE,
    PHYSTOP,
    PLIC,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    TRAMPOLINE,
    UART0,
    VIRTIO0,
    pa2pte,
    pg_round_down,
    pg_round_up,
    pte2pa,
    pte_flags,
    px,
)

_PTE_SIZE = 8


class KernelPanic(RuntimeError):
    """An unrecoverable inconsistency, where the kernel would panic."""


class OutOfMemory(MemoryError):
    """No physical page is left to allocate."""


class PhysicalMemory:
    """A contiguous range of page-sized physical memory with a page allocator."""

    def __init__(self, npages=1024, base=None):
        if npages <= 0:
            raise ValueError("npages must be positive")
        if base is None:
            base = PHYSTOP - npages * PGSIZE
        if base % PGSIZE:
            raise ValueError("base must be page-aligned")
        self.base = base
        self.end = base + npages * PGSIZE
        self._data = bytearray(npages * PGSIZE)
        self._free = list(range(base, self.end, PGSIZE))

    @property
    def free_pages(self):
        """Number of pages currently available to alloc()."""
        return len(self._free)

    def alloc(self):
        """Allocate one physical page and return its address."""
        if not self._free:
            raise OutOfMemory("kalloc")
        return self._free.pop()

    def free(self, pa):
        """Return a page obtained from alloc()."""
        if pa % PGSIZE or not self.base <= pa < self.end:
            raise KernelPanic("kfree")
        self._free.append(pa)

    def _offset(self, pa, n):
        if n < 0 or pa < self.base or pa + n > self.end:
            raise KernelPanic(f"physical address {pa:#x} out of range")
        return pa - self.base

    def read(self, pa, n):
        """Read n bytes at physical address pa."""
        offset = self._offset(pa, n)
        return bytes(self._data[offset:offset + n])

    def write(self, pa, data):
        """Write data at physical address pa."""
        offset = self._offset(pa, len(data))
        self._data[offset:offset + len(data)] = data


def _load(memory, pa):
    return int.from_bytes(memory.read(pa, _PTE_SIZE), "little")


def _store(memory, pa, value):
    memory.write(pa, value.to_bytes(_PTE_SIZE, "little"))


def _zero(memory, pa):
    memory.write(pa, bytes(PGSIZE))


def _freewalk(memory, table):
    for slot in range(table, table + PGSIZE, _PTE_SIZE):
        pte = _load(memory, slot)
        if pte & PTE_V and pte & (PTE_R | PTE_W | PTE_X) == 0:
            _freewalk(memory, pte2pa(pte))
            _store(memory, slot, 0)
        elif pte & PTE_V:
            raise KernelPanic("freewalk: leaf")
    memory.free(table)


class PageTable:
    """A page table whose pages live in a PhysicalMemory."""

    def __init__(self, memory, root=None):
        self.memory = memory
        if root is None:
            root = memory.alloc()
            _zero(memory, root)
        self.root = root

    def walk(self, va, alloc=False):
        """Return the physical address of the level-0 PTE for va.

        With alloc, missing page-table pages are created. Returns None if
        the PTE does not exist and cannot or may not be created.
        """
        if va >= MAXVA:
            raise KernelPanic("walk")
        memory = self.memory
        table = self.root
        for level in (2, 1):
            slot = table + _PTE_SIZE * px(level, va)
            pte = _load(memory, slot)
            if pte & PTE_V:
                table = pte2pa(pte)
                continue
            if not alloc:
                return None
            try:
                table = memory.alloc()
            except OutOfMemory:
                return None
            _zero(memory, table)
            _store(memory, slot, pa2pte(table) | PTE_V)
        return table + _PTE_SIZE * px(0, va)

    def _pte(self, va):
        slot = self.walk(va)
        return 0 if slot is None else _load(self.memory, slot)

    def walkaddr(self, va):
        """Physical page address of a user-accessible va, or None."""
        if va >= MAXVA:
            return None
        pte = self._pte(va)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte2pa(pte)

    def map_pages(self, va, size, pa, perm):
        """Map [va, va+size) to physical addresses starting at pa."""
        if va % PGSIZE:
            raise KernelPanic("mappages: va not aligned")
        if size % PGSIZE:
            raise KernelPanic("mappages: size not aligned")
        if size == 0:
            raise KernelPanic("mappages: size")
        for offset in range(0, size, PGSIZE):
            slot = self.walk(va + offset, alloc=True)
            if slot is None:
                raise OutOfMemory("mappages")
            if _load(self.memory, slot) & PTE_V:
                raise KernelPanic("mappages: remap")
            _store(self.memory, slot, pa2pte(pa + offset) | perm | PTE_V)

    def unmap(self, va, npages, do_free):
        """Remove npages existing mappings from va, optionally freeing the pages."""
        if va % PGSIZE:
            raise KernelPanic("uvmunmap: not aligned")
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            slot = self.walk(a)
            if slot is None:
                raise KernelPanic("uvmunmap: walk")
            pte = _load(self.memory, slot)
            if not pte & PTE_V:
                raise KernelPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise KernelPanic("uvmunmap: not a leaf")
            if do_free:
                self.memory.free(pte2pa(pte))
            _store(self.memory, slot, 0)

    def load_first(self, src):
        """Place the first process's code, under a page long, at address 0."""
        if len(src) >= PGSIZE:
            raise KernelPanic("uvmfirst: more than a page")
        page = self.memory.alloc()
        _zero(self.memory, page)
        self.map_pages(0, PGSIZE, page, PTE_W | PTE_R | PTE_X | PTE_U)
        self.memory.write(page, bytes(src))

    def grow(self, oldsz, newsz, xperm=0):
        """Grow user memory from oldsz to newsz and return the new size.

        On failure everything allocated here is released and OutOfMemory raised.
        """
        if newsz < oldsz:
            return oldsz
        oldsz = pg_round_up(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                page = self.memory.alloc()
            except OutOfMemory:
                self.shrink(a, oldsz)
                raise
            _zero(self.memory, page)
            try:
                self.map_pages(a, PGSIZE, page, PTE_R | PTE_U | xperm)
            except OutOfMemory:
                self.memory.free(page)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz, newsz):
        """Release user pages to bring the size from oldsz to newsz."""
        if newsz >= oldsz:
            return oldsz
        if pg_round_up(newsz) < pg_round_up(oldsz):
            npages = (pg_round_up(oldsz) - pg_round_up(newsz)) // PGSIZE
            self.unmap(pg_round_up(newsz), npages, True)
        return newsz

    def free(self, sz):
        """Free sz bytes of user memory, then every page-table page."""
        if sz > 0:
            self.unmap(0, pg_round_up(sz) // PGSIZE, True)
        _freewalk(self.memory, self.root)

    def copy_to(self, other, sz):
        """Copy the first sz bytes of memory and mappings into other.

        On failure the pages copied so far are freed and OutOfMemory raised.
        """
        for va in range(0, sz, PGSIZE):
            slot = self.walk(va)
            if slot is None:
                raise KernelPanic("uvmcopy: pte should exist")
            pte = _load(self.memory, slot)
            if not pte & PTE_V:
                raise KernelPanic("uvmcopy: page not present")
            try:
                page = other.memory.alloc()
            except OutOfMemory:
                other.unmap(0, va // PGSIZE, True)
                raise
            other.memory.write(page, self.memory.read(pte2pa(pte), PGSIZE))
            try:
                other.map_pages(va, PGSIZE, page, pte_flags(pte))
            except OutOfMemory:
                other.memory.free(page)
                other.unmap(0, va // PGSIZE, True)
                raise

    def clear_user(self, va):
        """Make the page at va inaccessible to user code."""
        slot = self.walk(va)
        if slot is None:
            raise KernelPanic("uvmclear")
        _store(self.memory, slot, _load(self.memory, slot) & ~PTE_U)

    def copy_out(self, dstva, data):
        """Copy bytes to user virtual address dstva; ValueError if not writable."""
        data = bytes(data)
        pos = 0
        while pos < len(data):
            va0 = pg_round_down(dstva)
            if va0 >= MAXVA:
                raise ValueError(f"copyout: bad address {dstva:#x}")
            pte = self._pte(va0)
            needed = PTE_V | PTE_U | PTE_W
            if pte & needed != needed:
                raise ValueError(f"copyout: bad address {dstva:#x}")
            offset = dstva - va0
            n = min(PGSIZE - offset, len(data) - pos)
            self.memory.write(pte2pa(pte) + offset, data[pos:pos + n])
            pos += n
            dstva = va0 + PGSIZE

    def copy_in(self, srcva, n):
        """Copy n bytes from user virtual address srcva; ValueError if unmapped."""
        chunks = []
        while n > 0:
            va0 = pg_round_down(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise ValueError(f"copyin: bad address {srcva:#x}")
            offset = srcva - va0
            count = min(PGSIZE - offset, n)
            chunks.append(self.memory.read(pa0 + offset, count))
            n -= count
            srcva = va0 + PGSIZE
        return b"".join(chunks)

    def copy_in_str(self, srcva, limit):
        """Copy a NUL-terminated string of at most limit bytes, NUL included.

        Returns the bytes before the NUL; ValueError if unmapped or unterminated.
        """
        chunks = []
        while limit > 0:
            va0 = pg_round_down(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise ValueError(f"copyinstr: bad address {srcva:#x}")
            offset = srcva - va0
            count = min(PGSIZE - offset, limit)
            chunk = self.memory.read(pa0 + offset, count)
            end = chunk.find(b"\0")
            if end >= 0:
                chunks.append(chunk[:end])
                return b"".join(chunks)
            chunks.append(chunk)
            limit -= count
            srcva = va0 + PGSIZE
        raise ValueError("copyinstr: string not terminated")


def make_kernel_pagetable(memory, etext, trampoline):
    """Build the kernel's direct-mapped page table.

    etext is the end of kernel text and trampoline the physical address of
    the trampoline page. Per-process kernel stacks are mapped separately.
    """
    kpt = PageTable(memory)

    def kvmmap(va, pa, sz, perm):
        try:
            kpt.map_pages(va, sz, pa, perm)
        except OutOfMemory as exc:
            raise KernelPanic("kvmmap") from exc

    kvmmap(UART0, UART0, PGSIZE, PTE_R | PTE_W)
    kvmmap(VIRTIO0, VIRTIO0, PGSIZE, PTE_R | PTE_W)
    kvmmap(PLIC, PLIC, 0x4000000, PTE_R | PTE_W)
    kvmmap(KERNBASE, KERNBASE, etext - KERNBASE, PTE_R | PTE_X)
    kvmmap(etext, etext, PHYSTOP - etext, PTE_R | PTE_W)
    kvmmap(TRAMPOLINE, trampoline, PGSIZE, PTE_R | PTE_X)
    return kpt