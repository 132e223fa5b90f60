import pytest

from rvkit.riscv import (
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
    pte2pa,
    pte_flags,
)
from rvkit.vm import (
    KernelPanic,
    OutOfMemory,
    PageTable,
    PhysicalMemory,
    make_kernel_pagetable,
)


def read_pte(memory, slot):
    return int.from_bytes(memory.read(slot, 8), "little")


@pytest.fixture
def memory():
    return PhysicalMemory(npages=64)


@pytest.fixture
def table(memory):
    return PageTable(memory)


def test_alloc_and_free_reuse(memory):
    before = memory.free_pages
    page = memory.alloc()
    assert page % PGSIZE == 0
    assert memory.free_pages == before - 1
    memory.free(page)
    assert memory.free_pages == before
    assert memory.alloc() == page


def test_free_rejects_bad_address(memory):
    with pytest.raises(KernelPanic):
        memory.free(memory.base + 1)
    with pytest.raises(KernelPanic):
        memory.free(memory.end)


def test_alloc_exhaustion():
    mem = PhysicalMemory(npages=2)
    mem.alloc()
    mem.alloc()
    with pytest.raises(OutOfMemory):
        mem.alloc()


def test_memory_read_write_round_trip(memory):
    page = memory.alloc()
    memory.write(page + 10, b"hello")
    assert memory.read(page + 10, 5) == b"hello"
    with pytest.raises(KernelPanic):
        memory.read(memory.end - 2, 4)


def test_walk_missing_returns_none(table):
    assert table.walk(0) is None
    assert table.walkaddr(0) is None


def test_walk_beyond_maxva_panics(table):
    with pytest.raises(KernelPanic):
        table.walk(MAXVA)
    assert table.walkaddr(MAXVA) is None


def test_map_and_walkaddr(memory, table):
    page = memory.alloc()
    table.map_pages(3 * PGSIZE, PGSIZE, page, PTE_R | PTE_U)
    assert table.walkaddr(3 * PGSIZE) == page
    pte = read_pte(memory, table.walk(3 * PGSIZE))
    assert pte_flags(pte) == PTE_R | PTE_U | PTE_V
    assert pte2pa(pte) == page


def test_walkaddr_requires_user_bit(memory, table):
    page = memory.alloc()
    table.map_pages(0, PGSIZE, page, PTE_R | PTE_W)
    assert table.walkaddr(0) is None


@pytest.mark.parametrize(
    "va, size",
    [(1, PGSIZE), (0, PGSIZE + 1), (0, 0)],
)
def test_map_pages_argument_panics(memory, table, va, size):
    with pytest.raises(KernelPanic):
        table.map_pages(va, size, memory.alloc(), PTE_R)


def test_remap_panics(memory, table):
    table.map_pages(0, PGSIZE, memory.alloc(), PTE_R)
    with pytest.raises(KernelPanic, match="remap"):
        table.map_pages(0, PGSIZE, memory.alloc(), PTE_R)


def test_unmap_unmapped_panics(table):
    with pytest.raises(KernelPanic):
        table.unmap(0, 1, True)
    with pytest.raises(KernelPanic):
        table.unmap(1, 1, True)


def test_grow_copy_round_trip(table):
    assert table.grow(0, 2 * PGSIZE, PTE_W) == 2 * PGSIZE
    payload = bytes(range(256)) * 20
    table.copy_out(100, payload)
    assert table.copy_in(100, len(payload)) == payload


def test_grown_memory_is_zeroed(table):
    table.grow(0, PGSIZE, PTE_W)
    assert table.copy_in(0, PGSIZE) == bytes(PGSIZE)


def test_grow_smaller_returns_old_size(table):
    assert table.grow(2 * PGSIZE, PGSIZE) == 2 * PGSIZE


def test_shrink_releases_pages(memory, table):
    table.grow(0, 3 * PGSIZE, PTE_W)
    before = memory.free_pages
    assert table.shrink(3 * PGSIZE, PGSIZE + 1) == PGSIZE + 1
    assert memory.free_pages == before + 1
    assert table.walkaddr(PGSIZE) is not None
    assert table.walkaddr(2 * PGSIZE) is None
    assert table.shrink(PGSIZE, 2 * PGSIZE) == PGSIZE


def test_free_returns_every_page(memory):
    start = memory.free_pages
    table = PageTable(memory)
    table.grow(0, 5 * PGSIZE, PTE_W)
    table.free(5 * PGSIZE)
    assert memory.free_pages == start


def test_free_with_leftover_leaf_panics(memory, table):
    table.grow(0, PGSIZE)
    with pytest.raises(KernelPanic, match="leaf"):
        table.free(0)


def test_grow_out_of_memory_cleans_up():
    mem = PhysicalMemory(npages=4)
    table = PageTable(mem)
    with pytest.raises(OutOfMemory):
        table.grow(0, 3 * PGSIZE, PTE_W)
    assert table.walkaddr(0) is None
    table.free(0)
    assert mem.free_pages == 4


def test_copy_to_duplicates_memory(memory, table):
    table.grow(0, 2 * PGSIZE, PTE_W)
    table.copy_out(PGSIZE - 2, b"abcd")
    child = PageTable(memory)
    table.copy_to(child, 2 * PGSIZE)
    assert child.copy_in(PGSIZE - 2, 4) == b"abcd"
    child.copy_out(PGSIZE - 2, b"wxyz")
    assert table.copy_in(PGSIZE - 2, 4) == b"abcd"
    assert child.walkaddr(0) != table.walkaddr(0)


def test_copy_to_missing_page_panics(memory, table):
    child = PageTable(memory)
    with pytest.raises(KernelPanic):
        table.copy_to(child, PGSIZE)


def test_copy_in_str(table):
    table.grow(0, 2 * PGSIZE, PTE_W)
    table.copy_out(PGSIZE - 3, b"hello\0")
    assert table.copy_in_str(PGSIZE - 3, 100) == b"hello"
    assert table.copy_in_str(PGSIZE - 3, 6) == b"hello"
    with pytest.raises(ValueError):
        table.copy_in_str(PGSIZE - 3, 5)


def test_copy_in_str_unmapped(table):
    with pytest.raises(ValueError):
        table.copy_in_str(0, 10)


def test_copy_out_needs_write_permission(memory, table):
    table.map_pages(0, PGSIZE, memory.alloc(), PTE_R | PTE_U)
    with pytest.raises(ValueError):
        table.copy_out(0, b"x")
    with pytest.raises(ValueError):
        table.copy_out(MAXVA, b"x")


def test_copy_in_unmapped(table):
    table.grow(0, PGSIZE, PTE_W)
    with pytest.raises(ValueError):
        table.copy_in(PGSIZE - 1, 2)


def test_clear_user_blocks_access(table):
    table.grow(0, 2 * PGSIZE, PTE_W)
    table.clear_user(PGSIZE)
    with pytest.raises(ValueError):
        table.copy_in(PGSIZE, 1)
    with pytest.raises(ValueError):
        table.copy_out(PGSIZE, b"x")
    assert table.copy_in(0, 1) == b"\0"


def test_clear_user_missing_panics(table):
    with pytest.raises(KernelPanic):
        table.clear_user(0)


def test_load_first(table):
    table.load_first(b"init code")
    assert table.copy_in(0, 9) == b"init code"
    with pytest.raises(KernelPanic):
        PageTable(table.memory).load_first(bytes(PGSIZE))


def test_kernel_pagetable():
    mem = PhysicalMemory(npages=256)
    etext = KERNBASE + 16 * PGSIZE
    trampoline = KERNBASE + 2 * PGSIZE
    kpt = make_kernel_pagetable(mem, etext, trampoline)

    uart = read_pte(mem, kpt.walk(UART0))
    assert pte2pa(uart) == UART0
    assert pte_flags(uart) == PTE_R | PTE_W | PTE_V

    plic_last = read_pte(mem, kpt.walk(PLIC + 0x4000000 - PGSIZE))
    assert pte2pa(plic_last) == PLIC + 0x4000000 - PGSIZE

    text = read_pte(mem, kpt.walk(KERNBASE))
    assert pte_flags(text) == PTE_R | PTE_X | PTE_V

    data = read_pte(mem, kpt.walk(PHYSTOP - PGSIZE))
    assert pte2pa(data) == PHYSTOP - PGSIZE
    assert pte_flags(data) == PTE_R | PTE_W | PTE_V

    tramp = read_pte(mem, kpt.walk(TRAMPOLINE))
    assert pte2pa(tramp) == trampoline
    assert pte_flags(tramp) == PTE_R | PTE_X | PTE_V

    assert kpt.walk(PHYSTOP) is None
    assert kpt.walkaddr(KERNBASE) is None


def test_kernel_pagetable_out_of_memory_panics():
    mem = PhysicalMemory(npages=8)
    with pytest.raises(KernelPanic, match="kvmmap"):
        make_kernel_pagetable(mem, KERNBASE + PGSIZE, KERNBASE)