"""A first-fit free-list allocator over a simulated, growing break."""

HEADER_SIZE = 16
_MIN_UNITS = 4096
_BASE = 0


class Heap:
    """Allocates byte ranges from an address space grown one chunk at a time.

    Addresses are plain integers. The break starts at start and may grow
    by at most capacity bytes (unbounded when capacity is None).
    """

    HEADER_SIZE = HEADER_SIZE

    def __init__(self, start=4096, capacity=None):
        if start <= _BASE or start % HEADER_SIZE:
            raise ValueError("start must be a positive multiple of the header size")
        self.start = start
        self.brk = start
        self.capacity = capacity
        self._size = {}
        self._next = {}
        self._allocated = set()
        self._freep = None

    def _sbrk(self, nbytes):
        if self.capacity is not None and self.brk + nbytes - self.start > self.capacity:
            return None
        old = self.brk
        self.brk += nbytes
        return old

    def _morecore(self, nunits):
        nunits = max(nunits, _MIN_UNITS)
        hp = self._sbrk(nunits * HEADER_SIZE)
        if hp is None:
            raise MemoryError("out of memory")
        self._size[hp] = nunits
        self._release(hp)
        return self._freep

    def malloc(self, nbytes):
        """Allocate nbytes and return the address of the usable area."""
        if nbytes < 0:
            raise ValueError("negative size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._size[_BASE] = 0
            self._next[_BASE] = _BASE
            self._freep = _BASE
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next.pop(p)
                else:
                    self._size[p] -= nunits
                    p += self._size[p] * HEADER_SIZE
                    self._size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return p + HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
            prevp, p = p, self._next[p]

    def free(self, addr):
        """Return an area obtained from malloc()."""
        bp = addr - HEADER_SIZE
        if bp not in self._allocated:
            raise ValueError(f"address {addr:#x} was not allocated")
        self._allocated.remove(bp)
        self._release(bp)

    def _release(self, bp):
        size, nxt = self._size, self._next
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        q = nxt[p]
        if bp + size[bp] * HEADER_SIZE == q:
            size[bp] += size.pop(q)
            nxt[bp] = nxt.pop(q)
        else:
            nxt[bp] = q
        if p + size[p] * HEADER_SIZE == bp:
            size[p] += size.pop(bp)
            nxt[p] = nxt.pop(bp)
        else:
            nxt[p] = bp
        self._freep = p