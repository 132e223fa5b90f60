"""The Park–Miller "minimal standard" pseudo-random number generator."""

_UINT64_MASK = (1 << 64) - 1
_MODULUS = 0x7FFFFFFF  # 2**31 - 1
_MULTIPLIER = 16807  # 7**5
_Q = 127773  # _MODULUS // _MULTIPLIER
_R = 2836  # _MODULUS % _MULTIPLIER


def do_rand(ctx):
    """Advance the generator state ctx and return the next value.

    The returned value, in [0, 0x7ffffffd], is also the new state.
    """
    x = ((ctx & _UINT64_MASK) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, _Q)
    x = _MULTIPLIER * lo - _R * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A generator holding its own state, seeded with 1 by default."""

    def __init__(self, seed=1):
        self.state = seed & _UINT64_MASK

    def next(self):
        """Return the next pseudo-random number."""
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self):
        while True:
            yield self.next()