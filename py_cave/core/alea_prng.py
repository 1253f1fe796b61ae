"""
Alea pseudo-random number generator.

Based on Johannes Baagøe's Alea algorithm. The generator is seeded by
hashing the string form of the seed with the Mash function, so string
and integer seeds are both accepted and produce a stable stream on every
platform. All stochastic decisions in cave generation draw from one
instance of this class.
"""


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _make_mash():
    """Return a fresh Mash hash function with its own running state."""
    mash_n = 0xEFC8249D  # 4022871197

    def mash(data):
        nonlocal mash_n
        for char in str(data):
            mash_n = mash_n + ord(char)
            h = 0.02519603282416938 * mash_n
            mash_n = _uint32(h)
            h -= mash_n
            h *= mash_n
            mash_n = _uint32(h)
            h -= mash_n
            mash_n += h * 0x100000000  # 2^32
        return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

    return mash


class AleaPRNG:
    """
    Seeded Alea generator with integer helpers used by the cave pipeline.

    ``next_int(low, high)`` draws from the half-open range ``[low, high)``.
    An empty or inverted range collapses to ``low`` instead of raising, so
    callers working with very small grids never crash on a degenerate span.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.seed = seed
        self.call_count = 0

        mash = _make_mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high); ``low`` when the range is empty."""
        if high <= low:
            return low
        return low + int(self.random() * (high - low))

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.next_int(0, len(seq))]

    def derive_seed(self) -> str:
        """Draw a child seed string for an independent sub-generation."""
        return str(self.next_int(0, 2**31 - 1))
