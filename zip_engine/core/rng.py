import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")

MASK64 = 0xFFFFFFFFFFFFFFFF


class XorShiftRandom:
    """
    Seedable xorshift64 stream.
    Every helper is derived from next_u64() so a fixed seed gives the same
    sequence on any platform (unlike random.Random, whose derived helpers
    are free to change between Python versions).
    """

    __slots__ = ('seed', 'state')

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            # Practice puzzles: draw a fresh seed from the OS entropy pool
            seed = random.SystemRandom().getrandbits(64)
        seed &= MASK64
        # All-zero state would stall the generator
        if seed == 0:
            seed = 1
        self.seed = seed
        self.state = seed

    def next_u64(self) -> int:
        x = self.state
        x ^= (x << 13) & MASK64
        x ^= x >> 7
        x ^= (x << 17) & MASK64
        self.state = x
        return x

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n). Rejection sampling keeps it unbiased."""
        if n <= 0:
            raise ValueError(f"randrange() needs a positive bound, got {n}")
        limit = (MASK64 + 1) - ((MASK64 + 1) % n)
        while True:
            value = self.next_u64()
            if value < limit:
                return value % n

    def randint(self, a: int, b: int) -> int:
        return a + self.randrange(b - a + 1)

    def random(self) -> float:
        # Top 53 bits -> double in [0, 1)
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))

    def randbool(self) -> bool:
        return (self.next_u64() >> 63) == 1

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randrange(len(seq))]

    def shuffle(self, seq: MutableSequence) -> None:
        # Fisher-Yates, walking down from the end
        for i in range(len(seq) - 1, 0, -1):
            j = self.randrange(i + 1)
            seq[i], seq[j] = seq[j], seq[i]
