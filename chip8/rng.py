"""Random byte sources for the CXKK instruction."""

from typing import Callable, Iterable

import jax
import jax.numpy as jnp

RandomSource = Callable[[], int]


class JaxRandomSource:
    """Uniform random bytes drawn from a split ``jax.random`` key.

    Two sources built with the same seed yield the same sequence.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        self.key = jax.random.PRNGKey(seed)

    def __call__(self) -> int:
        self.key, subkey = jax.random.split(self.key)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))

    def __repr__(self):
        return f"JaxRandomSource(seed={self.seed})"


class FixedRandomSource:
    """Replays a fixed sequence of bytes, cycling when exhausted."""

    def __init__(self, values: Iterable[int]):
        self.values = [int(v) & 0xFF for v in values]
        if not self.values:
            raise ValueError("FixedRandomSource needs at least one value")
        self.position = 0

    def __call__(self) -> int:
        value = self.values[self.position % len(self.values)]
        self.position += 1
        return value
