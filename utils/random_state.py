"""
Per-stream random state for noise generation.
Each stream owns its own generator; nothing is shared between streams.
"""

import logging
import os
from typing import List, Optional, Union

import numpy as np
from numpy.random import Generator, PCG64DXSM, SeedSequence

logger = logging.getLogger("NoiseStreamer")

SeedLike = Union[int, SeedSequence, None]


class RandomStateManager:
    """
    Seedable random provider owned by a single stream.

    Not thread-safe: the owning stream thread is the only caller, and the
    sample path must never wait on a lock.
    """

    @classmethod
    def independent(cls, count: int, seed: Optional[int] = None) -> List["RandomStateManager"]:
        """
        Create several statistically independent managers.

        Args:
            count: Number of managers to create
            seed: Optional root seed; children are spawned from it so a
                seeded run is reproducible while streams stay uncorrelated

        Returns:
            List of managers, one per stream
        """
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")
        if seed is None:
            return [cls() for _ in range(count)]
        return [cls(child) for child in SeedSequence(seed).spawn(count)]

    def __init__(self, seed: SeedLike = None):
        """
        Initialize with an optional seed.

        Args:
            seed: Integer seed, a numpy SeedSequence, or None to draw one
                from system entropy
        """
        self.seed = seed if seed is not None else self._generate_secure_seed()
        self._numpy_random = Generator(PCG64DXSM(self.seed))
        logger.debug(f"Initializing random state with seed: {self.seed}")

    def _generate_secure_seed(self) -> int:
        """
        Generate a seed from system entropy.

        Returns:
            64-bit seed
        """
        random_bytes = os.urandom(8)
        return int.from_bytes(random_bytes, byteorder='little')

    def uniform(self, low=0.0, high=1.0, size=None):
        """
        Get uniformly distributed random numbers.

        Args:
            low: Lower boundary
            high: Upper boundary
            size: Output shape, None for a single float

        Returns:
            Float or array of random numbers
        """
        return self._numpy_random.uniform(low, high, size)

    def random(self) -> float:
        """Get a random float in range [0.0, 1.0)."""
        return float(self._numpy_random.random())

    @property
    def generator(self) -> Generator:
        return self._numpy_random
