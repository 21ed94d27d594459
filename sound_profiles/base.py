"""
Base sample source classes and abstract interfaces.
"""

from abc import ABC, abstractmethod
import logging
import numpy as np
from typing import Iterator, MutableSequence

from models.constants import Constants


logger = logging.getLogger("NoiseStreamer")


class SampleSource(ABC):
    """
    Abstract base class for infinite, pull-driven mono sample sources.
    The audio backend calls next_sample() once per output frame, or
    fill() once per block.
    """

    def __init_subclass__(cls, **kwargs):
        """Validate that subclasses implement all required methods."""
        super().__init_subclass__(**kwargs)

        # Check that the next_sample method is implemented
        if 'next_sample' not in cls.__dict__:
            raise TypeError(f"Class {cls.__name__} must implement abstract method 'next_sample'")

    def __init__(self, sample_rate: int):
        """
        Initialize the sample source.

        Args:
            sample_rate: Audio sample rate
        """
        self.sample_rate = sample_rate

    @property
    def channels(self) -> int:
        return Constants.CHANNELS

    @abstractmethod
    def next_sample(self) -> float:
        """
        Produce the next sample.

        Returns:
            Next sample value; never raises in steady state
        """
        pass

    def fill(self, out: MutableSequence[float]) -> None:
        """
        Write consecutive samples into a caller-owned buffer.

        Subclasses may override with a vectorized version, but the values
        must match calling next_sample() once per element.

        Args:
            out: Buffer to overwrite
        """
        next_sample = self.next_sample
        for i in range(len(out)):
            out[i] = next_sample()

    def take(self, num_samples: int) -> np.ndarray:
        """
        Pull the next num_samples samples into a new array.

        Args:
            num_samples: Number of samples to pull

        Returns:
            Samples as a float64 numpy array
        """
        out = np.empty(num_samples, dtype=np.float64)
        self.fill(out)
        return out

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next_sample()
