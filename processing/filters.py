"""
Stateful single-sample filters for the live sample path.
"""

import math
import numbers
from typing import MutableSequence, Tuple


class HighPassFilter:
    """
    One-pole recursive high-pass filter.

    Discretized RC high-pass: each step uses the previous input and the
    previous output only, so cost and memory are constant per sample.
    The rolling state lives for the whole stream and is never reset.
    """

    def __init__(self, sample_rate: int, cutoff_frequency: float):
        """
        Initialize the filter.

        Args:
            sample_rate: Audio sample rate in Hz, must be positive
            cutoff_frequency: Cutoff frequency in Hz, must be positive

        Raises:
            ValueError: If either argument is not a positive finite number,
                or if the derived coefficient leaves the open interval (0, 1)
        """
        if not isinstance(sample_rate, numbers.Real) or not math.isfinite(sample_rate) or sample_rate <= 0:
            raise ValueError(f"Sample rate must be a positive number, got {sample_rate!r}")
        if not isinstance(cutoff_frequency, numbers.Real) or not math.isfinite(cutoff_frequency) or cutoff_frequency <= 0:
            raise ValueError(f"Cutoff frequency must be a positive number, got {cutoff_frequency!r}")

        dt = 1.0 / sample_rate
        rc = 1.0 / (2.0 * math.pi * cutoff_frequency)
        alpha = rc / (rc + dt)

        # Extreme cutoffs round alpha onto the interval bounds
        if not 0.0 < alpha < 1.0:
            raise ValueError(
                f"Cutoff {cutoff_frequency} Hz at {sample_rate} Hz yields a degenerate "
                f"filter coefficient ({alpha!r})"
            )

        self.sample_rate = sample_rate
        self.cutoff_hz = float(cutoff_frequency)
        self.alpha = alpha
        self.prev_input = 0.0
        self.prev_output = 0.0

    @property
    def coefficients(self) -> Tuple[list, list]:
        """Transfer function (b, a) equivalent to the recurrence."""
        return [self.alpha, -self.alpha], [1.0, -self.alpha]

    def process(self, input: float) -> float:
        output = self.alpha * (self.prev_output + input - self.prev_input)
        self.prev_input = input
        self.prev_output = output
        return output

    def process_buffer(self, buffer: MutableSequence[float]) -> None:
        """
        Filter a finite sequence in place, one sample at a time.

        Produces exactly the values of calling process() on each element
        in order, and leaves the filter state where those calls would.

        Args:
            buffer: List or numpy array, overwritten with the filtered samples
        """
        process = self.process
        for i, sample in enumerate(buffer):
            buffer[i] = process(sample)

    def __repr__(self) -> str:
        return (f"HighPassFilter(sample_rate={self.sample_rate}, "
                f"cutoff_hz={self.cutoff_hz}, alpha={self.alpha:.6f})")
