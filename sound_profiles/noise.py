"""
Buffered white noise source with ring-buffer playback and fade-in envelope.
"""

import logging
import math
import numbers
from typing import Any, MutableSequence, Optional, Union

import numpy as np

from models.constants import Constants, FilterConstants, FilterMode, NoiseConstants
from processing.filters import HighPassFilter
from sound_profiles.base import SampleSource
from utils.random_state import RandomStateManager

logger = logging.getLogger("NoiseStreamer")


def _check_positive(name: str, value: Any) -> None:
    if not isinstance(value, numbers.Real) or not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive number, got {value!r}")


def _check_non_negative(name: str, value: Any) -> None:
    if not isinstance(value, numbers.Real) or not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value!r}")


def duration_to_samples(duration_ms: float, sample_rate: int) -> int:
    """Whole number of samples covered by duration_ms (floored)."""
    return int(duration_ms * sample_rate // 1000)


class NoiseBuffer(SampleSource):
    """
    Uniform white noise read from a pre-generated ring buffer.

    The buffer is drawn once at construction and replayed cyclically, so a
    fresh instance built from the same random state replays the same
    sequence from tick 0. A live instance's tick counter is never reset.

    With buffer_duration_ms == 0 there is no buffer at all: every tick
    draws a fresh value from the random source instead.

    No clamping is applied. Amplitudes above 1.0 (or later gain stages)
    can exceed full scale; clamping belongs at the device boundary.
    """

    def __init__(
        self,
        sample_rate: int,
        buffer_duration_ms: float = NoiseConstants.DEFAULT_BUFFER_DURATION_MS,
        ramp_up_duration_ms: float = NoiseConstants.DEFAULT_RAMP_UP_DURATION_MS,
        amplitude: float = NoiseConstants.DEFAULT_AMPLITUDE,
        filter_mode: Union[FilterMode, str] = FilterMode.NONE,
        cutoff_hz: float = FilterConstants.DEFAULT_CUTOFF_HZ,
        rng: Optional[Any] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the noise buffer.

        Args:
            sample_rate: Audio sample rate in Hz
            buffer_duration_ms: Length of the ring buffer; 0 selects a fresh
                random draw per tick
            ramp_up_duration_ms: Length of the linear fade-in; 0 disables it
            amplitude: Peak of the uniform draw, values lie in [-amplitude, amplitude]
            filter_mode: FilterMode.BATCH high-pass filters the stored buffer
                once here; LIVE and NONE store raw values
            cutoff_hz: Cutoff used for batch filtering
            rng: Random provider with a numpy-style uniform(low, high, size)
            seed: Seed for a new RandomStateManager when rng is not given

        Raises:
            ValueError: On any invalid configuration
        """
        _check_positive("Sample rate", sample_rate)
        _check_non_negative("Buffer duration", buffer_duration_ms)
        _check_non_negative("Ramp-up duration", ramp_up_duration_ms)
        _check_non_negative("Amplitude", amplitude)
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")

        super().__init__(sample_rate)
        self.filter_mode = FilterMode(filter_mode)
        self.amplitude = float(amplitude)
        self.buffer_duration_ms = buffer_duration_ms
        self.buffer_size = duration_to_samples(buffer_duration_ms, sample_rate)
        self.ramp_up_samples = duration_to_samples(ramp_up_duration_ms, sample_rate)
        self.tick = 0

        if buffer_duration_ms > 0 and self.buffer_size == 0:
            raise ValueError(
                f"Buffer duration of {buffer_duration_ms} ms holds no samples at {sample_rate} Hz; "
                f"use {NoiseConstants.DEGENERATE_BUFFER_DURATION_MS} ms for per-tick random draws"
            )
        if self.buffer_size == 0 and self.filter_mode is FilterMode.BATCH:
            raise ValueError("Batch filtering requires a ring buffer (buffer_duration_ms > 0)")

        if self.amplitude > Constants.MAX_AUDIO_VALUE:
            logger.warning(f"Amplitude {self.amplitude} exceeds full scale; output is not clamped")

        self._rng = rng if rng is not None else RandomStateManager(seed)

        if self.buffer_size > 0:
            self.samples = self._generate_buffer(cutoff_hz)
            self._draw = self._read_ring
            self._copy_block = self._copy_ring
        else:
            self.samples = np.empty(0, dtype=np.float64)
            self._draw = self._draw_fresh
            self._copy_block = self._copy_fresh
        self.samples.flags.writeable = False

        # Fade-in multiplier for ticks 1 .. ramp_up_samples-1, indexed by tick-1
        ramp = self.ramp_up_samples
        self._envelope = np.arange(1, ramp, dtype=np.float64) / ramp if ramp > 1 else np.empty(0)

        logger.debug(
            f"NoiseBuffer ready: buffer_size={self.buffer_size}, "
            f"ramp_up_samples={self.ramp_up_samples}, filter_mode={self.filter_mode.value}"
        )

    def _generate_buffer(self, cutoff_hz: float) -> np.ndarray:
        samples = np.array(
            self._rng.uniform(-self.amplitude, self.amplitude, size=self.buffer_size),
            dtype=np.float64,
        )
        if self.filter_mode is FilterMode.BATCH:
            HighPassFilter(self.sample_rate, cutoff_hz).process_buffer(samples)
            # Filter state at the end of the buffer does not match the start
            logger.info(
                f"Batch-filtered noise buffer will click at each ring wrap "
                f"(every {self.buffer_size} samples)"
            )
        return samples

    @property
    def is_ring_buffered(self) -> bool:
        return self.buffer_size > 0

    @property
    def ramp_complete(self) -> bool:
        """True once the envelope multiplier has reached 1."""
        return self.tick >= self.ramp_up_samples

    def _read_ring(self, tick: int) -> float:
        return float(self.samples[tick % self.buffer_size])

    def _draw_fresh(self, tick: int) -> float:
        return float(self._rng.uniform(-self.amplitude, self.amplitude))

    def _copy_ring(self, out: np.ndarray, start: int) -> None:
        # Contiguous runs of the ring, split only where it wraps
        size = self.buffer_size
        pos = start % size
        written = 0
        while written < len(out):
            chunk = min(len(out) - written, size - pos)
            np.copyto(out[written:written + chunk], self.samples[pos:pos + chunk])
            written += chunk
            pos = 0

    def _copy_fresh(self, out: np.ndarray, start: int) -> None:
        out[:] = self._rng.uniform(-self.amplitude, self.amplitude, size=len(out))

    def next_sample(self) -> float:
        raw = self._draw(self.tick)
        self.tick += 1
        if self.ramp_up_samples > 0 and self.tick < self.ramp_up_samples:
            return raw * (self.tick / self.ramp_up_samples)
        return raw

    def fill(self, out: MutableSequence[float]) -> None:
        """
        Block version of next_sample().

        Writes exactly the values len(out) next_sample() calls would return
        and advances the tick counter by the same amount. Ring-buffered
        numpy output is filled by slice copies without temporary arrays.

        Args:
            out: Buffer to overwrite
        """
        count = len(out)
        if count == 0:
            return
        if not isinstance(out, np.ndarray):
            super().fill(out)
            return

        start = self.tick
        self._copy_block(out, start)
        self.tick = start + count

        # Ticks start+1 .. ramp_up_samples-1 are still inside the fade-in
        ramped = min(count, self.ramp_up_samples - 1 - start)
        if ramped > 0:
            out[:ramped] *= self._envelope[start:start + ramped]
