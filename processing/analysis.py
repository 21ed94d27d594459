"""
Spectral analysis helpers for checking filter behaviour.
"""

from typing import Sequence, Union

import numpy as np
from scipy import signal

from processing.filters import HighPassFilter


def generate_tone(sample_rate: int, frequency: float, num_samples: int, amplitude: float = 1.0) -> np.ndarray:
    """
    Generate a sine tone starting at phase zero.

    Args:
        sample_rate: Audio sample rate
        frequency: Tone frequency in Hz
        num_samples: Number of samples to generate
        amplitude: Peak amplitude

    Returns:
        Tone as a float64 numpy array
    """
    t = np.arange(num_samples) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


def signal_energy(audio: Union[Sequence[float], np.ndarray]) -> float:
    """Sum of squared samples."""
    audio = np.asarray(audio, dtype=np.float64)
    return float(np.sum(audio * audio))


def energy_loss(before: Union[Sequence[float], np.ndarray], after: Union[Sequence[float], np.ndarray]) -> float:
    """
    Relative energy change between two signals.

    Args:
        before: Unprocessed signal
        after: Processed signal

    Returns:
        |E_before - E_after| / E_before, or 0.0 for a silent input
    """
    energy_before = signal_energy(before)
    if energy_before == 0.0:
        return 0.0
    return abs(energy_before - signal_energy(after)) / energy_before


def frequency_response(hp_filter: HighPassFilter, frequencies: Union[float, Sequence[float]]) -> np.ndarray:
    """
    Magnitude response of a high-pass filter in dB.

    Args:
        hp_filter: Filter to evaluate (its state is not touched)
        frequencies: Frequency or frequencies in Hz

    Returns:
        Gain in dB at each requested frequency
    """
    b, a = hp_filter.coefficients
    freqs = np.atleast_1d(np.asarray(frequencies, dtype=np.float64))
    _, h = signal.freqz(b, a, worN=freqs, fs=hp_filter.sample_rate)
    magnitude = np.maximum(np.abs(h), np.finfo(np.float64).tiny)
    return 20 * np.log10(magnitude)
