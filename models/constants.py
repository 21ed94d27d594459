"""
Constants and enumerations for the NoiseStreamer.
"""

from enum import Enum


class Constants:
    """General constants used throughout the application"""
    # Audio settings
    DEFAULT_SAMPLE_RATE = 44100
    CHANNELS = 1  # The pipeline is strictly mono

    # Device boundary
    MAX_AUDIO_VALUE = 1.0  # Playback clamps to [-MAX_AUDIO_VALUE, MAX_AUDIO_VALUE]

    # Exit codes
    EXIT_OK = 0
    EXIT_FAILURE = 1
    EXIT_INVALID_CONFIG = 2


class NoiseConstants:
    """Constants for noise buffer generation"""
    DEFAULT_BUFFER_DURATION_MS = 2000.0
    DEFAULT_RAMP_UP_DURATION_MS = 500.0
    DEFAULT_AMPLITUDE = 0.5  # Peak of the uniform draw
    DEGENERATE_BUFFER_DURATION_MS = 0.0  # Fresh draw per tick, no ring buffer


class FilterConstants:
    """Constants for the high-pass filter"""
    DEFAULT_CUTOFF_HZ = 100.0  # DC / rumble removal


class StreamConstants:
    """Constants for device streaming"""
    DEFAULT_BLOCKSIZE = 1024
    DEFAULT_LATENCY = "high"
    DTYPE = "float32"
    WAIT_INTERVAL_SECONDS = 0.1
    SHUTDOWN_TIMEOUT_SECONDS = 5.0


class FilterMode(str, Enum):
    """Where the high-pass filter is applied"""
    LIVE = "live"    # Per sample on the output path
    BATCH = "batch"  # Once over the stored buffer at construction
    NONE = "none"
