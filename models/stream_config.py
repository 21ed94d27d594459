"""
Stream configuration dataclass for noise playback settings.
"""

from dataclasses import dataclass, field, asdict, fields
from typing import List, Dict, Any, Optional, Union
import math
import numbers
import os
import json
import logging

from models.constants import Constants, NoiseConstants, FilterConstants, StreamConstants, FilterMode

logger = logging.getLogger("NoiseStreamer")

@dataclass
class StreamConfiguration:
    """Configuration shared by every output stream of one run."""

    # Signal parameters
    sample_rate: int = Constants.DEFAULT_SAMPLE_RATE
    amplitude: float = NoiseConstants.DEFAULT_AMPLITUDE
    buffer_duration_ms: float = NoiseConstants.DEFAULT_BUFFER_DURATION_MS
    ramp_up_duration_ms: float = NoiseConstants.DEFAULT_RAMP_UP_DURATION_MS

    # Filtering
    filter_mode: str = FilterMode.LIVE.value
    cutoff_hz: float = FilterConstants.DEFAULT_CUTOFF_HZ

    # Output streams; None means the system default device
    devices: List[Optional[Union[int, str]]] = field(default_factory=lambda: [None])
    blocksize: int = StreamConstants.DEFAULT_BLOCKSIZE
    latency: Union[str, float] = StreamConstants.DEFAULT_LATENCY

    # Run control
    duration_seconds: Optional[float] = None  # None streams until interrupted
    seed: Optional[int] = None  # Root seed; each stream gets an independent child

    @classmethod
    def from_config_manager(cls, config_manager) -> "StreamConfiguration":
        """
        Create a configuration from INI settings.

        Args:
            config_manager: ConfigManager holding the loaded settings

        Returns:
            StreamConfiguration instance
        """
        defaults = cls()
        devices = config_manager.get_list("STREAM", "devices", default=[])
        latency = config_manager.get_str("STREAM", "latency", defaults.latency)
        try:
            latency = float(latency)
        except (TypeError, ValueError):
            pass
        return cls(
            sample_rate=config_manager.get_int("DEFAULT", "sample_rate", defaults.sample_rate),
            amplitude=config_manager.get_float("NOISE", "amplitude", defaults.amplitude),
            buffer_duration_ms=config_manager.get_float("NOISE", "buffer_duration_ms", defaults.buffer_duration_ms),
            ramp_up_duration_ms=config_manager.get_float("NOISE", "ramp_up_duration_ms", defaults.ramp_up_duration_ms),
            filter_mode=config_manager.get_str("FILTER", "mode", defaults.filter_mode),
            cutoff_hz=config_manager.get_float("FILTER", "cutoff_hz", defaults.cutoff_hz),
            devices=[parse_device(d) for d in devices if d] or [None],
            blocksize=config_manager.get_int("STREAM", "blocksize", defaults.blocksize),
            latency=latency,
            duration_seconds=config_manager.get_float("STREAM", "duration_seconds", None),
            seed=config_manager.get_int("DEFAULT", "seed", None),
        )

    @classmethod
    def from_json(cls, json_file: str):
        """
        Create a configuration from a JSON file.

        Args:
            json_file: Path to JSON configuration file

        Returns:
            StreamConfiguration instance
        """
        if not os.path.exists(json_file):
            logger.warning(f"Configuration file not found: {json_file}")
            return cls()

        with open(json_file, 'r') as f:
            data = json.load(f)
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_json(self, json_file: str):
        """
        Save configuration to a JSON file.

        Args:
            json_file: Path to save configuration
        """
        os.makedirs(os.path.dirname(json_file) or '.', exist_ok=True)
        with open(json_file, 'w') as f:
            json.dump(asdict(self), f, indent=2)
        logger.info(f"Configuration saved to {json_file}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def validate(self) -> bool:
        """
        Validate configuration.

        Returns:
            True if configuration is valid, False otherwise
        """
        valid = True

        if not _is_positive(self.sample_rate):
            logger.error("Sample rate must be positive")
            valid = False

        if not _is_non_negative(self.amplitude):
            logger.error("Amplitude must be non-negative")
            valid = False

        if not _is_non_negative(self.buffer_duration_ms):
            logger.error("Buffer duration must be non-negative")
            valid = False

        if not _is_non_negative(self.ramp_up_duration_ms):
            logger.error("Ramp-up duration must be non-negative")
            valid = False

        if self.filter_mode not in [m.value for m in FilterMode]:
            logger.error(f"Filter mode must be one of {[m.value for m in FilterMode]}")
            valid = False
        elif self.filter_mode != FilterMode.NONE.value and not _is_positive(self.cutoff_hz):
            logger.error("Cutoff frequency must be positive")
            valid = False

        if not isinstance(self.blocksize, numbers.Integral) or self.blocksize < 0:
            logger.error("Block size must be a non-negative integer")
            valid = False

        if not self.devices:
            logger.error("At least one output device is required")
            valid = False

        if self.duration_seconds is not None and not _is_positive(self.duration_seconds):
            logger.error("Duration must be positive")
            valid = False

        return valid


def _is_positive(value) -> bool:
    return isinstance(value, numbers.Real) and math.isfinite(value) and value > 0


def _is_non_negative(value) -> bool:
    return isinstance(value, numbers.Real) and math.isfinite(value) and value >= 0


def parse_device(value):
    """Device indices are ints, anything else is a name substring for sounddevice."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return value
