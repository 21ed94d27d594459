"""
INI configuration for NoiseStreamer.
"""

import os
import json
import configparser
import logging
from typing import Any, Callable, Dict, List, Optional

from models.constants import Constants, NoiseConstants, FilterConstants, StreamConstants, FilterMode

logger = logging.getLogger("NoiseStreamer")

# Section -> key -> default; DEFAULT values are visible from every section
DEFAULTS = {
    "DEFAULT": {
        "sample_rate": Constants.DEFAULT_SAMPLE_RATE,
    },
    "NOISE": {
        "amplitude": NoiseConstants.DEFAULT_AMPLITUDE,
        "buffer_duration_ms": NoiseConstants.DEFAULT_BUFFER_DURATION_MS,
        "ramp_up_duration_ms": NoiseConstants.DEFAULT_RAMP_UP_DURATION_MS,
    },
    "FILTER": {
        "mode": FilterMode.LIVE.value,
        "cutoff_hz": FilterConstants.DEFAULT_CUTOFF_HZ,
    },
    "STREAM": {
        "devices": "",  # empty means the system default device
        "blocksize": StreamConstants.DEFAULT_BLOCKSIZE,
        "latency": StreamConstants.DEFAULT_LATENCY,
    },
}


class ConfigManager:
    """Typed access to INI settings layered over the built-in defaults."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize with an optional config file.

        Args:
            config_file: INI file read on top of the defaults

        Raises:
            configparser.Error: If the file cannot be parsed
        """
        self.config = configparser.ConfigParser()
        self.config.read_dict({
            section: {key: str(value) for key, value in values.items()}
            for section, values in DEFAULTS.items()
        })

        if config_file:
            self.load_config(config_file)

    def load_config(self, config_file: str) -> None:
        """Read a file over the current values; a missing file keeps them."""
        if not os.path.exists(config_file):
            logger.warning(f"Configuration file {config_file} not found. Using defaults.")
            return
        self.config.read(config_file)
        logger.info(f"Loaded configuration from {config_file}")

    def _get(self, getter: Callable[[str, str], Any], section: str, key: str, default: Any) -> Any:
        try:
            return getter(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_int(self, section: str, key: str, default: Optional[int] = None) -> Optional[int]:
        return self._get(self.config.getint, section, key, default)

    def get_float(self, section: str, key: str, default: Optional[float] = None) -> Optional[float]:
        return self._get(self.config.getfloat, section, key, default)

    def get_bool(self, section: str, key: str, default: Optional[bool] = None) -> Optional[bool]:
        return self._get(self.config.getboolean, section, key, default)

    def get_str(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._get(self.config.get, section, key, default)

    def get_list(self, section: str, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Comma separated values with blanks dropped."""
        value = self.get_str(section, key)
        if value is None:
            return default if default is not None else []
        return [item.strip() for item in value.split(',') if item.strip()]

    def set(self, section: str, key: str, value: Any) -> None:
        if section != self.config.default_section and not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, str(value))

    def save(self, config_file: str) -> None:
        """Write the current settings as INI."""
        os.makedirs(os.path.dirname(config_file) or '.', exist_ok=True)
        with open(config_file, 'w') as f:
            self.config.write(f)
        logger.info(f"Configuration saved to {config_file}")

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Nested dict of raw string values, DEFAULT included."""
        result = {self.config.default_section: dict(self.config.defaults())}
        for section in self.config.sections():
            result[section] = dict(self.config.items(section))
        return result

    def export_json(self, json_file: str) -> None:
        os.makedirs(os.path.dirname(json_file) or '.', exist_ok=True)
        with open(json_file, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration exported to JSON: {json_file}")

    @classmethod
    def from_json(cls, json_file: str) -> "ConfigManager":
        """Build a manager from a file written by export_json()."""
        config_manager = cls()
        if not os.path.exists(json_file):
            logger.warning(f"JSON configuration file {json_file} not found. Using defaults.")
            return config_manager

        with open(json_file, 'r') as f:
            for section, values in json.load(f).items():
                for key, value in values.items():
                    config_manager.set(section, key, value)
        logger.info(f"Configuration loaded from JSON: {json_file}")
        return config_manager
