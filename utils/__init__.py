"""
Utility functions for NoiseStreamer.
"""

from utils.optional_imports import (
    HAS_SOUNDDEVICE,
    get_sounddevice_module,
    check_imports
)

# Import common utility functions to make them available through utils
from utils.random_state import RandomStateManager
from utils.config import ConfigManager
from utils.logging import setup_logging
from utils.parallel import StreamWorkerPool, TaskResult

# Version information
__version__ = "1.0.0"
