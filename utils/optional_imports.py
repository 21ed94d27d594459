"""
Optional imports management and availability flags.
"""

import logging
from typing import Dict

logger = logging.getLogger("NoiseStreamer")

# Initialize flags for optional dependencies
HAS_SOUNDDEVICE = False

# Initialize module holders for optional dependencies
SOUNDDEVICE_MODULE = None
SOUNDDEVICE_ERROR = None

def check_imports() -> Dict[str, bool]:
    """Check which optional dependencies are available and return status."""
    global HAS_SOUNDDEVICE, SOUNDDEVICE_MODULE, SOUNDDEVICE_ERROR

    # sounddevice raises OSError when the PortAudio library itself is missing
    try:
        import sounddevice
        HAS_SOUNDDEVICE = True
        SOUNDDEVICE_MODULE = sounddevice
        SOUNDDEVICE_ERROR = None
    except (ImportError, OSError) as e:
        HAS_SOUNDDEVICE = False
        SOUNDDEVICE_ERROR = e
        logger.debug(f"sounddevice unavailable: {e}")

    return {
        "sounddevice": HAS_SOUNDDEVICE,
    }

def get_sounddevice_module():
    """
    Get the sounddevice module.

    Raises:
        RuntimeError: If sounddevice or PortAudio is not installed
    """
    if not HAS_SOUNDDEVICE:
        raise RuntimeError(
            f"Audio playback requires 'sounddevice' and the PortAudio library "
            f"(pip install sounddevice): {SOUNDDEVICE_ERROR}"
        )
    return SOUNDDEVICE_MODULE

# Run the import checks when module is loaded
IMPORT_STATUS = check_imports()
