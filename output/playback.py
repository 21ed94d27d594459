"""
Device playback: drives an output stream's pull callback from a sample source.
"""

import logging
import threading
from typing import Any, Callable, Optional, Union

import numpy as np

from models.constants import Constants, StreamConstants
from sound_profiles.base import SampleSource
from utils.optional_imports import get_sounddevice_module

logger = logging.getLogger("NoiseStreamer")


class DevicePlayer:
    """
    Plays one sample source on one output device.

    The audio backend calls callback() from its own thread once per block.
    The callback only fills and clamps a preallocated buffer; status flags
    are counted there and logged later from the worker thread.
    """

    def __init__(
        self,
        source: SampleSource,
        device: Optional[Union[int, str]] = None,
        blocksize: int = StreamConstants.DEFAULT_BLOCKSIZE,
        latency: Union[str, float] = StreamConstants.DEFAULT_LATENCY,
        stream_factory: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize the player.

        Args:
            source: Sample source owned by this player
            device: sounddevice device index or name, None for the default
            blocksize: Frames per callback, 0 lets the backend choose
            latency: sounddevice latency setting
            stream_factory: Callable with the sounddevice.OutputStream
                signature; defaults to sounddevice.OutputStream
        """
        self.source = source
        self.device = device
        self.blocksize = blocksize
        self.latency = latency
        self._stream_factory = stream_factory
        self._scratch = np.zeros(blocksize or StreamConstants.DEFAULT_BLOCKSIZE, dtype=np.float64)
        self.frames_written = 0
        self.status_events = 0
        self.last_status = None

    @property
    def device_label(self) -> str:
        return "default device" if self.device is None else f"device {self.device!r}"

    def callback(self, outdata, frames, time_info, status) -> None:
        """sounddevice output callback."""
        if status:
            self.status_events += 1
            self.last_status = status

        if len(self._scratch) != frames:
            self._scratch = np.zeros(frames, dtype=np.float64)

        self.source.fill(self._scratch)
        np.clip(self._scratch, -Constants.MAX_AUDIO_VALUE, Constants.MAX_AUDIO_VALUE, out=self._scratch)
        outdata[:, 0] = self._scratch
        self.frames_written += frames

    def open(self):
        """
        Create the output stream without starting it.

        Raises:
            RuntimeError: If sounddevice is unavailable
        """
        factory = self._stream_factory
        if factory is None:
            factory = get_sounddevice_module().OutputStream
        return factory(
            samplerate=self.source.sample_rate,
            blocksize=self.blocksize,
            device=self.device,
            channels=self.source.channels,
            dtype=StreamConstants.DTYPE,
            latency=self.latency,
            callback=self.callback,
        )

    def play(self, stop_event: threading.Event, poll_interval: float = StreamConstants.WAIT_INTERVAL_SECONDS) -> int:
        """
        Stream until stop_event is set.

        Args:
            stop_event: Event that ends playback
            poll_interval: Seconds between status checks

        Returns:
            Number of frames written

        Raises:
            Whatever the backend raises when the device cannot be opened
        """
        reported = 0
        with self.open():
            logger.info(f"Streaming noise to {self.device_label} at {self.source.sample_rate} Hz")
            while not stop_event.wait(poll_interval):
                if self.status_events != reported:
                    logger.warning(
                        f"{self.device_label}: {self.status_events - reported} stream status event(s), "
                        f"last: {self.last_status}"
                    )
                    reported = self.status_events

        logger.info(f"Stopped {self.device_label} after {self.frames_written} frames")
        return self.frames_written
