"""
Core streamer class that builds per-device noise pipelines and runs them.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from models.constants import Constants, FilterMode, StreamConstants
from models.stream_config import StreamConfiguration
from output.playback import DevicePlayer
from processing.analysis import frequency_response
from processing.filters import HighPassFilter
from sound_profiles.pipeline import NoiseStream
from utils.parallel import StreamWorkerPool, TaskResult
from utils.random_state import RandomStateManager

logger = logging.getLogger("NoiseStreamer")


class NoiseStreamer:
    """Stream continuous noise to one or more output devices"""

    def __init__(
        self,
        config: Optional[StreamConfiguration] = None,
        player_factory: Callable[..., Any] = DevicePlayer,
    ):
        """
        Initialize the streamer.

        Args:
            config: Stream configuration, defaults when omitted
            player_factory: Callable building a player from
                (source, device=..., blocksize=..., latency=...)

        Raises:
            ValueError: If the configuration is invalid
        """
        self.config = config or StreamConfiguration()
        if not self.config.validate():
            raise ValueError("Invalid stream configuration")
        self.player_factory = player_factory

    def build_streams(self) -> List[NoiseStream]:
        """
        Build one independent pipeline per configured device.

        Every pipeline gets its own random state, so devices never play
        correlated noise.

        Returns:
            One NoiseStream per device, in device order

        Raises:
            ValueError: If a pipeline cannot be constructed
        """
        rngs = RandomStateManager.independent(len(self.config.devices), self.config.seed)
        return [NoiseStream.from_configuration(self.config, rng) for rng in rngs]

    def _build_stream(self) -> NoiseStream:
        rng = RandomStateManager.independent(1, self.config.seed)[0]
        return NoiseStream.from_configuration(self.config, rng)

    def render(self, num_samples: int) -> np.ndarray:
        """
        Pull samples from a fresh single pipeline without any device.

        Args:
            num_samples: Number of samples to produce

        Returns:
            Samples as a float64 array
        """
        return self._build_stream().take(num_samples)

    def describe(self) -> Dict[str, Any]:
        """
        Derived parameters of the configured pipeline.

        Builds one pipeline exactly as run() would, so settings that
        cannot be played are rejected here too.

        Returns:
            Dict of derived parameters; filter details only when a
            filter is in effect

        Raises:
            ValueError: If a pipeline cannot be constructed
        """
        config = self.config
        stream = self._build_stream()
        source = stream.source
        filter_mode = FilterMode.LIVE if stream.live_filter is not None else source.filter_mode
        info: Dict[str, Any] = {
            "sample_rate": stream.sample_rate,
            "buffer_size": source.buffer_size,
            "ramp_up_samples": source.ramp_up_samples,
            "amplitude": source.amplitude,
            "filter_mode": filter_mode.value,
            "devices": list(config.devices),
        }
        if filter_mode is not FilterMode.NONE:
            hp_filter = stream.live_filter or HighPassFilter(config.sample_rate, config.cutoff_hz)
            info["cutoff_hz"] = config.cutoff_hz
            info["alpha"] = hp_filter.alpha
            info["response_at_cutoff_db"] = float(frequency_response(hp_filter, config.cutoff_hz)[0])
        return info

    def _play_stream(self, stop_event, stream: NoiseStream, device) -> int:
        player = self.player_factory(
            stream,
            device=device,
            blocksize=self.config.blocksize,
            latency=self.config.latency,
        )
        return player.play(stop_event)

    def run(self, pool: Optional[StreamWorkerPool] = None) -> List[TaskResult]:
        """
        Play every device until the configured duration elapses, the
        process is interrupted, or every stream has ended.

        Args:
            pool: Worker pool to use, a new one by default

        Returns:
            One TaskResult per device
        """
        streams = self.build_streams()
        pool = pool or StreamWorkerPool()
        tasks = [
            (self._play_stream, {"stream": stream, "device": device})
            for stream, device in zip(streams, self.config.devices)
        ]

        start_time = time.time()
        pool.start(tasks)
        try:
            pool.wait(timeout=self.config.duration_seconds)
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping streams")
        finally:
            pool.shutdown()
            results = pool.wait(timeout=StreamConstants.SHUTDOWN_TIMEOUT_SECONDS)

        succeeded = sum(1 for r in results if r.success)
        logger.info(
            f"{succeeded}/{len(results)} stream(s) finished cleanly after "
            f"{time.time() - start_time:.2f} seconds"
        )
        return results

    @staticmethod
    def exit_code(results: List[TaskResult]) -> int:
        """Process exit code for a finished run."""
        if results and any(r.success for r in results):
            return Constants.EXIT_OK
        return Constants.EXIT_FAILURE
