"""
Per-stream sample pipeline: noise source followed by an optional live filter.
"""

import logging
from typing import Any, MutableSequence, Optional

from models.constants import FilterMode
from models.stream_config import StreamConfiguration
from processing.filters import HighPassFilter
from sound_profiles.base import SampleSource
from sound_profiles.noise import NoiseBuffer

logger = logging.getLogger("NoiseStreamer")


class NoiseStream(SampleSource):
    """
    Composes a sample source with an optional high-pass filter by data flow.

    Each instance is owned by exactly one stream thread; neither the
    source nor the filter is shared with another stream.
    """

    def __init__(self, source: SampleSource, live_filter: Optional[HighPassFilter] = None):
        """
        Initialize the pipeline.

        Args:
            source: Raw sample source
            live_filter: Filter applied to every sample on the output path
        """
        if live_filter is not None and live_filter.sample_rate != source.sample_rate:
            raise ValueError(
                f"Filter sample rate {live_filter.sample_rate} Hz does not match "
                f"source sample rate {source.sample_rate} Hz"
            )
        super().__init__(source.sample_rate)
        self.source = source
        self.live_filter = live_filter

    @classmethod
    def from_configuration(cls, config: StreamConfiguration, rng: Optional[Any] = None) -> "NoiseStream":
        """
        Build the pipeline for one output stream.

        Args:
            config: Stream configuration
            rng: Random provider for this stream only

        Returns:
            New NoiseStream
        """
        filter_mode = FilterMode(config.filter_mode)
        # Fresh per-tick draws are played raw
        if filter_mode is FilterMode.LIVE and config.buffer_duration_ms == 0:
            logger.info("No noise buffer configured; live high-pass filtering is skipped")
            filter_mode = FilterMode.NONE
        source = NoiseBuffer(
            config.sample_rate,
            buffer_duration_ms=config.buffer_duration_ms,
            ramp_up_duration_ms=config.ramp_up_duration_ms,
            amplitude=config.amplitude,
            filter_mode=filter_mode,
            cutoff_hz=config.cutoff_hz,
            rng=rng,
        )
        live_filter = None
        if filter_mode is FilterMode.LIVE:
            live_filter = HighPassFilter(config.sample_rate, config.cutoff_hz)
        return cls(source, live_filter)

    @property
    def tick(self) -> int:
        return self.source.tick

    def next_sample(self) -> float:
        sample = self.source.next_sample()
        if self.live_filter is not None:
            return self.live_filter.process(sample)
        return sample

    def fill(self, out: MutableSequence[float]) -> None:
        self.source.fill(out)
        if self.live_filter is not None:
            self.live_filter.process_buffer(out)
