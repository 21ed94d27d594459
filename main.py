#!/usr/bin/env python
"""
NoiseStreamer - Continuous white noise for one or more output devices

Streams uniform white noise from a looping noise buffer, with:
- One-pole high-pass filtering to remove DC and rumble (live or batch)
- Linear fade-in so playback never starts abruptly
- One independent stream per output device, never phase-correlated
"""

import argparse
import configparser
import logging
import sys
import time

from models.constants import Constants, FilterMode
from models.stream_config import StreamConfiguration, parse_device
from streamer import NoiseStreamer
from utils.config import ConfigManager
from utils.logging import setup_logging

logger = logging.getLogger("NoiseStreamer")

def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Stream continuous white noise to audio output devices"
    )

    # Main operation mode
    parser.add_argument(
        "--mode",
        choices=["play", "info"],
        default="play",
        help="Operation mode: stream noise, or print the derived stream parameters",
    )
    parser.add_argument("--config", type=str, help="INI configuration file")

    # Signal options; unset options fall back to the configuration file
    parser.add_argument("--sample-rate", type=int, help=f"Sample rate in Hz (default: {Constants.DEFAULT_SAMPLE_RATE})")
    parser.add_argument("--amplitude", type=float, help="Peak noise amplitude, 1.0 is full scale")
    parser.add_argument("--buffer-ms", type=float, help="Noise ring buffer length in ms; 0 draws fresh noise every sample")
    parser.add_argument("--ramp-up-ms", type=float, help="Fade-in length in ms; 0 disables the fade")
    parser.add_argument(
        "--filter-mode",
        choices=[e.value for e in FilterMode],
        help="Apply the high-pass filter per sample (live), once to the buffer (batch), or not at all",
    )
    parser.add_argument("--cutoff", type=float, help="High-pass cutoff frequency in Hz")

    # Device options
    parser.add_argument(
        "--device",
        action="append",
        help="Output device index or name; repeat to stream to several devices",
    )
    parser.add_argument("--blocksize", type=int, help="Frames per audio callback")
    parser.add_argument("--duration", type=float, help="Stop after this many seconds (default: run until interrupted)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible noise")

    # Debug options
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=str, help="Also log to this file")

    return parser.parse_args(argv)


def build_configuration(args) -> StreamConfiguration:
    """Merge the configuration file with command line overrides"""
    config_manager = ConfigManager(args.config)
    config = StreamConfiguration.from_config_manager(config_manager)

    overrides = {
        "sample_rate": args.sample_rate,
        "amplitude": args.amplitude,
        "buffer_duration_ms": args.buffer_ms,
        "ramp_up_duration_ms": args.ramp_up_ms,
        "filter_mode": args.filter_mode,
        "cutoff_hz": args.cutoff,
        "blocksize": args.blocksize,
        "duration_seconds": args.duration,
        "seed": args.seed,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    if args.device:
        config.devices = [parse_device(d) for d in args.device]

    return config


def display_stream_info(info):
    """Print the derived stream parameters"""
    print("\n=== NoiseStreamer ===\n")
    print(f"Sample rate:      {info['sample_rate']} Hz")
    if info["buffer_size"] > 0:
        print(f"Noise buffer:     {info['buffer_size']} samples (ring buffer)")
    else:
        print("Noise buffer:     none (fresh random draw per sample)")
    print(f"Fade-in:          {info['ramp_up_samples']} samples")
    print(f"Amplitude:        {info['amplitude']}")
    print(f"Filter mode:      {info['filter_mode']}")
    if "alpha" in info:
        print(f"Cutoff:           {info['cutoff_hz']} Hz (alpha={info['alpha']:.6f}, "
              f"{info['response_at_cutoff_db']:.2f} dB at cutoff)")
    if info["filter_mode"] == FilterMode.BATCH.value:
        print("  Note: batch filtering clicks once per buffer loop")
    devices = ", ".join("default" if d is None else str(d) for d in info["devices"])
    print(f"Devices:          {devices}")


def main(argv=None) -> int:
    """Main function for command-line usage"""
    args = parse_arguments(argv)

    setup_logging(verbose=args.verbose, log_to_file=bool(args.log_file), log_file=args.log_file)

    start_time = time.time()

    try:
        config = build_configuration(args)
        streamer = NoiseStreamer(config)
        if args.mode == "info":
            display_stream_info(streamer.describe())
            return Constants.EXIT_OK
        results = streamer.run()
    except (ValueError, configparser.Error) as e:
        logger.error(f"Invalid configuration: {e}")
        return Constants.EXIT_INVALID_CONFIG

    elapsed_time = time.time() - start_time
    logger.info(f"Total streaming time: {elapsed_time:.2f} seconds")

    return NoiseStreamer.exit_code(results)


if __name__ == "__main__":
    sys.exit(main())
