"""
Constants and configuration models for NoiseStreamer.
"""
