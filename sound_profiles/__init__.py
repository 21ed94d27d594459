"""
Sample sources and per-stream pipelines.
"""
