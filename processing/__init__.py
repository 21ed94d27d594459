"""
Signal processing: filters and spectral analysis.
"""
