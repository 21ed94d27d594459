"""
Device output.
"""
