"""
zcatr core - format detection, decoding and rendering.
"""
__version__ = "0.1.0"
