"""
cellbench: micro-benchmarks for AES and digest-keyed structures.
"""

from .timer import ClockError, Stopwatch

__version__ = "0.1.0"

__all__ = ["ClockError", "Stopwatch", "__version__"]
