"""
Benchmark routines and the registry that names them.
"""

from .aes import AESBenchmark, AESConfig, CellAESBenchmark, CellAESConfig
from .benchmark import Benchmark, BenchmarkResult, Measurement
from .dmap import DigestMapBenchmark, DigestMapConfig
from .registry import BenchmarkEntry, BenchmarkRegistry, default_registry

__all__ = [
    "AESBenchmark",
    "AESConfig",
    "Benchmark",
    "BenchmarkEntry",
    "BenchmarkRegistry",
    "BenchmarkResult",
    "CellAESBenchmark",
    "CellAESConfig",
    "DigestMapBenchmark",
    "DigestMapConfig",
    "Measurement",
    "default_registry",
]
