from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List

from ..timer import Stopwatch


@dataclass
class Measurement:
    """
    One timed block.

    Attributes:
        label: What was measured (buffer size, offset, phase name)
        elapsed_ns: Duration of the block in nanoseconds
        units: Bytes or operations processed, used to normalize into a rate
    """

    label: str
    elapsed_ns: int
    units: int = 1

    @property
    def ns_per_unit(self) -> float:
        if self.units <= 0:
            return 0.0
        return self.elapsed_ns / self.units

    @property
    def elapsed_us(self) -> int:
        return self.elapsed_ns // 1000


@dataclass
class BenchmarkResult:
    """Everything a benchmark printed, as values"""

    name: str
    measurements: List[Measurement] = field(default_factory=list)
    stats: Dict[str, float] = field(default_factory=dict)


class Benchmark(ABC):
    """
    Abstract base class for benchmarks.

    A benchmark has a unique name and a run() that performs its measurements
    with the stopwatch it is given, prints a report to stdout and returns the
    same numbers as a BenchmarkResult.
    """

    name: str = ""

    @abstractmethod
    def run(self, stopwatch: Stopwatch) -> BenchmarkResult:
        """
        Run the benchmark.

        Args:
            stopwatch: Stopwatch to reset and read; owned by the caller

        Returns:
            A BenchmarkResult with one Measurement per reported timing
        """
        pass

    def __str__(self) -> str:
        return self.name
