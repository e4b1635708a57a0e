from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .aes import AESBenchmark, CellAESBenchmark
from .benchmark import Benchmark
from .dmap import DigestMapBenchmark


@dataclass
class BenchmarkEntry:
    """A registered benchmark and whether this run selected it"""

    benchmark: Benchmark
    selected: bool = False

    @property
    def name(self) -> str:
        return self.benchmark.name


class BenchmarkRegistry:
    """Fixed, ordered collection of uniquely named benchmarks."""

    def __init__(self, benchmarks: Iterable[Benchmark]):
        self.entries: List[BenchmarkEntry] = []
        for benchmark in benchmarks:
            if not benchmark.name:
                raise ValueError(f"Benchmark {benchmark!r} has no name")
            if self.find(benchmark.name) is not None:
                raise ValueError(f"Duplicate benchmark name: {benchmark.name}")
            self.entries.append(BenchmarkEntry(benchmark))

    def find(self, name: str) -> Optional[BenchmarkEntry]:
        """Return the entry registered under exactly `name`, or None."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def select(self, name: str) -> bool:
        """Mark `name` as selected. Return False if no such benchmark exists."""
        entry = self.find(name)
        if entry is None:
            return False
        entry.selected = True
        return True

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def __iter__(self) -> Iterator[BenchmarkEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def default_registry() -> BenchmarkRegistry:
    """Registry of every built-in benchmark, in run order."""
    return BenchmarkRegistry(
        [
            DigestMapBenchmark(),
            AESBenchmark(),
            CellAESBenchmark(),
        ]
    )
