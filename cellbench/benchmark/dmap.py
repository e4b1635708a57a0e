"""
Digest structure benchmark.

Compares insert/lookup cost of the exact DigestMap against the probabilistic
DigestSet over two random corpora (A is inserted, B is expected absent), then
estimates the set's false positive rate from fresh random digests.

Each phase repeats the whole pass over the corpora `iterations` times so a
single pass below clock resolution still gives a usable number.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..crypto import DIGEST_LEN, random_digests
from ..data_structures import DigestMap, DigestSet
from ..timer import Stopwatch
from .benchmark import Benchmark, BenchmarkResult, Measurement

FP_BATCH_SIZE = 4096


@dataclass
class DigestMapConfig:
    """Parameters of the digest structure benchmark"""

    iterations: int = 10000
    elements: int = 4000
    fp_tests: int = 1_000_000


def count_false_positives(ds: DigestSet, trials: int) -> int:
    """Test `trials` fresh random digests against ds; return how many hit."""
    fp = 0
    remaining = trials
    while remaining > 0:
        batch = random_digests(min(FP_BATCH_SIZE, remaining), DIGEST_LEN)
        for d in batch:
            if ds.contains(d):
                fp += 1
        remaining -= len(batch)
    return fp


class DigestMapBenchmark(Benchmark):
    name = "dmap"

    def __init__(self, config: Optional[DigestMapConfig] = None):
        self.config = config or DigestMapConfig()

    def _phase(
        self, label: str, start_ns: int, end_ns: int, corpus_size: int
    ) -> Measurement:
        return Measurement(
            label=label,
            elapsed_ns=end_ns - start_ns,
            units=self.config.iterations * corpus_size,
        )

    def run(self, stopwatch: Stopwatch) -> BenchmarkResult:
        cfg = self.config
        result = BenchmarkResult(name=self.name)

        sl: List[bytes] = random_digests(cfg.elements)
        sl2: List[bytes] = random_digests(cfg.elements)
        n = 0

        with DigestMap() as dm, DigestSet(cfg.elements) as ds:
            print(f"nbits={ds.num_bits}")

            stopwatch.reset()
            start = stopwatch.elapsed()
            for _ in range(cfg.iterations):
                for cp in sl:
                    dm.set(cp, 1)
            pt2 = stopwatch.elapsed()
            for _ in range(cfg.iterations):
                for cp in sl:
                    dm.get(cp)
                for cp in sl2:
                    dm.get(cp)
            pt3 = stopwatch.elapsed()
            for _ in range(cfg.iterations):
                for cp in sl:
                    ds.add(cp)
            pt4 = stopwatch.elapsed()
            for _ in range(cfg.iterations):
                for cp in sl:
                    n += ds.contains(cp)
                for cp in sl2:
                    n += ds.contains(cp)
            end = stopwatch.elapsed()

            fp = count_false_positives(ds, cfg.fp_tests)

            result.measurements = [
                self._phase("map insert", start, pt2, len(sl)),
                self._phase("map lookup", pt2, pt3, len(sl) + len(sl2)),
                self._phase("set insert", pt3, pt4, len(sl)),
                self._phase("set membership", pt4, end, len(sl) + len(sl2)),
            ]
            fp_rate = fp / cfg.fp_tests if cfg.fp_tests else 0.0
            result.stats = {
                "nbits": ds.num_bits,
                "membership_hits": n,
                "false_positives": fp,
                "false_positive_rate": fp_rate,
            }

        for m in result.measurements:
            print(m.elapsed_us)
        print(f"-- {n}")
        print(f"++ {fp_rate:f}")

        return result
