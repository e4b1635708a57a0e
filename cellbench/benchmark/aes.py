"""
Cipher throughput benchmarks.

aes:      bulk encryption across a doubling sweep of buffer sizes, with the
          total byte volume held constant per size.
cell_aes: in-place encryption of one cell-sized buffer at every byte
          misalignment from 0 to max_misalign.
"""

from dataclasses import dataclass
from typing import Optional

from ..crypto import CipherContext
from ..timer import Stopwatch
from .benchmark import Benchmark, BenchmarkResult, Measurement


@dataclass
class AESConfig:
    """Parameters of the bulk-cipher sweep"""

    bytes_per_iter: int = 1 << 24
    min_len: int = 1
    max_len: int = 8192

    def buffer_lengths(self):
        length = self.min_len
        while length <= self.max_len:
            yield length
            length *= 2


@dataclass
class CellAESConfig:
    """Parameters of the misalignment sweep"""

    cell_len: int = 509
    iterations: int = 1 << 16
    max_misalign: int = 15


class AESBenchmark(Benchmark):
    name = "aes"

    def __init__(self, config: Optional[AESConfig] = None):
        self.config = config or AESConfig()

    def run(self, stopwatch: Stopwatch) -> BenchmarkResult:
        result = BenchmarkResult(name=self.name)

        stopwatch.reset()
        with CipherContext.for_encryption() as cipher:
            for length in self.config.buffer_lengths():
                iters = max(1, self.config.bytes_per_iter // length)
                src = bytearray(length)
                dst = bytearray(length)

                start = stopwatch.elapsed()
                for _ in range(iters):
                    cipher.encrypt(src, dst)
                end = stopwatch.elapsed()
                del src, dst

                m = Measurement(
                    label=f"{length} bytes",
                    elapsed_ns=end - start,
                    units=iters * length,
                )
                result.measurements.append(m)
                print(f"{length} bytes: {m.ns_per_unit:.2f} nsec per byte")

        return result


class CellAESBenchmark(Benchmark):
    name = "cell_aes"

    def __init__(self, config: Optional[CellAESConfig] = None):
        self.config = config or CellAESConfig()

    def run(self, stopwatch: Stopwatch) -> BenchmarkResult:
        cfg = self.config
        result = BenchmarkResult(name=self.name)
        buf = bytearray(cfg.cell_len + cfg.max_misalign)

        with CipherContext.for_encryption() as cipher:
            stopwatch.reset()
            for misalign in range(cfg.max_misalign + 1):
                cell = memoryview(buf)[misalign : misalign + cfg.cell_len]

                start = stopwatch.elapsed()
                for _ in range(cfg.iterations):
                    cipher.crypt_inplace(cell)
                end = stopwatch.elapsed()
                cell.release()

                m = Measurement(
                    label=f"misaligned by {misalign}",
                    elapsed_ns=end - start,
                    units=cfg.iterations * cfg.cell_len,
                )
                result.measurements.append(m)
                print(
                    f"{cfg.cell_len} bytes, misaligned by {misalign}: "
                    f"{m.ns_per_unit:.2f} nsec per byte"
                )

        return result
