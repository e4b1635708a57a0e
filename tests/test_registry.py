"""
Tests for BenchmarkRegistry and the default benchmark set.
"""

import pytest

from cellbench.benchmark import (
    AESBenchmark,
    Benchmark,
    BenchmarkEntry,
    BenchmarkRegistry,
    CellAESBenchmark,
    DigestMapBenchmark,
    default_registry,
)


class NamedBenchmark(Benchmark):
    def __init__(self, name):
        self.name = name
        self.runs = 0

    def run(self, stopwatch):
        self.runs += 1


class TestBenchmarkBase:
    """Test the abstract Benchmark interface."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Benchmark()

    def test_str_is_name(self):
        assert str(NamedBenchmark("abc")) == "abc"


class TestDefaultRegistry:
    """The built-in registry."""

    def test_names_in_order(self):
        assert default_registry().names() == ["dmap", "aes", "cell_aes"]

    def test_names_unique(self):
        names = default_registry().names()
        assert len(names) == len(set(names))

    def test_benchmark_types(self):
        benchmarks = [entry.benchmark for entry in default_registry()]
        assert isinstance(benchmarks[0], DigestMapBenchmark)
        assert isinstance(benchmarks[1], AESBenchmark)
        assert isinstance(benchmarks[2], CellAESBenchmark)

    def test_nothing_selected_initially(self):
        assert not any(entry.selected for entry in default_registry())

    def test_fresh_registry_each_call(self):
        a = default_registry()
        a.select("aes")
        assert not default_registry().find("aes").selected


class TestBenchmarkRegistry:
    """Lookup, selection and validation."""

    def setup_method(self):
        self.registry = BenchmarkRegistry(
            [NamedBenchmark("one"), NamedBenchmark("two"), NamedBenchmark("three")]
        )

    def test_len_and_iter(self):
        assert len(self.registry) == 3
        entries = list(self.registry)
        assert all(isinstance(e, BenchmarkEntry) for e in entries)
        assert [e.name for e in entries] == ["one", "two", "three"]

    def test_find_exact_match(self):
        assert self.registry.find("two").name == "two"

    @pytest.mark.parametrize("name", ["TWO", "tw", "two ", "", "four"])
    def test_find_no_match(self, name):
        assert self.registry.find(name) is None

    def test_select(self):
        assert self.registry.select("two") is True
        assert [e.selected for e in self.registry] == [False, True, False]

    def test_select_unknown(self):
        assert self.registry.select("nope") is False
        assert not any(e.selected for e in self.registry)

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            BenchmarkRegistry([NamedBenchmark("a"), NamedBenchmark("a")])

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            BenchmarkRegistry([NamedBenchmark("")])

    def test_empty_registry(self):
        registry = BenchmarkRegistry([])
        assert len(registry) == 0
        assert registry.names() == []
