"""
Pytest configuration and fixtures for cellbench tests.

This file contains shared fixtures and configuration for all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cellbench.benchmark import (  # noqa: E402
    AESBenchmark,
    AESConfig,
    BenchmarkRegistry,
    CellAESBenchmark,
    CellAESConfig,
    DigestMapBenchmark,
    DigestMapConfig,
)
from cellbench.timer import Stopwatch  # noqa: E402


class FakeClock:
    """Clock that advances a fixed step every time it is read."""

    name = "fake"
    resolution_ns = 1

    def __init__(self, step_ns: int = 1000):
        self.now = 0
        self.step_ns = step_ns
        self.reads = 0

    def now_ns(self) -> int:
        self.reads += 1
        self.now += self.step_ns
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def stopwatch():
    """Stopwatch on the platform's default clock."""
    return Stopwatch()


@pytest.fixture
def small_aes_config():
    """Full 1..8192 size sweep with a tiny byte volume."""
    return AESConfig(bytes_per_iter=8192)


@pytest.fixture
def small_cell_aes_config():
    return CellAESConfig(iterations=4)


@pytest.fixture
def small_dmap_config():
    return DigestMapConfig(iterations=2, elements=200, fp_tests=2000)


@pytest.fixture
def small_registry(small_aes_config, small_cell_aes_config, small_dmap_config):
    """Registry with the built-in benchmarks on small configs."""
    return BenchmarkRegistry(
        [
            DigestMapBenchmark(small_dmap_config),
            AESBenchmark(small_aes_config),
            CellAESBenchmark(small_cell_aes_config),
        ]
    )


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# Custom collection modifiers
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark integration tests
        if "integration" in item.nodeid or "test_integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        # Mark slow tests (full-size protocol runs)
        if any(keyword in item.nodeid for keyword in ["full_size", "stress"]):
            item.add_marker(pytest.mark.slow)

        # Mark unit tests (default for most tests)
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# Pytest options
def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="run slow tests"
    )


def pytest_runtest_setup(item):
    """Setup for individual test runs."""
    # Skip slow tests unless --run-slow is passed
    if "slow" in item.keywords and not item.config.getoption("--run-slow"):
        pytest.skip("need --run-slow option to run")
