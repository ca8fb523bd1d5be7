"""Structural tests for the termwalk benchmark module."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))


def test_bench_traversal_importable() -> None:
    """Verify bench_traversal module can be imported."""
    mod = importlib.import_module("bench_traversal")
    assert hasattr(mod, "bench_everywhere_throughput")
    assert hasattr(mod, "bench_everywhere_but_throughput")
    assert hasattr(mod, "bench_everything_throughput")


def test_everywhere_throughput_returns_expected_keys() -> None:
    """Verify bench_everywhere_throughput returns expected result keys."""
    from bench_traversal import bench_everywhere_throughput

    result = bench_everywhere_throughput()
    assert "operation" in result
    assert "iterations" in result
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]


def test_everywhere_but_throughput_returns_expected_keys() -> None:
    """Verify bench_everywhere_but_throughput returns expected result keys."""
    from bench_traversal import bench_everywhere_but_throughput

    result = bench_everywhere_but_throughput()
    assert result["operation"] == "everywhere_but_document"
    assert "avg_latency_ms" in result


def test_everything_throughput_returns_expected_keys() -> None:
    """Verify bench_everything_throughput returns expected result keys."""
    from bench_traversal import bench_everything_throughput

    result = bench_everything_throughput()
    assert result["operation"] == "everything_expression"
    assert "ops_per_second" in result
