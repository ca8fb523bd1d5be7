"""Benchmark: traversal throughput.

Measures how many full traversals of a mid-sized nested structure
complete per second with ``Everywhere``, ``EverywhereBut`` and
``Everything``.
"""
from __future__ import annotations

import json
import operator
import sys
import time
from dataclasses import dataclass
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from termwalk import Everything, Everywhere, EverywhereBut, Query, Transformation

_ITERATIONS: int = 200


@dataclass(frozen=True)
class Num:
    value: int


@dataclass(frozen=True)
class Add:
    left: object
    right: object


def _expression(depth: int) -> object:
    """Build a balanced ``Add`` tree with ``2 ** depth`` leaves."""
    if depth == 0:
        return Num(depth)
    return Add(_expression(depth - 1), _expression(depth - 1))


def _document(width: int) -> dict[str, object]:
    return {
        f"item{i}": {"name": f" item {i} ", "tags": ["a", "b", None], "count": i}
        for i in range(width)
    }


def _run(operation: str, fn, iterations: int = _ITERATIONS) -> dict[str, object]:  # type: ignore[no-untyped-def]
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_traversal] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_everywhere_throughput() -> dict[str, object]:
    """Benchmark ``Everywhere`` over a dataclass expression tree (64 leaves)."""
    tree = _expression(6)
    increment = Everywhere(Transformation(lambda n: n + 1, int))
    return _run("everywhere_expression", lambda: increment.transform(tree))


def bench_everywhere_but_throughput() -> dict[str, object]:
    """Benchmark ``EverywhereBut`` over a JSON-like document, pruning tag lists."""
    doc = _document(50)
    strip = EverywhereBut(lambda t: not isinstance(t, list), Transformation(str.strip, str))
    return _run("everywhere_but_document", lambda: strip.transform(doc))


def bench_everything_throughput() -> dict[str, object]:
    """Benchmark ``Everything`` summing leaf values in an expression tree."""
    tree = _expression(6)
    total = Everything(Query(lambda n: n.value, Num, default=0), operator.add)
    return _run("everything_expression", lambda: total.query(tree))


if __name__ == "__main__":
    results = [
        bench_everywhere_throughput(),
        bench_everywhere_but_throughput(),
        bench_everything_throughput(),
    ]
    output_path = Path(__file__).parent / "results" / "traversal_baseline.json"
    output_path.parent.mkdir(exist_ok=True)
    output_path.write_text(json.dumps(results, indent=2))
    print(f"Results saved to {output_path}")
