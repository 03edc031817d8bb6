#!/usr/bin/env python3
"""Benchmark script for seqcheck performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

CALLS = 10000
VERIFIED = 1000


def benchmark_import_time() -> float:
    """Measure import time of seqcheck package."""
    start = time.perf_counter()
    import seqcheck  # noqa: F401

    return time.perf_counter() - start


def benchmark_recording() -> float:
    """Measure recording of calls on a substitute."""
    from seqcheck import QueryContext, Substitute

    target = Substitute(name="target", context=QueryContext())

    start = time.perf_counter()
    for index in range(CALLS):
        target.hit(index)
    return time.perf_counter() - start


def benchmark_verification(*, any_order: bool) -> float:
    """Measure declaring and verifying a long sequence."""
    from seqcheck import QueryContext, Substitute, received_in_any_order, received_in_order

    context = QueryContext()
    target = Substitute(name="target", context=context)
    for index in range(VERIFIED):
        target.hit(index)

    def declare() -> None:
        for index in range(VERIFIED):
            target.hit(index)

    verify = received_in_any_order if any_order else received_in_order
    start = time.perf_counter()
    verify(declare, context)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run seqcheck benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    args = parser.parse_args()

    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {"name": "Recording (10k calls)", "unit": "seconds", "value": benchmark_recording()},
        {
            "name": "Exact Order (1k specifications)",
            "unit": "seconds",
            "value": benchmark_verification(any_order=False),
        },
        {
            "name": "Any Order (1k specifications)",
            "unit": "seconds",
            "value": benchmark_verification(any_order=True),
        },
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
