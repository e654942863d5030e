#!/usr/bin/env python3
"""
Hot path profile of the JECS lexer and parser.

Parses every generated payload repeatedly with JECS_PROFILE enabled, checks
the results against the JSON rendering of the same data and prints where
parsing time goes, next to the stdlib json time for the same data. Run
from the repository root with python -m benchmarks.profile_hot_paths.
"""

import json
import os
import sys
import time
from typing import Any

# Profiling is switched on when jecs is imported
os.environ.setdefault("JECS_PROFILE", "1")

import jecs  # noqa: E402
from benchmarks.data_generators import DATA_TYPES  # noqa: E402
from benchmarks.data_generators import generate_documents  # noqa: E402


def check_correctness(documents: dict[str, tuple[str, str]]) -> bool:
    """Verify that jecs and stdlib json agree on every payload."""
    print("\n=== Correctness Validation ===")
    all_correct = True

    for name, (jecs_text, json_text) in documents.items():
        try:
            identical = jecs.loads(jecs_text) == json.loads(
                json_text, parse_int=float
            )
        except jecs.JecsDecodeError as e:
            print(f"✗ {name}: {e}")
            all_correct = False
            continue

        print(f"{'✓' if identical else '✗'} {name}")
        all_correct = all_correct and identical

    return all_correct


def time_parser(func: Any, data: Any, iterations: int) -> float:
    """Mean seconds per call over the given number of iterations."""
    start_time = time.perf_counter()
    for _ in range(iterations):
        func(data)
    return (time.perf_counter() - start_time) / iterations


def main() -> bool:
    """Main profiling run."""
    print("JECS hot path profile")
    print("=" * 60)

    documents = {name: generate_documents(name) for name in DATA_TYPES}
    if not check_correctness(documents):
        print("\n❌ CORRECTNESS VALIDATION FAILED")
        return False

    print("\n=== Timings ===")
    for name, (jecs_text, json_text) in documents.items():
        iterations = 20 if len(jecs_text) > 10_000 else 200
        jecs.clear_hot_path_stats()
        jecs_time = time_parser(jecs.loads, jecs_text, iterations)
        json_time = time_parser(json.loads, json_text, iterations)

        print(
            f"\n{name} ({len(jecs_text):,} chars): "
            f"jecs {jecs_time * 1000:.3f}ms, json {json_time * 1000:.3f}ms "
            f"({jecs_time / json_time:.1f}x)"
        )
        stats = jecs.get_hot_path_stats()
        if stats:
            print(jecs.format_hot_path_stats(stats))
        else:
            print("⚠ No profile collected, python -O disables profiling")

    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
