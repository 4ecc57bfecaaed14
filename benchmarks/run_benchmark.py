"""
CLI entry point for running throughput benchmarks.

Usage:
    python -m benchmarks.run_benchmark                              # all languages, 100 analyses
    python -m benchmarks.run_benchmark --language python            # single language
    python -m benchmarks.run_benchmark --num-analyses 500 --lines 1000

Prerequisites:
    uvicorn api.main:app (the API runs the worker pool in-process)
"""

import argparse
import json

from benchmarks.throughput import ThroughputBenchmark
from models.enums import Language


def main():
    parser = argparse.ArgumentParser(description="Code Analysis Throughput Benchmark")
    parser.add_argument(
        "--num-analyses", type=int, default=100,
        help="Number of analyses to submit per language (default: 100)",
    )
    parser.add_argument(
        "--lines", type=int, default=200,
        help="Lines of source per analysis (default: 200)",
    )
    parser.add_argument(
        "--language", type=str, default="all",
        choices=[lang.value for lang in Language] + ["all"],
        help="Which language to benchmark (default: all)",
    )
    parser.add_argument(
        "--base-url", type=str, default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    args = parser.parse_args()

    print("=== Code Analysis Throughput Benchmark ===")
    print(f"Analyses: {args.num_analyses} x {args.lines} lines | Language: {args.language}\n")

    bench = ThroughputBenchmark(
        base_url=args.base_url, num_analyses=args.num_analyses, lines=args.lines
    )

    if args.language == "all":
        results = bench.run_all_languages()
    else:
        results = [bench.run(Language(args.language))]

    print("\n=== RESULTS ===")
    print(json.dumps(results, indent=2))

    print("\n{:<12} {:>10} {:>10} {:>16}".format("Language", "Failed", "Time (s)", "Throughput"))
    print("-" * 51)
    for r in results:
        print("{:<12} {:>10} {:>10.3f} {:>12.2f} a/s".format(
            r["language"], r["failed"], r["wall_clock_sec"], r["throughput_per_sec"]
        ))


if __name__ == "__main__":
    main()
