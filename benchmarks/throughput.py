"""
Throughput benchmark — measures analyses/sec for each language.

How it works:
1. Build a source file of LINES lines that trips a few rules per line
2. Submit N copies through POST /api/analyze
3. Poll every submitted analysis until it is completed or failed
4. Calculate: throughput = N / total_wall_clock_time

The bottleneck is the worker pool and store, not the network: every request
is tiny and the scan itself is a linear pass over the lines.
"""

import time

from client.poller import AnalysisClient, BASE_URL
from models.enums import Language

# One line per language that matches at least one rule, repeated to size.
SAMPLE_LINES = {
    Language.JAVASCRIPT: "var total = 0; if (total == 0) { console.log(total); }",
    Language.PYTHON: "result = eval(expression)  # TODO: parse safely",
    Language.SOLIDITY: "(bool ok, ) = msg.sender.call{value: amount}(\"\");",
}

FILENAMES = {
    Language.JAVASCRIPT: "bench.js",
    Language.PYTHON: "bench.py",
    Language.SOLIDITY: "Bench.sol",
}


class ThroughputBenchmark:

    def __init__(self, base_url: str = BASE_URL, num_analyses: int = 100, lines: int = 200):
        self.num_analyses = num_analyses
        self.lines = lines
        self.client = AnalysisClient(base_url)

    def build_source(self, language: Language) -> str:
        return "\n".join([SAMPLE_LINES[language]] * self.lines)

    def submit_analyses(self, language: Language) -> list[str]:
        code = self.build_source(language)
        return [
            self.client.submit(code, language.value, FILENAMES[language])["id"]
            for _ in range(self.num_analyses)
        ]

    def wait_for_completion(self, analysis_ids: list[str], timeout: float = 120.0) -> dict:
        """Poll each analysis to a terminal status; returns counts per status."""
        counts = {"completed": 0, "failed": 0}
        for analysis_id in analysis_ids:
            analysis = self.client.wait_for_result(analysis_id, interval=0.05, timeout=timeout)
            counts[analysis["status"]] += 1
        return counts

    def run(self, language: Language) -> dict:
        """Run the benchmark for a single language."""
        start = time.monotonic()
        analysis_ids = self.submit_analyses(language)
        counts = self.wait_for_completion(analysis_ids)
        elapsed = time.monotonic() - start

        return {
            "language": language.value,
            "num_analyses": self.num_analyses,
            "lines_per_analysis": self.lines,
            "completed": counts["completed"],
            "failed": counts["failed"],
            "wall_clock_sec": round(elapsed, 3),
            "throughput_per_sec": round(self.num_analyses / elapsed, 2),
        }

    def run_all_languages(self) -> list[dict]:
        results = []
        for language in Language:
            print(f"\n--- Benchmarking {language.value} ---")
            result = self.run(language)
            results.append(result)
            print(
                f"  {result['throughput_per_sec']} analyses/sec "
                f"({result['wall_clock_sec']}s wall clock)"
            )
        return results
