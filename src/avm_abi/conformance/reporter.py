"""
Report generation for ABI conformance results.

Counts are derived from the per-vector results rather than stored, so a
report can never disagree with the vectors it lists.
"""

import json
import os
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .comparator import ComparisonResult, Divergence


@dataclass
class VectorResult:
    """Outcome of one vector across every client."""
    vector_name: str
    suite_name: str
    passed: bool
    execution_time_ms: float
    comparison: Optional[ComparisonResult] = None
    error: Optional[str] = None

    @property
    def divergences(self) -> List[Divergence]:
        return self.comparison.divergences if self.comparison else []


@dataclass
class SuiteResult:
    """Results of one vector file."""
    suite_name: str
    results: List[VectorResult] = field(default_factory=list)
    skipped_tests: int = 0
    execution_time_ms: float = 0.0

    @property
    def total_tests(self) -> int:
        return len(self.results)

    @property
    def passed_tests(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_tests(self) -> int:
        return self.total_tests - self.passed_tests

    @property
    def failures(self) -> List[VectorResult]:
        return [r for r in self.results if not r.passed]

    @property
    def pass_rate(self) -> float:
        if not self.results:
            return 0.0
        return self.passed_tests / self.total_tests * 100


@dataclass
class ConformanceReport:
    timestamp: str
    clients: List[str]
    suites: List[SuiteResult]
    execution_time_ms: float

    @property
    def total_tests(self) -> int:
        return sum(s.total_tests for s in self.suites)

    @property
    def total_passed(self) -> int:
        return sum(s.passed_tests for s in self.suites)

    @property
    def total_failed(self) -> int:
        return sum(s.failed_tests for s in self.suites)

    @property
    def divergences(self) -> List[Divergence]:
        return [d for s in self.suites for r in s.results for d in r.divergences]

    @property
    def total_divergences(self) -> int:
        return len(self.divergences)

    def divergences_by_client(self) -> Dict[str, int]:
        counts = Counter(d.client for d in self.divergences)
        return {client: counts.get(client, 0) for client in self.clients}


class ReportGenerator:
    """Writes conformance reports as JSON and as a text summary."""

    def __init__(self, result_dir: str):
        self.result_dir = result_dir

    def generate_report(
        self,
        suite_results: List[SuiteResult],
        clients: List[str],
        execution_time_ms: float,
    ) -> ConformanceReport:
        return ConformanceReport(
            timestamp=datetime.now(timezone.utc).isoformat(),
            clients=clients,
            suites=suite_results,
            execution_time_ms=execution_time_ms,
        )

    def _write(self, filename: str, text: str) -> str:
        os.makedirs(self.result_dir, exist_ok=True)
        path = os.path.join(self.result_dir, filename)
        with open(path, "w") as f:
            f.write(text)
        return path

    def write_json_report(
        self,
        report: ConformanceReport,
        filename: str = "conformance-report.json",
    ) -> str:
        """Write report as JSON file and return its path."""
        return self._write(filename, json.dumps(self.report_to_dict(report), indent=2))

    def write_summary(
        self,
        report: ConformanceReport,
        filename: str = "conformance-summary.txt",
    ) -> str:
        """Write human-readable summary and return its path."""
        return self._write(filename, "\n".join(self.summary_lines(report)))

    def summary_lines(self, report: ConformanceReport) -> List[str]:
        rate = report.total_passed / max(report.total_tests, 1) * 100
        lines = [
            f"ABI conformance {report.timestamp}",
            f"vectors: {report.total_passed}/{report.total_tests} passed ({rate:.1f}%) "
            f"in {report.execution_time_ms:.0f}ms",
            "",
            "clients:",
        ]
        for client, count in report.divergences_by_client().items():
            lines.append(f"  {client}: {count} divergences")

        lines.append("")
        lines.append("suites:")
        for suite in report.suites:
            mark = "ok  " if suite.failed_tests == 0 else "FAIL"
            skipped = f", {suite.skipped_tests} skipped" if suite.skipped_tests else ""
            lines.append(
                f"  {mark} {suite.suite_name} {suite.passed_tests}/{suite.total_tests}{skipped}"
            )
            for r in suite.failures:
                if r.error:
                    lines.append(f"       {r.vector_name}: {r.error}")
                for d in r.divergences:
                    lines.append(
                        f"       {d.vector_name} ({d.field}) [{d.client}]: "
                        f"expected {d.expected!r}, got {d.actual!r}"
                    )
                    if d.details:
                        lines.append(f"         {d.details}")

        lines.append("")
        lines.append(f"Overall: {'PASSED' if report.total_failed == 0 else 'FAILED'}")
        return lines

    def report_to_dict(self, report: ConformanceReport) -> Dict[str, Any]:
        """Convert report to dictionary for JSON serialization."""
        return {
            "timestamp": report.timestamp,
            "clients": report.clients,
            "total_tests": report.total_tests,
            "total_passed": report.total_passed,
            "total_failed": report.total_failed,
            "divergences_by_client": report.divergences_by_client(),
            "execution_time_ms": report.execution_time_ms,
            "suites": [
                {
                    "suite_name": s.suite_name,
                    "passed": s.passed_tests,
                    "total": s.total_tests,
                    "skipped": s.skipped_tests,
                    "failures": [
                        {
                            "vector_name": r.vector_name,
                            "error": r.error,
                            "divergences": [
                                {
                                    "client": d.client,
                                    "field": d.field,
                                    "expected": d.expected,
                                    "actual": d.actual,
                                    "details": d.details,
                                }
                                for d in r.divergences
                            ],
                        }
                        for r in s.failures
                    ],
                }
                for s in report.suites
            ],
        }
