"""
ABI Conformance Runner

Replays ABI vectors against one or more codec implementations and reports
any result that differs from the vector's expected output.
"""

import asyncio
import glob
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiohttp
import click
import yaml

from ..vectors import run_vector
from .comparator import ResultComparator
from .config import ClientConfig, HarnessConfig
from .reporter import ConformanceReport, ReportGenerator, SuiteResult, VectorResult

logger = logging.getLogger(__name__)


class LocalCodecClient:
    """Runs vectors against this package in-process."""

    def __init__(self, config: ClientConfig):
        self.config = config

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def run(self, vector: Dict[str, Any]) -> Dict[str, Any]:
        return run_vector(vector)


class HttpCodecClient:
    """HTTP client for a single codec implementation."""

    def __init__(self, config: ClientConfig):
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None

    async def connect(self) -> None:
        """Initialize HTTP session."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self.session = aiohttp.ClientSession(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP session."""
        if self.session:
            await self.session.close()

    async def run(self, vector: Dict[str, Any]) -> Dict[str, Any]:
        inp = vector["input"]
        body = {"type": inp["type"], "return_value": inp.get("return_value", False)}
        if inp["kind"] == "encode":
            body["value"] = inp["value"]
        else:
            body["hex"] = inp["hex"]
        try:
            async with self.session.post(
                f"{self.config.endpoint}/abi/{inp['kind']}",
                json=body,
            ) as resp:
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[{self.config.name}] {inp['kind']} failed: {e}")
            return {"success": False, "error": f"transport: {e}"}


def make_client(config: ClientConfig):
    if config.endpoint == "local":
        return LocalCodecClient(config)
    return HttpCodecClient(config)


class ConformanceHarness:
    """Main harness for ABI conformance testing."""

    def __init__(self, config: HarnessConfig):
        self.config = config
        self.clients: Dict[str, Any] = {}
        self.comparator = ResultComparator()
        self.reporter = ReportGenerator(config.result_dir)

    async def setup(self) -> None:
        """Initialize all clients."""
        for name, client_config in self.config.get_enabled_clients().items():
            client = make_client(client_config)
            await client.connect()
            self.clients[name] = client
            logger.info(f"Connected to {client_config.name} at {client_config.endpoint}")

    async def teardown(self) -> None:
        """Close all client connections."""
        for client in self.clients.values():
            await client.close()

    async def run_vector(self, vector: Dict[str, Any], suite_name: str = "") -> VectorResult:
        """Run a single test vector on every client."""
        vector_name = vector.get("name", "unknown")
        start_time = time.time()

        if "input" not in vector or "expected" not in vector:
            return VectorResult(
                vector_name=vector_name,
                suite_name=suite_name,
                passed=False,
                execution_time_ms=(time.time() - start_time) * 1000,
                error="Vector has no input/expected section",
            )

        names = list(self.clients.keys())
        outputs = await asyncio.gather(
            *[self.clients[n].run(vector) for n in names], return_exceptions=True
        )
        results = {}
        for name, output in zip(names, outputs):
            if isinstance(output, Exception):
                logger.error(f"[{name}] {vector_name} raised: {output!r}")
                output = {"success": False, "error": f"exception: {output!r}"}
            results[name] = output
        comparison = self.comparator.compare_results(
            vector["expected"], results, vector_name
        )
        return VectorResult(
            vector_name=vector_name,
            suite_name=suite_name,
            passed=not comparison.has_divergences,
            execution_time_ms=(time.time() - start_time) * 1000,
            comparison=comparison,
        )

    async def run_suite(self, suite_path: str) -> SuiteResult:
        """Run a test suite from a YAML or JSON file."""
        suite_name = Path(suite_path).stem
        logger.info(f"Running suite: {suite_name}")

        start_time = time.time()

        with open(suite_path) as f:
            suite = yaml.safe_load(f) or {}

        vectors = suite.get("test_vectors", [])
        result_set = SuiteResult(suite_name=suite_name)

        for vector in vectors:
            result = await self.run_vector(vector, suite_name)
            result_set.results.append(result)

            status = "PASS" if result.passed else "FAIL"
            logger.info(f"  [{status}] {result.vector_name}")

            if not result.passed and self.config.stop_on_first_failure:
                break

        result_set.skipped_tests = len(vectors) - result_set.total_tests
        result_set.execution_time_ms = (time.time() - start_time) * 1000
        return result_set

    async def run_all(self, vector_paths: List[str]) -> ConformanceReport:
        """Run all test suites."""
        start_time = time.time()

        suite_results = []
        for path in vector_paths:
            suite_results.append(await self.run_suite(path))

        return self.reporter.generate_report(
            suite_results=suite_results,
            clients=list(self.clients.keys()),
            execution_time_ms=(time.time() - start_time) * 1000,
        )


def find_vector_files(vector_dir: str) -> List[str]:
    """Find all vector files in directory."""
    files = []
    for ext in ("yaml", "yml", "json"):
        files.extend(glob.glob(os.path.join(vector_dir, "**", f"*.{ext}"), recursive=True))
    return sorted(files)


async def run_harness(config: HarnessConfig, vector_files: List[str]) -> ConformanceReport:
    harness = ConformanceHarness(config)
    try:
        await harness.setup()
        return await harness.run_all(vector_files)
    finally:
        await harness.teardown()


@click.command()
@click.option(
    "--vectors",
    default=None,
    help="Path to vectors directory or specific vector file",
)
@click.option(
    "--endpoint",
    "endpoints",
    multiple=True,
    help="Codec endpoint as name=url (repeatable)",
)
@click.option(
    "--no-local",
    is_flag=True,
    help="Do not run vectors against this package in-process",
)
@click.option(
    "--result-dir",
    default=None,
    help="Directory to write results",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--stop-on-failure",
    is_flag=True,
    help="Stop on first test failure",
)
def main(
    vectors: Optional[str],
    endpoints: List[str],
    no_local: bool,
    result_dir: Optional[str],
    verbose: bool,
    stop_on_failure: bool,
) -> None:
    """Run ABI conformance vectors."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # Load config from environment, then override with CLI args
    config = HarnessConfig.from_env()

    for entry in endpoints:
        name, sep, url = entry.partition("=")
        if not sep:
            raise click.BadParameter(f"expected name=url, got {entry!r}", param_hint="--endpoint")
        config.add_client(name, url)
    if no_local:
        config.clients["local"].enabled = False
    if result_dir:
        config.result_dir = result_dir
    if verbose:
        config.verbose = True
        logging.getLogger().setLevel(logging.DEBUG)
    if stop_on_failure:
        config.stop_on_first_failure = True

    if not config.get_enabled_clients():
        logger.error("No clients enabled")
        sys.exit(1)

    # Find vector files
    vector_dir = vectors or config.vector_dir
    if os.path.isfile(vector_dir):
        vector_files = [vector_dir]
    else:
        vector_files = find_vector_files(vector_dir)

    if not vector_files:
        logger.error(f"No vector files found in {vector_dir}")
        sys.exit(1)

    logger.info(f"Found {len(vector_files)} vector files")

    report = asyncio.run(run_harness(config, vector_files))
    reporter = ReportGenerator(config.result_dir)
    reporter.write_json_report(report)
    reporter.write_summary(report)
    click.echo("\n".join(reporter.summary_lines(report)))

    sys.exit(0 if report.total_failed == 0 else 1)


if __name__ == "__main__":
    main()
