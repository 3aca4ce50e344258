"""
Configuration management for the ABI conformance harness.
"""

import os
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ClientConfig:
    """Configuration for a single codec endpoint."""
    name: str
    endpoint: str
    enabled: bool = True
    timeout: float = 30.0


@dataclass
class HarnessConfig:
    """Main configuration for the test harness."""
    # Codec endpoints; "local" runs this package in-process
    clients: Dict[str, ClientConfig] = field(default_factory=dict)

    # Paths
    vector_dir: str = "fixtures"
    result_dir: str = "results"

    # Execution settings
    stop_on_first_failure: bool = False
    verbose: bool = False

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        """Load configuration from environment variables.

        ``ABI_ENDPOINTS`` is a comma-separated list of ``name=url`` pairs.
        """
        config = cls()

        config.request_timeout = float(os.environ.get("REQUEST_TIMEOUT", config.request_timeout))
        config.clients = {"local": ClientConfig(name="local", endpoint="local")}
        for entry in os.environ.get("ABI_ENDPOINTS", "").split(","):
            entry = entry.strip()
            if not entry:
                continue
            name, _, url = entry.partition("=")
            config.add_client(name.strip(), url.strip())

        # Load paths
        config.vector_dir = os.environ.get("VECTOR_DIR", config.vector_dir)
        config.result_dir = os.environ.get("RESULT_DIR", config.result_dir)

        # Load settings
        config.verbose = os.environ.get("VERBOSE", "").lower() in ("true", "1", "yes")
        config.stop_on_first_failure = os.environ.get(
            "STOP_ON_FIRST_FAILURE", ""
        ).lower() in ("true", "1", "yes")

        return config

    def add_client(self, name: str, endpoint: str) -> None:
        if not endpoint:
            raise ValueError(f"endpoint for client '{name}' is empty")
        self.clients[name] = ClientConfig(
            name=name,
            endpoint=endpoint.rstrip("/"),
            timeout=self.request_timeout,
        )

    def get_enabled_clients(self) -> Dict[str, ClientConfig]:
        """Get only enabled client configurations."""
        return {
            name: client
            for name, client in self.clients.items()
            if client.enabled
        }
