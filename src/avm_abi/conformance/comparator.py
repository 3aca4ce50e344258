"""
Result comparison logic for ABI conformance testing.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class Divergence:
    """A client result that differs from a vector's expected result."""
    field: str
    expected: Any
    actual: Any
    client: str
    vector_name: str
    details: Optional[str] = None


@dataclass
class ComparisonResult:
    """Result of comparing outputs from all clients for one vector."""
    success: bool
    divergences: List[Divergence]
    clients_compared: List[str]

    @property
    def has_divergences(self) -> bool:
        return len(self.divergences) > 0


class ResultComparator:
    """Compares client results against the expected result of a vector."""

    def compare_results(
        self,
        expected: Dict[str, Any],
        results: Dict[str, Dict[str, Any]],
        vector_name: str,
    ) -> ComparisonResult:
        """
        Compare results from all clients.

        Args:
            expected: The vector's expected result
            results: Dict mapping client name to their result dict
            vector_name: Name of the test vector

        Returns:
            ComparisonResult with any divergences found
        """
        divergences = []
        for client, result in results.items():
            divergences.extend(self._compare_single(expected, result, client, vector_name))

        return ComparisonResult(
            success=len(divergences) == 0,
            divergences=divergences,
            clients_compared=list(results.keys()),
        )

    def _compare_single(
        self,
        expected: Dict[str, Any],
        actual: Dict[str, Any],
        client: str,
        vector_name: str,
    ) -> List[Divergence]:
        """Compare a single client result against the expected result."""
        exp_success = expected.get("success", True)
        act_success = actual.get("success", False)
        if exp_success != act_success:
            return [Divergence(
                field="success",
                expected=exp_success,
                actual=act_success,
                client=client,
                vector_name=vector_name,
                details=actual.get("error"),
            )]

        if not exp_success:
            exp_error = expected.get("error")
            act_error = actual.get("error")
            if exp_error != act_error:
                return [Divergence(
                    field="error",
                    expected=exp_error,
                    actual=act_error,
                    client=client,
                    vector_name=vector_name,
                    details=f"Error mismatch: expected {exp_error}, got {act_error}",
                )]
            return []

        divergences = []
        # Encode vectors compare hex, decode vectors compare the decoded value
        for key in ("hex", "value"):
            if key not in expected:
                continue
            exp_value = expected[key]
            act_value = actual.get(key)
            if key == "hex" and isinstance(act_value, str):
                act_value = act_value.lower()
            if exp_value != act_value:
                divergences.append(Divergence(
                    field=key,
                    expected=exp_value,
                    actual=act_value,
                    client=client,
                    vector_name=vector_name,
                ))
        return divergences
