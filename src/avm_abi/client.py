"""Method-call client.

Marshals arguments for a contract method, hands the ordered app-argument
blobs to a call executor and decodes the logged return value. Transaction
construction and submission belong to the executor.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Sequence

from .codec import decode_return
from .contract import Contract, Method
from .errors import AbiError, InvalidValueError, MethodCallError
from .native import from_native
from .values import AbiValue

logger = logging.getLogger(__name__)


class CallExecutor(Protocol):
    def __call__(self, app_args: List[bytes]) -> Sequence[bytes]:
        """Run a call with the given app args and return its raw logs."""
        ...


class ContractClient:
    """Calls methods of one contract through a ``CallExecutor``."""

    def __init__(self, contract: Contract, executor: CallExecutor):
        self.contract = contract
        self.executor = executor

    def build_args(self, method: Method, args: Sequence[Any]) -> List[bytes]:
        try:
            if len(args) != len(method.args):
                raise InvalidValueError(
                    f"{method.name} takes {len(method.args)} arguments, got {len(args)}"
                )
            values = [from_native(a.abi_type, v) for a, v in zip(method.args, args)]
            return method.encode_args(values)
        except AbiError as e:
            raise MethodCallError(method.name, e) from e

    def call(self, name_or_signature: str, *args: Any) -> Optional[AbiValue]:
        method = self.contract.get_method(name_or_signature)
        app_args = self.build_args(method, args)
        logger.debug(
            "calling %s selector=%s args=%d", method.signature, app_args[0].hex(), len(app_args) - 1
        )
        logs = self.executor(app_args)
        logger.debug("%s returned %d log entries", method.name, len(logs))
        if method.returns is None:
            return None
        try:
            return decode_return(logs, method.returns)
        except AbiError as e:
            logger.warning("failed to decode return value of %s: %s", method.name, e)
            raise MethodCallError(method.name, e) from e
