from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .constants import (
    GAS_BUDGET,
    MERGE_GAS_BUDGET,
    SPLIT_GAS_BUDGET,
    SUI_BIN,
    SUI_FRAMEWORK,
    SUI_TYPE,
)
from .errors import ExecutionError, OperationFailed, ParseError
from .executor import ProcessRunner
from .logging_utils import get_logger
from .models import CoinHolding, PublishResult, TransactionResult


class SuiGateway:
    """Typed operations over the ``sui client`` command line.

    Each method issues exactly one command and converts its JSON payload into
    the models in :mod:`pool_bootstrap.models`.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        sui_bin: str = SUI_BIN,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.runner = runner
        self.sui_bin = sui_bin
        self.logger = logger or get_logger()

    def _client(self, *parts: str) -> str:
        return " ".join((self.sui_bin, "client") + parts)

    @staticmethod
    def require_success(result: TransactionResult, operation: str) -> TransactionResult:
        if not result.succeeded:
            raise OperationFailed(operation, result.status)
        return result

    def publish(
        self,
        package_path: Path,
        gas_budget: int = GAS_BUDGET,
        skip_fetch_deps: bool = False,
    ) -> PublishResult:
        parts = ["publish", "--gas-budget", str(gas_budget), "--json", shlex.quote(str(package_path))]
        if skip_fetch_deps:
            parts.append("--skip-fetch-latest-git-deps")
        return PublishResult.from_payload(self.runner.execute(self._client(*parts)))

    def active_address(self) -> str:
        payload = self.runner.execute(self._client("active-address", "--json"))
        if isinstance(payload, str):
            address = payload
        elif isinstance(payload, dict) and payload.get("activeAddress"):
            address = str(payload["activeAddress"])
        else:
            raise ParseError(repr(payload), reason="no active address in response")
        return address.strip()

    def gas_coins(self) -> List[CoinHolding]:
        payload = self.runner.execute(self._client("gas", "--json"))
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list):
            raise ParseError(repr(payload), reason="expected a list of gas coins")
        return [CoinHolding.from_gas_entry(entry) for entry in payload]

    def merge_coins(
        self,
        primary_id: str,
        coin_ids: Sequence[str],
        gas_budget: int = MERGE_GAS_BUDGET,
    ) -> TransactionResult:
        parts = ["merge-coin", "--primary-coin", primary_id]
        for coin_id in coin_ids:
            parts += ["--coin-to-merge", coin_id]
        parts += ["--gas-budget", str(gas_budget), "--json"]
        result = TransactionResult.from_payload(self.runner.execute(self._client(*parts)))
        return self.require_success(result, "merge-coin")

    def split_coin(
        self,
        coin_id: str,
        amount: int,
        coin_type: str = SUI_TYPE,
        gas_budget: int = SPLIT_GAS_BUDGET,
    ) -> TransactionResult:
        return self.call(
            SUI_FRAMEWORK,
            "coin",
            "split",
            args=[coin_id, str(amount)],
            type_args=[coin_type],
            gas_budget=gas_budget,
        )

    def call(
        self,
        package: str,
        module: str,
        function: str,
        args: Sequence[Any] = (),
        type_args: Sequence[str] = (),
        gas_budget: int = GAS_BUDGET,
    ) -> TransactionResult:
        parts = ["call", "--package", package, "--module", module, "--function", function]
        if type_args:
            parts += ["--type-args"] + [shlex.quote(t) for t in type_args]
        if args:
            parts += ["--args"] + [shlex.quote(str(a)) for a in args]
        parts += ["--gas-budget", str(gas_budget), "--json"]
        return TransactionResult.from_payload(self.runner.execute(self._client(*parts)))

    def object_exists(self, object_id: str) -> bool:
        try:
            payload = self.runner.execute(self._client("object", object_id, "--json"))
        except (ExecutionError, ParseError) as exc:
            self.logger.info(f"Object {object_id} not readable yet: {exc.__class__.__name__}")
            return False
        return bool(payload)
