from __future__ import annotations

import logging
import time
from dataclasses import dataclass, fields
from typing import Any, Optional

from .config_writer import update_config
from .constants import FIXED_PUBLISH_DELAY, PROPAGATION_BACKOFF, PUBLISHED_RECORD, SUI_TYPE
from .consolidator import CoinConsolidator
from .env_utils import BootstrapSettings
from .errors import (
    CapabilityNotFound,
    MintError,
    PoolCreationError,
    PropagationTimeout,
    PublishError,
    SplitError,
    StateAlreadySet,
    StateNotReady,
)
from .gateway import SuiGateway
from .limits import spend_threshold
from .logging_utils import get_logger
from .models import (
    PublishResult,
    capability_matcher,
    find_object,
    minted_coin_matcher,
    pool_matcher,
    split_coin_matcher,
    token_type,
)

# Passed to the CLI instead of a coin id when consolidation is skipped
GAS_COIN_ARG = "gas"


def _failure_message(summary: str, error: Optional[str]) -> str:
    return f"{summary}: {error}" if error else summary


@dataclass
class PoolBootstrapState:
    """Identifiers gathered during one run; each field is set exactly once."""

    package_id: Optional[str] = None
    capability_id: Optional[str] = None
    active_address: Optional[str] = None
    minted_coin_id: Optional[str] = None
    split_coin_id: Optional[str] = None
    pool_id: Optional[str] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, name, None) is not None:
            raise StateAlreadySet(f"{name} is already set to {getattr(self, name)}")
        super().__setattr__(name, value)

    def require(self, name: str) -> str:
        value = getattr(self, name)
        if value is None:
            raise StateNotReady(f"{name} has not been produced yet")
        return value

    def to_state(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class BootstrapOrchestrator:
    """Publish the DEX package and stand up its first pool.

    Steps run strictly in order and any failure aborts the run; a rerun
    starts again from publishing.
    """

    def __init__(
        self,
        gateway: SuiGateway,
        settings: BootstrapSettings,
        consolidator: Optional[CoinConsolidator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.gateway = gateway
        self.settings = settings
        self.logger = logger or get_logger()
        self.consolidator = consolidator or CoinConsolidator(
            gateway,
            merge_gas_budget=settings.merge_gas_budget,
            logger=self.logger,
        )
        self.state = PoolBootstrapState()
        self._publish_result: Optional[PublishResult] = None

    @property
    def custom_token_type(self) -> str:
        return token_type(
            self.state.require("package_id"),
            self.settings.token_module,
            self.settings.token_struct,
        )

    def run(self) -> PoolBootstrapState:
        self.logger.info("Deploying Move Dex...")
        self.clear_published_record()
        self.publish()
        self.locate_capability()
        self.wait_for_package()
        self.resolve_identity()
        self.mint()
        split_source = self.prepare_funds()
        self.split(split_source)
        self.create_pool()
        self.write_config()
        return self.state

    def clear_published_record(self) -> None:
        record = self.settings.package_path / PUBLISHED_RECORD
        if record.exists():
            record.unlink()
            self.logger.info(f"Deleted {PUBLISHED_RECORD}")

    def publish(self) -> str:
        self.logger.info("Publishing package...")
        result = self.gateway.publish(
            self.settings.package_path,
            gas_budget=self.settings.gas_budget,
            skip_fetch_deps=self.settings.skip_fetch_deps,
        )
        if not result.succeeded:
            raise PublishError("publish", result.status, _failure_message("Publish failed", result.error))
        if not result.package_id:
            raise PublishError("publish", result.status, "Could not find published package ID")

        self._publish_result = result
        self.state.package_id = result.package_id
        self.logger.info(f"Package Published: {result.package_id}")
        return result.package_id

    def locate_capability(self) -> str:
        if self._publish_result is None:
            raise StateNotReady("package has not been published yet")
        match = capability_matcher(self.settings.token_module, self.settings.token_struct)
        capability = find_object(self._publish_result.created_objects, match)
        if capability is None or not capability.object_id:
            raise CapabilityNotFound("publish", message="Could not find TreasuryCap ID")

        self.state.capability_id = capability.object_id
        self.logger.info(f"Treasury Cap found: {capability.object_id}")
        return capability.object_id

    def wait_for_package(self) -> None:
        package_id = self.state.require("package_id")
        attempts = self.settings.propagation_attempts
        if attempts <= 0:
            time.sleep(FIXED_PUBLISH_DELAY)
            return

        delay = self.settings.propagation_delay
        for attempt in range(1, attempts + 1):
            if self.gateway.object_exists(package_id):
                self.logger.info(f"Package visible after {attempt} attempt(s)")
                return
            if attempt < attempts:
                self.logger.info(f"Package not visible yet (attempt {attempt}). Retrying in {delay:.1f}s…")
                time.sleep(delay)
                delay *= PROPAGATION_BACKOFF
        raise PropagationTimeout(package_id, attempts)

    def resolve_identity(self) -> str:
        address = self.gateway.active_address()
        self.state.active_address = address
        self.logger.info(f"Active Address: {address}")
        return address

    def mint(self) -> str:
        self.logger.info("Minting Faucet Coin...")
        result = self.gateway.call(
            self.state.require("package_id"),
            self.settings.token_module,
            "mint",
            args=[
                self.state.require("capability_id"),
                self.settings.mint_amount,
                self.state.require("active_address"),
            ],
            gas_budget=self.settings.gas_budget,
        )
        if not result.succeeded:
            raise MintError("mint", result.status, _failure_message("Mint failed", result.error))
        minted = result.find(minted_coin_matcher(self.settings.token_module, self.settings.token_struct))
        if minted is None or not minted.object_id:
            raise MintError("mint", result.status, "Could not find minted coin")

        self.state.minted_coin_id = minted.object_id
        self.logger.info(f"Minted Coin: {minted.object_id}")
        return minted.object_id

    def prepare_funds(self) -> str:
        """Return the coin argument the split should draw from."""

        if not self.settings.consolidate:
            self.logger.info("Coin consolidation disabled; splitting from the gas coin")
            return GAS_COIN_ARG
        primary = self.consolidator.ensure_primary_holding(spend_threshold(self.settings.split_amount))
        self.logger.info(f"Using Gas Coin for split: {primary.object_id}")
        return primary.object_id

    def split(self, coin_id: str) -> str:
        self.logger.info("Splitting SUI coin...")
        result = self.gateway.split_coin(
            coin_id,
            self.settings.split_amount,
            coin_type=SUI_TYPE,
            gas_budget=self.settings.split_gas_budget,
        )
        if not result.succeeded:
            raise SplitError("split", result.status, _failure_message("Split failed", result.error))
        split_coin = result.find(split_coin_matcher())
        if split_coin is None or not split_coin.object_id:
            raise SplitError("split", result.status, "Could not split SUI coin")

        self.state.split_coin_id = split_coin.object_id
        self.logger.info(f"Split Coin (SUI): {split_coin.object_id}")
        return split_coin.object_id

    def create_pool(self) -> str:
        self.logger.info("Creating Pool...")
        result = self.gateway.call(
            self.state.require("package_id"),
            self.settings.amm_module,
            "create_pool",
            args=[self.state.require("split_coin_id"), self.state.require("minted_coin_id")],
            type_args=[SUI_TYPE, self.custom_token_type],
            gas_budget=self.settings.gas_budget,
        )
        if not result.succeeded:
            raise PoolCreationError("create_pool", result.status, _failure_message("Pool creation failed", result.error))
        pool = result.find(pool_matcher(self.settings.amm_module))
        if pool is None or not pool.object_id:
            raise PoolCreationError("create_pool", result.status, "Could not find created pool")

        self.state.pool_id = pool.object_id
        self.logger.info(f"Pool Created: {pool.object_id}")
        return pool.object_id

    def write_config(self) -> None:
        update_config(
            self.settings.config_path,
            {
                "PACKAGE_ID": self.state.require("package_id"),
                "POOL_ID": self.state.require("pool_id"),
                "CUSTOM_TOKEN_TYPE": self.custom_token_type,
            },
            strict=self.settings.strict_config,
            logger=self.logger,
        )
        self.logger.info("Config updated!")
