"""CLI payload builders and a gateway double that keeps coin state."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pool_bootstrap.models import CoinHolding, PublishResult, TransactionResult

PACKAGE_ID = "0xpkg"
TREASURY_CAP_ID = "0xcap"
ADDRESS = "0xme"
MINTED_COIN_ID = "0xminted"
SPLIT_COIN_ID = "0xsplit"
POOL_ID = "0xpool"

CONFIG_TEXT = (
    'export const PACKAGE_ID = "0xold";\n'
    'export const MODULE_NAME = "amm";\n'
    "\n"
    'export const SUI_TYPE = "0x2::sui::SUI";\n'
    'export const CUSTOM_TOKEN_TYPE = "0xold::coin_module::COIN_MODULE";\n'
    "\n"
    "// Pool ID will need to be updated after first pool creation\n"
    'export const POOL_ID = "0xoldpool"; // Pool object ID\n'
)


def tx_payload(
    status: str = "success", changes: Sequence[Dict[str, Any]] = (), error: Optional[str] = None
) -> Dict[str, Any]:
    status_entry: Dict[str, Any] = {"status": status}
    if error is not None:
        status_entry["error"] = error
    return {
        "digest": "D1",
        "effects": {"status": status_entry},
        "objectChanges": list(changes),
    }


def created(object_type: str, object_id: str) -> Dict[str, Any]:
    return {"type": "created", "objectType": object_type, "objectId": object_id}


def publish_payload(status: str = "success", with_cap: bool = True, error: Optional[str] = None) -> Dict[str, Any]:
    changes = [
        {"type": "mutated", "objectType": "0x2::coin::Coin<0x2::sui::SUI>", "objectId": "0xgas"},
        {"type": "published", "packageId": PACKAGE_ID, "modules": ["amm", "faucet_coin"]},
        created("0x2::package::UpgradeCap", "0xupgrade"),
    ]
    if with_cap:
        changes.append(
            created(f"0x2::coin::TreasuryCap<{PACKAGE_ID}::faucet_coin::FAUCET_COIN>", TREASURY_CAP_ID)
        )
    return tx_payload(status, changes, error)


class FakeGateway:
    """In-memory stand-in for SuiGateway that merges coins without fees."""

    def __init__(self, balances: Sequence[int] = (5_000_000_000,)) -> None:
        self.coins: List[CoinHolding] = [
            CoinHolding(object_id=f"0xcoin{i}", balance=b) for i, b in enumerate(balances)
        ]
        self.calls: List[str] = []
        self.merges: List[List[str]] = []
        self.publish_result = PublishResult.from_payload(publish_payload())
        self.mint_result = TransactionResult.from_payload(
            tx_payload(
                changes=[
                    created(f"0x2::coin::Coin<{PACKAGE_ID}::faucet_coin::FAUCET_COIN>", MINTED_COIN_ID)
                ]
            )
        )
        self.split_result = TransactionResult.from_payload(
            tx_payload(changes=[created("0x2::coin::Coin<0x2::sui::SUI>", SPLIT_COIN_ID)])
        )
        self.pool_result = TransactionResult.from_payload(
            tx_payload(
                changes=[
                    created(f"{PACKAGE_ID}::amm::LPCoin<0x2::sui::SUI, {PACKAGE_ID}::faucet_coin::FAUCET_COIN>", "0xlp"),
                    created(f"{PACKAGE_ID}::amm::Pool<0x2::sui::SUI, {PACKAGE_ID}::faucet_coin::FAUCET_COIN>", POOL_ID),
                ]
            )
        )
        self.visible_after = 1
        self.exists_checks = 0
        self.split_args: Optional[tuple] = None
        self.call_args: List[Dict[str, Any]] = []

    def publish(self, package_path, gas_budget=0, skip_fetch_deps=False):
        self.calls.append("publish")
        return self.publish_result

    def object_exists(self, object_id):
        self.calls.append("object")
        self.exists_checks += 1
        return self.exists_checks >= self.visible_after

    def active_address(self):
        self.calls.append("active-address")
        return ADDRESS

    def gas_coins(self):
        self.calls.append("gas")
        return list(self.coins)

    def merge_coins(self, primary_id, coin_ids, gas_budget=0):
        self.calls.append("merge-coin")
        self.merges.append(list(coin_ids))
        merged = [c for c in self.coins if c.object_id in coin_ids]
        primary = next(c for c in self.coins if c.object_id == primary_id)
        rest = [c for c in self.coins if c.object_id not in coin_ids and c.object_id != primary_id]
        total = primary.balance + sum(c.balance for c in merged)
        self.coins = [CoinHolding(primary_id, total)] + rest
        return TransactionResult.from_payload(tx_payload())

    def split_coin(self, coin_id, amount, coin_type="", gas_budget=0):
        self.calls.append("split")
        self.split_args = (coin_id, amount, coin_type)
        return self.split_result

    def call(self, package, module, function, args=(), type_args=(), gas_budget=0):
        self.calls.append(f"call:{module}::{function}")
        self.call_args.append(
            {"package": package, "module": module, "function": function, "args": list(args), "type_args": list(type_args)}
        )
        if function == "mint":
            return self.mint_result
        return self.pool_result


