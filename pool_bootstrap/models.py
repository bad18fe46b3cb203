from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .constants import CAPABILITY_MARKER, SUCCESS_STATUS, SUI_COIN_TYPE
from .errors import ParseError
from .limits import parse_int


@dataclass(frozen=True)
class CreatedObject:
    change_type: str
    object_type: str = ""
    object_id: Optional[str] = None
    package_id: Optional[str] = None

    @classmethod
    def from_change(cls, change: Dict[str, Any]) -> "CreatedObject":
        return cls(
            change_type=str(change.get("type", "")),
            object_type=str(change.get("objectType") or ""),
            object_id=change.get("objectId"),
            package_id=change.get("packageId"),
        )


ObjectPredicate = Callable[[CreatedObject], bool]


def _status_of(payload: Dict[str, Any]) -> Optional[str]:
    effects = payload.get("effects") or {}
    status = effects.get("status") or {}
    value = status.get("status")
    return str(value) if value is not None else None


def _error_of(payload: Dict[str, Any]) -> Optional[str]:
    effects = payload.get("effects") or {}
    value = (effects.get("status") or {}).get("error")
    return str(value) if value else None


def _changes_of(payload: Dict[str, Any]) -> List[CreatedObject]:
    return [CreatedObject.from_change(c) for c in payload.get("objectChanges") or [] if isinstance(c, dict)]


@dataclass(frozen=True)
class TransactionResult:
    status: Optional[str]
    created_objects: Sequence[CreatedObject] = field(default_factory=tuple)
    digest: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS

    def find(self, predicate: ObjectPredicate) -> Optional[CreatedObject]:
        return find_object(self.created_objects, predicate)

    @classmethod
    def from_payload(cls, payload: Any) -> "TransactionResult":
        if not isinstance(payload, dict):
            raise ParseError(repr(payload), reason="expected a transaction object")
        return cls(
            status=_status_of(payload),
            created_objects=tuple(_changes_of(payload)),
            digest=payload.get("digest"),
            error=_error_of(payload),
        )


@dataclass(frozen=True)
class PublishResult:
    package_id: Optional[str]
    created_objects: Sequence[CreatedObject]
    status: Optional[str]
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS

    @classmethod
    def from_payload(cls, payload: Any) -> "PublishResult":
        if not isinstance(payload, dict):
            raise ParseError(repr(payload), reason="expected a publish result object")
        changes = tuple(_changes_of(payload))
        published = find_object(changes, is_published_package)
        return cls(
            package_id=published.package_id if published else None,
            created_objects=changes,
            status=_status_of(payload),
            error=_error_of(payload),
        )


@dataclass(frozen=True)
class CoinHolding:
    object_id: str
    balance: int

    @classmethod
    def from_gas_entry(cls, entry: Dict[str, Any]) -> "CoinHolding":
        object_id = entry.get("gasCoinId") or entry.get("coinObjectId")
        balance = parse_int(entry.get("mistBalance", entry.get("balance")))
        if not object_id or balance is None:
            raise ParseError(repr(entry), reason="gas coin entry without id or balance")
        return cls(object_id=str(object_id), balance=balance)


def find_object(objects: Sequence[CreatedObject], predicate: ObjectPredicate) -> Optional[CreatedObject]:
    for obj in objects:
        if predicate(obj):
            return obj
    return None


def token_type(package_id: str, module: str, struct: str) -> str:
    return f"{package_id}::{module}::{struct}"


# Predicates, one per kind of object the bootstrap steps look for


def is_published_package(obj: CreatedObject) -> bool:
    return obj.change_type == "published" and bool(obj.package_id)


def capability_matcher(module: str, struct: str) -> ObjectPredicate:
    marker = f"::{module}::{struct}"

    def _match(obj: CreatedObject) -> bool:
        return obj.change_type == "created" and marker in obj.object_type and CAPABILITY_MARKER in obj.object_type

    return _match


def minted_coin_matcher(module: str, struct: str) -> ObjectPredicate:
    marker = f"::{module}::{struct}"

    def _match(obj: CreatedObject) -> bool:
        return (
            obj.change_type == "created"
            and marker in obj.object_type
            and "::coin::Coin<" in obj.object_type
            and CAPABILITY_MARKER not in obj.object_type
        )

    return _match


def split_coin_matcher(coin_type: str = SUI_COIN_TYPE) -> ObjectPredicate:
    def _match(obj: CreatedObject) -> bool:
        return obj.change_type == "created" and obj.object_type.startswith(coin_type)

    return _match


def pool_matcher(amm_module: str) -> ObjectPredicate:
    marker = f"::{amm_module}::Pool"

    def _match(obj: CreatedObject) -> bool:
        if obj.change_type != "created":
            return False
        return f"{marker}<" in obj.object_type or obj.object_type.endswith(marker)

    return _match
