from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .constants import MAX_MERGE_BATCH, MERGE_GAS_BUDGET
from .errors import InsufficientFunds
from .gateway import SuiGateway
from .logging_utils import get_logger
from .models import CoinHolding


@dataclass(frozen=True)
class ConsolidationPlan:
    ordered: Tuple[CoinHolding, ...]
    primary: CoinHolding
    merge_batches: Tuple[Tuple[str, ...], ...]

    @property
    def total(self) -> int:
        return sum(h.balance for h in self.ordered)

    @property
    def needs_merge(self) -> bool:
        return bool(self.merge_batches)


def order_holdings(holdings: Sequence[CoinHolding]) -> List[CoinHolding]:
    """Drop empty coins and sort the rest largest first."""

    funded = [h for h in holdings if h.balance > 0]
    funded.sort(key=lambda h: h.balance, reverse=True)
    return funded


def plan_consolidation(
    holdings: Sequence[CoinHolding],
    minimum_balance: int,
    batch_size: int = MAX_MERGE_BATCH,
) -> ConsolidationPlan:
    ordered = order_holdings(holdings)
    total = sum(h.balance for h in ordered)
    if not ordered or total < minimum_balance:
        raise InsufficientFunds(have=total, need=minimum_balance)

    primary = ordered[0]
    if primary.balance >= minimum_balance:
        return ConsolidationPlan(tuple(ordered), primary, ())

    rest = [h.object_id for h in ordered[1:]]
    batches = tuple(tuple(rest[i : i + batch_size]) for i in range(0, len(rest), batch_size))
    return ConsolidationPlan(tuple(ordered), primary, batches)


class CoinConsolidator:
    """Make sure one SUI coin is large enough to fund the next spend.

    Coins are merged into the largest one only when it is too small on its own.
    Balances are re-read from the network after merging since gas for every
    merge comes out of the same coins.
    """

    def __init__(
        self,
        gateway: SuiGateway,
        batch_size: int = MAX_MERGE_BATCH,
        merge_gas_budget: int = MERGE_GAS_BUDGET,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.gateway = gateway
        self.batch_size = batch_size
        self.merge_gas_budget = merge_gas_budget
        self.logger = logger or get_logger()

    def ensure_primary_holding(self, minimum_balance: int) -> CoinHolding:
        plan = plan_consolidation(self.gateway.gas_coins(), minimum_balance, self.batch_size)
        self.logger.info(
            f"Found {len(plan.ordered)} funded coin(s), total {plan.total} MIST, "
            f"largest {plan.primary.balance} MIST"
        )
        if not plan.needs_merge:
            return plan.primary

        self.logger.info("Primary coin too small. Merging coins...")
        for batch in plan.merge_batches:
            self.logger.info(f"Merging {len(batch)} coins into {plan.primary.object_id}...")
            self.gateway.merge_coins(plan.primary.object_id, batch, self.merge_gas_budget)

        ordered = order_holdings(self.gateway.gas_coins())
        if not ordered:
            raise InsufficientFunds(have=0, need=minimum_balance)
        primary = ordered[0]
        self.logger.info(f"New Primary Balance: {primary.balance}")
        if primary.balance < minimum_balance:
            raise InsufficientFunds(have=primary.balance, need=minimum_balance)
        return primary
