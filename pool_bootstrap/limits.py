from __future__ import annotations

from typing import Optional, Union

from .constants import U64_MAX

# Headroom kept on the primary coin on top of the split amount, in tenths
SAFETY_MARGIN_TENTHS = 1


def parse_int(token: Union[str, int, None]) -> Optional[int]:
    """Parse an on-chain amount without going through floating point.

    Accepts plain integers, decimal strings with ``_`` separators and ``0x``
    hex strings. Returns ``None`` for anything else, including booleans.
    """

    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token
    if not isinstance(token, str):
        return None
    token = token.strip()
    if not token or token.startswith("$"):
        return None
    try:
        if token.startswith("0x") or token.startswith("0X"):
            return int(token, 16)
        sanitized = token.replace("_", "")
        return int(sanitized, 10)
    except ValueError:
        return None


def check_amount_limits(amount: int, label: str = "amount") -> Optional[str]:
    if amount <= 0:
        return f"{label} must be positive, got {amount}"
    if amount > U64_MAX:
        return f"{label} {amount} exceeds the u64 range"
    return None


def spend_threshold(split_amount: int) -> int:
    """Minimum primary balance needed before splitting ``split_amount`` off.

    Gas for the split is paid from the same coin, so the threshold is the split
    amount plus a tenth of it.
    """

    return split_amount + (split_amount * SAFETY_MARGIN_TENTHS) // 10
