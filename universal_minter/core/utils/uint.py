from __future__ import annotations

from universal_minter.core.constants.base import MAX_UINT256
from universal_minter.core.engine.errors import PriceOverflowError


def ensure_uint256(value: int, *, label: str = "value") -> int:
    value = int(value)
    if value < 0:
        raise ValueError(f"{label} must be non-negative, got {value}")
    if value > MAX_UINT256:
        raise PriceOverflowError(f"{label} exceeds uint256: {value}")
    return value


def checked_mul(a: int, b: int, *, label: str = "product") -> int:
    return ensure_uint256(
        ensure_uint256(a, label=label) * ensure_uint256(b, label=label), label=label
    )


def checked_add(a: int, b: int, *, label: str = "sum") -> int:
    return ensure_uint256(
        ensure_uint256(a, label=label) + ensure_uint256(b, label=label), label=label
    )
