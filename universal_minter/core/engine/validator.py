from __future__ import annotations

from universal_minter.core.engine import registry
from universal_minter.core.engine.types import (
    ContractInfo,
    MintRequest,
    NFTProvider,
    ValidationResult,
)

ERR_UNSUPPORTED_CONTRACT = "unsupported contract"
ERR_UNKNOWN_STANDARD = "cannot determine token standard"
ERR_SALE_NOT_ACTIVE = "sale not active"
ERR_EXCEEDS_WALLET_LIMIT = "exceeds per-wallet limit"
ERR_INVALID_AMOUNT = "invalid amount"
ERR_EXCEEDS_REMAINING_SUPPLY = "exceeds remaining supply"

_REQUEST_PARAM_FIELDS = {
    "recipient": "recipient",
    "tokenId": "token_id",
}


def validate(request: MintRequest, info: ContractInfo) -> ValidationResult:
    """Check ``request`` against the detected contract. Pure; no I/O.

    Every applicable rule is evaluated, so the result lists all problems at
    once rather than the first one hit.
    """
    errors: list[str] = []
    missing: list[str] = []
    descriptor = registry.find(info.provider)

    if info.provider is NFTProvider.UNKNOWN or descriptor is None:
        errors.append(ERR_UNSUPPORTED_CONTRACT)
    if not info.is_erc721 and not info.is_erc1155:
        errors.append(ERR_UNKNOWN_STANDARD)
    if info.sale_active is False:
        errors.append(ERR_SALE_NOT_ACTIVE)
    if info.max_per_wallet is not None and request.amount > info.max_per_wallet:
        errors.append(ERR_EXCEEDS_WALLET_LIMIT)

    ceiling = descriptor.max_amount_per_call if descriptor is not None else None
    if request.amount < 1 or (ceiling is not None and request.amount > ceiling):
        errors.append(ERR_INVALID_AMOUNT)

    remaining = info.extra.get("remainingSupply")
    if remaining is not None and request.amount > int(remaining):
        errors.append(ERR_EXCEEDS_REMAINING_SUPPLY)

    if descriptor is not None:
        for param in descriptor.required_params_for(info):
            field_name = _REQUEST_PARAM_FIELDS.get(param, param)
            if getattr(request, field_name, None) is None:
                missing.append(param)

    return ValidationResult(
        is_valid=not errors and not missing,
        errors=tuple(errors),
        missing_params=tuple(missing),
    )
