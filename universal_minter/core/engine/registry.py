from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from universal_minter.core.constants.base import (
    MAX_UINT16,
    MAX_UINT256,
    NATIVE_TOKEN_ADDRESS,
    ZERO_ADDRESS,
)
from universal_minter.core.constants.erc721_abi import ERC721_PUBLIC_MINT_ABI
from universal_minter.core.constants.erc1155_abi import ERC1155_PUBLIC_MINT_ABI
from universal_minter.core.constants.manifold_abi import MANIFOLD_MINT_ABI
from universal_minter.core.constants.nfts2me_abi import NFTS2ME_MINT_ABI
from universal_minter.core.constants.thirdweb_abi import THIRDWEB_CLAIM_ABI
from universal_minter.core.engine.errors import UnknownProvider
from universal_minter.core.engine.types import (
    CalculateValue,
    ContractInfo,
    MintRequest,
    NFTProvider,
    ProviderDescriptor,
)
from universal_minter.core.utils.uint import checked_add, checked_mul

# Public-phase claims carry an empty allowlist proof with "no override" values.
_EMPTY_ALLOWLIST_PROOF: tuple[Any, ...] = ((), 0, MAX_UINT256, ZERO_ADDRESS)


def _unit_price_times_amount(
    unit_price_wei: int | None, request: MintRequest, info: ContractInfo
) -> int:
    return checked_mul(unit_price_wei or 0, request.amount, label="mint value")


def _with_per_unit_fee(extra_key: str) -> CalculateValue:
    """Value = (unit price + flat per-token platform fee) x amount."""

    def calculate(
        unit_price_wei: int | None, request: MintRequest, info: ContractInfo
    ) -> int:
        fee_wei = int(info.extra.get(extra_key, 0))
        per_unit = checked_add(unit_price_wei or 0, fee_wei, label="unit price + fee")
        return checked_mul(per_unit, request.amount, label="mint value")

    return calculate


def _thirdweb_value(
    unit_price_wei: int | None, request: MintRequest, info: ContractInfo
) -> int:
    currency = str(info.extra.get("currency", NATIVE_TOKEN_ADDRESS))
    if currency.lower() != NATIVE_TOKEN_ADDRESS.lower():
        # ERC-20 priced claims pull payment via allowance, not msg.value
        return 0
    return _unit_price_times_amount(unit_price_wei, request, info)


def _recipient_and_amount(request: MintRequest, info: ContractInfo) -> list[Any]:
    return [request.recipient, request.amount]


def _thirdweb_claim_args(request: MintRequest, info: ContractInfo) -> list[Any]:
    currency = info.extra.get("currency", NATIVE_TOKEN_ADDRESS)
    price_per_token = int(info.extra.get("pricePerToken", info.unit_price_wei or 0))
    head: list[Any] = [request.recipient]
    if info.is_erc1155:
        head.append(request.token_id)
    return [
        *head,
        request.amount,
        currency,
        price_per_token,
        _EMPTY_ALLOWLIST_PROOF,
        b"",
    ]


def _erc721_mint_args(request: MintRequest, info: ContractInfo) -> list[Any]:
    return [request.amount]


def _erc1155_mint_args(request: MintRequest, info: ContractInfo) -> list[Any]:
    return [request.recipient, request.token_id, request.amount, b""]


def _descriptor(
    provider: NFTProvider,
    abi: list[dict[str, Any]],
    function_name: str,
    build_args: Callable[[MintRequest, ContractInfo], list[Any]],
    calculate_value: CalculateValue,
    **kwargs: Any,
) -> ProviderDescriptor:
    return ProviderDescriptor(
        provider=provider,
        abi_fragment=tuple(abi),
        function_name=function_name,
        build_args=build_args,
        calculate_value=calculate_value,
        **kwargs,
    )


_REGISTRY: dict[NFTProvider, ProviderDescriptor] = {
    d.provider: d
    for d in (
        # Creator-core mintBaseBatch is adminRequired on stock Manifold creators,
        # so public minters will see it revert. Lazy-claim extensions (which own
        # MINT_FEE) are not covered; mintFeeWei is only set if the core exposes it.
        _descriptor(
            NFTProvider.MANIFOLD,
            MANIFOLD_MINT_ABI,
            "mintBaseBatch",
            _recipient_and_amount,
            _with_per_unit_fee("mintFeeWei"),
            required_params=("recipient",),
            max_amount_per_call=MAX_UINT16,
        ),
        _descriptor(
            NFTProvider.THIRDWEB,
            THIRDWEB_CLAIM_ABI,
            "claim",
            _thirdweb_claim_args,
            _thirdweb_value,
            required_params=("recipient",),
            erc1155_params=("tokenId",),
            price_required=True,
            price_signal_key="pricePerToken",
        ),
        _descriptor(
            NFTProvider.NFTS2ME,
            NFTS2ME_MINT_ABI,
            "mintTo",
            _recipient_and_amount,
            _with_per_unit_fee("protocolFeeWei"),
            required_params=("recipient",),
        ),
        _descriptor(
            NFTProvider.GENERIC_ERC721,
            ERC721_PUBLIC_MINT_ABI,
            "mint",
            _erc721_mint_args,
            _unit_price_times_amount,
        ),
        _descriptor(
            NFTProvider.GENERIC_ERC1155,
            ERC1155_PUBLIC_MINT_ABI,
            "mint",
            _erc1155_mint_args,
            _unit_price_times_amount,
            required_params=("recipient", "tokenId"),
        ),
    )
}

# Populated once at import; read-only afterwards.
PROVIDER_REGISTRY: MappingProxyType[NFTProvider, ProviderDescriptor] = (
    MappingProxyType(_REGISTRY)
)


def lookup(provider: NFTProvider) -> ProviderDescriptor:
    try:
        return PROVIDER_REGISTRY[provider]
    except KeyError:
        raise UnknownProvider(f"No mint descriptor registered for {provider}") from None


def find(provider: NFTProvider) -> ProviderDescriptor | None:
    return PROVIDER_REGISTRY.get(provider)
