"""Provider detection.

Every known minting framework leaves a fingerprint: a view function that only
its contracts expose. ``ProviderDetector`` fires all fingerprint probes and
the ERC-165 standard checks concurrently, then picks the highest-priority
match. Once the dialect is known it reads whatever sale-state, per-wallet and
price getters the contract happens to have.

Adding a provider means appending one ``ProviderProbe`` to ``PROVIDER_PROBES``
(and registering its descriptor in ``registry``).
"""

from __future__ import annotations

import asyncio
import string
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from universal_minter.core.constants.base import MAX_UINT256, NATIVE_TOKEN_ADDRESS
from universal_minter.core.constants.erc165 import (
    ERC721_INTERFACE_ID,
    ERC1155_INTERFACE_ID,
)
from universal_minter.core.constants.manifold_abi import (
    MANIFOLD_GET_EXTENSIONS_ABI,
    MANIFOLD_MINT_FEE_ABI,
)
from universal_minter.core.constants.nfts2me_abi import (
    NFTS2ME_PROTOCOL_FEE_ABI,
    NFTS2ME_VERSION_ABI,
)
from universal_minter.core.constants.sale_getters_abi import (
    MAX_PER_WALLET_GETTERS,
    PAUSED_GETTER,
    SALE_ACTIVE_GETTERS,
    UNIT_PRICE_GETTERS,
)
from universal_minter.core.constants.thirdweb_abi import (
    THIRDWEB_1155_ACTIVE_CONDITION_ID_ABI,
    THIRDWEB_1155_CONDITION_BY_ID_ABI,
    THIRDWEB_ACTIVE_CONDITION_ID_ABI,
    THIRDWEB_CONDITION_BY_ID_ABI,
    THIRDWEB_CONTRACT_TYPE_ABI,
)
from universal_minter.core.engine.errors import DetectionError
from universal_minter.core.engine.reader import ChainReader
from universal_minter.core.engine.types import (
    ContractInfo,
    MintRequest,
    NFTProvider,
    ProbeResult,
)

# Facts a provider-specific reader may contribute; keys mirror ContractInfo.
Facts = dict[str, Any]
FactReader = Callable[[ChainReader, MintRequest, "_Standards"], Awaitable[Facts]]


@dataclass(frozen=True)
class _Standards:
    is_erc721: bool
    is_erc1155: bool


@dataclass(frozen=True)
class ProviderProbe:
    provider: NFTProvider
    marker: dict[str, Any]
    is_sane: Callable[[Any], bool]
    read_facts: FactReader | None = None


def _decode_bytes32_text(value: Any) -> str | None:
    if not isinstance(value, (bytes, bytearray)):
        return None
    raw = bytes(value).rstrip(b"\x00")
    if not raw:
        return None
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError:
        return None
    if not all(ch in string.printable for ch in text):
        return None
    return text


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


async def _read_fee(
    reader: ChainReader, address: str, fragment: dict[str, Any], key: str
) -> Facts:
    result = await reader.call(address, fragment)
    if result.matched and _is_uint(result.value):
        return {"extra": {key: int(result.value)}}
    if result.unreachable:
        return {"price_read_failed": True}
    return {}


async def _manifold_facts(
    reader: ChainReader, request: MintRequest, standards: _Standards
) -> Facts:
    return await _read_fee(
        reader, request.contract_address, MANIFOLD_MINT_FEE_ABI, "mintFeeWei"
    )


async def _nfts2me_facts(
    reader: ChainReader, request: MintRequest, standards: _Standards
) -> Facts:
    return await _read_fee(
        reader, request.contract_address, NFTS2ME_PROTOCOL_FEE_ABI, "protocolFeeWei"
    )


async def _thirdweb_facts(
    reader: ChainReader, request: MintRequest, standards: _Standards
) -> Facts:
    address = request.contract_address
    if standards.is_erc1155:
        if request.token_id is None:
            # claim conditions are per token; nothing to read without one
            return {}
        id_fragment = THIRDWEB_1155_ACTIVE_CONDITION_ID_ABI
        by_id_fragment = THIRDWEB_1155_CONDITION_BY_ID_ABI
        prefix: list[Any] = [request.token_id]
    else:
        id_fragment = THIRDWEB_ACTIVE_CONDITION_ID_ABI
        by_id_fragment = THIRDWEB_CONDITION_BY_ID_ABI
        prefix = []

    active = await reader.call(address, id_fragment, prefix)
    if active.unreachable:
        return {"price_read_failed": True}
    if not active.matched or not _is_uint(active.value):
        # getActiveClaimConditionId reverts with "!CONDITION" outside a phase
        return {"sale_active": False}

    condition_id = int(active.value)
    condition = await reader.call(address, by_id_fragment, [*prefix, condition_id])
    if condition.unreachable:
        return {"price_read_failed": True, "extra": {"claimConditionId": condition_id}}
    if not condition.matched:
        return {"extra": {"claimConditionId": condition_id}}

    (
        start_timestamp,
        max_claimable_supply,
        supply_claimed,
        quantity_limit_per_wallet,
        _merkle_root,
        price_per_token,
        currency,
        _metadata,
    ) = condition.value

    extra: dict[str, Any] = {
        "claimConditionId": condition_id,
        "startTimestamp": int(start_timestamp),
        "currency": str(currency),
        "pricePerToken": int(price_per_token),
    }
    if int(max_claimable_supply) != MAX_UINT256:
        extra["remainingSupply"] = max(
            0, int(max_claimable_supply) - int(supply_claimed)
        )

    facts: Facts = {"sale_active": True, "extra": extra}
    if int(quantity_limit_per_wallet) != MAX_UINT256:
        facts["max_per_wallet"] = int(quantity_limit_per_wallet)
    if str(currency).lower() == NATIVE_TOKEN_ADDRESS.lower():
        facts["unit_price_wei"] = int(price_per_token)
    return facts


# Priority order: the first sane match wins.
PROVIDER_PROBES: tuple[ProviderProbe, ...] = (
    ProviderProbe(
        provider=NFTProvider.MANIFOLD,
        marker=MANIFOLD_GET_EXTENSIONS_ABI,
        is_sane=lambda v: isinstance(v, (list, tuple)),
        read_facts=_manifold_facts,
    ),
    ProviderProbe(
        provider=NFTProvider.THIRDWEB,
        marker=THIRDWEB_CONTRACT_TYPE_ABI,
        is_sane=lambda v: _decode_bytes32_text(v) is not None,
        read_facts=_thirdweb_facts,
    ),
    ProviderProbe(
        provider=NFTProvider.NFTS2ME,
        marker=NFTS2ME_VERSION_ABI,
        is_sane=lambda v: _is_uint(v) and v > 0,
        read_facts=_nfts2me_facts,
    ),
)


def _first_match(
    results: Sequence[ProbeResult], accept: Callable[[Any], bool]
) -> tuple[Any, bool]:
    """Return ``(value, undetermined)`` for the first accepted candidate.

    ``undetermined`` is true when a higher-priority candidate could not be read,
    so the chosen value (or its absence) is not trustworthy.
    """
    for result in results:
        if result.unreachable:
            return None, True
        if result.matched and accept(result.value):
            return result.value, False
    return None, False


class ProviderDetector:
    def __init__(
        self,
        reader: ChainReader,
        probes: Sequence[ProviderProbe] = PROVIDER_PROBES,
    ):
        self.reader = reader
        self.probes = tuple(probes)
        self.logger = logger.bind(component="ProviderDetector")

    async def detect(self, request: MintRequest) -> ContractInfo:
        address = request.contract_address
        await self.reader.get_code(address)

        *marker_results, erc721, erc1155 = await asyncio.gather(
            *(self.reader.call(address, probe.marker) for probe in self.probes),
            self.reader.supports_interface(address, ERC721_INTERFACE_ID),
            self.reader.supports_interface(address, ERC1155_INTERFACE_ID),
        )

        if all(r.unreachable for r in (*marker_results, erc721, erc1155)):
            raise DetectionError(address, f"Chain unreachable while probing {address}")

        matched: ProviderProbe | None = None
        matched_value: Any = None
        for probe, result in zip(self.probes, marker_results, strict=True):
            if result.matched and probe.is_sane(result.value):
                matched, matched_value = probe, result.value
                break

        is_erc721 = erc721.matched and erc721.value is True
        is_erc1155 = not is_erc721 and erc1155.matched and erc1155.value is True

        extra: dict[str, Any] = {}
        if matched is not None and matched.provider is NFTProvider.THIRDWEB:
            contract_type = _decode_bytes32_text(matched_value) or ""
            extra["contractType"] = contract_type
            if not (is_erc721 or is_erc1155):
                is_erc1155 = "1155" in contract_type
                is_erc721 = not is_erc1155 and "721" in contract_type

        if matched is not None:
            provider = matched.provider
        elif is_erc721:
            provider = NFTProvider.GENERIC_ERC721
        elif is_erc1155:
            provider = NFTProvider.GENERIC_ERC1155
        else:
            self.logger.info(f"No minting dialect recognised at {address}")
            return ContractInfo(provider=NFTProvider.UNKNOWN)

        standards = _Standards(is_erc721=is_erc721, is_erc1155=is_erc1155)
        facts = await self._read_getters(request, matched, standards)
        extra.update(facts.pop("extra", {}))

        info = ContractInfo(
            provider=provider,
            is_erc721=is_erc721,
            is_erc1155=is_erc1155,
            sale_active=facts.get("sale_active"),
            max_per_wallet=facts.get("max_per_wallet"),
            unit_price_wei=facts.get("unit_price_wei"),
            price_read_failed=bool(facts.get("price_read_failed", False)),
            extra=extra,
        )
        self.logger.info(
            f"Detected {info.provider} ({info.token_standard or 'unknown standard'}) "
            f"at {address} sale_active={info.sale_active} "
            f"unit_price_wei={info.unit_price_wei}"
        )
        return info

    async def _read_getters(
        self,
        request: MintRequest,
        probe: ProviderProbe | None,
        standards: _Standards,
    ) -> Facts:
        address = request.contract_address
        common = [
            *SALE_ACTIVE_GETTERS,
            PAUSED_GETTER,
            *MAX_PER_WALLET_GETTERS,
            *UNIT_PRICE_GETTERS,
        ]

        async def _no_facts() -> Facts:
            return {}

        provider_facts_coro = (
            probe.read_facts(self.reader, request, standards)
            if probe is not None and probe.read_facts is not None
            else _no_facts()
        )
        results, provider_facts = await asyncio.gather(
            asyncio.gather(*(self.reader.call(address, f) for f in common)),
            provider_facts_coro,
        )

        n_sale = len(SALE_ACTIVE_GETTERS)
        n_cap = len(MAX_PER_WALLET_GETTERS)
        sale_results = results[:n_sale]
        paused_result = results[n_sale]
        cap_results = results[n_sale + 1 : n_sale + 1 + n_cap]
        price_results = results[n_sale + 1 + n_cap :]

        facts: Facts = {}

        sale_active, _ = _first_match(sale_results, lambda v: isinstance(v, bool))
        if sale_active is None and paused_result.matched:
            if isinstance(paused_result.value, bool):
                sale_active = not paused_result.value
        if sale_active is not None:
            facts["sale_active"] = sale_active

        cap, _ = _first_match(cap_results, _is_uint)
        # 0 and uint256 max are the usual "no limit" encodings
        if cap is not None and 0 < cap < MAX_UINT256:
            facts["max_per_wallet"] = int(cap)

        price, price_undetermined = _first_match(price_results, _is_uint)
        if price is not None:
            facts["unit_price_wei"] = int(price)
        if price_undetermined:
            facts["price_read_failed"] = True

        # provider-specific readings are authoritative over the generic guesses
        extra = dict(provider_facts.pop("extra", {}))
        provider_price_failed = provider_facts.pop("price_read_failed", False)
        if "unit_price_wei" in provider_facts:
            facts.pop("price_read_failed", None)
        facts.update(provider_facts)
        if provider_price_failed:
            facts["price_read_failed"] = True
        facts["extra"] = extra
        return facts
