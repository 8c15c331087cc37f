from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from universal_minter.core.adapters.BaseAdapter import BaseAdapter
from universal_minter.core.adapters.decorators import status_tuple
from universal_minter.core.config import get_read_timeout_s
from universal_minter.core.engine.detector import ProviderDetector
from universal_minter.core.engine.pricing import PriceOptimizer
from universal_minter.core.engine.reader import ChainReader
from universal_minter.core.engine.resolver import MintResolver
from universal_minter.core.engine.types import MintRequest
from universal_minter.core.engine.validator import validate
from universal_minter.core.utils.web3 import web3_from_chain_id


class MintAdapter(BaseAdapter):
    """Chain-facing entry point for the mint engine.

    Opens a web3 client for the target network per call and returns the
    ``(ok, result)`` status tuples used across adapters. Results are plain
    JSON-safe dicts so a UI can render them directly.
    """

    adapter_type = "MINT"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        chain_id: int | None = None,
        timeout_s: float | None = None,
    ) -> None:
        super().__init__("mint_adapter", config, chain_id=chain_id)
        self.timeout_s = float(timeout_s) if timeout_s is not None else None
        self.optimizer = PriceOptimizer()

    def build_request(
        self,
        contract_address: str,
        *,
        amount: int = 1,
        recipient: str | None = None,
        token_id: int | None = None,
    ) -> MintRequest:
        return MintRequest(
            contract_address=contract_address,
            chain_id=self.chain_id,
            amount=amount,
            recipient=recipient,
            token_id=token_id,
        )

    @asynccontextmanager
    async def _detector(self):
        timeout_s = self.timeout_s or get_read_timeout_s()
        async with web3_from_chain_id(self.chain_id) as web3:
            yield ProviderDetector(ChainReader(web3, timeout_s=timeout_s)), web3

    @status_tuple
    async def detect_contract(self, request: MintRequest) -> dict[str, Any]:
        self.require_chain(request.chain_id)
        async with self._detector() as (detector, _):
            info = await detector.detect(request)
        return info.to_dict()

    @status_tuple
    async def validate_request(self, request: MintRequest) -> dict[str, Any]:
        self.require_chain(request.chain_id)
        async with self._detector() as (detector, _):
            info = await detector.detect(request)
        result = validate(request, info)
        return {
            "is_valid": result.is_valid,
            "errors": list(result.errors),
            "missing_params": list(result.missing_params),
            "contract": info.to_dict(),
        }

    @status_tuple
    async def quote_mint(self, request: MintRequest) -> dict[str, Any]:
        self.require_chain(request.chain_id)
        async with self._detector() as (detector, _):
            info = await detector.detect(request)
        quote = self.optimizer.quote(request, info)
        return {
            "provider": str(info.provider),
            "amount": request.amount,
            "total_cost_wei": (
                str(quote.total_cost_wei) if quote is not None else None
            ),
        }

    @status_tuple
    async def prepare_mint(self, request: MintRequest) -> dict[str, Any]:
        self.require_chain(request.chain_id)
        async with self._detector() as (detector, web3):
            resolver = MintResolver(detector, self.optimizer)
            call = await resolver.resolve(request)
            return {**call.to_dict(), "tx": _jsonable_tx(call.to_tx_params(web3))}


def _jsonable_tx(tx: dict[str, Any]) -> dict[str, Any]:
    return {**tx, "value": str(tx["value"])}
