from __future__ import annotations

from loguru import logger

from universal_minter.core.engine import registry
from universal_minter.core.engine.detector import ProviderDetector
from universal_minter.core.engine.errors import ValidationError
from universal_minter.core.engine.pricing import PriceOptimizer
from universal_minter.core.engine.types import MintRequest, PreparedCall
from universal_minter.core.engine.validator import validate


class MintResolver:
    """detect -> validate -> lookup -> quote -> assemble, all or nothing."""

    def __init__(
        self,
        detector: ProviderDetector,
        optimizer: PriceOptimizer | None = None,
    ):
        self.detector = detector
        self.optimizer = optimizer or PriceOptimizer()
        self.logger = logger.bind(component="MintResolver")

    async def resolve(self, request: MintRequest) -> PreparedCall:
        info = await self.detector.detect(request)

        result = validate(request, info)
        if not result.is_valid:
            raise ValidationError(result.errors, result.missing_params)

        descriptor = registry.lookup(info.provider)
        quote = self.optimizer.quote(request, info)
        if quote is not None:
            value_wei = quote.total_cost_wei
        else:
            # no on-chain price: whatever the dialect charges on its own (fees)
            value_wei = descriptor.calculate_value(None, request, info)

        call = PreparedCall(
            to=request.contract_address,
            abi_fragment=descriptor.abi_fragment,
            function_name=descriptor.function_name,
            args=tuple(descriptor.build_args(request, info)),
            value_wei=value_wei,
            chain_id=request.chain_id,
        )
        self.logger.info(
            f"Prepared {call.function_name} on {call.to} ({info.provider}) "
            f"amount={request.amount} value_wei={call.value_wei}"
        )
        return call
