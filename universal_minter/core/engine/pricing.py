from __future__ import annotations

from loguru import logger

from universal_minter.core.engine import registry
from universal_minter.core.engine.errors import PriceQueryError, PriceUnavailable
from universal_minter.core.engine.types import ContractInfo, MintRequest, PriceQuote
from universal_minter.core.utils.uint import ensure_uint256


class PriceOptimizer:
    """Turns a detected unit price into the total wei to attach to a mint.

    The provider's ``calculate_value`` owns the fee rule, so platform fees and
    price arguments stay pluggable per dialect. Three outcomes are kept apart:

    - a ``PriceQuote`` (possibly of zero, e.g. claims paid in an ERC-20),
    - ``None`` when the contract exposes no price at all,
    - ``PriceQueryError`` / ``PriceUnavailable`` when the price could not be
      determined or the dialect refuses to mint without one.
    """

    def __init__(self) -> None:
        self.logger = logger.bind(component="PriceOptimizer")

    def quote(self, request: MintRequest, info: ContractInfo) -> PriceQuote | None:
        descriptor = registry.lookup(info.provider)

        if info.price_read_failed:
            raise PriceQueryError(
                f"Price for {request.contract_address} could not be read"
            )

        if not descriptor.has_price_signal(info):
            if descriptor.price_required:
                raise PriceUnavailable(
                    f"{info.provider} requires an explicit price; none found at "
                    f"{request.contract_address}"
                )
            self.logger.debug(f"No discoverable price at {request.contract_address}")
            return None

        unit_price = info.unit_price_wei
        if unit_price is not None:
            ensure_uint256(unit_price, label="unit price")
        # without a native unit price the dialect decides what value rides along
        total = descriptor.calculate_value(unit_price, request, info)
        self.logger.debug(
            f"Quote {request.contract_address}: {unit_price} x {request.amount} "
            f"-> {total} wei"
        )
        return PriceQuote(total_cost_wei=total)
