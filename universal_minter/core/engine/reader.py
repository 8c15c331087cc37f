from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from eth_abi.exceptions import DecodingError
from loguru import logger
from web3 import AsyncWeb3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from universal_minter.core.constants.base import DEFAULT_READ_TIMEOUT
from universal_minter.core.constants.erc165 import SUPPORTS_INTERFACE_ABI
from universal_minter.core.engine.errors import DetectionError
from universal_minter.core.engine.types import ProbeOutcome, ProbeResult

# A revert or undecodable return means "this function is not here".
_NO_MATCH_ERRORS = (
    ContractLogicError,
    BadFunctionCallOutput,
    DecodingError,
    ValueError,
    TypeError,
    OverflowError,
)


class ChainReader:
    """Read-only access to a single chain through an ``AsyncWeb3`` client.

    Every call is bounded by ``timeout_s``. ``call`` never raises: its result
    is a three-valued ``ProbeResult`` so callers can tell "this contract does
    not expose that function" apart from "the chain did not answer".
    """

    def __init__(self, web3: AsyncWeb3, *, timeout_s: float = DEFAULT_READ_TIMEOUT):
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        self.web3 = web3
        self.timeout_s = float(timeout_s)

    async def get_code(self, address: str) -> bytes:
        try:
            code = await asyncio.wait_for(
                self.web3.eth.get_code(AsyncWeb3.to_checksum_address(address)),
                timeout=self.timeout_s,
            )
        except TimeoutError as exc:
            raise DetectionError(
                address, f"Timed out reading code at {address}"
            ) from exc
        except Exception as exc:
            logger.warning(f"eth_getCode failed for {address}: {exc}")
            raise DetectionError(
                address, f"Chain read failed for {address}: {exc}"
            ) from exc

        code = bytes(code or b"")
        if not code:
            raise DetectionError(address, f"No contract code at {address}")
        return code

    async def call(
        self,
        address: str,
        fragment: dict[str, Any],
        args: Sequence[Any] = (),
    ) -> ProbeResult:
        fn_name = fragment["name"]
        try:
            contract = self.web3.eth.contract(
                address=AsyncWeb3.to_checksum_address(address), abi=[fragment]
            )
            fn = getattr(contract.functions, fn_name)(*args)
            value = await asyncio.wait_for(fn.call(), timeout=self.timeout_s)
        except TimeoutError:
            logger.debug(f"probe {fn_name} on {address} timed out")
            return ProbeResult(ProbeOutcome.UNREACHABLE)
        except _NO_MATCH_ERRORS as exc:
            logger.debug(f"probe {fn_name} on {address} negative: {exc}")
            return ProbeResult(ProbeOutcome.NO_MATCH)
        except Exception as exc:  # noqa: BLE001
            # transport and JSON-RPC failures: the chain did not answer
            logger.debug(f"probe {fn_name} on {address} unreachable: {exc}")
            return ProbeResult(ProbeOutcome.UNREACHABLE)
        return ProbeResult(ProbeOutcome.MATCH, value)

    async def supports_interface(self, address: str, interface_id: str) -> ProbeResult:
        result = await self.call(
            address, SUPPORTS_INTERFACE_ABI, [bytes.fromhex(interface_id[2:])]
        )
        if result.matched and not isinstance(result.value, bool):
            return ProbeResult(ProbeOutcome.NO_MATCH)
        return result
