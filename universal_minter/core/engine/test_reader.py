from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from universal_minter.core.constants.erc165 import ERC721_INTERFACE_ID
from universal_minter.core.constants.manifold_abi import MANIFOLD_GET_EXTENSIONS_ABI
from universal_minter.core.engine.errors import DetectionError
from universal_minter.core.engine.reader import ChainReader
from universal_minter.core.engine.types import ProbeOutcome

ADDRESS = "0x" + "12" * 20


def _w3(*, code=b"\x60\x80", code_exc=None, call=None):
    class _Eth:
        async def get_code(self, address: str):  # noqa: ANN001
            if code_exc is not None:
                raise code_exc
            return code

        def contract(self, *, address: str, abi: list[dict]):  # noqa: ANN001
            fn_name = abi[0]["name"]

            def _bound(*args):
                return SimpleNamespace(call=lambda: call(fn_name, args))

            return SimpleNamespace(functions=SimpleNamespace(**{fn_name: _bound}))

    return SimpleNamespace(eth=_Eth())


@pytest.mark.asyncio
async def test_get_code_returns_bytes():
    reader = ChainReader(_w3(code=b"\x60\x80"))
    assert await reader.get_code(ADDRESS) == b"\x60\x80"


@pytest.mark.asyncio
async def test_get_code_empty_raises():
    reader = ChainReader(_w3(code=b""))
    with pytest.raises(DetectionError, match="No contract code"):
        await reader.get_code(ADDRESS)


@pytest.mark.asyncio
async def test_get_code_network_failure_raises():
    reader = ChainReader(_w3(code_exc=ConnectionError("refused")))
    with pytest.raises(DetectionError, match="Chain read failed"):
        await reader.get_code(ADDRESS)


@pytest.mark.asyncio
async def test_call_match():
    async def call(fn_name, args):
        return ["0x" + "ab" * 20]

    result = await ChainReader(_w3(call=call)).call(ADDRESS, MANIFOLD_GET_EXTENSIONS_ABI)

    assert result.outcome is ProbeOutcome.MATCH
    assert result.value == ["0x" + "ab" * 20]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        ContractLogicError("execution reverted"),
        BadFunctionCallOutput("Could not decode contract function call"),
        ValueError("malformed"),
    ],
)
async def test_call_revert_or_bad_output_is_no_match(exc):
    async def call(fn_name, args):
        raise exc

    result = await ChainReader(_w3(call=call)).call(ADDRESS, MANIFOLD_GET_EXTENSIONS_ABI)

    assert result.outcome is ProbeOutcome.NO_MATCH


@pytest.mark.asyncio
async def test_call_connection_failure_is_unreachable():
    async def call(fn_name, args):
        raise ConnectionError("reset by peer")

    result = await ChainReader(_w3(call=call)).call(ADDRESS, MANIFOLD_GET_EXTENSIONS_ABI)

    assert result.outcome is ProbeOutcome.UNREACHABLE


@pytest.mark.asyncio
async def test_call_timeout_is_unreachable():
    async def call(fn_name, args):
        await asyncio.sleep(1)
        return []

    reader = ChainReader(_w3(call=call), timeout_s=0.01)
    result = await reader.call(ADDRESS, MANIFOLD_GET_EXTENSIONS_ABI)

    assert result.outcome is ProbeOutcome.UNREACHABLE


@pytest.mark.asyncio
async def test_supports_interface_passes_bytes4():
    seen = {}

    async def call(fn_name, args):
        seen["fn"] = fn_name
        seen["args"] = args
        return True

    result = await ChainReader(_w3(call=call)).supports_interface(
        ADDRESS, ERC721_INTERFACE_ID
    )

    assert result.matched and result.value is True
    assert seen == {"fn": "supportsInterface", "args": (bytes.fromhex("80ac58cd"),)}


@pytest.mark.asyncio
async def test_supports_interface_non_bool_is_no_match():
    async def call(fn_name, args):
        return 1

    result = await ChainReader(_w3(call=call)).supports_interface(
        ADDRESS, ERC721_INTERFACE_ID
    )

    assert result.outcome is ProbeOutcome.NO_MATCH


def test_timeout_must_be_positive():
    with pytest.raises(ValueError):
        ChainReader(_w3(), timeout_s=0)
