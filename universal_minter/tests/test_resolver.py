from __future__ import annotations

import asyncio

import pytest
from eth_utils import function_signature_to_4byte_selector
from web3 import AsyncHTTPProvider, AsyncWeb3

from universal_minter.core.constants.erc165 import ERC721_INTERFACE_ID
from universal_minter.core.engine.detector import ProviderDetector
from universal_minter.core.engine.errors import (
    DetectionError,
    PriceQueryError,
    PriceUnavailable,
    ValidationError,
)
from universal_minter.core.engine.resolver import MintResolver
from universal_minter.core.engine.types import MintRequest, ProbeOutcome

CONTRACT = "0x" + "12" * 20
RECIPIENT = "0x" + "34" * 20
USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"


def _resolver(reader) -> MintResolver:
    return MintResolver(ProviderDetector(reader))


def _request(**kwargs) -> MintRequest:
    return MintRequest(contract_address=CONTRACT, **kwargs)


@pytest.mark.asyncio
async def test_manifold_scenario(fake_chain):
    reader = fake_chain(
        {"getExtensions": [], "saleActive": True, "mintPrice": 10**16},
        interfaces={ERC721_INTERFACE_ID},
    )

    call = await _resolver(reader).resolve(_request(amount=3, recipient=RECIPIENT))

    assert call.value_wei == 3 * 10**16
    assert call.function_name == "mintBaseBatch"
    assert call.to == _request().contract_address
    assert call.args == (_request(recipient=RECIPIENT).recipient, 3)


@pytest.mark.asyncio
async def test_no_code_scenario(fake_chain):
    reader = fake_chain({}, code=b"")

    with pytest.raises(DetectionError):
        await _resolver(reader).resolve(_request(amount=1))


@pytest.mark.asyncio
async def test_per_wallet_limit_scenario(fake_chain):
    reader = fake_chain({"maxPerWallet": 2}, interfaces={ERC721_INTERFACE_ID})

    with pytest.raises(ValidationError) as excinfo:
        await _resolver(reader).resolve(_request(amount=5))

    assert "exceeds per-wallet limit" in excinfo.value.errors


@pytest.mark.asyncio
async def test_unknown_contract_scenario(fake_chain):
    reader = fake_chain({})

    with pytest.raises(ValidationError) as excinfo:
        await _resolver(reader).resolve(_request(amount=1))

    assert "unsupported contract" in excinfo.value.errors
    assert excinfo.value.to_dict()["errors"][0] == "unsupported contract"


@pytest.mark.asyncio
async def test_missing_recipient_surfaces_in_validation_error(fake_chain):
    reader = fake_chain({"n2mVersion": 1}, interfaces={ERC721_INTERFACE_ID})

    with pytest.raises(ValidationError) as excinfo:
        await _resolver(reader).resolve(_request(amount=1))

    assert excinfo.value.errors == ()
    assert excinfo.value.missing_params == ("recipient",)


@pytest.mark.asyncio
async def test_absent_price_resolves_with_fee_only_value(fake_chain):
    reader = fake_chain(
        {"getExtensions": [], "MINT_FEE": 100}, interfaces={ERC721_INTERFACE_ID}
    )

    call = await _resolver(reader).resolve(_request(amount=2, recipient=RECIPIENT))

    assert call.value_wei == 200


@pytest.mark.asyncio
async def test_absent_price_generic_resolves_to_zero(fake_chain):
    reader = fake_chain({}, interfaces={ERC721_INTERFACE_ID})

    call = await _resolver(reader).resolve(_request(amount=2))

    assert call.value_wei == 0
    assert call.function_name == "mint"
    assert call.args == (2,)


@pytest.mark.asyncio
async def test_price_timeout_blocks_resolution(fake_chain):
    reader = fake_chain(
        {"mintPrice": ProbeOutcome.UNREACHABLE}, interfaces={ERC721_INTERFACE_ID}
    )

    with pytest.raises(PriceQueryError):
        await _resolver(reader).resolve(_request(amount=1))


@pytest.mark.asyncio
async def test_thirdweb_erc20_claim_attaches_no_native_value(fake_chain):
    reader = fake_chain(
        {
            "contractType": b"DropERC721".ljust(32, b"\x00"),
            "getActiveClaimConditionId": 0,
            "getClaimConditionById": (
                0,
                100,
                0,
                10,
                b"\x00" * 32,
                5_000_000,
                USDC,
                "",
            ),
        },
        interfaces={ERC721_INTERFACE_ID},
    )

    call = await _resolver(reader).resolve(_request(amount=2, recipient=RECIPIENT))

    assert call.function_name == "claim"
    assert call.value_wei == 0
    # payment is pulled in USDC, so the claim must still name currency and price
    assert call.args[2:4] == (USDC, 5_000_000)


@pytest.mark.asyncio
async def test_thirdweb_without_claim_condition_price_is_unavailable(fake_chain):
    reader = fake_chain(
        {
            "contractType": b"DropERC721".ljust(32, b"\x00"),
            "getActiveClaimConditionId": 0,
        },
        interfaces={ERC721_INTERFACE_ID},
    )

    with pytest.raises(PriceUnavailable):
        await _resolver(reader).resolve(_request(amount=1, recipient=RECIPIENT))


@pytest.mark.asyncio
async def test_concurrent_resolves_do_not_interfere(fake_chain):
    reader = fake_chain(
        {"getExtensions": [], "mintPrice": 7}, interfaces={ERC721_INTERFACE_ID}
    )
    resolver = _resolver(reader)
    recipients = ["0x" + f"{i:040x}" for i in range(1, 21)]

    calls = await asyncio.gather(
        *(
            resolver.resolve(_request(amount=i, recipient=recipients[i - 1]))
            for i in range(1, 21)
        )
    )

    for i, call in enumerate(calls, start=1):
        assert call.value_wei == 7 * i
        assert call.args == (_request(recipient=recipients[i - 1]).recipient, i)


@pytest.mark.asyncio
async def test_concurrent_resolves_across_contracts(fake_chain):
    manifold = _resolver(
        fake_chain(
            {"getExtensions": [], "mintPrice": 3}, interfaces={ERC721_INTERFACE_ID}
        )
    )
    generic = _resolver(fake_chain({"price": 11}, interfaces={ERC721_INTERFACE_ID}))

    manifold_call, generic_call = await asyncio.gather(
        manifold.resolve(_request(amount=4, recipient=RECIPIENT)),
        generic.resolve(_request(amount=5)),
    )

    assert manifold_call.function_name == "mintBaseBatch"
    assert manifold_call.value_wei == 12
    assert (generic_call.function_name, generic_call.value_wei) == ("mint", 55)


@pytest.mark.asyncio
async def test_prepared_call_encodes_calldata(fake_chain):
    reader = fake_chain({"price": 5}, interfaces={ERC721_INTERFACE_ID})
    call = await _resolver(reader).resolve(_request(amount=3))
    w3 = AsyncWeb3(AsyncHTTPProvider("http://localhost:8545"))

    tx = call.to_tx_params(w3)

    selector = "0x" + function_signature_to_4byte_selector("mint(uint256)").hex()
    assert tx["data"].startswith(selector)
    assert tx["data"].endswith(f"{3:064x}")
    assert tx["value"] == 15
    assert tx["to"] == call.to
    assert tx["chainId"] == call.chain_id


@pytest.mark.asyncio
async def test_nfts2me_calldata_targets_mint_to(fake_chain):
    reader = fake_chain(
        {"n2mVersion": 1, "mintPrice": 10, "protocolFee": 1},
        interfaces={ERC721_INTERFACE_ID},
    )
    call = await _resolver(reader).resolve(_request(amount=2, recipient=RECIPIENT))
    w3 = AsyncWeb3(AsyncHTTPProvider("http://localhost:8545"))

    data = call.encode_calldata(w3)

    selector = function_signature_to_4byte_selector("mintTo(address,uint256)").hex()
    assert data == "0x" + selector + RECIPIENT[2:].rjust(64, "0") + f"{2:064x}"
    assert call.value_wei == 22
