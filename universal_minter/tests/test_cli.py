"""Tests for the universal-minter command line."""

from __future__ import annotations

import json
import sys
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from loguru import logger

from universal_minter.adapters.mint_adapter.adapter import MintAdapter
from universal_minter.cli import cli

CONTRACT = "0x" + "12" * 20
RECIPIENT = "0x" + "34" * 20


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    # the CLI swaps sinks onto CliRunner's captured stderr
    logger.remove()
    logger.add(sys.stderr)


def test_resolve_prints_prepared_call():
    prepared = {"to": CONTRACT, "function_name": "mint", "value_wei": "0"}
    mock = AsyncMock(return_value=(True, prepared))

    with patch.object(MintAdapter, "prepare_mint", mock):
        result = CliRunner().invoke(
            cli, ["resolve", CONTRACT, "--amount", "2", "--recipient", RECIPIENT]
        )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"ok": True, "result": prepared}
    request = mock.await_args.args[0]
    assert request.amount == 2
    assert request.recipient.lower() == RECIPIENT


def test_resolve_failure_exits_non_zero():
    failure = {"errors": ["sale not active"], "missing_params": []}

    with patch.object(
        MintAdapter, "prepare_mint", AsyncMock(return_value=(False, failure))
    ):
        result = CliRunner().invoke(cli, ["resolve", CONTRACT])

    assert result.exit_code == 1
    assert json.loads(result.stdout) == {"ok": False, "error": failure}


def test_zero_amount_is_rejected_at_the_boundary():
    with patch.object(MintAdapter, "quote_mint", AsyncMock()) as mock:
        result = CliRunner().invoke(cli, ["quote", CONTRACT, "--amount", "0"])

    assert result.exit_code == 2
    mock.assert_not_awaited()


def test_malformed_address_is_a_usage_error():
    with patch.object(MintAdapter, "detect_contract", AsyncMock()) as mock:
        result = CliRunner().invoke(cli, ["detect", "0xnot-an-address"])

    assert result.exit_code == 2
    mock.assert_not_awaited()


def test_chain_id_option_reaches_request():
    mock = AsyncMock(return_value=(True, {"provider": "Unknown"}))

    with patch.object(MintAdapter, "detect_contract", mock):
        result = CliRunner().invoke(
            cli, ["--chain-id", "84532", "detect", CONTRACT, "--token-id", "4"]
        )

    assert result.exit_code == 0, result.output
    request = mock.await_args.args[0]
    assert request.chain_id == 84532
    assert request.token_id == 4


def test_chain_code_is_accepted():
    mock = AsyncMock(return_value=(True, {}))

    with patch.object(MintAdapter, "quote_mint", mock):
        result = CliRunner().invoke(cli, ["--chain-id", "base-sepolia", "quote", CONTRACT])

    assert result.exit_code == 0, result.output
    assert mock.await_args.args[0].chain_id == 84532


def test_unknown_chain_code_is_a_usage_error():
    result = CliRunner().invoke(cli, ["--chain-id", "narnia", "quote", CONTRACT])

    assert result.exit_code == 2
