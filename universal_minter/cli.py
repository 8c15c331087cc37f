from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click
from loguru import logger
from pydantic import ValidationError as RequestError

from universal_minter.adapters.mint_adapter.adapter import MintAdapter
from universal_minter.core.config import load_config
from universal_minter.core.constants.chains import CHAIN_CODE_TO_ID
from universal_minter.core.engine.types import MintRequest


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _emit(ok: bool, result: Any) -> None:
    if ok:
        _echo_json({"ok": True, "result": result})
        return
    _echo_json({"ok": False, "error": result})
    sys.exit(1)


def _address_arg(fn):
    return click.argument("contract_address")(fn)


def _parse_chain(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> int | None:
    if value is None:
        return None
    value = value.strip().lower()
    if value.isdigit():
        return int(value)
    if value in CHAIN_CODE_TO_ID:
        return CHAIN_CODE_TO_ID[value]
    raise click.BadParameter(
        f"expected a chain id or one of: {', '.join(sorted(CHAIN_CODE_TO_ID))}"
    )


def _request(
    adapter: MintAdapter, contract_address: str, **kwargs: Any
) -> MintRequest:
    try:
        return adapter.build_request(contract_address, **kwargs)
    except RequestError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group(name="universal-minter", help="Detect NFT mint dialects and prepare mints.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None)
@click.option(
    "--chain-id",
    callback=_parse_chain,
    default=None,
    help="Target chain, by id or code (base, base-sepolia, ...).",
)
@click.option("--timeout", "timeout_s", type=float, default=None, help="Per-read timeout (s).")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    chain_id: int | None,
    timeout_s: float | None,
    log_level: str,
) -> None:
    logger.remove()
    logger.add(sys.stderr, level=str(log_level).upper())
    if config_path:
        load_config(config_path, require_exists=True)
    ctx.obj = MintAdapter(chain_id=chain_id, timeout_s=timeout_s)


@cli.command(name="detect", help="Detect the minting dialect of a contract.")
@_address_arg
@click.option("--token-id", type=click.IntRange(min=0), default=None)
@click.pass_obj
def detect_cmd(adapter: MintAdapter, contract_address: str, token_id: int | None) -> None:
    request = _request(adapter, contract_address, token_id=token_id)
    _emit(*asyncio.run(adapter.detect_contract(request)))


@cli.command(name="quote", help="Quote the total cost of minting AMOUNT tokens.")
@_address_arg
@click.option("--amount", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--token-id", type=click.IntRange(min=0), default=None)
@click.pass_obj
def quote_cmd(
    adapter: MintAdapter, contract_address: str, amount: int, token_id: int | None
) -> None:
    request = _request(adapter, contract_address, amount=amount, token_id=token_id)
    _emit(*asyncio.run(adapter.quote_mint(request)))


@cli.command(name="resolve", help="Prepare the exact mint call for an external signer.")
@_address_arg
@click.option("--amount", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--recipient", default=None, help="Address receiving the tokens.")
@click.option("--token-id", type=click.IntRange(min=0), default=None)
@click.pass_obj
def resolve_cmd(
    adapter: MintAdapter,
    contract_address: str,
    amount: int,
    recipient: str | None,
    token_id: int | None,
) -> None:
    request = _request(
        adapter,
        contract_address,
        amount=amount,
        recipient=recipient,
        token_id=token_id,
    )
    _emit(*asyncio.run(adapter.prepare_mint(request)))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
