from contextlib import asynccontextmanager

from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import ExtraDataToPOAMiddleware

from universal_minter.core.config import get_rpc_urls
from universal_minter.core.constants.chains import POA_MIDDLEWARE_CHAIN_IDS


def rpc_url_for_chain(chain_id: int) -> str:
    configured = get_rpc_urls().get(str(chain_id))
    urls = [configured] if isinstance(configured, str) else list(configured or [])
    if not urls:
        raise ValueError(f"No RPCs configured for chain ID {chain_id}")
    return urls[0]


def build_web3(rpc_url: str, chain_id: int) -> AsyncWeb3:
    provider = AsyncHTTPProvider(
        rpc_url, request_kwargs={"headers": AsyncHTTPProvider.get_request_headers()}
    )
    web3 = AsyncWeb3(provider)
    if chain_id in POA_MIDDLEWARE_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return web3


@asynccontextmanager
async def web3_from_chain_id(chain_id: int):
    """Yield a read client for ``chain_id``; the HTTP session is closed on exit."""
    rpc_url = rpc_url_for_chain(chain_id)
    logger.debug(f"Opening RPC client for chain {chain_id}: {rpc_url}")
    web3 = build_web3(rpc_url, chain_id)
    try:
        yield web3
    finally:
        await web3.provider.disconnect()
