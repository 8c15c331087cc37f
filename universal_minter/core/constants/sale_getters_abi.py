"""View getters that hand-rolled and framework drops commonly expose.

Each group is ordered by preference; the detector takes the first one that
answers.
"""

from __future__ import annotations

from typing import Any


def _view(name: str, output_type: str) -> dict[str, Any]:
    return {
        "type": "function",
        "stateMutability": "view",
        "name": name,
        "inputs": [],
        "outputs": [{"name": "", "type": output_type}],
    }


SALE_ACTIVE_GETTERS: list[dict[str, Any]] = [
    _view("saleActive", "bool"),
    _view("isPublicSaleActive", "bool"),
    _view("publicSaleActive", "bool"),
    _view("mintActive", "bool"),
]

# true means the sale is NOT active
PAUSED_GETTER: dict[str, Any] = _view("paused", "bool")

MAX_PER_WALLET_GETTERS: list[dict[str, Any]] = [
    _view("maxPerWallet", "uint256"),
    _view("maxMintPerWallet", "uint256"),
    _view("maxMintsPerWallet", "uint256"),
    _view("walletLimit", "uint256"),
]

UNIT_PRICE_GETTERS: list[dict[str, Any]] = [
    _view("mintPrice", "uint256"),
    _view("price", "uint256"),
    _view("cost", "uint256"),
    _view("publicSalePrice", "uint256"),
]
