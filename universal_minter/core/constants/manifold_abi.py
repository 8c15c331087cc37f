from __future__ import annotations

from typing import Any

MANIFOLD_GET_EXTENSIONS_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "getExtensions",
    "inputs": [],
    "outputs": [{"name": "extensions", "type": "address[]"}],
}

MANIFOLD_MINT_FEE_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "MINT_FEE",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
}

MANIFOLD_MINT_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "mintBaseBatch",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "count", "type": "uint16"},
        ],
        "outputs": [{"name": "tokenIds", "type": "uint256[]"}],
    },
]
