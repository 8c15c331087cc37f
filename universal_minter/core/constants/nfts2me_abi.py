from __future__ import annotations

from typing import Any

NFTS2ME_VERSION_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "n2mVersion",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
}

NFTS2ME_PROTOCOL_FEE_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "protocolFee",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
}

NFTS2ME_MINT_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "mintTo",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [],
    },
]
