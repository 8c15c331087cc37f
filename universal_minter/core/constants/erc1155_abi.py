from __future__ import annotations

from typing import Any

ERC1155_PUBLIC_MINT_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "mint",
        "inputs": [
            {"name": "account", "type": "address"},
            {"name": "id", "type": "uint256"},
            {"name": "amount", "type": "uint256"},
            {"name": "data", "type": "bytes"},
        ],
        "outputs": [],
    },
]
