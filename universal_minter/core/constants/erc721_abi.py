from __future__ import annotations

from typing import Any

ERC721_PUBLIC_MINT_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "mint",
        "inputs": [{"name": "quantity", "type": "uint256"}],
        "outputs": [],
    },
]
