from __future__ import annotations

from typing import Any

ERC721_INTERFACE_ID = "0x80ac58cd"
ERC1155_INTERFACE_ID = "0xd9b67a26"

SUPPORTS_INTERFACE_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "supportsInterface",
    "inputs": [{"name": "interfaceId", "type": "bytes4"}],
    "outputs": [{"name": "", "type": "bool"}],
}
