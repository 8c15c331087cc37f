from __future__ import annotations

from typing import Any

_CLAIM_CONDITION_COMPONENTS: list[dict[str, Any]] = [
    {"name": "startTimestamp", "type": "uint256"},
    {"name": "maxClaimableSupply", "type": "uint256"},
    {"name": "supplyClaimed", "type": "uint256"},
    {"name": "quantityLimitPerWallet", "type": "uint256"},
    {"name": "merkleRoot", "type": "bytes32"},
    {"name": "pricePerToken", "type": "uint256"},
    {"name": "currency", "type": "address"},
    {"name": "metadata", "type": "string"},
]

_ALLOWLIST_PROOF_COMPONENTS: list[dict[str, Any]] = [
    {"name": "proof", "type": "bytes32[]"},
    {"name": "quantityLimitPerWallet", "type": "uint256"},
    {"name": "pricePerToken", "type": "uint256"},
    {"name": "currency", "type": "address"},
]

THIRDWEB_CONTRACT_TYPE_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "pure",
    "name": "contractType",
    "inputs": [],
    "outputs": [{"name": "", "type": "bytes32"}],
}

THIRDWEB_ACTIVE_CONDITION_ID_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "getActiveClaimConditionId",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
}

THIRDWEB_CONDITION_BY_ID_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "getClaimConditionById",
    "inputs": [{"name": "_conditionId", "type": "uint256"}],
    "outputs": [
        {
            "name": "condition",
            "type": "tuple",
            "components": _CLAIM_CONDITION_COMPONENTS,
        }
    ],
}

THIRDWEB_1155_ACTIVE_CONDITION_ID_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "getActiveClaimConditionId",
    "inputs": [{"name": "_tokenId", "type": "uint256"}],
    "outputs": [{"name": "", "type": "uint256"}],
}

THIRDWEB_1155_CONDITION_BY_ID_ABI: dict[str, Any] = {
    "type": "function",
    "stateMutability": "view",
    "name": "getClaimConditionById",
    "inputs": [
        {"name": "_tokenId", "type": "uint256"},
        {"name": "_conditionId", "type": "uint256"},
    ],
    "outputs": [
        {
            "name": "condition",
            "type": "tuple",
            "components": _CLAIM_CONDITION_COMPONENTS,
        }
    ],
}

# Both claim() overloads; web3 picks the ERC-721 or ERC-1155 one by arity.
THIRDWEB_CLAIM_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "claim",
        "inputs": [
            {"name": "_receiver", "type": "address"},
            {"name": "_quantity", "type": "uint256"},
            {"name": "_currency", "type": "address"},
            {"name": "_pricePerToken", "type": "uint256"},
            {
                "name": "_allowlistProof",
                "type": "tuple",
                "components": _ALLOWLIST_PROOF_COMPONENTS,
            },
            {"name": "_data", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "stateMutability": "payable",
        "name": "claim",
        "inputs": [
            {"name": "_receiver", "type": "address"},
            {"name": "_tokenId", "type": "uint256"},
            {"name": "_quantity", "type": "uint256"},
            {"name": "_currency", "type": "address"},
            {"name": "_pricePerToken", "type": "uint256"},
            {
                "name": "_allowlistProof",
                "type": "tuple",
                "components": _ALLOWLIST_PROOF_COMPONENTS,
            },
            {"name": "_data", "type": "bytes"},
        ],
        "outputs": [],
    },
]
