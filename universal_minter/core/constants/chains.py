CHAIN_ID_ETHEREUM = 1
CHAIN_ID_BASE = 8453
CHAIN_ID_BASE_SEPOLIA = 84532
CHAIN_ID_POLYGON = 137

DEFAULT_TARGET_CHAIN_ID = CHAIN_ID_BASE

CHAIN_CODE_TO_ID = {
    "base": CHAIN_ID_BASE,
    "base-sepolia": CHAIN_ID_BASE_SEPOLIA,
    "ethereum": CHAIN_ID_ETHEREUM,
    "mainnet": CHAIN_ID_ETHEREUM,
    "polygon": CHAIN_ID_POLYGON,
}

POA_MIDDLEWARE_CHAIN_IDS: set[int] = {
    CHAIN_ID_POLYGON,
}

DEFAULT_RPC_URLS: dict[int, str] = {
    CHAIN_ID_BASE: "https://mainnet.base.org",
    CHAIN_ID_BASE_SEPOLIA: "https://sepolia.base.org",
}
