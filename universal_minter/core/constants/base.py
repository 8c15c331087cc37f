MAX_UINT256 = 2**256 - 1
MAX_UINT16 = 2**16 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
# thirdweb's sentinel for the chain's native currency
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# Timeout constants (seconds)
DEFAULT_READ_TIMEOUT = 10.0  # per eth_call / eth_getCode
