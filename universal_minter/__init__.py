__version__ = "0.1.0"

from universal_minter.core import BaseAdapter
from universal_minter.core.engine import (
    ContractInfo,
    MintRequest,
    MintResolver,
    NFTProvider,
    PreparedCall,
)

__all__ = [
    "__version__",
    "BaseAdapter",
    "ContractInfo",
    "MintRequest",
    "MintResolver",
    "NFTProvider",
    "PreparedCall",
]
