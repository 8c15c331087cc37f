from universal_minter.core.engine.detector import PROVIDER_PROBES, ProviderDetector
from universal_minter.core.engine.errors import (
    DetectionError,
    MintEngineError,
    PriceOverflowError,
    PriceQueryError,
    PriceUnavailable,
    UnknownProvider,
    ValidationError,
)
from universal_minter.core.engine.pricing import PriceOptimizer
from universal_minter.core.engine.reader import ChainReader
from universal_minter.core.engine.registry import PROVIDER_REGISTRY, lookup
from universal_minter.core.engine.resolver import MintResolver
from universal_minter.core.engine.types import (
    ContractInfo,
    MintRequest,
    NFTProvider,
    PreparedCall,
    PriceQuote,
    ProbeOutcome,
    ProbeResult,
    ProviderDescriptor,
    ValidationResult,
)
from universal_minter.core.engine.validator import validate

__all__ = [
    "PROVIDER_PROBES",
    "PROVIDER_REGISTRY",
    "ChainReader",
    "ContractInfo",
    "DetectionError",
    "MintEngineError",
    "MintRequest",
    "MintResolver",
    "NFTProvider",
    "PreparedCall",
    "PriceOptimizer",
    "PriceOverflowError",
    "PriceQueryError",
    "PriceQuote",
    "PriceUnavailable",
    "ProbeOutcome",
    "ProbeResult",
    "ProviderDescriptor",
    "ProviderDetector",
    "UnknownProvider",
    "ValidationError",
    "ValidationResult",
    "lookup",
    "validate",
]
