from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

from universal_minter.core.config import get_target_chain_id


class NFTProvider(StrEnum):
    MANIFOLD = "Manifold"
    THIRDWEB = "Thirdweb"
    NFTS2ME = "NFTs2Me"
    GENERIC_ERC721 = "GenericERC721"
    GENERIC_ERC1155 = "GenericERC1155"
    UNKNOWN = "Unknown"


class ProbeOutcome(StrEnum):
    MATCH = "MATCH"
    NO_MATCH = "NO_MATCH"
    UNREACHABLE = "UNREACHABLE"


@dataclass(frozen=True)
class ProbeResult:
    outcome: ProbeOutcome
    value: Any = None

    @property
    def matched(self) -> bool:
        return self.outcome is ProbeOutcome.MATCH

    @property
    def unreachable(self) -> bool:
        return self.outcome is ProbeOutcome.UNREACHABLE


def _checksum(value: str) -> str:
    value = str(value).strip()
    if not is_address(value):
        raise ValueError(f"Invalid address: {value}")
    return to_checksum_address(value)


class MintRequest(BaseModel):
    # amount is range-checked by validate(), not here
    model_config = ConfigDict(frozen=True)

    contract_address: str
    chain_id: int = Field(default_factory=get_target_chain_id)
    amount: int = 1
    recipient: str | None = None
    token_id: int | None = Field(
        default=None, description="Token id, required by ERC-1155 dialects"
    )

    @field_validator("contract_address")
    @classmethod
    def _validate_contract_address(cls, value: str) -> str:
        return _checksum(value)

    @field_validator("recipient")
    @classmethod
    def _validate_recipient(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        return _checksum(value)

    @field_validator("token_id")
    @classmethod
    def _validate_token_id(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("token_id must be non-negative")
        return value


@dataclass(frozen=True)
class ContractInfo:
    provider: NFTProvider
    is_erc721: bool = False
    is_erc1155: bool = False
    sale_active: bool | None = None
    max_per_wallet: int | None = None
    unit_price_wei: int | None = None
    price_read_failed: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.is_erc721 and self.is_erc1155:
            raise ValueError("a contract cannot be both ERC-721 and ERC-1155")
        # read-only copy; the caller keeps its own dict
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def token_standard(self) -> str | None:
        if self.is_erc721:
            return "ERC721"
        if self.is_erc1155:
            return "ERC1155"
        return None

    def to_dict(self) -> dict[str, Any]:
        # wei values as strings; JSON consumers choke on 256-bit ints
        return {
            "provider": str(self.provider),
            "is_erc721": self.is_erc721,
            "is_erc1155": self.is_erc1155,
            "sale_active": self.sale_active,
            "max_per_wallet": self.max_per_wallet,
            "unit_price_wei": (
                str(self.unit_price_wei) if self.unit_price_wei is not None else None
            ),
            "price_read_failed": self.price_read_failed,
            "extra": {k: _jsonable(v) for k, v in sorted(self.extra.items())},
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return str(value)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()
    missing_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class PriceQuote:
    total_cost_wei: int


BuildArgs = Callable[[MintRequest, ContractInfo], list[Any]]
CalculateValue = Callable[[int | None, MintRequest, ContractInfo], int]


@dataclass(frozen=True)
class ProviderDescriptor:
    provider: NFTProvider
    abi_fragment: Sequence[dict[str, Any]]
    function_name: str
    build_args: BuildArgs
    calculate_value: CalculateValue
    required_params: tuple[str, ...] = ()
    price_required: bool = False
    max_amount_per_call: int | None = None
    # extra params needed only when the detected contract is ERC-1155
    erc1155_params: tuple[str, ...] = ()
    # key in ContractInfo.extra holding a non-native price (e.g. ERC-20 claims)
    price_signal_key: str | None = None

    def has_price_signal(self, info: ContractInfo) -> bool:
        if info.unit_price_wei is not None:
            return True
        key = self.price_signal_key
        return key is not None and key in info.extra

    def required_params_for(self, info: ContractInfo) -> tuple[str, ...]:
        if info.is_erc1155:
            return (*self.required_params, *self.erc1155_params)
        return self.required_params


@dataclass(frozen=True)
class PreparedCall:
    to: str
    abi_fragment: Sequence[dict[str, Any]]
    function_name: str
    args: tuple[Any, ...]
    value_wei: int
    chain_id: int

    def encode_calldata(self, web3: Any) -> str:
        contract = web3.eth.contract(address=self.to, abi=list(self.abi_fragment))
        return contract.encode_abi(self.function_name, args=list(self.args))

    def to_tx_params(self, web3: Any) -> dict[str, Any]:
        """Unsigned transaction params for an external signer (no gas/nonce)."""
        return {
            "chainId": self.chain_id,
            "to": self.to,
            "value": self.value_wei,
            "data": self.encode_calldata(web3),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "function_name": self.function_name,
            "args": _jsonable(list(self.args)),
            "value_wei": str(self.value_wei),
            "chain_id": self.chain_id,
            "abi": list(self.abi_fragment),
        }
