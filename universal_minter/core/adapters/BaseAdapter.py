from __future__ import annotations

from abc import ABC
from typing import Any

from loguru import logger

from universal_minter.core.config import get_target_chain_id


class BaseAdapter(ABC):
    """Shared plumbing for adapters pinned to a single EVM network.

    Holds the raw adapter config and the chain every request must target, and
    binds a loguru logger to both so log lines can be filtered per adapter.
    """

    adapter_type: str | None = None

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        *,
        chain_id: int | None = None,
    ):
        self.name = name
        self.config = config or {}
        self.chain_id = (
            int(chain_id) if chain_id is not None else get_target_chain_id()
        )
        self.logger = logger.bind(
            adapter=self.__class__.__name__, chain_id=self.chain_id
        )

    def require_chain(self, chain_id: int) -> None:
        if int(chain_id) != self.chain_id:
            raise ValueError(
                f"Unsupported chain_id={chain_id}; "
                f"{self.name} targets chain {self.chain_id}"
            )
