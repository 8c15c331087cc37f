"""Process-wide settings for the minter.

Settings live in a JSON file (``config.json`` at the repo root unless
``UNIVERSAL_MINTER_CONFIG_PATH`` points elsewhere) and are held in the
module-level ``CONFIG`` dict. Accessors below apply defaults, so an empty
config targets Base mainnet over its public RPC.
"""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from universal_minter.core.constants.base import DEFAULT_READ_TIMEOUT
from universal_minter.core.constants.chains import (
    DEFAULT_RPC_URLS,
    DEFAULT_TARGET_CHAIN_ID,
)

_CONFIG_ENV_KEYS = ("UNIVERSAL_MINTER_CONFIG_PATH", "UNIVERSAL_MINTER_CONFIG")
_RPC_URL_ENV_KEY = "UNIVERSAL_MINTER_RPC_URL"
_DEFAULT_CONFIG_FILENAME = "config.json"


def _repo_root() -> Path | None:
    for start in (Path.cwd(), Path(__file__).parent):
        start = start.resolve()
        for candidate in (start, *start.parents):
            if (candidate / "pyproject.toml").exists():
                return candidate
    return None


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    root = _repo_root()
    for key in _CONFIG_ENV_KEYS:
        env_path = os.getenv(key, "").strip()
        if not env_path:
            continue
        candidate = Path(env_path).expanduser()
        if candidate.is_absolute() or root is None:
            return candidate
        return root / candidate

    return (root or Path.cwd()) / _DEFAULT_CONFIG_FILENAME


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    """Read the config file; a missing or unreadable file yields ``{}``.

    With ``require_exists`` both cases raise instead, which is what an explicit
    ``--config`` on the command line wants.
    """
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        data = json.loads(cfg_path.read_text())
    except json.JSONDecodeError as exc:
        if require_exists:
            raise ValueError(f"Malformed config file {cfg_path}: {exc}") from exc
        logger.warning(f"Ignoring malformed config file {cfg_path}: {exc}")
        return {}
    if not isinstance(data, dict):
        if require_exists:
            raise ValueError(f"Config file {cfg_path} must hold a JSON object")
        logger.warning(f"Ignoring config file {cfg_path}: not a JSON object")
        return {}
    return data


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    # mutate in place; modules hold a reference to CONFIG
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    set_config(load_config_json(path, require_exists=require_exists))


def get_target_chain_id() -> int:
    value = CONFIG.get("target_chain_id")
    if value is None:
        return DEFAULT_TARGET_CHAIN_ID
    return int(value)


def get_rpc_urls() -> dict[str, Any]:
    mapping: dict[str, Any] = {str(k): v for k, v in DEFAULT_RPC_URLS.items()}
    mapping.update({str(k): v for k, v in CONFIG.get("rpc_urls", {}).items()})
    env_rpc = os.environ.get(_RPC_URL_ENV_KEY, "").strip()
    if env_rpc:
        mapping[str(get_target_chain_id())] = env_rpc
    return mapping


def get_read_timeout_s() -> float:
    value = CONFIG.get("read_timeout_s")
    if value is None:
        return DEFAULT_READ_TIMEOUT
    timeout_s = float(value)
    if timeout_s <= 0:
        raise ValueError("read_timeout_s must be positive")
    return timeout_s
