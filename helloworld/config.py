"""Solana CLI config resolution with local fallbacks."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Optional, TypeVar, Union

from .constants import CLI_CONFIG_ENV_VARS, CLI_CONFIG_RELPATH, CLUSTER_URLS, DEFAULT_RPC_URL

T = TypeVar("T")


@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T
    source: str


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: str


Resolution = Union[Loaded[T], Fallback[T]]


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def cli_config_path() -> Path:
    for name in CLI_CONFIG_ENV_VARS:
        path = os.environ.get(name)
        if path:
            return Path(path).expanduser()
    return Path.home() / CLI_CONFIG_RELPATH


def load_solana_cli_config(path: str | Path | None = None) -> dict[str, str]:
    cfg_path = Path(path).expanduser() if path is not None else cli_config_path()
    try:
        text = cfg_path.read_text()
    except (OSError, UnicodeDecodeError):
        return {}
    cfg: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or line == "---":
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        value = value.strip().strip("\"'")
        if key:
            cfg[key] = value
    return cfg


def resolve_rpc_url(
    config: dict[str, str],
    override: Optional[str] = None,
    cluster: Optional[str] = None,
    config_path: str | Path | None = None,
) -> Resolution[str]:
    if override:
        return Loaded(override, "command line")
    if cluster:
        url = CLUSTER_URLS.get(cluster.strip().lower())
        if url is None:
            raise ValueError(f"unknown cluster '{cluster}' (expected {'|'.join(CLUSTER_URLS)})")
        return Loaded(url, f"cluster {cluster}")
    url = config.get("json_rpc_url")
    if url:
        source = Path(config_path).expanduser() if config_path is not None else cli_config_path()
        return Loaded(url, str(source))
    warn("Failed to read RPC url from CLI config file, falling back to localhost")
    return Fallback(DEFAULT_RPC_URL, "json_rpc_url missing from CLI config")
