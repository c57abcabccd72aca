"""Keypair file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from solders.keypair import Keypair

from .config import Fallback, Loaded, Resolution, warn
from .constants import KEYPAIR_BYTES


def read_keypair_file(path: str | Path) -> Keypair:
    """Load a keypair written by ``solana-keygen`` (a JSON array of 64 bytes)."""
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Keypair file not found: {path}")
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Keypair file is not valid JSON: {path}") from exc
    if not isinstance(raw, list) or len(raw) != KEYPAIR_BYTES:
        raise ValueError(f"Keypair file must hold a JSON array of {KEYPAIR_BYTES} bytes: {path}")
    if not all(isinstance(b, int) and 0 <= b <= 0xFF for b in raw):
        raise ValueError(f"Keypair file contains values outside 0..255: {path}")
    try:
        return Keypair.from_bytes(bytes(raw))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Keypair file does not hold a valid ed25519 keypair: {path}") from exc


def resolve_payer(config: dict[str, str], override: Optional[str] = None) -> Resolution[Keypair]:
    keypair_path = override or config.get("keypair_path")
    if not keypair_path:
        reason = "keypair_path missing from CLI config"
    else:
        try:
            return Loaded(read_keypair_file(keypair_path), keypair_path)
        except (OSError, ValueError) as exc:
            reason = str(exc)
    warn("Failed to read keypair from CLI config file, falling back to new random keypair")
    return Fallback(Keypair(), reason)
