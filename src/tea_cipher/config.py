from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .block import DEFAULT_ROUNDS

MAX_ROUNDS = 0xFFFFFFFF
BYTEORDERS = ("little", "big")


@dataclass
class CipherConfig:
    use_tea: bool = True
    rounds: int = DEFAULT_ROUNDS
    byteorder: str = "little"
    allow_overrun: bool = False
    key: Optional[bytes] = None

    @property
    def variant(self) -> str:
        return "tea" if self.use_tea else "xtea"


def parse_hex_key(hex_value: Optional[str], field: str) -> Optional[bytes]:
    if hex_value is None:
        return None
    if not isinstance(hex_value, str):
        raise ValueError(f"{field} must be null or hex string")
    if len(hex_value) != 32:
        raise ValueError(f"{field} must be exactly 32 hex characters")
    try:
        key = bytes.fromhex(hex_value)
    except ValueError as exc:
        raise ValueError(f"{field} must be valid hex") from exc
    if len(key) != 16:
        raise ValueError(f"{field} must decode to 16 bytes")
    return key


def load_config(path: str | Path) -> CipherConfig:
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ValueError(f"config file not found: {cfg_path}")

    try:
        raw = json.loads(cfg_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError("config root must be an object")

    use_tea = raw.get("use_tea", True)
    rounds = raw.get("rounds", DEFAULT_ROUNDS)
    byteorder = raw.get("byteorder", "little")
    allow_overrun = raw.get("allow_overrun", False)

    if not isinstance(use_tea, bool):
        raise ValueError("use_tea must be boolean")
    # bool is an int subclass; reject it explicitly
    if isinstance(rounds, bool) or not isinstance(rounds, int) or not (0 <= rounds <= MAX_ROUNDS):
        raise ValueError(f"rounds must be an integer in range 0..{MAX_ROUNDS}")
    if byteorder not in BYTEORDERS:
        raise ValueError("byteorder must be 'little' or 'big'")
    if not isinstance(allow_overrun, bool):
        raise ValueError("allow_overrun must be boolean")

    key = parse_hex_key(raw.get("key_hex"), "key_hex")

    return CipherConfig(
        use_tea=use_tea,
        rounds=rounds,
        byteorder=byteorder,
        allow_overrun=allow_overrun,
        key=key,
    )
