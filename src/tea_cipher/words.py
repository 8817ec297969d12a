from __future__ import annotations

import struct
from typing import Tuple

from .errors import InvalidKeyLengthError

BLOCK_SIZE = 8
KEY_SIZE = 16

_PREFIX = {
    "little": "<",
    "big": ">",
}


def _struct_prefix(byteorder: str) -> str:
    try:
        return _PREFIX[byteorder]
    except KeyError:
        raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}") from None


def key_to_words(key: bytes, byteorder: str = "little") -> Tuple[int, int, int, int]:
    if len(key) != KEY_SIZE:
        raise InvalidKeyLengthError(
            reason="key must be exactly 16 bytes",
            details={"length": len(key)},
        )
    return struct.unpack(_struct_prefix(byteorder) + "4I", bytes(key))


def bytes_to_block(block8: bytes, byteorder: str = "little") -> Tuple[int, int]:
    if len(block8) != BLOCK_SIZE:
        raise ValueError("block must be 8 bytes")
    return struct.unpack(_struct_prefix(byteorder) + "2I", bytes(block8))


def block_to_bytes(v0: int, v1: int, byteorder: str = "little") -> bytes:
    return struct.pack(_struct_prefix(byteorder) + "2I", v0, v1)
