"""In-place TEA/XTEA encryption of caller-owned buffers.

The buffer is processed in 8-byte blocks with no padding, chaining or
framing; the output has the same length as the input. Every argument is
validated before the first block is touched, so a failing call leaves the
buffer exactly as it was.

By default ``size`` must be a multiple of 8. Passing ``allow_overrun=True``
enables an unsafe compatibility mode in which a trailing partial block is
rounded up to a full block and the bytes past ``size`` (up to 7 of them) are
encrypted as well. Those bytes must exist in the buffer's spare capacity.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .block import DEFAULT_ROUNDS, DEFAULT_VARIANT, get_transform
from .config import MAX_ROUNDS, CipherConfig
from .errors import InvalidRoundCountError, MisalignedInputError
from .words import BLOCK_SIZE, block_to_bytes, bytes_to_block, key_to_words


def _check_rounds(rounds: Any) -> None:
    if isinstance(rounds, bool) or not isinstance(rounds, int):
        raise InvalidRoundCountError(
            reason="round count must be an integer",
            details={"rounds": rounds},
        )
    if not (0 <= rounds <= MAX_ROUNDS):
        raise InvalidRoundCountError(
            reason=f"round count must be in range 0..{MAX_ROUNDS}",
            details={"rounds": rounds},
        )


def block_count(size: int, capacity: int, allow_overrun: bool = False) -> int:
    """Number of blocks a call over ``size`` bytes will transform."""
    if size < 0 or size > capacity:
        raise ValueError(f"size must be in range 0..{capacity}, got {size}")

    if size % BLOCK_SIZE == 0:
        return size // BLOCK_SIZE

    if not allow_overrun:
        raise MisalignedInputError(
            reason="data length must be a multiple of 8 bytes",
            details={"size": size, "capacity": capacity},
        )

    n_blocks = size // BLOCK_SIZE + 1
    if n_blocks * BLOCK_SIZE > capacity:
        raise MisalignedInputError(
            reason="buffer capacity cannot absorb the trailing block overrun",
            details={"size": size, "capacity": capacity, "required": n_blocks * BLOCK_SIZE},
        )
    return n_blocks


def _writable_view(data: Any) -> memoryview:
    view = memoryview(data)
    if view.readonly:
        raise TypeError("data must be a writable buffer such as bytearray")
    return view.cast("B")


def _apply(
    data: Any,
    key: bytes,
    rounds: int,
    variant: str,
    byteorder: str,
    size: Optional[int],
    allow_overrun: bool,
    decipher: bool,
) -> None:
    key_words: Sequence[int] = key_to_words(key, byteorder)
    _check_rounds(rounds)
    transform = get_transform(variant)

    view = _writable_view(data)
    if size is None:
        size = len(view)
    n_blocks = block_count(size, len(view), allow_overrun)

    step = transform.decipher_block if decipher else transform.encipher_block
    for i in range(n_blocks):
        offset = BLOCK_SIZE * i
        v0, v1 = bytes_to_block(view[offset : offset + BLOCK_SIZE], byteorder)
        v0, v1 = step(v0, v1, key_words, rounds)
        view[offset : offset + BLOCK_SIZE] = block_to_bytes(v0, v1, byteorder)


def encrypt(
    data: Any,
    key: bytes,
    rounds: int = DEFAULT_ROUNDS,
    *,
    variant: str = DEFAULT_VARIANT,
    byteorder: str = "little",
    size: Optional[int] = None,
    allow_overrun: bool = False,
) -> None:
    """Encrypt ``data`` in place.

    Args:
        data: Writable buffer (``bytearray``, writable ``memoryview``...).
        key: Exactly 16 bytes.
        rounds: Round count, must match the one used to decrypt.
        variant: ``"tea"`` or ``"xtea"``.
        byteorder: How each 4-byte group maps to a 32-bit word.
        size: Number of bytes to process, defaults to ``len(data)``.
        allow_overrun: Unsafe compatibility mode, see module docstring.

    Raises:
        InvalidKeyLengthError, InvalidRoundCountError, MisalignedInputError,
        UnknownVariantError, ValueError, TypeError.
    """
    _apply(data, key, rounds, variant, byteorder, size, allow_overrun, decipher=False)


def decrypt(
    data: Any,
    key: bytes,
    rounds: int = DEFAULT_ROUNDS,
    *,
    variant: str = DEFAULT_VARIANT,
    byteorder: str = "little",
    size: Optional[int] = None,
    allow_overrun: bool = False,
) -> None:
    """Decrypt ``data`` in place; exact inverse of :func:`encrypt`."""
    _apply(data, key, rounds, variant, byteorder, size, allow_overrun, decipher=True)


def encrypt_bytes(data: bytes, key: bytes, rounds: int = DEFAULT_ROUNDS, **options: Any) -> bytes:
    buf = bytearray(data)
    encrypt(buf, key, rounds, **options)
    return bytes(buf)


def decrypt_bytes(data: bytes, key: bytes, rounds: int = DEFAULT_ROUNDS, **options: Any) -> bytes:
    buf = bytearray(data)
    decrypt(buf, key, rounds, **options)
    return bytes(buf)


class Cipher:
    """A key bound to a :class:`CipherConfig`."""

    def __init__(self, key: bytes, config: Optional[CipherConfig] = None) -> None:
        key_to_words(key)
        self.key = bytes(key)
        self.config = config if config is not None else CipherConfig()
        _check_rounds(self.config.rounds)

    def _options(self) -> dict:
        return {
            "variant": self.config.variant,
            "byteorder": self.config.byteorder,
            "allow_overrun": self.config.allow_overrun,
        }

    def encrypt(self, data: Any, size: Optional[int] = None) -> None:
        encrypt(data, self.key, self.config.rounds, size=size, **self._options())

    def decrypt(self, data: Any, size: Optional[int] = None) -> None:
        decrypt(data, self.key, self.config.rounds, size=size, **self._options())

    def encrypt_bytes(self, data: bytes) -> bytes:
        return encrypt_bytes(data, self.key, self.config.rounds, **self._options())

    def decrypt_bytes(self, data: bytes) -> bytes:
        return decrypt_bytes(data, self.key, self.config.rounds, **self._options())
