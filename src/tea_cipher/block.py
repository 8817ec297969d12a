"""Round functions for the TEA and XTEA block structures.

Both structures work on a block of two 32-bit words and a key of four 32-bit
words. They expose the same two operations, so the buffer layer can pick one
by name without caring which is active. Ciphertext from one structure can
only be deciphered by the same structure.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .errors import UnknownVariantError

DELTA = 0x9E3779B9
_MASK32 = 0xFFFFFFFF

DEFAULT_ROUNDS = 32
DEFAULT_VARIANT = "tea"

Block = Tuple[int, int]


class TeaTransform:
    name = "tea"

    def encipher_block(self, v0: int, v1: int, key: Sequence[int], rounds: int) -> Block:
        k0, k1, k2, k3 = (k & _MASK32 for k in key)
        v0 &= _MASK32
        v1 &= _MASK32

        summation = 0
        for _ in range(rounds):
            summation = (summation + DELTA) & _MASK32
            v0 = (v0 + ((((v1 << 4) + k0) ^ (v1 + summation) ^ ((v1 >> 5) + k1)) & _MASK32)) & _MASK32
            v1 = (v1 + ((((v0 << 4) + k2) ^ (v0 + summation) ^ ((v0 >> 5) + k3)) & _MASK32)) & _MASK32
        return v0, v1

    def decipher_block(self, v0: int, v1: int, key: Sequence[int], rounds: int) -> Block:
        k0, k1, k2, k3 = (k & _MASK32 for k in key)
        v0 &= _MASK32
        v1 &= _MASK32

        # v1 was written last on the way in, so it is restored first.
        summation = (DELTA * rounds) & _MASK32
        for _ in range(rounds):
            v1 = (v1 - ((((v0 << 4) + k2) ^ (v0 + summation) ^ ((v0 >> 5) + k3)) & _MASK32)) & _MASK32
            v0 = (v0 - ((((v1 << 4) + k0) ^ (v1 + summation) ^ ((v1 >> 5) + k1)) & _MASK32)) & _MASK32
            summation = (summation - DELTA) & _MASK32
        return v0, v1


class XteaTransform:
    name = "xtea"

    def encipher_block(self, v0: int, v1: int, key: Sequence[int], rounds: int) -> Block:
        key_words = tuple(k & _MASK32 for k in key)
        v0 &= _MASK32
        v1 &= _MASK32

        summation = 0
        for _ in range(rounds):
            v0 = (v0 + ((((v1 << 4) ^ (v1 >> 5)) + v1) ^ (summation + key_words[summation & 3]))) & _MASK32
            summation = (summation + DELTA) & _MASK32
            v1 = (v1 + ((((v0 << 4) ^ (v0 >> 5)) + v0) ^ (summation + key_words[(summation >> 11) & 3]))) & _MASK32
        return v0, v1

    def decipher_block(self, v0: int, v1: int, key: Sequence[int], rounds: int) -> Block:
        key_words = tuple(k & _MASK32 for k in key)
        v0 &= _MASK32
        v1 &= _MASK32

        summation = (DELTA * rounds) & _MASK32
        for _ in range(rounds):
            v1 = (v1 - ((((v0 << 4) ^ (v0 >> 5)) + v0) ^ (summation + key_words[(summation >> 11) & 3]))) & _MASK32
            summation = (summation - DELTA) & _MASK32
            v0 = (v0 - ((((v1 << 4) ^ (v1 >> 5)) + v1) ^ (summation + key_words[summation & 3]))) & _MASK32
        return v0, v1


_TRANSFORMS: Dict[str, object] = {
    TeaTransform.name: TeaTransform(),
    XteaTransform.name: XteaTransform(),
}

VARIANTS = tuple(_TRANSFORMS)


def get_transform(variant: str):
    transform = _TRANSFORMS.get(variant)
    if transform is None:
        raise UnknownVariantError(
            reason="unknown cipher variant",
            details={"variant": variant, "expected": list(VARIANTS)},
        )
    return transform


def encipher_block(
    block: Sequence[int],
    key: Sequence[int],
    rounds: int = DEFAULT_ROUNDS,
    variant: str = DEFAULT_VARIANT,
) -> Block:
    """Encipher one block of two 32-bit words.

    Never fails for any word values; arithmetic wraps modulo 2**32.
    ``rounds=0`` returns the block unchanged.
    """
    v0, v1 = block
    return get_transform(variant).encipher_block(v0, v1, key, rounds)


def decipher_block(
    block: Sequence[int],
    key: Sequence[int],
    rounds: int = DEFAULT_ROUNDS,
    variant: str = DEFAULT_VARIANT,
) -> Block:
    """Inverse of :func:`encipher_block` for the same key, rounds and variant."""
    v0, v1 = block
    return get_transform(variant).decipher_block(v0, v1, key, rounds)
