from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(eq=False)
class CipherError(ValueError):
    reason: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if not self.details:
            return self.reason
        extra = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.reason} ({extra})"


class InvalidKeyLengthError(CipherError):
    pass


class MisalignedInputError(CipherError):
    pass


class InvalidRoundCountError(CipherError):
    pass


class UnknownVariantError(CipherError):
    pass
