from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class TxSignerError(Exception):
    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InputError(TxSignerError):
    """
    Network profile, signing key or intent fields could not be parsed.
    """

    def __init__(self, message: str, data: Dict[str, Any] | None = None) -> None:
        super().__init__("invalid_input", message, dict(data or {}))


class KeyLengthError(InputError):
    def __init__(self, length: int) -> None:
        super().__init__(f"Invalid private key length (expected: 32, input: {length}).", {"length": length})
        self.code = "invalid_private_key_length"

    @property
    def length(self) -> int:
        return int(self.data["length"])


class SigningError(TxSignerError):
    def __init__(self, message: str, data: Dict[str, Any] | None = None) -> None:
        super().__init__("signing_failed", message, dict(data or {}))


class EncodingError(TxSignerError):
    """
    A field exceeded its declared width. Builders validate their inputs, so this
    signals a defect rather than bad user input.
    """

    def __init__(self, message: str, data: Dict[str, Any] | None = None) -> None:
        super().__init__("encoding_contract_violation", message, dict(data or {}))


def classify_exception(e: Exception) -> TxSignerError:
    """
    Map library exceptions into stable error codes.
    """
    if isinstance(e, TxSignerError):
        return e
    # rlp / eth_keys validation errors surface as encoding or signing failures
    mod = type(e).__module__ or ""
    if mod.startswith("rlp"):
        return EncodingError(str(e))
    if mod.startswith("eth_keys"):
        return SigningError(str(e))
    return TxSignerError("unknown_error", str(e), {})
