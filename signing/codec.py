"""
Canonical (RLP) encoding of fee-market transactions.

Byte-level list/string framing is delegated to `rlp`; this module owns the
field layouts, the width contract of each field and the minimal big-endian
integer form shared by quantities and signature scalars.
"""

from __future__ import annotations

from typing import Iterable, List

import rlp
from rlp.exceptions import DecodingError, DeserializationError, SerializationError

from errors import EncodingError, InputError

from . import sedes
from .messages import (
    FEE_MARKET_TX_TYPE,
    UINT64_MAX,
    UINT256_MAX,
    AccessListEntry,
    SignedTransaction,
    UnsignedMessage,
)

QUANTITY_MAX_BYTES = 32

_QUANTITY_FIELDS = ("nonce", "max_priority_fee_per_gas", "max_fee_per_gas", "gas_limit", "value")


def encode_quantity(i: int) -> bytes:
    """
    Minimal big-endian bytes of a non-negative integer; zero is b"".
    """
    if isinstance(i, bool) or not isinstance(i, int):
        raise EncodingError(f"Quantity must be an int, got {type(i).__name__}")
    if i < 0 or i > UINT256_MAX:
        raise EncodingError("Quantity out of 256-bit range", {"value": i})
    if i == 0:
        return b""
    return i.to_bytes((i.bit_length() + 7) // 8, "big")


def decode_quantity(b: bytes) -> int:
    if len(b) > QUANTITY_MAX_BYTES:
        raise InputError("Quantity wider than 32 bytes", {"length": len(b)})
    if b[:1] == b"\x00":
        raise InputError("Quantity has a leading zero byte")
    return int.from_bytes(b, "big")


def _check_width(name: str, value: bytes, size: int) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != size:
        got = len(value) if isinstance(value, (bytes, bytearray)) else type(value).__name__
        raise EncodingError(f"{name} must be exactly {size} bytes", {"field": name, "got": got})


def _check_access_list(entries: Iterable[AccessListEntry]) -> None:
    for entry in entries:
        _check_width("access_list.address", entry.address, 20)
        for key in entry.storage_keys:
            _check_width("access_list.storage_key", key, 32)


def _check_message(msg: UnsignedMessage) -> None:
    if isinstance(msg.chain_id, bool) or not isinstance(msg.chain_id, int) or not 0 <= msg.chain_id <= UINT64_MAX:
        raise EncodingError("chain_id out of 64-bit range", {"field": "chain_id", "value": msg.chain_id})
    for name in _QUANTITY_FIELDS:
        encode_quantity(getattr(msg, name))
    _check_width("to", msg.to, 20)
    if not isinstance(msg.data, (bytes, bytearray)):
        raise EncodingError("data must be bytes", {"field": "data"})
    _check_access_list(msg.access_list)


def _encode(fields: List, layout) -> bytes:
    try:
        return rlp.encode(fields, sedes=layout)
    except SerializationError as e:
        raise EncodingError(f"RLP serialization failed: {e}") from e


def encode_unsigned(msg: UnsignedMessage) -> bytes:
    """
    RLP of the nine unsigned fields, without the type byte.
    """
    _check_message(msg)
    return _encode(msg.fields(), sedes.unsigned_fee_market_tx)


def encode_signed(tx: SignedTransaction) -> bytes:
    """
    Type-prefixed wire bytes of a signed transaction.
    """
    _check_message(tx.message)
    if tx.y_parity not in (0, 1):
        raise EncodingError("y_parity must be 0 or 1", {"field": "y_parity", "value": tx.y_parity})
    encode_quantity(tx.r)
    encode_quantity(tx.s)
    return bytes([FEE_MARKET_TX_TYPE]) + _encode(tx.fields(), sedes.signed_fee_market_tx)


def decode_signed(raw: bytes) -> SignedTransaction:
    """
    Parse type-prefixed wire bytes back into a SignedTransaction.
    """
    if not raw or raw[0] != FEE_MARKET_TX_TYPE:
        raise InputError("Not a fee-market (type 2) transaction")
    try:
        items = rlp.decode(raw[1:], sedes=sedes.signed_fee_market_tx)
    except (DecodingError, DeserializationError) as e:
        raise InputError(f"Malformed transaction payload: {e}") from e

    (chain_id, nonce, tip, fee_cap, gas, to, value, data, access_list, y_parity, r, s) = items
    if y_parity not in (0, 1):
        raise InputError("y_parity must be 0 or 1", {"value": y_parity})
    if chain_id > UINT64_MAX:
        raise InputError("chain_id out of 64-bit range", {"value": chain_id})
    for q in (nonce, tip, fee_cap, gas, value, r, s):
        if q > UINT256_MAX:
            raise InputError("Quantity out of 256-bit range", {"value": q})
    return SignedTransaction(
        chain_id=chain_id,
        nonce=nonce,
        max_priority_fee_per_gas=tip,
        max_fee_per_gas=fee_cap,
        gas_limit=gas,
        to=to,
        value=value,
        data=data,
        access_list=tuple(AccessListEntry(address=a, storage_keys=tuple(keys)) for a, keys in access_list),
        y_parity=bool(y_parity),
        r=r,
        s=s,
    )
