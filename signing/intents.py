from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from eth_utils import decode_hex

from errors import InputError

from .messages import UINT64_MAX, UINT256_MAX, AccessListEntry, UnsignedMessage

HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class NetworkProfile:
    """
    Per-network values supplied once per run: chain id and fee caps.
    """

    chain_id: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int


@dataclass(frozen=True)
class TxIntent:
    """
    What the caller wants to send. This is a *description* of what will be
    signed; it is not the signed transaction.
    """

    nonce: int
    to: bytes
    value: int
    gas_limit: int
    data: bytes = b""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "to": "0x" + self.to.hex(),
            "value": self.value,
            "gas_limit": self.gas_limit,
            "data_hex": "0x" + self.data.hex(),
        }


def to_quantity(v: Any, *, name: str) -> int:
    """
    JSON integers are taken as-is; strings are hex digits with an optional 0x prefix.
    """
    if v is None:
        raise InputError(f"Missing required field: {name}", {"field": name})
    if isinstance(v, bool):
        raise InputError(f"Invalid quantity field {name}: {v}", {"field": name})
    if isinstance(v, int):
        q = v
    elif isinstance(v, str):
        s = v.strip()
        if s[:2].lower() == "0x":
            s = s[2:]
        # int() would also take a second prefix, underscores and signs
        if not HEX_DIGITS.fullmatch(s):
            raise InputError(f"Invalid hex quantity for {name}: {v!r}", {"field": name})
        q = int(s, 16)
    else:
        raise InputError(f"Invalid quantity field {name}: {type(v).__name__}", {"field": name})
    if q < 0 or q > UINT256_MAX:
        raise InputError(f"Quantity {name} out of 256-bit range", {"field": name, "value": q})
    return q


def to_hex_bytes(v: Any, *, name: str) -> bytes:
    """
    Hex string with optional 0x prefix; None and "" both mean no bytes.
    """
    if v is None:
        return b""
    if isinstance(v, (bytes, bytearray)):
        return bytes(v)
    if not isinstance(v, str):
        raise InputError(f"Invalid bytes field {name}: {type(v).__name__}", {"field": name})
    try:
        return decode_hex(v.strip())
    except ValueError as e:
        raise InputError(f"Invalid hex for {name}: {e}", {"field": name}) from e


def to_address(v: Any, *, name: str = "to") -> bytes:
    if v is None or v == "":
        raise InputError(f"Missing required field: {name}", {"field": name})
    b = to_hex_bytes(v, name=name)
    if len(b) != 20:
        raise InputError(f"{name} must be 20 bytes", {"field": name, "length": len(b)})
    return b


def build_access_list(entries: Iterable[Tuple[Any, Iterable[Any]]] | None) -> Tuple[AccessListEntry, ...]:
    out = []
    for addr, storage_keys in entries or ():
        keys_b = []
        for k in storage_keys:
            kb = to_hex_bytes(k, name="access_list.storage_key")
            if len(kb) != 32:
                raise InputError("storage key must be 32 bytes", {"length": len(kb)})
            keys_b.append(kb)
        out.append(AccessListEntry(address=to_address(addr, name="access_list.address"), storage_keys=tuple(keys_b)))
    return tuple(out)


def build_unsigned_message(
    profile: NetworkProfile,
    intent: TxIntent,
    *,
    access_list: Optional[Tuple[AccessListEntry, ...]] = None,
) -> UnsignedMessage:
    """
    Assemble validated profile and intent values into an immutable UnsignedMessage.
    """
    if isinstance(profile.chain_id, bool) or not isinstance(profile.chain_id, int):
        raise InputError("chain_id must be an integer", {"field": "chain_id"})
    if not 0 <= profile.chain_id <= UINT64_MAX:
        raise InputError("chain_id out of 64-bit range", {"field": "chain_id", "value": profile.chain_id})

    return UnsignedMessage(
        chain_id=profile.chain_id,
        nonce=to_quantity(intent.nonce, name="nonce"),
        max_priority_fee_per_gas=to_quantity(profile.max_priority_fee_per_gas, name="max_priority_fee_per_gas"),
        max_fee_per_gas=to_quantity(profile.max_fee_per_gas, name="max_fee_per_gas"),
        gas_limit=to_quantity(intent.gas_limit, name="gas_limit"),
        to=to_address(intent.to),
        value=to_quantity(intent.value, name="value"),
        data=to_hex_bytes(intent.data, name="data"),
        access_list=tuple(access_list or ()),
    )
