from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

# EIP-2718 type byte for EIP-1559 fee-market transactions.
FEE_MARKET_TX_TYPE = 0x02

UINT64_MAX = 2**64 - 1
UINT256_MAX = 2**256 - 1


@dataclass(frozen=True)
class AccessListEntry:
    address: bytes
    storage_keys: Tuple[bytes, ...] = ()

    def to_rlp(self) -> list:
        return [self.address, list(self.storage_keys)]


@dataclass(frozen=True)
class UnsignedMessage:
    """
    Fee-market transaction fields covered by the signature.

    `to` is always a 20-byte call target; contract creation is not supported.
    """

    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas_limit: int
    to: bytes
    value: int
    data: bytes = b""
    access_list: Tuple[AccessListEntry, ...] = field(default_factory=tuple)

    def fields(self) -> list:
        return [
            self.chain_id,
            self.nonce,
            self.max_priority_fee_per_gas,
            self.max_fee_per_gas,
            self.gas_limit,
            self.to,
            self.value,
            self.data,
            [entry.to_rlp() for entry in self.access_list],
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "nonce": self.nonce,
            "max_priority_fee_per_gas": self.max_priority_fee_per_gas,
            "max_fee_per_gas": self.max_fee_per_gas,
            "gas_limit": self.gas_limit,
            "to": "0x" + self.to.hex(),
            "value": self.value,
            "data_bytes": len(self.data),
            "access_list_entries": len(self.access_list),
        }


@dataclass(frozen=True)
class Signature:
    r: int
    s: int
    y_parity: bool

    @property
    def v(self) -> int:
        return 1 if self.y_parity else 0


@dataclass(frozen=True)
class SignedTransaction:
    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas_limit: int
    to: bytes
    value: int
    data: bytes
    access_list: Tuple[AccessListEntry, ...]
    y_parity: bool
    r: int
    s: int

    @property
    def message(self) -> UnsignedMessage:
        return UnsignedMessage(
            chain_id=self.chain_id,
            nonce=self.nonce,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
            max_fee_per_gas=self.max_fee_per_gas,
            gas_limit=self.gas_limit,
            to=self.to,
            value=self.value,
            data=self.data,
            access_list=self.access_list,
        )

    @property
    def signature(self) -> Signature:
        return Signature(r=self.r, s=self.s, y_parity=self.y_parity)

    def fields(self) -> list:
        return self.message.fields() + [int(self.y_parity), self.r, self.s]
