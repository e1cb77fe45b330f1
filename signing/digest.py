from __future__ import annotations

from eth_utils import keccak

from .codec import encode_unsigned
from .messages import FEE_MARKET_TX_TYPE, UnsignedMessage


def signing_payload(msg: UnsignedMessage) -> bytes:
    return bytes([FEE_MARKET_TX_TYPE]) + encode_unsigned(msg)


def signing_digest(msg: UnsignedMessage) -> bytes:
    """
    keccak256(0x02 || rlp(unsigned fields)). Signature fields never take part.
    """
    return keccak(signing_payload(msg))


def transaction_hash(raw_signed_tx: bytes) -> bytes:
    """
    Network transaction id of the final wire bytes.
    """
    return keccak(raw_signed_tx)
