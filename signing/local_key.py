from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import decode_hex

from errors import InputError, KeyLengthError, SigningError

from .messages import Signature

SECP256K1_N = int(
    "0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141",
    16,
)
SECP256K1_HALF_N = SECP256K1_N // 2

PRIVATE_KEY_BYTES = 32


def decode_private_key(private_key_hex: str) -> bytes:
    """
    Decode a hex private key, with or without a 0x prefix, into 32 raw bytes.
    """
    s = (private_key_hex or "").strip()
    try:
        raw = decode_hex(s)
    except (ValueError, TypeError) as e:
        raise InputError(f"Private key is not valid hex: {e}") from e
    if len(raw) != PRIVATE_KEY_BYTES:
        raise KeyLengthError(len(raw))
    return raw


@contextmanager
def private_key_scope(private_key_bytes: bytes) -> Iterator[keys.PrivateKey]:
    """
    Yield a PrivateKey for the duration of one signing call.

    The mutable copy of the secret is zeroed on exit, including on failure.
    """
    buf = bytearray(private_key_bytes)
    try:
        if len(buf) != PRIVATE_KEY_BYTES:
            raise KeyLengthError(len(buf))
        secret = int.from_bytes(buf, "big")
        if not 0 < secret < SECP256K1_N:
            raise SigningError("Private key scalar is outside the secp256k1 group order range")
        del secret
        yield keys.PrivateKey(bytes(buf))
    finally:
        for i in range(len(buf)):
            buf[i] = 0


def _normalize_sig(r: int, s: int, y_parity: int) -> Tuple[int, int, int]:
    if r <= 0 or r >= SECP256K1_N:
        raise SigningError("invalid r")
    if s <= 0 or s >= SECP256K1_N:
        raise SigningError("invalid s")
    if s > SECP256K1_HALF_N:
        # negating s mirrors R across the x-axis, which flips its parity
        s = SECP256K1_N - s
        y_parity ^= 1
    return r, s, y_parity


def sign_digest(digest: bytes, private_key_bytes: bytes) -> Signature:
    """
    Deterministic (RFC 6979) recoverable ECDSA signature over an already hashed digest.
    """
    if len(digest) != 32:
        raise SigningError("Digest must be exactly 32 bytes", {"length": len(digest)})

    with private_key_scope(private_key_bytes) as pk:
        try:
            raw_sig = pk.sign_msg_hash(digest)
        except (ValidationError, BadSignature) as e:
            raise SigningError(f"ECDSA signing failed: {e}") from e
        r, s, y_parity = _normalize_sig(raw_sig.r, raw_sig.s, raw_sig.v)
        sig = Signature(r=r, s=s, y_parity=bool(y_parity))

        if recover_public_key(digest, sig) != pk.public_key:
            raise SigningError("could not determine recovery id (public key mismatch)")
    return sig


def recover_public_key(digest: bytes, sig: Signature) -> keys.PublicKey:
    try:
        return keys.Signature(vrs=(sig.v, sig.r, sig.s)).recover_public_key_from_msg_hash(digest)
    except (ValidationError, BadSignature) as e:
        raise SigningError(f"Public key recovery failed: {e}") from e


def recover_sender(digest: bytes, sig: Signature) -> bytes:
    """
    20-byte address of the key that produced `sig` over `digest`.
    """
    return recover_public_key(digest, sig).to_canonical_address()


def address_of(private_key_bytes: bytes) -> bytes:
    with private_key_scope(private_key_bytes) as pk:
        return pk.public_key.to_canonical_address()
