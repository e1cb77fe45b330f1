from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from errors import classify_exception
from observability import build_log_context, log_event

from .assembler import assemble
from .codec import encode_signed
from .digest import signing_digest, transaction_hash
from .local_key import sign_digest
from .messages import UnsignedMessage


def sign_transaction(
    msg: UnsignedMessage,
    private_key_bytes: bytes,
    *,
    ctx: Optional[Dict[str, Any]] = None,
) -> bytes:
    """
    Built -> Hashed -> Signed -> Assembled -> Encoded.

    Returns the type-prefixed wire bytes. Any failure aborts the whole run;
    nothing is returned for a partially completed pipeline.
    """
    ctx = ctx or build_log_context(tool="sign_transaction")
    stage = "hash"
    try:
        log_event("message_built", ctx=ctx, data=msg.to_dict())

        digest = signing_digest(msg)
        log_event("digest_computed", ctx=ctx, data={"digest": "0x" + digest.hex()})

        stage = "sign"
        sig = sign_digest(digest, private_key_bytes)
        log_event("transaction_signed", ctx=ctx, data={"y_parity": sig.v})

        stage = "encode"
        raw = encode_signed(assemble(msg, sig))
    except Exception as e:
        err = classify_exception(e)
        log_event(
            "pipeline_failed",
            ctx=ctx,
            data={"stage": stage, "error_code": err.code, "error": err.message},
            level=logging.ERROR,
        )
        if err is e or err.code == "unknown_error":
            raise
        raise err from e

    log_event(
        "transaction_encoded",
        ctx=ctx,
        data={"bytes": len(raw), "tx_hash": "0x" + transaction_hash(raw).hex()},
    )
    return raw


def to_hex(raw: bytes) -> str:
    return "0x" + raw.hex()
