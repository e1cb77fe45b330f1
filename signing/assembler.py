from __future__ import annotations

from .messages import Signature, SignedTransaction, UnsignedMessage


def assemble(msg: UnsignedMessage, sig: Signature) -> SignedTransaction:
    return SignedTransaction(
        chain_id=msg.chain_id,
        nonce=msg.nonce,
        max_priority_fee_per_gas=msg.max_priority_fee_per_gas,
        max_fee_per_gas=msg.max_fee_per_gas,
        gas_limit=msg.gas_limit,
        to=msg.to,
        value=msg.value,
        data=msg.data,
        access_list=msg.access_list,
        y_parity=sig.y_parity,
        r=sig.r,
        s=sig.s,
    )
