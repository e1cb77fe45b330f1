from .assembler import assemble
from .codec import decode_quantity, decode_signed, encode_quantity, encode_signed, encode_unsigned
from .digest import signing_digest, transaction_hash
from .intents import NetworkProfile, TxIntent, build_access_list, build_unsigned_message
from .local_key import address_of, decode_private_key, private_key_scope, recover_sender, sign_digest
from .messages import FEE_MARKET_TX_TYPE, AccessListEntry, Signature, SignedTransaction, UnsignedMessage
from .pipeline import sign_transaction, to_hex

__all__ = [
    "FEE_MARKET_TX_TYPE",
    "AccessListEntry",
    "NetworkProfile",
    "Signature",
    "SignedTransaction",
    "TxIntent",
    "UnsignedMessage",
    "address_of",
    "assemble",
    "build_access_list",
    "build_unsigned_message",
    "decode_private_key",
    "decode_quantity",
    "decode_signed",
    "encode_quantity",
    "encode_signed",
    "encode_unsigned",
    "private_key_scope",
    "recover_sender",
    "sign_digest",
    "sign_transaction",
    "signing_digest",
    "to_hex",
    "transaction_hash",
]
