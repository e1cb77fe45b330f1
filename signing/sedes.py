from rlp.sedes import (
    Binary,
    CountableList,
    List,
    big_endian_int,
    binary,
)

address = Binary.fixed_length(20)
hash32 = Binary.fixed_length(32)

access_list = CountableList(List([address, CountableList(hash32)]))

# chain_id, nonce, max_priority_fee_per_gas, max_fee_per_gas, gas_limit, to, value, data, access_list
_UNSIGNED_FIELDS = [
    big_endian_int,
    big_endian_int,
    big_endian_int,
    big_endian_int,
    big_endian_int,
    address,
    big_endian_int,
    binary,
    access_list,
]

unsigned_fee_market_tx = List(_UNSIGNED_FIELDS)

# unsigned layout followed by y_parity, r, s
signed_fee_market_tx = List(_UNSIGNED_FIELDS + [big_endian_int, big_endian_int, big_endian_int])
