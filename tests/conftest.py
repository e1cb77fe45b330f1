import logging
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from signing import UnsignedMessage
from signing.local_key import decode_private_key

# Well-known development key (hardhat / anvil account #0)
DEV_PRIVATE_KEY_HEX = "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = bytes.fromhex("f39fd6e51aad88f6f4ce6ab8827279cfffb92266")

ZERO_ADDRESS = b"\x00" * 20


@pytest.fixture
def private_key_bytes():
    return decode_private_key(DEV_PRIVATE_KEY_HEX)

@pytest.fixture
def mainnet_transfer():
    return UnsignedMessage(
        chain_id=1,
        nonce=0,
        max_priority_fee_per_gas=1_000_000_000,
        max_fee_per_gas=2_000_000_000,
        gas_limit=21000,
        to=ZERO_ADDRESS,
        value=0,
        data=b"",
    )

def _reset_logger():
    logger = logging.getLogger("txsigner")
    for h in list(logger.handlers):
        if not type(h).__module__.startswith("_pytest"):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)

@pytest.fixture(autouse=True)
def _reset_txsigner_logger():
    _reset_logger()
    yield
    _reset_logger()

@pytest.fixture
def dev_address():
    return DEV_ADDRESS

@pytest.fixture
def dev_private_key_hex():
    return DEV_PRIVATE_KEY_HEX
