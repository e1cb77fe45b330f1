import pytest

from app.core.settings import Settings, SettingsValidationError
from errors import InputError, KeyLengthError

ENV = {
    "CHAIN_ID": "11155111",
    "MAX_FEE_PER_GAS": "0x77359400",
    "MAX_PRIORITY_FEE_PER_GAS": "0x3b9aca00",
    "PRIVATE_KEY": "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
}


@pytest.fixture
def env(monkeypatch):
    for k in ENV:
        monkeypatch.delenv(k, raising=False)
    monkeypatch.delenv("TXSIGNER_LOG_LEVEL", raising=False)

    def _set(**overrides):
        values = {**ENV, **overrides}
        for k, v in values.items():
            if v is None:
                monkeypatch.delenv(k, raising=False)
            else:
                monkeypatch.setenv(k, v)

    return _set


def test_settings_loads_network_profile(env):
    env()
    s = Settings()
    profile = s.network_profile
    assert profile.chain_id == 11155111
    assert profile.max_fee_per_gas == 2_000_000_000
    assert profile.max_priority_fee_per_gas == 1_000_000_000
    assert profile.max_fee_per_gas > profile.max_priority_fee_per_gas


def test_settings_fee_strings_are_hex_with_optional_prefix(env):
    env(MAX_FEE_PER_GAS="1dcd65000", MAX_PRIORITY_FEE_PER_GAS="0x77359400")
    s = Settings()
    assert s.max_fee_per_gas == 0x1DCD65000
    assert s.max_priority_fee_per_gas == 0x77359400


def test_settings_zero_fees_are_allowed(env):
    env(CHAIN_ID="31337", MAX_FEE_PER_GAS="0x0", MAX_PRIORITY_FEE_PER_GAS="0")
    s = Settings()
    assert s.chain_id == 31337
    assert s.max_fee_per_gas == 0
    assert s.max_priority_fee_per_gas == 0


def test_settings_missing_private_key(env):
    env(PRIVATE_KEY=None)
    with pytest.raises(SettingsValidationError) as e:
        Settings()
    assert isinstance(e.value, InputError)
    assert "PRIVATE_KEY" in str(e.value)


def test_settings_reports_every_problem(env):
    env(CHAIN_ID="mainnet", MAX_FEE_PER_GAS="0xinvalid", MAX_PRIORITY_FEE_PER_GAS=None)
    with pytest.raises(SettingsValidationError) as e:
        Settings()
    msg = str(e.value)
    assert "CHAIN_ID" in msg
    assert "MAX_FEE_PER_GAS" in msg
    assert "MAX_PRIORITY_FEE_PER_GAS environment variable not set" in msg


def test_settings_rejects_chain_id_over_64_bits(env):
    env(CHAIN_ID=str(2**64))
    with pytest.raises(SettingsValidationError):
        Settings()


@pytest.mark.parametrize("chain_id", ["0x0x1", "1_0", "0b1", "0o7", "+1", "-1", "0x"])
def test_settings_rejects_loose_chain_id_syntax(env, chain_id):
    env(CHAIN_ID=chain_id)
    with pytest.raises(SettingsValidationError) as e:
        Settings()
    assert "CHAIN_ID" in e.value.message


@pytest.mark.parametrize("chain_id, expected", [("1", 1), ("0x1", 1), ("0XaA36A7", 11155111), ("010", 10)])
def test_settings_chain_id_decimal_or_prefixed_hex(env, chain_id, expected):
    env(CHAIN_ID=chain_id)
    assert Settings().chain_id == expected


def test_settings_rejects_loose_fee_syntax(env):
    env(MAX_FEE_PER_GAS="0x0x1", MAX_PRIORITY_FEE_PER_GAS="1_0")
    with pytest.raises(SettingsValidationError) as e:
        Settings()
    assert "MAX_FEE_PER_GAS" in e.value.message
    assert "MAX_PRIORITY_FEE_PER_GAS" in e.value.message


def test_settings_private_key_bytes(env):
    env(PRIVATE_KEY="0x" + ENV["PRIVATE_KEY"])
    key = Settings().private_key_bytes()
    assert len(key) == 32
    assert key[0] == 0xAC
    assert key[31] == 0x80


def test_settings_private_key_wrong_length(env):
    env(PRIVATE_KEY=ENV["PRIVATE_KEY"][:-2])
    s = Settings()
    with pytest.raises(KeyLengthError) as e:
        s.private_key_bytes()
    assert e.value.length == 31


def test_settings_never_expose_private_key(env):
    env()
    s = Settings()
    assert ENV["PRIVATE_KEY"] not in repr(s)
    d = s.to_dict()
    assert d["PRIVATE_KEY"] == "***REDACTED***"
    assert d["CHAIN_ID"] == "11155111"
    assert d["VERSION"] == "0.1.0"
