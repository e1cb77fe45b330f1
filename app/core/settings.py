"""
txsigner settings

Network profile and signing key are read from the process environment (a
`.env` file in the working directory is loaded first). Every value is checked
at instantiation time, so a misconfigured run fails before anything is signed.

Usage:
    from app.core.settings import Settings

    settings = Settings()
    profile = settings.network_profile
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from errors import InputError
from signing.intents import HEX_DIGITS, NetworkProfile, to_quantity
from signing.local_key import decode_private_key
from signing.messages import UINT64_MAX

# Load environment variables from .env file
load_dotenv()


class SettingsValidationError(InputError):
    """Raised when settings validation fails."""

    def __init__(self, field: str, value: Any, message: str):
        super().__init__(f"Invalid configuration for {field}={value!r}: {message}", {"field": field})
        self.field = field
        self.value = value


def _env(name: str) -> str | None:
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def _parse_chain_id(value: str) -> int:
    """Decimal, or hex with 0x prefix."""
    if value.isascii() and value.isdigit():
        chain_id = int(value, 10)
    elif value[:2].lower() == "0x" and HEX_DIGITS.fullmatch(value[2:]):
        chain_id = int(value[2:], 16)
    else:
        raise ValueError("chain id must be decimal digits or 0x-prefixed hex")
    if not 0 <= chain_id <= UINT64_MAX:
        raise ValueError("chain id must fit in 64 bits")
    return chain_id


def get_version_from_pyproject() -> str:
    """Extract version from pyproject.toml."""
    try:
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        version: str = str(data.get("project", {}).get("version", "0.0.0"))
        return version
    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"


@dataclass
class Settings:
    """
    Environment-backed settings with validation.

    Fee values follow the parameter-file convention: hex digits with an
    optional 0x prefix.
    """

    PROJECT_NAME: str = "txsigner"
    VERSION: str = field(default_factory=get_version_from_pyproject)

    CHAIN_ID: str | None = field(default_factory=lambda: _env("CHAIN_ID"))
    MAX_FEE_PER_GAS: str | None = field(default_factory=lambda: _env("MAX_FEE_PER_GAS"))
    MAX_PRIORITY_FEE_PER_GAS: str | None = field(default_factory=lambda: _env("MAX_PRIORITY_FEE_PER_GAS"))
    PRIVATE_KEY: str | None = field(default_factory=lambda: _env("PRIVATE_KEY"), repr=False)

    TXSIGNER_LOG_LEVEL: str = field(default_factory=lambda: (_env("TXSIGNER_LOG_LEVEL") or "warning").lower())

    chain_id: int = field(init=False, default=0)
    max_fee_per_gas: int = field(init=False, default=0)
    max_priority_fee_per_gas: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        errors: list[str] = []

        if self.CHAIN_ID is None:
            errors.append("CHAIN_ID environment variable not set")
        else:
            try:
                self.chain_id = _parse_chain_id(self.CHAIN_ID)
            except ValueError as e:
                errors.append(f"CHAIN_ID={self.CHAIN_ID!r}: {e}")

        for name, attr in (
            ("MAX_FEE_PER_GAS", "max_fee_per_gas"),
            ("MAX_PRIORITY_FEE_PER_GAS", "max_priority_fee_per_gas"),
        ):
            raw = getattr(self, name)
            if raw is None:
                errors.append(f"{name} environment variable not set")
                continue
            try:
                setattr(self, attr, to_quantity(raw, name=name))
            except InputError as e:
                errors.append(e.message)

        if not self.PRIVATE_KEY:
            errors.append("PRIVATE_KEY environment variable not set")

        if self.TXSIGNER_LOG_LEVEL not in ("debug", "info", "warning", "error", "critical"):
            errors.append(f"TXSIGNER_LOG_LEVEL must be a logging level name, got {self.TXSIGNER_LOG_LEVEL!r}")

        if errors:
            raise SettingsValidationError("MULTIPLE", None, "; ".join(errors))

    @property
    def network_profile(self) -> NetworkProfile:
        return NetworkProfile(
            chain_id=self.chain_id,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
            max_fee_per_gas=self.max_fee_per_gas,
        )

    def private_key_bytes(self) -> bytes:
        """
        Decode PRIVATE_KEY (optional 0x prefix) into exactly 32 bytes.
        """
        return decode_private_key(self.PRIVATE_KEY or "")

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary (redacting secrets)."""
        result: dict[str, Any] = {}
        for key in dir(self):
            if key.startswith("_") or key.isupper() is False:
                continue
            value = getattr(self, key)
            if any(s in key.upper() for s in ["SECRET", "PASSWORD", "KEY", "TOKEN"]):
                result[key] = "***REDACTED***" if value else None
            else:
                result[key] = value
        return result
