from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from errors import InputError
from signing.intents import TxIntent, to_address, to_hex_bytes, to_quantity

REQUIRED_FIELDS = ("nonce", "to_address", "value", "gas_limit")


def intent_from_dict(data: Dict[str, Any]) -> TxIntent:
    """
    Parameter object -> TxIntent.

    {"nonce": 0, "to_address": "0x...", "value": "0x0", "gas_limit": 21000, "input": "0x"}

    `input` is optional; a missing field and an empty string both mean no call data.
    """
    if not isinstance(data, dict):
        raise InputError("Parameter file must contain a JSON object")
    missing = [k for k in REQUIRED_FIELDS if k not in data]
    if missing:
        raise InputError(f"Missing required parameter(s): {', '.join(missing)}", {"missing": missing})

    return TxIntent(
        nonce=to_quantity(data["nonce"], name="nonce"),
        to=to_address(data["to_address"], name="to_address"),
        value=to_quantity(data["value"], name="value"),
        gas_limit=to_quantity(data["gas_limit"], name="gas_limit"),
        data=to_hex_bytes(data.get("input"), name="input"),
    )


def load_intent(path: str | Path) -> TxIntent:
    p = Path(path).expanduser()
    if not p.is_file():
        raise InputError(f"Parameter file not found: {p}", {"path": str(p)})
    try:
        raw = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Parameter file could not be read: {e}", {"path": str(p)}) from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputError(f"Parameter file is not valid JSON: {e}", {"path": str(p)}) from e
    return intent_from_dict(data)
