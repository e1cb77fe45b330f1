"""
txsigner command line entrypoint.

    txsigner params.json

Reads CHAIN_ID, MAX_FEE_PER_GAS, MAX_PRIORITY_FEE_PER_GAS and PRIVATE_KEY from
the environment (or `.env`), signs the EIP-1559 transaction described by the
parameter file and prints it as 0x-prefixed hex on stdout.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from app.core.params import load_intent
from app.core.settings import Settings, get_version_from_pyproject
from errors import TxSignerError
from observability import build_log_context, get_logger, log_event
from signing import build_unsigned_message, sign_transaction, to_hex


def _build_parser(version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txsigner",
        description="Sign an EIP-1559 transaction offline and print the raw transaction hex.",
    )
    parser.add_argument("params", help="path to the parameter JSON file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {version}")
    return parser


def run(params_path: str, settings: Settings) -> str:
    ctx = build_log_context(tool="txsigner", chain_id=settings.chain_id)
    log_event("settings_loaded", ctx=ctx, data=settings.to_dict())
    intent = load_intent(params_path)
    msg = build_unsigned_message(settings.network_profile, intent)
    raw = sign_transaction(msg, settings.private_key_bytes(), ctx=ctx)
    return to_hex(raw)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser(get_version_from_pyproject()).parse_args(argv)

    try:
        settings = Settings()
        get_logger().setLevel(settings.TXSIGNER_LOG_LEVEL.upper())
        out = run(args.params, settings)
    except TxSignerError as e:
        log_event("txsigner_failed", ctx=build_log_context(tool="txsigner"), data={"error_code": e.code})
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
