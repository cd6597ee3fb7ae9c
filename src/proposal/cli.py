"""Командная строка: safe-propose.

Пример:
    safe-propose --safe 0x... --to 0x... --value 1000000

Ключ берётся из --private-key или SAFE_SIGNER_PRIVATE_KEY. Если --sender не
задан, используется адрес ключа.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from src.core.crypto.signer import address_of
from src.core.errors import ProposalError
from src.proposal.state_machine import ProposalRequest, ProposalStateMachine
from src.service.config import ServiceConfig

ENV_PRIVATE_KEY = "SAFE_SIGNER_PRIVATE_KEY"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-propose",
        description="Propose a Safe multisig transaction signed by one owner",
    )
    parser.add_argument("--safe", required=True, help="Safe address")
    parser.add_argument("--to", required=True, help="Receiver address")
    parser.add_argument("--value", required=True, type=int, help="Amount in wei")
    parser.add_argument("--sender", default=None, help="Signer address (default: key address)")
    parser.add_argument(
        "--private-key",
        default=None,
        help=f"Signer private key hex (default: ${ENV_PRIVATE_KEY})",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    private_key = args.private_key or os.getenv(ENV_PRIVATE_KEY)
    if not private_key:
        print(f"error: --private-key or {ENV_PRIVATE_KEY} is required", file=sys.stderr)
        return 2

    try:
        config = ServiceConfig.from_env()
        sender = args.sender or address_of(private_key)
        request = ProposalRequest(
            sender=sender,
            safe=args.safe,
            to=args.to,
            value=args.value,
            private_key=private_key,
        )
        outcome = ProposalStateMachine(config=config).run(request)
    except (ProposalError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not outcome.succeeded:
        print(f"error: {outcome.error}", file=sys.stderr)
        return 1

    print("nonce:", outcome.nonce)
    print("safeTxGas:", outcome.safe_tx_gas)
    print("contractTransactionHash:", outcome.digest.hex())
    return 0


if __name__ == "__main__":
    sys.exit(main())
