"""Command-line explorer: absorb messages, squeeze output, print the trace."""

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from .engine import DEFAULT_CAPACITY_BITS, DEFAULT_RATE_BITS, LivingHash, SpongeConfiguration
from .errors import LivingHashError

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="living-hash",
        description="Run a traceable Keccak sponge and print every recorded step.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-m",
        "--message",
        action="append",
        default=[],
        help="UTF-8 message to absorb; repeat for several absorb steps",
    )
    parser.add_argument(
        "--hex",
        action="append",
        default=[],
        dest="hex_messages",
        help="Hex-encoded message to absorb, after any --message inputs",
    )
    parser.add_argument("-n", "--length", type=int, default=32, help="Bytes to squeeze")
    parser.add_argument("--rate", type=int, default=DEFAULT_RATE_BITS, help="Rate in bits")
    parser.add_argument(
        "--capacity", type=int, default=DEFAULT_CAPACITY_BITS, help="Capacity in bits"
    )
    parser.add_argument("--json", action="store_true", help="Print the trace as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable informational logging")
    return parser.parse_args(argv)


def _messages(args: argparse.Namespace) -> List[bytes]:
    messages = [m.encode("utf-8") for m in args.message]
    for value in args.hex_messages:
        try:
            messages.append(bytes.fromhex(value))
        except ValueError as exc:
            raise LivingHashError(f"invalid hex message {value!r}: {exc}") from exc
    return messages


def run(args: argparse.Namespace) -> dict:
    engine = LivingHash(SpongeConfiguration(args.rate, args.capacity))
    for message in _messages(args):
        engine.absorb(message)
    output = engine.squeeze(args.length)
    logger.info("Recorded %d steps", engine.step_count)
    return {
        "output": output.hex(),
        "trace": engine.get_trace(),
        "commitment": engine.trace_commitment(),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)

    try:
        result = run(args)
    except LivingHashError as exc:
        print(f"living-hash: {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = {
            "output": result["output"],
            "trace": [record.to_dict() for record in result["trace"]],
            "commitment": result["commitment"].to_dict(),
        }
        print(json.dumps(payload, indent=2))
    else:
        print(f"Output: {result['output']}")
        for record in result["trace"]:
            print()
            print(record)
        print()
        commitment = result["commitment"]
        print(f"Commitment: {commitment.hexdigest()} ({commitment.step_count} steps)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
