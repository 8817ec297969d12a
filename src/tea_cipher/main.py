from __future__ import annotations

import argparse
import sys

from .block import VARIANTS
from .buffer import block_count, decrypt, encrypt
from .config import BYTEORDERS, CipherConfig, load_config, parse_hex_key


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TEA/XTEA block cipher over hex input")
    parser.add_argument("command", choices=("encrypt", "decrypt"))
    parser.add_argument("--data", required=True, help="Input bytes as hex")
    parser.add_argument("--key", help="128-bit key as 32 hex characters")
    parser.add_argument("--config", help="Path to JSON config")
    parser.add_argument("--rounds", type=int, help="Round count (default from config, else 32)")
    parser.add_argument("--variant", choices=VARIANTS, help="Block structure (default tea)")
    parser.add_argument("--byteorder", choices=BYTEORDERS, help="Word byte order (default little)")
    parser.add_argument(
        "--allow-overrun",
        action="store_true",
        help="Unsafe: zero-extend a trailing partial block instead of failing",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("info", "debug"),
        help="Console log verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else CipherConfig()
    except ValueError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    try:
        key = parse_hex_key(args.key, "--key") if args.key is not None else config.key
        data = bytes.fromhex(args.data)
    except ValueError as exc:
        print(f"input error: {exc}", file=sys.stderr)
        return 2
    if key is None:
        print("input error: no key given (use --key or key_hex in config)", file=sys.stderr)
        return 2

    rounds = args.rounds if args.rounds is not None else config.rounds
    variant = args.variant or config.variant
    byteorder = args.byteorder or config.byteorder
    allow_overrun = args.allow_overrun or config.allow_overrun

    size = len(data)
    buf = bytearray(data)
    if allow_overrun and size % 8:
        # The buffer is ours here, so give the trailing block its spare capacity.
        buf.extend(bytes(8 - size % 8))

    try:
        if args.log_level == "debug":
            n_blocks = block_count(size, len(buf), allow_overrun)
            print(
                f"{args.command}: variant={variant} rounds={rounds} byteorder={byteorder} "
                f"size={size} blocks={n_blocks}",
                file=sys.stderr,
            )
        run = encrypt if args.command == "encrypt" else decrypt
        run(
            buf,
            key,
            rounds,
            variant=variant,
            byteorder=byteorder,
            size=size,
            allow_overrun=allow_overrun,
        )
    except ValueError as exc:
        print(f"input error: {exc}", file=sys.stderr)
        return 2

    print(buf.hex())
    return 0
