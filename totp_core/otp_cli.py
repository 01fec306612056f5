#!/usr/bin/env python3
"""
otp_cli.py: Developer CLI around the totp_core engine.

Subcommands:
- init   : generate a new secret and print its Base32 form
- code   : print the code for a secret at an instant
- verify : check a code against a secret (+/-1 step)
- step   : print the step index for an instant

The secret comes from --secret or the TOTP_SECRET environment variable;
nothing is written to disk.

eg..:
    totp-core init
    totp-core code --secret IFBEGRCFIZDUQSKK
    TOTP_SECRET=IFBEGRCFIZDUQSKK totp-core verify --code 123456
    totp-core step --at 1700000000000
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .counter import STEP_MILLIS, millis_until_next_step, now_millis, step_index
from .errors import OTPError
from .otp_core import DIGITS, SECRET_BYTES, format_code
from .secret import TOTPSecret

logger = logging.getLogger(__name__)

SECRET_ENV = "TOTP_SECRET"


def _load_secret(args) -> TOTPSecret:
    encoded = args.secret or os.environ.get(SECRET_ENV)
    if not encoded:
        raise OTPError(f"no secret given (use --secret or set {SECRET_ENV})")
    return TOTPSecret.from_encoded(encoded, length=args.length)


def _instant(args) -> int:
    return args.at if args.at is not None else now_millis()


# --- CLI command handlers ---
def cmd_init(args) -> int:
    secret = TOTPSecret.generate(args.length)
    print(secret.encode())
    return 0


def cmd_code(args) -> int:
    secret = _load_secret(args)
    now = _instant(args)
    code = secret.code_at(step_index(now, args.period_ms))
    remaining = millis_until_next_step(now, args.period_ms)
    print(f"{format_code(code)}  (valid ~{remaining} ms)")
    return 0


def cmd_verify(args) -> int:
    secret = _load_secret(args)
    raw = args.code.strip()
    well_formed = raw.isascii() and raw.isdigit() and len(raw) <= DIGITS
    ok = well_formed and secret.matches(int(raw), _instant(args), args.period_ms)
    if ok:
        print("[+] code is VALID")
        return 0
    print("[-] code is INVALID")
    return 1


def cmd_step(args) -> int:
    print(step_index(_instant(args), args.period_ms))
    return 0


def cmd_help(args) -> int:
    print("'totp-core -h' for help.")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totp-core", description="TOTP (HMAC-SHA1) engine developer CLI")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # init
    pi = sub.add_parser("init", help="Generate a new secret")
    pi.add_argument("--length", type=int, default=SECRET_BYTES, help="Key length in bytes")
    pi.set_defaults(func=cmd_init)

    timed = argparse.ArgumentParser(add_help=False)
    timed.add_argument("--at", type=int, help="Instant in ms since epoch (default: now)")
    timed.add_argument("--period-ms", type=int, default=STEP_MILLIS, help="Step duration in ms")

    keyed = argparse.ArgumentParser(add_help=False)
    keyed.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    keyed.add_argument("--length", type=int, default=SECRET_BYTES, help="Key length in bytes")

    # code
    pc = sub.add_parser("code", parents=[keyed, timed], help="Print the code for an instant")
    pc.set_defaults(func=cmd_code)

    # verify
    pv = sub.add_parser("verify", parents=[keyed, timed], help="Verify a code (+/-1 step)")
    pv.add_argument("--code", required=True, help="Code to verify")
    pv.set_defaults(func=cmd_verify)

    # step
    ps = sub.add_parser("step", parents=[timed], help="Print the step index for an instant")
    ps.set_defaults(func=cmd_step)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")
    try:
        return args.func(args)
    except (OTPError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
