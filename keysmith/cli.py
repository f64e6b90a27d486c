"""Keysmith command-line interface.

Usage examples:
    python -m keysmith generate -n 20 -c 5
    python -m keysmith generate --avoid-ambiguous --no-symbols -o history.txt
    python -m keysmith check mypassword
    python -m keysmith check -f passwords.txt
"""

import argparse
import json
import logging
import sys

from keysmith import (
    DEFAULT_LENGTH,
    GenerationConfig,
    InvalidConfigError,
    PasswordHistory,
    generate,
    score_strength,
)

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="keysmith",
        description="Generate passwords and estimate their strength.",
    )
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate passwords")
    gen_p.add_argument(
        "-n", "--length", type=int, default=DEFAULT_LENGTH,
        help=f"Password length (default: {DEFAULT_LENGTH})",
    )
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-lowercase", action="store_true")
    gen_p.add_argument("--no-digits", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "--avoid-ambiguous", action="store_true",
        help="Leave out look-alike characters (0 O 1 l I)",
    )
    gen_p.add_argument("--json", action="store_true", help="Output as JSON array")
    gen_p.add_argument(
        "-o", "--export",
        help="Write the most recent passwords to a text file",
    )

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Estimate password strength")
    check_p.add_argument("passwords", nargs="*", help="Passwords to check")
    check_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "check":
        return _cmd_check(args)

    parser.print_help()
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        config = GenerationConfig(
            length=args.length,
            uppercase=not args.no_uppercase,
            lowercase=not args.no_lowercase,
            digits=not args.no_digits,
            symbols=not args.no_symbols,
            exclude_ambiguous=args.avoid_ambiguous,
        )
    except InvalidConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    history = PasswordHistory()
    results = []
    for _ in range(max(1, args.count)):
        entry = generate(config)
        if entry is None:
            print("Error: no characters to choose from, enable a category", file=sys.stderr)
            return 1
        history.push(entry)
        results.append((entry, score_strength(entry.text)))

    if args.json:
        print(json.dumps([
            {
                "password": entry.text,
                "score": report["score"],
                "label": report["label"],
                "created_at": entry.created_at.isoformat(),
            }
            for entry, report in results
        ]))
    else:
        for entry, report in results:
            print(f"  {entry.text}  ({report['label']}, {report['score']}%)")

    if args.export:
        with open(args.export, "w", encoding="utf-8") as f:
            f.write(history.export())
        logger.info("Wrote %d passwords to %s", len(history), args.export)

    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            passwords.extend(line.strip() for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    for pwd in passwords:
        report = score_strength(pwd)
        filled = report["score"] // 10
        bar = "#" * filled + "-" * (10 - filled)
        print(f"  [{bar}] {report['label']:<9} ({report['score']:>3}%)  '{pwd}'")

    return 0


if __name__ == "__main__":
    sys.exit(main())
