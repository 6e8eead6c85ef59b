"""
Command line analysis of a single email.

Run from the api/ directory:
    python -m spamguard.cli -f message.eml --method ai
    python -m spamguard.cli --sender a@b.com --subject Hi --body "Hello world."
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import get_settings
from .pipeline.classify import classify_email
from .pipeline.eml import EmlFormatError, parse_eml, require_fields
from .schemas import EmailIn


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify one email as safe, suspicious or dangerous.")
    parser.add_argument("-f", "--file", dest="eml", help="Path to the .eml file to analyze.")
    parser.add_argument("--sender", default="", help="Sender address (when not using -f).")
    parser.add_argument("--subject", default="", help="Subject line (when not using -f).")
    parser.add_argument("--body", default="", help="Plain-text body (when not using -f).")
    parser.add_argument(
        "-m",
        "--method",
        choices=["local", "ai"],
        help="Analysis method (default: SPAMGUARD_DEFAULT_METHOD or local).",
    )
    parser.add_argument("--json", dest="json_path", help="Write the JSON result to this path.")
    return parser


def _load_email(args: argparse.Namespace) -> EmailIn:
    if args.eml:
        raw = Path(args.eml).read_text(encoding="utf-8", errors="replace")
        parsed = require_fields(parse_eml(raw))
        return EmailIn(sender=parsed.sender, subject=parsed.subject, content=parsed.content)
    return EmailIn(sender=args.sender, subject=args.subject, content=args.body)


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    if not args.eml and not (args.sender or args.subject or args.body):
        parser.error("Either -f/--file or at least one of --sender/--subject/--body is required.")

    try:
        email = _load_email(args)
    except EmlFormatError as exc:
        sys.stderr.write(f"{exc}\n")
        return 2
    except OSError as exc:
        sys.stderr.write(f"Cannot read {args.eml}: {exc}\n")
        return 2

    result = classify_email(email, method=args.method or settings.default_method, settings=settings)
    serialized = json.dumps(result.model_dump(by_alias=True), indent=2)
    if args.json_path:
        Path(args.json_path).write_text(serialized, encoding="utf-8")
    else:
        sys.stdout.write(serialized + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
