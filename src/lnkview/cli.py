"""CLI entry point: ``lnkview parse`` / ``lnkview detect``."""

import argparse
import codecs
import json
import logging
import sys
from pathlib import Path

from ._constants import ANSI_CODEPAGE
from .errors import ShellLinkError
from .parser import is_lnk, parse_lnk
from .report import build_report, format_report, report_to_dict

logger = logging.getLogger(__name__)

EXIT_NOT_LNK = 1
EXIT_ERROR = 2


def _codepage(val: str) -> str:
    """argparse type: accept any codec name Python knows."""
    try:
        return codecs.lookup(val).name
    except LookupError:
        raise argparse.ArgumentTypeError(f"Unknown code page: {val!r}") from None


def _cmd_parse(args: argparse.Namespace) -> int:
    status = 0
    for path in args.files:
        try:
            lnk = parse_lnk(path, best_effort=args.best_effort, codepage=args.codepage)
        except (OSError, ShellLinkError) as exc:
            print(f"error: {path}: {exc}", file=sys.stderr)
            status = EXIT_ERROR
            continue

        report = build_report(lnk)
        if args.json:
            print(json.dumps(report_to_dict(report), indent=2))
        else:
            header = f"FILE: {path}"
            print(f"\n{'=' * 70}")
            print(header)
            print(f"{'=' * 70}")
            print(format_report(report, descriptions=args.descriptions))
            print()
    return status


def _cmd_detect(args: argparse.Namespace) -> int:
    status = 0
    for path in args.files:
        try:
            with Path(path).open("rb") as f:
                head = f.read(4)
        except OSError as exc:
            print(f"error: {path}: {exc}", file=sys.stderr)
            status = EXIT_ERROR
            continue
        found = is_lnk(head)
        logger.debug("%s: first bytes %s", path, head.hex())
        print(f"{path}: {'yes' if found else 'no'}")
        if not found and status == 0:
            status = EXIT_NOT_LNK
    return status


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="lnkview",
        description="Decode Windows .lnk files (MS-SHLLINK) into a field report",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log decoder progress to stderr"
    )
    sub = parser.add_subparsers(dest="command")

    # -- parse --
    pp = sub.add_parser("parse", help="Decode and display .lnk file(s)")
    pp.add_argument("files", nargs="+", help="LNK file(s) to decode")
    pp.add_argument("--json", action="store_true", help="Output the report as JSON")
    pp.add_argument(
        "--best-effort",
        action="store_true",
        help="Keep decoding when the header size or CLSID is wrong",
    )
    pp.add_argument(
        "--codepage",
        type=_codepage,
        default=ANSI_CODEPAGE,
        help=f"Code page for non-Unicode strings (default: {ANSI_CODEPAGE})",
    )
    pp.add_argument(
        "-d",
        "--descriptions",
        action="store_true",
        help="Show field descriptions in text output",
    )

    # -- detect --
    dp = sub.add_parser(
        "detect", help="Check whether file(s) start with the LNK magic"
    )
    dp.add_argument("files", nargs="+", help="File(s) to check")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "parse":
        sys.exit(_cmd_parse(args))
    elif args.command == "detect":
        sys.exit(_cmd_detect(args))


if __name__ == "__main__":
    main()
