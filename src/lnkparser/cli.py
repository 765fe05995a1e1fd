"""CLI entry point: ``lnkparser [parse] FILE...``."""

import argparse
import errno
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from .exceptions import FormatError
from .idlist import TargetIDList
from .parser import LnkFile, format_lnk, parse_lnk

logger = logging.getLogger(__name__)

_PROMPT = "What is the path to the .lnk file you would like to parse? "


def _json_default(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _serialize_lnk_file(info: LnkFile) -> dict:
    """Convert LnkFile to a JSON-friendly dict."""
    d = asdict(info)
    d["link_clsid"] = str(info.link_clsid)
    d["show_command"] = info.show_command.name
    d["hotkey"]["name"] = str(info.hotkey)
    if isinstance(info.target, TargetIDList):
        for item, src in zip(d["target"]["items"], info.target.items):
            item["type_name"] = src.type_name
    d["target_path"] = info.target_path
    return d


def _read_error_message(path: str, err: OSError) -> str:
    if isinstance(err, FileNotFoundError):
        return f"The .lnk file does not exist: {path}"
    if isinstance(err, IsADirectoryError) or err.errno == errno.EISDIR:
        return f"The specified path points to a directory: {path}"
    if isinstance(err, PermissionError):
        return f"Permission error reading {path}"
    return f"Error reading .lnk file {path}: {err}"


def _cmd_parse(args: argparse.Namespace) -> int:
    files = args.files
    if not files:
        if not sys.stdin.isatty():
            print("No .lnk file given", file=sys.stderr)
            return 1
        files = [input(_PROMPT).strip()]

    status = 0
    for path in files:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            print(_read_error_message(path, e), file=sys.stderr)
            status = 1
            continue

        logger.debug("Read %d bytes from %s", len(data), path)
        try:
            info = parse_lnk(data)
        except FormatError as e:
            print(f"Error parsing {path}: {e}", file=sys.stderr)
            status = 1
            continue

        if args.text:
            print(f"\n{'=' * 70}")
            print(f"FILE: {path}")
            print(f"{'=' * 70}")
            print(format_lnk(info))
            print()
        else:
            indent = 2 if args.prettify else None
            print(json.dumps(_serialize_lnk_file(info), indent=indent, default=_json_default))
    return status


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lnkparser",
        description="Parse Windows shell links (.lnk files) into JSON",
        epilog="With no FILE and an interactive terminal, you are prompted for a path.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="LNK file(s) to parse")
    parser.add_argument(
        "-p", "--prettify", action="store_true", help="Indent the JSON output"
    )
    parser.add_argument(
        "-t", "--text", action="store_true", help="Print a human-readable report"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log decoding details to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    # ``parse`` is accepted as an optional subcommand name
    if argv and argv[0] == "parse":
        argv = argv[1:]

    args = create_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return _cmd_parse(args)


if __name__ == "__main__":
    sys.exit(main())
