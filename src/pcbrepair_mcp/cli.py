"""Command line front end: inspect repair files and extract footprints.

Usage::

    pcbrepair parse board.fz            # board summary
    pcbrepair parse board.fz --json     # every parsed record as JSON
    pcbrepair fpextract board.fz        # writes board.pretty/*.kicad_mod
    pcbrepair serve                     # MCP server on stdio
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .exceptions import DecodeError, FileLoadingError, ParseError, PcbRepairError
from .export import default_library_dir, export_footprints
from .fz import RepairFile
from .logging_config import create_logger, request_scope, setup_logging

logger = create_logger(__name__)


def _stage(exc: PcbRepairError) -> str:
    if isinstance(exc, FileLoadingError):
        return "opening"
    if isinstance(exc, DecodeError):
        return "decoding"
    if isinstance(exc, ParseError):
        return "parsing"
    return "interpreting"


def _load(path: str) -> RepairFile:
    repair_file = RepairFile.load(path)
    # Interpret eagerly so interpretation errors report against this file.
    _ = repair_file.footprints
    return repair_file


def cmd_parse(args: argparse.Namespace) -> int:
    repair_file = _load(args.file)
    if args.json:
        payload = {
            "summary": repair_file.summary().to_dict(),
            "description": repair_file.description.to_dict(),
            "content": repair_file.content.to_dict(),
        }
    else:
        payload = repair_file.summary().to_dict()
    print(json.dumps(payload, indent=2))
    return 0


def cmd_fpextract(args: argparse.Namespace) -> int:
    repair_file = _load(args.file)
    source = Path(args.file)
    output_dir = Path(args.output) if args.output else default_library_dir(source)
    try:
        written = export_footprints(repair_file.footprints, output_dir, source.stem)
    except OSError as e:
        print(f"Error writing footprints to {output_dir}: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {len(written)} footprints to {output_dir}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .server import create_server

    create_server().run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcbrepair",
        description="Decode ASUS FZ / ASRock CAE PCB repair files.",
    )
    parser.add_argument("--log-level", help="Logging level (default: PCBREPAIR_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Decode and parse a repair file")
    p_parse.add_argument("file", help="The .fz or .cae file to read")
    p_parse.add_argument("--json", action="store_true", help="Dump every parsed record")
    p_parse.set_defaults(func=cmd_parse)

    p_extract = sub.add_parser("fpextract", help="Extract KiCad footprints")
    p_extract.add_argument("file", help="The .fz or .cae file to read")
    p_extract.add_argument("-o", "--output", help="Output directory (default: <stem>.pretty)")
    p_extract.set_defaults(func=cmd_fpextract)

    p_serve = sub.add_parser("serve", help="Run the MCP server on stdio")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # stdout is reserved for command output
    setup_logging(args.log_level, stream=sys.stderr)

    with request_scope():
        try:
            return int(args.func(args))
        except PcbRepairError as e:
            target = getattr(args, "file", "")
            logger.debug("Command %s failed", args.command, exc_info=True)
            print(f"Error {_stage(e)} file {target!r}: {e.message}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
