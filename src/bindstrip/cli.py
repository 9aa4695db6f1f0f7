"""Command line front end: ``bindstrip layout.xml [-o out.xml]``."""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from pathlib import Path

from .constants import LINE_SEPARATORS
from .editor import strip
from .errors import BindingLayoutError, ExpressionSyntaxError, MarkupSyntaxError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindstrip",
        description="Strip data-binding markup from layout files.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Layout files to strip")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (single input) or directory (default: stdout)",
    )
    parser.add_argument("--tag", dest="new_tag", help="Prefix for generated android:tag values")
    parser.add_argument(
        "--line-separator",
        choices=["lf", "crlf", "native"],
        default="native",
        help="Line separator used when writing output",
    )
    parser.add_argument("--debug", action="store_true", help="Print the edit trace")
    return parser


def _destination(output: Path | None, source: Path, many: bool) -> Path | None:
    if output is None:
        return None
    if many or output.is_dir():
        return output / source.name
    return output


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    many = len(args.inputs) > 1
    if many and args.output is None:
        parser.error("--output directory is required with more than one input")

    line_separator = LINE_SEPARATORS.get(args.line_separator, os.linesep)
    if many:
        args.output.mkdir(parents=True, exist_ok=True)

    status = 0
    for source in args.inputs:
        try:
            result = strip(source, args.new_tag, line_separator=line_separator, debug=args.debug)
        except (BindingLayoutError, MarkupSyntaxError, ExpressionSyntaxError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 1
            continue

        destination = _destination(args.output, source, many)
        if result is None:
            print(f"skipped {source}: not a binding layout", file=sys.stderr)
            if destination is not None and destination.resolve() != source.resolve():
                shutil.copyfile(source, destination)
            continue

        if destination is None:
            sys.stdout.write(result)
            sys.stdout.write("\n")
        else:
            destination.write_text(result, encoding="utf-8", newline="")
    return status
