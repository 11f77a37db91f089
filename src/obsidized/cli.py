"""Command-line interface for obsidized.

Usage:
    obsidized compile-one NOTE.md [-o OUTPUT] [-O] [--plugin NAME ...]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from obsidized import Markdown, __version__
from obsidized.config import PLUGIN_FLAGS
from obsidized.errors import ConversionError, ParseError
from obsidized.utils.logger import get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obsidized",
        description="Convert Obsidian-flavored Markdown to HTML.",
    )
    parser.add_argument("--version", action="version", version=f"obsidized {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Verbose progress logs")
    parser.add_argument("--debug", action="store_true", help="Debug logs")

    commands = parser.add_subparsers(dest="command", required=True)
    compile_one = commands.add_parser("compile-one", help="Compile a single note")
    compile_one.add_argument("path", help="Input path to the .md file to compile")
    compile_one.add_argument(
        "-o",
        dest="output",
        metavar="output_file",
        default="output.html",
        help="Output path for the compiled HTML file (default: output.html)",
    )
    compile_one.add_argument(
        "-O",
        dest="overwrite",
        action="store_true",
        help="Overwrite the output file if it exists",
    )
    compile_one.add_argument(
        "--plugin",
        dest="plugins",
        action="append",
        default=[],
        choices=[*PLUGIN_FLAGS, "all"],
        help="Enable a syntax extension (repeatable)",
    )
    compile_one.add_argument(
        "--lenient",
        action="store_true",
        help="Keep unterminated fences as plain text instead of failing",
    )
    compile_one.add_argument(
        "--repair-markup",
        action="store_true",
        help="Emit well-formed link and heading tags",
    )
    return parser


def compile_one(
    path: Path,
    output: Path,
    *,
    overwrite: bool = False,
    plugins: list[str] | None = None,
    strict_fences: bool = True,
    repair_markup: bool = False,
) -> None:
    """Parse ``path`` and write its HTML to ``output``.

    Raises:
        OSError: If the input cannot be read or the output cannot be opened
        UnicodeDecodeError: If the input is not valid UTF-8
        FileExistsError: If ``output`` exists and ``overwrite`` is False
        ParseError: If the note cannot be parsed
        ConversionError: If writing the HTML fails
    """
    source = path.read_text(encoding="utf-8")
    md = Markdown(plugins=plugins, strict_fences=strict_fences, repair_markup=repair_markup)
    doc = md.parse(source, source_file=str(path))

    if output.exists() and not overwrite:
        raise FileExistsError(f"{output} already exists; add -O to overwrite")

    with output.open("wb") as sink:
        md.convert(doc, sink)
    logger.info("wrote %s (%d block(s))", output, len(doc.children))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    level = logging.WARNING
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        compile_one(
            Path(args.path),
            Path(args.output),
            overwrite=args.overwrite,
            plugins=args.plugins,
            strict_fences=not args.lenient,
            repair_markup=args.repair_markup,
        )
    except ParseError as exc:
        print(f"error: could not parse markdown: {exc}", file=sys.stderr)
        return 1
    except ConversionError as exc:
        print(f"error: could not write HTML: {exc} ({exc.__cause__})", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"error: {args.path} is not valid UTF-8: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
