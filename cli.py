#!/usr/bin/env python3
"""
Markdown → HTML command line front end.
Reads one or more Markdown files (or stdin) and renders them with a selectable backend.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from renderers import ConversionError, RenderOptions, driver_display_name, normalize_options
from services import (
    ServiceSettings,
    SourceDocument,
    configure_renderers,
    convert_documents,
    load_settings,
)

logger = logging.getLogger("md2html")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="md2html",
        description="Convert one or more Markdown files to HTML.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Markdown files to render (default: read standard input).",
    )
    parser.add_argument(
        "--toc",
        action="store_true",
        help="Generate a table of contents (implies --latex=false).",
    )
    parser.add_argument(
        "--toc-only",
        action="store_true",
        help="Generate a table of contents only (implies --toc).",
    )
    parser.add_argument(
        "--page",
        action="store_true",
        help="Generate a standalone HTML page (implies --latex=false).",
    )
    parser.add_argument(
        "--latex",
        action="store_true",
        help="Generate LaTeX output instead of HTML (not supported by any renderer).",
    )
    parser.add_argument(
        "--smartypants",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Apply smartypants-style substitutions (default: on).",
    )
    parser.add_argument(
        "--latexdashes",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use LaTeX-style dash rules for smartypants (default: on).",
    )
    parser.add_argument(
        "--fractions",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use improved fraction rules for smartypants (default: on).",
    )
    parser.add_argument(
        "--html-simple",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Emit bare-minimum HTML without ids, classes or styles (default: on).",
    )
    parser.add_argument(
        "--css",
        default="",
        help="Link to a CSS stylesheet (implies --page).",
    )
    parser.add_argument(
        "--title",
        default="",
        help="Page title for --page (default: guessed from the first heading).",
    )
    parser.add_argument(
        "--output",
        default="",
        help="Output file, or directory when several files are given (default: stdout).",
    )
    parser.add_argument(
        "--driver",
        default=None,
        help="Markdown renderer: pm (python-markdown), mi (markdown-it-py) or gh (github-api).",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of documents to convert in parallel (default: 1).",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first document that fails to convert.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace, settings: ServiceSettings) -> RenderOptions:
    return normalize_options(
        {
            "toc": args.toc,
            "tocOnly": args.toc_only,
            "page": args.page,
            "latex": args.latex,
            "smartypants": args.smartypants,
            "latexdashes": args.latexdashes,
            "fractions": args.fractions,
            "htmlSimple": args.html_simple,
            "css": args.css,
            "title": args.title,
            "output": args.output,
            "driver": args.driver or settings.default_driver,
        }
    )


def collect_documents(
    files: List[Path], output: str
) -> Tuple[List[SourceDocument], List[Path]]:
    """Read the input files; unreadable ones become failed outcomes."""

    if not files:
        return [SourceDocument(name="<stdin>", content=sys.stdin.buffer.read())], []

    output_dir: Optional[Path] = None
    if output and len(files) > 1:
        output_dir = Path(output)
        output_dir.mkdir(parents=True, exist_ok=True)

    documents: List[SourceDocument] = []
    failures: List[Path] = []
    for path in files:
        target = str(output_dir / f"{path.stem}.html") if output_dir else None
        try:
            content = path.read_bytes()
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            failures.append(path)
            continue
        documents.append(SourceDocument(name=str(path), content=content, output=target))
    return documents, failures


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
    configure_renderers(settings)

    options = build_options(args, settings)
    logger.info("Work Dir: %s", Path.cwd())
    logger.info("Use Driver: %s", driver_display_name(options.driver))

    try:
        documents, failures = collect_documents(args.files, options.output)
    except OSError as exc:
        logger.error("Cannot prepare output directory %s: %s", options.output, exc)
        return 1
    if failures and args.fail_fast:
        return 1

    try:
        outcomes = convert_documents(
            documents,
            options,
            fail_fast=args.fail_fast,
            max_workers=args.jobs,
        )
    except ConversionError as exc:
        logger.error("Conversion aborted: %s", exc)
        return 1

    for outcome in outcomes:
        if outcome.succeeded:
            logger.info("Rendered %s -> %s", outcome.name, outcome.output)
        else:
            logger.error("Failed to render %s: %s", outcome.name, outcome.error)

    if failures or not all(outcome.succeeded for outcome in outcomes):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
