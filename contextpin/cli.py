"""Command-line front door for contextpin.

Prints the context chain pinned above a given first visible line of a file,
or the full annotation text a host would display there.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .chain import chain_texts
from .config import load_settings
from .document import Document, Position
from .registry import ExtractorRegistry, resolve_document_type
from .syntax import DEFAULT_STYLE, colorize_text, sanitize_terminal_text
from .viewport import AnnotationController, ViewportEvent


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for counts that may be zero."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextpin",
        description="Show the enclosing context lines pinned above a viewport's first visible line.",
    )
    parser.add_argument("path", help="File to inspect.")
    parser.add_argument("line", type=_positive_int, help="First visible line (1-based).")
    parser.add_argument("--type", dest="document_type", default=None, help="Override the detected document type.")
    parser.add_argument("--top", type=_nonnegative_int, default=None, help="Keep this many outer context lines.")
    parser.add_argument("--bottom", type=_nonnegative_int, default=None, help="Keep this many inner context lines.")
    parser.add_argument(
        "--annotation",
        action="store_true",
        help="Print the annotation text (context plus the line below) instead of the bare chain.",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for colored output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and print the context for ``path`` at ``line``."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    try:
        document = Document.from_path(path, document_type=args.document_type)
    except OSError as exc:
        raise SystemExit(f"Failed to read {path}: {exc}") from exc

    settings = load_settings()
    if args.top is not None:
        settings = replace(settings, lines_kept_from_top=args.top)
    if args.bottom is not None:
        settings = replace(settings, lines_kept_from_bottom=args.bottom)

    registry = ExtractorRegistry(validity_overrides=settings.validity_patterns)
    document_type = resolve_document_type(document)
    first_visible = Position(args.line - 1, 0)

    if args.annotation:
        controller = AnnotationController(replace(settings, use_overlay_strategy=True), registry)
        controller.enable(document)
        annotation = controller.handle(ViewportEvent(document, first_visible))
        text = annotation.display_text + "\n" if annotation is not None else ""
    else:
        controller = AnnotationController(settings, registry)
        text = "".join(chain_texts(controller.context_chain(document, first_visible)))

    text = sanitize_terminal_text(text)
    if text and not args.no_color and sys.stdout.isatty():
        text = colorize_text(text, document_type, args.style)
    sys.stdout.write(text)


if __name__ == "__main__":
    main()
