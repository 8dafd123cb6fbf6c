"""
Command-line entry point.

Commands:
    export  Render a saved document to PDF
    info    Summarize a saved document
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from snippet_layout import __version__
from snippet_layout.assets import DirectoryAssetLibrary, MissingAssetError
from snippet_layout.controller import ExportConfig, export_document
from snippet_layout.core.schemas.validator import ValidationError
from snippet_layout.core.utils.serialization import load_document
from snippet_layout.output import ExportError, QualityPreset

logger = logging.getLogger("snippet_layout")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippet-layout",
        description="Lay out image snippets on printable pages and export them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s export layout.json --assets snippets/ --output out/layout.pdf
  %(prog)s export layout.json --assets snippets/ --output out.pdf --quality maximum --dpi 144
  %(prog)s info layout.json
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Render a document to PDF")
    export.add_argument("document", type=Path, help="Document JSON file")
    export.add_argument("--assets", type=Path, required=True, help="Directory of snippet images")
    export.add_argument("--output", "-o", type=Path, required=True, help="Destination PDF")
    export.add_argument(
        "--quality",
        choices=[p.value for p in QualityPreset],
        default=QualityPreset.STANDARD.value,
        help="Bitmap quality preset (default: standard)",
    )
    export.add_argument("--dpi", type=float, default=72.0, help="Output resolution (default: 72)")
    export.add_argument("--border", action="store_true", help="Frame each snippet")

    info = sub.add_parser("info", help="Summarize a document")
    info.add_argument("document", type=Path, help="Document JSON file")
    return parser


def _cmd_export(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    config = ExportConfig(
        quality=QualityPreset(args.quality),
        output_dpi=args.dpi,
        snippet_border=args.border,
    )
    with DirectoryAssetLibrary(args.assets) as library:
        result = export_document(document, library, args.output, config)

    print(f"Exported {result.page_count} page(s) to {result.output_path}")
    for warning in result.warnings:
        print(f"  warning: {warning}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    print(f"Pages: {document.page_count}")
    for index, page in enumerate(document.pages, start=1):
        width_mm, height_mm = page.page_size_mm()
        print(
            f"  {index}. {page.id}  {page.paper_size.value} {page.orientation.value} "
            f"({width_mm:g}x{height_mm:g} mm)  "
            f"snippets={len(page.snippets)} texts={len(page.texts)} shapes={len(page.shapes)}"
        )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    handlers = {"export": _cmd_export, "info": _cmd_info}
    try:
        return handlers[args.command](args)
    except (ExportError, ValidationError, MissingAssetError) as e:
        logger.error(str(e))
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {args.document}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
