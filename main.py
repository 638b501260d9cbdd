"""
Entry point and compatibility facade for the DOCX → HTML → raster → PDF pipeline.

This module exposes a stable API and a CLI.

Packages:
- rasterpdf.docs: DOCX markup extraction and PDF assembly
- rasterpdf.render: Render surfaces and browser rasterization
- rasterpdf.image: Screenshot decoding
- rasterpdf.pipeline: High-level orchestration (`convert`)
"""

from __future__ import annotations

import logging
import os

from rasterpdf.config import load_settings
from rasterpdf.docs import assemble_pdf, extract_markup, plan_pages
from rasterpdf.pipeline import convert, convert_file, output_name_for, print_progress_bar
from rasterpdf.render import RenderHost, build_surface, configure_browser, rasterize

__all__ = [
    # stages
    "extract_markup",
    "build_surface",
    "rasterize",
    "plan_pages",
    "assemble_pdf",
    "RenderHost",
    # pipeline
    "convert",
    "convert_file",
    "output_name_for",
]

LOGGER = logging.getLogger("rasterpdf")

ACCEPTED_EXTENSIONS = (".docx", ".doc")


def _cli() -> int:
    """CLI for DOCX to PDF conversion.

    --file / -f: Path to input document (.docx)
    --out / -o: Output PDF path (default: input name with .pdf extension)
    --quiet / -q: Do not show the progress bar
    --verbose / -v: Debug logging
    """
    import argparse

    parser = argparse.ArgumentParser(description="Convert a DOCX document into an image-based PDF.")
    parser.add_argument("--file", "-f", type=str, required=True, help="Path to input document (.docx)")
    parser.add_argument("--out", "-o", type=str, default=None, help="Output PDF path (default: <input>.pdf)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not show the progress bar")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    settings = load_settings()
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    configure_browser(settings.browser_path)

    if not args.file.lower().endswith(ACCEPTED_EXTENSIONS):
        LOGGER.warning("%s does not look like a Word document; trying anyway", os.path.basename(args.file))

    progress = None if args.quiet else print_progress_bar
    try:
        out_path = convert_file(args.file, args.out, progress_callback=progress)
    except Exception:
        if not args.quiet:
            print()
        LOGGER.exception("Conversion failed")
        print("Conversion failed. Please check the log for details.")
        return 1

    if not args.quiet:
        print()
    print(f"Saved PDF to: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(_cli())
