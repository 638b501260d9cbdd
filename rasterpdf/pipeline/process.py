"""High-level pipeline: DOCX → HTML markup → raster image → PDF.

This module orchestrates the full flow and provides the single entry point
`convert` suitable for scripts and applications, plus `convert_file` for
working with paths.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from rasterpdf.docs import assemble_pdf, extract_markup
from rasterpdf.docs.docx_io import DocumentSource
from rasterpdf.render import RenderHost, build_surface, rasterize

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

RASTER_DONE_PROGRESS = 70


class ProgressReporter:
    """Forward progress to a callback, clamped to [0, 100] and never decreasing.

    Exceptions raised by the callback propagate to the caller.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self.callback = callback
        self.last = 0.0

    def __call__(self, percent: float) -> None:
        value = max(self.last, min(100.0, max(0.0, float(percent))))
        self.last = value
        if self.callback is not None:
            self.callback(value)


def print_progress_bar(percent: float, width: int = 20) -> None:
    """Render a colored one-line progress bar.

    Doxygen:
    - @param percent: Completion in percent (0-100).
    - @param width: Number of bar segments (default 20).
    """
    progress = max(0.0, min(100.0, percent)) / 100.0
    segments = max(1, int(width))
    filled = segments if progress >= 1.0 else int(progress * segments)
    pending = max(0, segments - filled)
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    RESET = "\x1b[0m"
    bar = f"{GREEN}{'█'*filled}{RESET}{RED}{'█'*pending}{RESET} {percent:5.1f}%"
    print(f"\r{bar}", end="", flush=True)


def convert(
    document: DocumentSource,
    progress_callback: Optional[ProgressCallback] = None,
    host: Optional[RenderHost] = None,
    allow_taint: bool = True,
) -> bytes:
    """Convert DOCX content into an image-based, US Letter PDF.

    Doxygen:
    - @param document: DOCX content as bytes or a binary file object.
    - @param progress_callback: Called with non-decreasing percentages in [0, 100]
      (10 when rasterization starts, 70 after it, then up to 100 per page).
    - @param host: Document tree the render surface is mounted on while
      rasterizing; a fresh one is used when omitted.
    - @param allow_taint: Tolerate images that cannot be loaded (rendered empty);
      when off they raise RenderError.
    - @return: The PDF file content.
    - @throws ParseError: If the content is not a readable DOCX package.
    - @throws RenderError: If the markup cannot be rasterized.
    - @throws AssemblyError: If the PDF cannot be built.
    """
    progress = ProgressReporter(progress_callback)
    host = host if host is not None else RenderHost()

    fragment = extract_markup(document)
    surface = build_surface(fragment)
    with host.mounted(surface):
        raster = rasterize(surface, progress=progress, allow_taint=allow_taint)
    progress(RASTER_DONE_PROGRESS)

    return assemble_pdf(raster, info=fragment.info, progress=progress)


def output_name_for(path: str) -> str:
    """Replace the last extension of ``path`` with ``.pdf``."""
    root, ext = os.path.splitext(path)
    return (root if ext else path) + ".pdf"


def convert_file(
    input_path: str,
    output_path: Optional[str] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> str:
    """Convert a DOCX file on disk and write the PDF next to it (or to ``output_path``)."""
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"File not found: {input_path}")

    out_path = output_path or output_name_for(input_path)
    LOGGER.info("Converting %s -> %s", input_path, out_path)

    with open(input_path, "rb") as f:
        data = f.read()
    pdf_bytes = convert(data, progress_callback=progress_callback)

    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "wb") as f:
        f.write(pdf_bytes)
    return out_path
