from __future__ import annotations

import io
import logging
from typing import Callable, List, Optional

from PIL import Image
from reportlab.lib.pagesizes import letter, portrait
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from rasterpdf.errors import AssemblyError

from .model import DocumentInfo, PagePlacement, RasterImage

LOGGER = logging.getLogger(__name__)

PAGE_SIZE = portrait(letter)
PAGINATION_START_PROGRESS = 70.0
PAGINATION_SPAN = 30.0
CREATOR = "rasterpdf"


def scaled_height(image_width: int, image_height: int, page_width: float) -> float:
    """Height of the image, in page units, once fit to the page width."""
    return image_height * page_width / image_width


def plan_pages(
    image_width: int,
    image_height: int,
    page_width: float = PAGE_SIZE[0],
    page_height: float = PAGE_SIZE[1],
) -> List[PagePlacement]:
    """Compute where the full image sits on each page.

    Every page shows the whole image shifted up by the height already
    rendered on previous pages, so page ``n`` shows band ``n``. A new page is
    only started while strictly more than one page height remains, so an
    image that ends exactly on a page boundary gets no trailing blank page.

    Doxygen:
    - @param image_width: Raster width in pixels.
    - @param image_height: Raster height in pixels.
    - @param page_width: Page width in points.
    - @param page_height: Page height in points.
    - @return: One placement per page, with the progress value to report after it.
    - @throws AssemblyError: If the raster or page dimensions are not positive.
    """
    if image_width <= 0 or image_height <= 0:
        raise AssemblyError(f"Cannot paginate a {image_width}x{image_height} raster image")
    if page_width <= 0 or page_height <= 0:
        raise AssemblyError(f"Invalid page size {page_width}x{page_height}")

    total = scaled_height(image_width, image_height, page_width)

    def _progress(rendered: float) -> float:
        return PAGINATION_START_PROGRESS + PAGINATION_SPAN * min(1.0, rendered / total)

    placements = [PagePlacement(index=0, offset=0.0, progress=_progress(page_height))]
    rendered = 0.0
    remaining = total
    while remaining - page_height > 0:
        rendered += page_height
        remaining -= page_height
        placements.append(
            PagePlacement(index=len(placements), offset=rendered, progress=_progress(rendered + page_height))
        )
    return placements


def _document_metadata(pdf: Canvas, info: Optional[DocumentInfo]) -> None:
    pdf.setCreator(CREATOR)
    if info is None:
        return
    if info.title:
        pdf.setTitle(info.title)
    if info.author:
        pdf.setAuthor(info.author)
    if info.subject:
        pdf.setSubject(info.subject)
    if info.keywords:
        pdf.setKeywords(info.keywords)


def assemble_pdf(
    raster: RasterImage,
    info: Optional[DocumentInfo] = None,
    progress: Optional[Callable[[float], None]] = None,
) -> bytes:
    """Slice a raster image across US Letter pages and return the PDF bytes.

    Raises:
        AssemblyError: if the raster is empty or reportlab fails.
    """
    page_width, page_height = PAGE_SIZE
    placements = plan_pages(raster.width, raster.height, page_width, page_height)
    image_height = scaled_height(raster.width, raster.height, page_width)

    buffer = io.BytesIO()
    try:
        image = ImageReader(Image.fromarray(raster.pixels))
        pdf = Canvas(buffer, pagesize=PAGE_SIZE)
        _document_metadata(pdf, info)
    except Exception as exc:
        raise AssemblyError(f"Could not start PDF document: {exc}") from exc

    for placement in placements:
        try:
            if placement.index > 0:
                pdf.showPage()
            # reportlab's origin is bottom-left; shift the image up by the offset.
            y = page_height - image_height + placement.offset
            pdf.drawImage(image, 0, y, width=page_width, height=image_height)
        except Exception as exc:
            raise AssemblyError(f"Could not place page {placement.index + 1}: {exc}") from exc
        if progress is not None:
            progress(placement.progress)

    try:
        pdf.showPage()
        pdf.save()
    except Exception as exc:
        raise AssemblyError(f"Could not write PDF document: {exc}") from exc

    LOGGER.info("Assembled %d page(s) from %dx%d px raster", len(placements), raster.width, raster.height)
    return buffer.getvalue()
