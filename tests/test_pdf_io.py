import math
import re

import numpy as np
import pytest
from reportlab.pdfgen.canvas import Canvas

from rasterpdf.docs.model import DocumentInfo, RasterImage
from rasterpdf.docs.pdf_io import PAGE_SIZE, assemble_pdf, plan_pages
from rasterpdf.errors import AssemblyError

PAGE_W, PAGE_H = PAGE_SIZE


def _page_count(pdf_bytes):
    # The page tree carries the largest /Count (outlines report 0).
    counts = [int(value) for value in re.findall(rb"/Count (\d+)", pdf_bytes)]
    assert counts, "PDF has no page tree count"
    return max(counts)


def _raster(width, height):
    return RasterImage(pixels=np.full((height, width, 3), 255, dtype=np.uint8))


def test_letter_portrait_geometry():
    assert (PAGE_W, PAGE_H) == (612.0, 792.0)


def test_short_image_fits_on_one_page_at_offset_zero():
    placements = plan_pages(612, 500)
    assert len(placements) == 1
    assert placements[0].offset == 0
    assert placements[0].progress == 100


def test_exact_multiple_has_no_trailing_blank_page():
    placements = plan_pages(612, 2 * 792)
    assert [p.offset for p in placements] == [0, 792]


def test_two_and_a_half_pages_produce_three_pages():
    image_height = int(2.5 * 792)
    placements = plan_pages(612, image_height)
    assert [p.offset for p in placements] == [0, 792, 1584]
    # The last page shows the final half-page band.
    assert image_height - placements[-1].offset == pytest.approx(792 / 2)


@pytest.mark.parametrize("image_height", [1, 400, 791, 792, 793, 1600, 2376, 5000])
def test_page_count_is_ceiling_of_scaled_height(image_height):
    placements = plan_pages(612, image_height)
    assert len(placements) == max(1, math.ceil(image_height / 792))


def test_scaling_to_page_width_preserves_aspect_ratio():
    # 1632 px wide, 2.5 pages tall once scaled to 612pt.
    placements = plan_pages(1632, 5280)
    assert len(placements) == 3


def test_progress_is_monotonic_and_ends_at_100():
    values = [p.progress for p in plan_pages(612, 4000)]
    assert values == sorted(values)
    assert all(70 <= v <= 100 for v in values)
    assert values[-1] == 100


def test_invalid_dimensions_raise_assembly_error():
    with pytest.raises(AssemblyError):
        plan_pages(0, 100)
    with pytest.raises(AssemblyError):
        plan_pages(100, 0)


def test_assemble_pdf_writes_paginated_pdf():
    seen = []
    pdf = assemble_pdf(_raster(612, 1980), info=DocumentInfo(title="Quarterly Report"), progress=seen.append)
    assert pdf.startswith(b"%PDF-")
    assert _page_count(pdf) == 3
    assert b"Quarterly Report" in pdf
    assert len(seen) == 3
    assert seen[-1] == 100


def test_assemble_pdf_single_page():
    assert _page_count(assemble_pdf(_raster(1632, 900))) == 1


def test_progress_callback_errors_propagate():
    def explode(_value):
        raise ValueError("callback failed")

    with pytest.raises(ValueError):
        assemble_pdf(_raster(612, 100), progress=explode)


def test_each_page_shows_the_next_band(monkeypatch):
    calls = []
    original = Canvas.drawImage

    def recording_draw_image(self, image, x, y, *args, **kwargs):
        calls.append((self.getPageNumber(), x, y, kwargs.get("width"), kwargs.get("height")))
        return original(self, image, x, y, *args, **kwargs)

    monkeypatch.setattr(Canvas, "drawImage", recording_draw_image)
    image_height = 1980  # 2.5 pages once scaled to 612pt
    assemble_pdf(_raster(612, image_height))

    assert [call[0] for call in calls] == [1, 2, 3]
    assert all(call[1] == 0 and call[3] == PAGE_W and call[4] == image_height for call in calls)
    ys = [call[2] for call in calls]
    assert ys == pytest.approx([PAGE_H - image_height + PAGE_H * n for n in range(3)])
    # Page 1 starts at the top of the image.
    assert ys[0] + image_height == pytest.approx(PAGE_H)
    # Page 3 shows only the last half-page band, with blank space below it.
    assert ys[-1] == pytest.approx(PAGE_H / 2)
    visible = min(PAGE_H, ys[-1] + image_height) - max(0, ys[-1])
    assert visible == pytest.approx(PAGE_H / 2)
