import base64
import io
import zipfile

import cv2
import numpy as np
import pytest
from docx import Document
from docx.shared import Inches


def png_bytes(width=40, height=20, color=(200, 30, 30)):
    """Encode a solid RGB image as PNG."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    ok, buf = cv2.imencode(".png", cv2.cvtColor(img, cv2.COLOR_RGB2BGR))
    assert ok
    return buf.tobytes()


def png_data_uri(width=40, height=20, color=(200, 30, 30)):
    encoded = base64.b64encode(png_bytes(width, height, color)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def build_docx(headings=(), paragraphs=(), title=None, table=None, image=False, core_title=None):
    doc = Document()
    if title:
        doc.add_heading(title, level=0)
    for text in headings:
        doc.add_heading(text, level=1)
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        grid = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    if image:
        doc.add_picture(io.BytesIO(png_bytes()), width=Inches(1))
    if core_title:
        doc.core_properties.title = core_title
    out = io.BytesIO()
    doc.save(out)
    return out.getvalue()


DOCX_MAIN_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
DOCM_MAIN_TYPE = "application/vnd.ms-word.document.macroEnabled.main+xml"


def as_macro_enabled(data):
    """Rewrite a .docx package so its main part is declared macro-enabled (.docm)."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as source, zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as target:
        for item in source.infolist():
            content = source.read(item.filename)
            if item.filename == "[Content_Types].xml":
                content = content.replace(DOCX_MAIN_TYPE.encode(), DOCM_MAIN_TYPE.encode())
            target.writestr(item, content)
    return out.getvalue()


@pytest.fixture
def simple_docx():
    return build_docx(
        headings=["Introduction", "Details"],
        paragraphs=["A first paragraph of body text.", "A second paragraph."],
        core_title="Quarterly Report",
    )


@pytest.fixture(scope="session")
def chromium():
    """Skip browser rendering tests when Playwright has no Chromium build installed."""
    from playwright.sync_api import Error, sync_playwright

    from rasterpdf.render.draw import launch_options

    try:
        with sync_playwright() as pw:
            pw.chromium.launch(**launch_options()).close()
    except Error as exc:
        pytest.skip(f"Chromium is not available for Playwright: {exc}")
