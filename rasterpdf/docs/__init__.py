"""Document input and output layer.

Exposes:
- Data model: DocumentInfo, MarkupFragment, RasterImage, PagePlacement
- Reader: DOCX → HTML markup fragment (mammoth, python-docx)
- Writer: raster image → paginated PDF (reportlab)
"""

from .docx_io import STYLE_MAP, extract_markup, read_document_info
from .model import DocumentInfo, MarkupFragment, PagePlacement, RasterImage
from .pdf_io import PAGE_SIZE, assemble_pdf, plan_pages

__all__ = [
    "DocumentInfo",
    "MarkupFragment",
    "PagePlacement",
    "RasterImage",
    "STYLE_MAP",
    "extract_markup",
    "read_document_info",
    "PAGE_SIZE",
    "assemble_pdf",
    "plan_pages",
]
