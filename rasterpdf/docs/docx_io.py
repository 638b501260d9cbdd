from __future__ import annotations

import base64
import io
import logging
from typing import BinaryIO, Dict, Optional, Tuple, Union

import mammoth
from docx import Document as DocxDocument

from rasterpdf.errors import ParseError

from .model import DocumentInfo, MarkupFragment

LOGGER = logging.getLogger(__name__)

DocumentSource = Union[bytes, bytearray, memoryview, BinaryIO]

# Order matters: mammoth uses the first matching rule.
STYLE_MAP: Tuple[str, ...] = (
    "p[style-name='Heading 1'] => h1:fresh",
    "p[style-name='Heading 2'] => h2:fresh",
    "p[style-name='Heading 3'] => h3:fresh",
    "p[style-name='Heading 4'] => h4:fresh",
    "p[style-name='Heading 5'] => h5:fresh",
    "p[style-name='Heading 6'] => h6:fresh",
    "p[style-name='Title'] => h1.title:fresh",
    "p[style-name='Subtitle'] => h2.subtitle:fresh",
    "table => table.w-full.border-collapse.my-4",
    "tr => tr",
    "td => td.p-2.border",
    "th => th.p-2.border.font-bold",
    "r[style-name='Strong'] => strong",
    "r[style-name='Emphasis'] => em",
    "r[style-name='Underline'] => u",
    "chart => div.chart-container.relative",
)

IMAGE_STYLE = "max-width: 100%; height: auto;"


def read_source(document: DocumentSource) -> bytes:
    """Return the raw bytes of ``document`` (bytes-like or binary file object)."""
    if isinstance(document, (bytes, bytearray, memoryview)):
        return bytes(document)
    if hasattr(document, "read"):
        return document.read()
    raise TypeError(f"Expected bytes or a binary file object, got {type(document).__name__}")


def _inline_image(image) -> Dict[str, str]:
    """Embed an image as a self-contained data URI."""
    with image.open() as image_bytes:
        encoded = base64.b64encode(image_bytes.read()).decode("ascii")
    return {
        "src": f"data:{image.content_type};base64,{encoded}",
        "style": IMAGE_STYLE,
    }


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def read_document_info(data: bytes) -> DocumentInfo:
    """Return the package's core properties, or empty info if python-docx cannot open it.

    python-docx only opens plain ``.docx`` packages; macro-enabled documents and
    templates still convert through mammoth, just without metadata.
    """
    try:
        props = DocxDocument(io.BytesIO(data)).core_properties
    except Exception as exc:
        LOGGER.warning("Could not read document properties: %s", exc)
        return DocumentInfo()
    return DocumentInfo(
        title=_blank_to_none(props.title),
        author=_blank_to_none(props.author),
        subject=_blank_to_none(props.subject),
        keywords=_blank_to_none(props.keywords),
    )


def extract_markup(document: DocumentSource) -> MarkupFragment:
    """Convert DOCX content into an HTML fragment with inlined images.

    Raises:
        ParseError: if mammoth cannot read the content as a Word package.
    """
    data = read_source(document)

    try:
        result = mammoth.convert_to_html(
            io.BytesIO(data),
            style_map="\n".join(STYLE_MAP),
            include_default_style_map=True,
            convert_image=mammoth.images.img_element(_inline_image),
        )
    except Exception as exc:
        raise ParseError(f"Could not read DOCX content ({len(data)} bytes): {exc}") from exc
    info = read_document_info(data)

    warnings = [message.message for message in result.messages]
    for warning in warnings:
        LOGGER.debug("mammoth: %s", warning)
    LOGGER.info("Extracted %d characters of markup (%d warnings)", len(result.value), len(warnings))

    return MarkupFragment(html=result.value, style_map=STYLE_MAP, warnings=warnings, info=info)
