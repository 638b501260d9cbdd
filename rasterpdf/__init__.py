"""Convert DOCX documents into paginated, image-based PDFs.

Packages:
- rasterpdf.docs: DOCX → markup extraction and raster → PDF assembly
- rasterpdf.render: Render surfaces and browser rasterization
- rasterpdf.image: Screenshot decoding
- rasterpdf.pipeline: High-level orchestration (`convert`)
"""

from rasterpdf.errors import AssemblyError, ConversionError, ParseError, RenderError
from rasterpdf.pipeline import convert, convert_file

__all__ = [
    "AssemblyError",
    "ConversionError",
    "ParseError",
    "RenderError",
    "convert",
    "convert_file",
]
