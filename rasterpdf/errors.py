"""Exception types raised by the conversion stages.

Each stage wraps failures of the library it drives into its own class; the
pipeline itself lets them propagate to the caller untouched.
"""


class ConversionError(Exception):
    """Base class for DOCX to PDF conversion failures."""


class ParseError(ConversionError):
    """The source document is malformed or could not be read."""


class RenderError(ConversionError):
    """The markup could not be laid out or rasterized."""


class AssemblyError(ConversionError):
    """The PDF could not be built from the raster image."""
