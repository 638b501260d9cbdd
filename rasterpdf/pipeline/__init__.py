"""High-level pipeline orchestration for DOCX → HTML → raster → PDF."""

from .process import (
    ProgressReporter,
    convert,
    convert_file,
    output_name_for,
    print_progress_bar,
)

__all__ = [
    "ProgressReporter",
    "convert",
    "convert_file",
    "output_name_for",
    "print_progress_bar",
]
