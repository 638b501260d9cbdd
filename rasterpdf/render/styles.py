"""Fixed page geometry and style sheet used for rasterization.

The rules here are applied on top of whatever the source document carries and
are never merged with it: text is always black and backgrounds white (table
headers excepted).
"""

from __future__ import annotations

from typing import Dict, List, Tuple

CSS_DPI = 96
SCALE = 2
PAGE_WIDTH_IN = 8.5
PAGE_HEIGHT_IN = 11.0
PADDING_IN = 1.0

PAGE_WIDTH_PX = int(PAGE_WIDTH_IN * CSS_DPI)
PAGE_HEIGHT_PX = int(PAGE_HEIGHT_IN * CSS_DPI)

TABLE_BORDER_PX = 1
TABLE_CELL_PADDING_PX = 8

CONTAINER_STYLE = (
    f"width: {PAGE_WIDTH_IN:g}in; padding: {PADDING_IN:g}in; font-family: Arial, sans-serif; "
    "color: #000000; background-color: #ffffff; box-sizing: border-box"
)

# tag -> (font size pt, margin top px, margin bottom px, line height)
HEADING_RULES: Dict[str, Tuple[float, float, float, float]] = {
    "h1": (24, 24, 12, 1.2),
    "h2": (20, 20, 10, 1.3),
    "h3": (16, 16, 8, 1.4),
    "h4": (14, 14, 7, 1.4),
    "h5": (12, 12, 6, 1.4),
    "h6": (11, 11, 5.5, 1.4),
}


def _heading_rule(tag: str, size_pt: float, margin_top: float, margin_bottom: float, line_height: float) -> str:
    return (
        f"{tag} {{ font-size: {size_pt:g}pt !important; font-weight: bold !important; "
        f"margin: {margin_top:g}px 0 {margin_bottom:g}px 0 !important; "
        f"line-height: {line_height:g} !important; }}"
    )


def build_style_sheet() -> str:
    """Render the fixed rules as CSS for the surface's ``<style>`` element."""
    rules: List[str] = [_heading_rule(tag, *values) for tag, values in HEADING_RULES.items()]
    rules += [
        ".title { font-size: 28pt !important; margin-bottom: 12px !important; }",
        ".subtitle { font-size: 18pt !important; font-weight: normal !important; "
        "margin-top: 0 !important; margin-bottom: 24px !important; }",
        "p { margin: 16px 0 !important; }",
        "p, li, td { font-size: 12pt !important; line-height: 1.5 !important; }",
        "table { width: 100% !important; border-collapse: collapse !important; page-break-inside: avoid; }",
        f"td, th {{ border: {TABLE_BORDER_PX}px solid #000000 !important; "
        f"padding: {TABLE_CELL_PADDING_PX}px !important; }}",
        "th { background-color: #f3f4f6 !important; text-align: left !important; font-weight: bold !important; }",
        "img { max-width: 100%; height: auto; }",
        ".chart-container { width: 100% !important; height: auto !important; page-break-inside: avoid; }",
        ".chart-container img { width: 100% !important; height: auto !important; }",
        "* { color: #000000 !important; background-color: transparent !important; }",
        "body, html, div { background-color: #ffffff !important; }",
    ]
    return "\n".join(rules)


STYLE_SHEET = build_style_sheet()
