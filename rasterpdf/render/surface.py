"""Render surfaces: the styled container a markup fragment is rasterized from.

A surface is an lxml ``<div>`` holding the parsed fragment plus the fixed
style sheet. It only lives inside a :class:`RenderHost` for the duration of
``RenderHost.mounted``.
"""

from __future__ import annotations

import copy
from collections import OrderedDict
from contextlib import contextmanager
from typing import Dict, Iterator, List

import lxml.html

from rasterpdf.docs.model import MarkupFragment
from rasterpdf.errors import RenderError

from .styles import CONTAINER_STYLE, STYLE_SHEET

SURFACE_CLASS = "rasterpdf-surface"
SHADOW_PROPERTIES = ("box-shadow", "text-shadow")


def parse_style(value: str | None) -> Dict[str, str]:
    """Parse an inline ``style`` attribute into an ordered property map."""
    declarations: Dict[str, str] = OrderedDict()
    for chunk in (value or "").split(";"):
        if ":" not in chunk:
            continue
        name, _, prop_value = chunk.partition(":")
        name = name.strip().lower()
        if name:
            declarations[name] = prop_value.strip()
    return declarations


def format_style(declarations: Dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


class RenderSurface:
    def __init__(self, element: lxml.html.HtmlElement) -> None:
        self.element = element

    @property
    def is_attached(self) -> bool:
        return self.element.getparent() is not None

    def __repr__(self) -> str:
        state = "attached" if self.is_attached else "detached"
        return f"<RenderSurface {state} children={len(self.element)}>"


class RenderHost:
    """Document tree that render surfaces are mounted into while rasterized."""

    def __init__(self) -> None:
        self.document = lxml.html.document_fromstring("<html><head></head><body></body></html>")

    @property
    def body(self) -> lxml.html.HtmlElement:
        return self.document.body

    def surfaces(self) -> List[lxml.html.HtmlElement]:
        return [child for child in self.body if SURFACE_CLASS in (child.get("class") or "").split()]

    @contextmanager
    def mounted(self, surface: RenderSurface) -> Iterator[RenderSurface]:
        """Attach ``surface`` to the body and detach it on every exit path."""
        self.body.append(surface.element)
        try:
            yield surface
        finally:
            self.body.remove(surface.element)


def build_surface(fragment: MarkupFragment) -> RenderSurface:
    """Wrap the fragment in the fixed-width container and attach the style sheet.

    Raises:
        RenderError: if lxml cannot parse the fragment.
    """
    try:
        if fragment.html.strip():
            container = lxml.html.fragment_fromstring(fragment.html, create_parent="div")
        else:
            container = lxml.html.Element("div")
    except Exception as exc:
        raise RenderError(f"Could not build render surface: {exc}") from exc
    container.set("class", SURFACE_CLASS)
    container.set("style", CONTAINER_STYLE)

    style_element = lxml.html.Element("style")
    style_element.text = STYLE_SHEET
    container.append(style_element)
    return RenderSurface(container)


def clone_without_shadows(surface: RenderSurface) -> lxml.html.HtmlElement:
    """Deep-copy the surface and force every shadow effect off in the copy."""
    clone = copy.deepcopy(surface.element)
    for element in clone.iter():
        if not isinstance(element.tag, str):
            continue
        declarations = parse_style(element.get("style"))
        for name in SHADOW_PROPERTIES:
            declarations.pop(name, None)
            declarations[name] = "none"
        element.set("style", format_style(declarations))
    return clone
