"""HTML surface construction and browser rasterization."""

from .draw import configure_browser, rasterize
from .surface import RenderHost, RenderSurface, build_surface, clone_without_shadows

__all__ = [
    "RenderHost",
    "RenderSurface",
    "build_surface",
    "clone_without_shadows",
    "configure_browser",
    "rasterize",
]
