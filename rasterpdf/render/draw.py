"""Rasterization of a mounted render surface.

The shadow-free clone of the surface is loaded into headless Chromium through
Playwright at the page width and 2x device scale, captured as a PNG and decoded
into a numpy array with OpenCV.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import lxml.html
from playwright.sync_api import Route, sync_playwright

from rasterpdf.docs.model import RasterImage
from rasterpdf.errors import RenderError
from rasterpdf.image.processing import decode_image

from .styles import PAGE_HEIGHT_PX, PAGE_WIDTH_PX, SCALE
from .surface import SURFACE_CLASS, RenderSurface, clone_without_shadows

LOGGER = logging.getLogger(__name__)

RASTER_START_PROGRESS = 10
VIEWPORT = {"width": PAGE_WIDTH_PX, "height": PAGE_HEIGHT_PX}
BROWSER_ARGS = ["--disable-dev-shm-usage", "--disable-gpu", "--no-sandbox"]

PAGE_TEMPLATE = (
    '<!DOCTYPE html><html><head><meta charset="utf-8"></head>'
    '<body style="margin: 0; background-color: #ffffff">{content}</body></html>'
)

BROKEN_IMAGES_SCRIPT = """() => Array.from(document.images)
    .filter(img => img.getAttribute('src') && (!img.complete || img.naturalWidth === 0))
    .map(img => img.getAttribute('src').slice(0, 60))"""

_browser_executable: Optional[str] = None


def configure_browser(executable_path: Optional[str]) -> None:
    """Use a specific Chromium executable instead of Playwright's bundled one."""
    global _browser_executable
    _browser_executable = executable_path or None


def launch_options() -> dict:
    options = {"headless": True, "args": list(BROWSER_ARGS)}
    if _browser_executable:
        options["executable_path"] = _browser_executable
    return options


def external_images(element: lxml.html.HtmlElement) -> List[str]:
    """Sources of ``img`` elements that are not inlined as ``data:`` URIs."""
    sources = []
    for img in element.iter("img"):
        src = (img.get("src") or "").strip()
        if src and not src.lower().startswith("data:"):
            sources.append(src)
    return sources


def page_html(element: lxml.html.HtmlElement) -> str:
    """Serialize a surface element into a standalone HTML page."""
    return PAGE_TEMPLATE.format(content=lxml.html.tostring(element, encoding="unicode", method="html"))


def _block_network(route: Route) -> None:
    if route.request.url.startswith("data:"):
        route.continue_()
        return
    LOGGER.debug("Blocked request for %s", route.request.url)
    route.abort()


def capture(html: str, allow_taint: bool = True) -> bytes:
    """Load ``html`` in Chromium and screenshot the surface container as PNG.

    Network access is blocked; external resources fail to load. Images that
    fail to load are tolerated when ``allow_taint`` is set and raise
    ``RenderError`` otherwise.
    """
    with sync_playwright() as pw:
        browser = pw.chromium.launch(**launch_options())
        try:
            page = browser.new_page(viewport=VIEWPORT, device_scale_factor=SCALE)
            page.route("**/*", _block_network)
            page.set_content(html, wait_until="load")

            broken = page.evaluate(BROKEN_IMAGES_SCRIPT)
            if broken:
                if not allow_taint:
                    raise RenderError(f"{len(broken)} image(s) could not be loaded: {broken}")
                LOGGER.warning("%d image(s) could not be loaded and render empty: %s", len(broken), broken)

            return page.locator(f"div.{SURFACE_CLASS}").first.screenshot(type="png", animations="disabled")
        finally:
            browser.close()


def rasterize(
    surface: RenderSurface,
    progress: Optional[Callable[[float], None]] = None,
    allow_taint: bool = True,
) -> RasterImage:
    """Render a mounted surface into a single tall bitmap.

    The surface is cloned and shadows are stripped from the clone before
    capture; the surface itself is left untouched.

    Raises:
        RenderError: if the surface is not mounted, an image is unusable while
            ``allow_taint`` is off, or the browser fails.
    """
    if not surface.is_attached:
        raise RenderError("Render surface must be mounted on a host before rasterizing")

    if progress is not None:
        progress(RASTER_START_PROGRESS)

    clone = clone_without_shadows(surface)
    external = external_images(clone)
    if external and not allow_taint:
        raise RenderError(f"Surface references {len(external)} external image(s): {external[:3]}")

    try:
        png = capture(page_html(clone), allow_taint=allow_taint)
        pixels = decode_image(png)
    except RenderError:
        raise
    except Exception as exc:
        raise RenderError(f"Rasterization failed: {exc}") from exc

    LOGGER.info("Rasterized surface to %dx%d px", pixels.shape[1], pixels.shape[0])
    return RasterImage(pixels=pixels, scale=SCALE)
