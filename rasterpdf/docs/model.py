from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class DocumentInfo:
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[str] = None


@dataclass(frozen=True)
class MarkupFragment:
    html: str
    style_map: Tuple[str, ...]
    warnings: List[str] = field(default_factory=list)
    info: DocumentInfo = field(default_factory=DocumentInfo)


@dataclass
class RasterImage:
    """Fixed-width RGB pixel buffer produced from a render surface."""

    pixels: np.ndarray
    scale: float = 1.0

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class PagePlacement:
    index: int
    offset: float
    progress: float
