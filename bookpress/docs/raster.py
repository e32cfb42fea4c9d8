"""Raster PDF backend: paint pages onto a tall image strip and slice it.

Output is an image-only PDF (no selectable text). It depends on FreeType
support in Pillow and is meant for environments where drawing text with
reportlab is not wanted; PdfSerializer is the default.
"""

from __future__ import annotations

import io
import time
from typing import Dict, List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from bookpress.errors import FontResourceError, SerializationError
from bookpress.log import get_logger

from .model import Document, FontSet, Page

_FIXED_DATE = time.gmtime(0)

logger = get_logger(__name__)


class RasterPdfSerializer:
    extension = "pdf"
    media_type = "application/pdf"

    def __init__(self, fonts: Optional[FontSet] = None, dpi: int = 150, pages_per_strip: int = 8) -> None:
        self.fonts = fonts or FontSet()
        self.dpi = int(dpi)
        self.pages_per_strip = max(1, int(pages_per_strip))

    def _load_font(self, role: str, px: int, cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont]):
        key = (role, px)
        font = cache.get(key)
        if font is not None:
            return font
        path = self.fonts.path_for(role)
        try:
            if path:
                font = ImageFont.truetype(path, px)
            else:
                font = ImageFont.load_default(size=px)
        except OSError as e:
            raise FontResourceError(f"Cannot load font for '{role}' ({path or 'default'}): {e}") from e
        if not isinstance(font, ImageFont.FreeTypeFont):
            raise FontResourceError("Pillow was built without FreeType; scalable fonts unavailable")
        cache[key] = font
        return font

    def render_pages(self, document: Document) -> List[Image.Image]:
        geometry = document.geometry
        scale = self.dpi / 72.0
        page_w = int(round(geometry.width * scale))
        page_h = int(round(geometry.height * scale))
        fonts: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}
        fallback = [role for role in sorted({r.font for r in document.iter_runs()}) if not self.fonts.path_for(role)]
        if fallback:
            # Layout measured these roles with base-14 metrics; Pillow's default face differs.
            logger.warning(
                "Raster backend has no font file for %s; drawing with Pillow's default font, lines may overflow",
                ", ".join(f"{role} ({self.fonts.name_for(role)})" for role in fallback),
            )
        out: List[Image.Image] = []

        pages = list(document.pages)
        for start in range(0, len(pages), self.pages_per_strip):
            chunk: List[Page] = pages[start:start + self.pages_per_strip]
            strip = Image.new("RGB", (page_w, page_h * len(chunk)), (255, 255, 255))
            draw = ImageDraw.Draw(strip)
            for offset, page in enumerate(chunk):
                top = offset * page_h
                for run in page.runs:
                    font = self._load_font(run.font, max(1, int(round(run.size * scale))), fonts)
                    fill = tuple(int(round(c * 255)) for c in run.color)
                    xy = (run.x * scale, top + (geometry.height - run.y) * scale)
                    draw.text(xy, run.text, font=font, fill=fill, anchor="ls")
            arr = np.asarray(strip)
            for offset in range(len(chunk)):
                band = arr[offset * page_h:(offset + 1) * page_h]
                out.append(Image.fromarray(band))
        return out

    def serialize(self, document: Document) -> bytes:
        images = self.render_pages(document)
        if not images:
            raise SerializationError("Document has no pages to rasterize")
        buf = io.BytesIO()
        images[0].save(
            buf,
            "PDF",
            save_all=True,
            append_images=images[1:],
            resolution=float(self.dpi),
            title=document.title,
            creationDate=_FIXED_DATE,
            modDate=_FIXED_DATE,
        )
        return buf.getvalue()
