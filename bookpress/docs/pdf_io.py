from __future__ import annotations

import hashlib
import io
import os
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from bookpress.errors import FontResourceError, SerializationError

from .model import FONT_ROLES, Document, FontSet

# Base-14 fonts are drawn with WinAnsi encoding.
_STANDARD_ENCODING = "cp1252"


def registered_font_name(name: str, path: str) -> str:
    """reportlab registry name for a TTF face; distinct for each font file."""
    digest = hashlib.sha1(os.path.abspath(path).encode("utf-8")).hexdigest()[:10]
    return f"{name}-{digest}"


def register_fonts(fonts: FontSet) -> Dict[str, str]:
    """Register configured TTF faces with reportlab and map roles to font names.

    Raises FontResourceError when a font file is missing or corrupt.
    """
    names: Dict[str, str] = {}
    for role in FONT_ROLES:
        name = fonts.name_for(role)
        path = fonts.path_for(role)
        if path:
            key = registered_font_name(name, path)
            try:
                if key not in pdfmetrics.getRegisteredFontNames():
                    pdfmetrics.registerFont(TTFont(key, path))
            except (OSError, TTFError) as e:
                raise FontResourceError(f"Cannot embed font '{name}' from {path}: {e}") from e
            name = key
        elif name not in pdfmetrics.standardFonts:
            raise FontResourceError(f"'{name}' is not a standard PDF font and has no font file")
        names[role] = name
    return names


class PdfSerializer:
    """Draw an already laid out Document onto PDF pages with reportlab."""

    extension = "pdf"
    media_type = "application/pdf"

    def __init__(self, fonts: Optional[FontSet] = None, author: Optional[str] = None) -> None:
        self.fonts = fonts or FontSet()
        self.author = author

    def serialize(self, document: Document) -> bytes:
        names = register_fonts(self.fonts)
        geometry = document.geometry
        buf = io.BytesIO()
        # invariant=1 drops timestamps/ids so equal documents give equal bytes
        c = canvas.Canvas(buf, pagesize=(geometry.width, geometry.height), invariant=1)
        c.setTitle(document.title)
        if self.author:
            c.setAuthor(self.author)
        c.setCreator("bookpress")

        for page in document.pages:
            for run in page.runs:
                if not self.fonts.path_for(run.font):
                    self._check_encodable(run.text)
                c.setFont(names[run.font], run.size)
                c.setFillColorRGB(*run.color)
                c.drawString(run.x, run.y, run.text)
            c.showPage()
        c.save()
        return buf.getvalue()

    @staticmethod
    def _check_encodable(text: str) -> None:
        try:
            text.encode(_STANDARD_ENCODING)
        except UnicodeEncodeError as e:
            bad = text[e.start:e.end]
            raise SerializationError(
                f"Character {bad!r} cannot be drawn with a standard PDF font; configure a TTF font"
            ) from e
