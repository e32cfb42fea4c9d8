"""Text measurement providers.

A provider answers two questions for a font role and point size: how wide a
string renders and how tall one line is. Layout only talks to this interface,
so it never needs a live canvas.
"""

from __future__ import annotations

from typing import Dict, Protocol

from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics

from bookpress.docs.model import FontSet
from bookpress.errors import FontResourceError

# Pillow hinting is coarse at small pixel sizes, so faces are loaded once at
# this size and widths are scaled linearly.
_REFERENCE_SIZE = 100


class TextMetrics(Protocol):
    def measure(self, text: str, font: str, size: float) -> float:
        ...

    def line_height(self, font: str, size: float) -> float:
        ...


class StandardFontMetrics:
    """Metrics for the PDF base-14 fonts, read from reportlab's bundled AFM data."""

    def __init__(self, fonts: FontSet | None = None) -> None:
        self.fonts = fonts or FontSet()
        for role in ("regular", "bold"):
            name = self.fonts.name_for(role)
            if name not in pdfmetrics.standardFonts:
                raise FontResourceError(
                    f"'{name}' is not a standard PDF font; configure a TTF path for it"
                )

    def measure(self, text: str, font: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.fonts.name_for(font), size)

    def line_height(self, font: str, size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self.fonts.name_for(font), size)
        return ascent - descent


class TrueTypeMetrics:
    """Metrics for TTF/OTF faces measured with Pillow.

    A role without a font file falls back to AFM metrics when its name is a
    base-14 font, so a TTF regular face can be paired with Times-Bold.
    """

    def __init__(self, fonts: FontSet) -> None:
        self.fonts = fonts
        self._faces: Dict[str, ImageFont.FreeTypeFont] = {}

    def _standard_name(self, role: str) -> str | None:
        name = self.fonts.name_for(role)
        if not self.fonts.path_for(role) and name in pdfmetrics.standardFonts:
            return name
        return None

    def _face(self, role: str) -> ImageFont.FreeTypeFont:
        face = self._faces.get(role)
        if face is not None:
            return face
        path = self.fonts.path_for(role)
        if not path:
            raise FontResourceError(f"No font file configured for the '{role}' role")
        try:
            face = ImageFont.truetype(path, _REFERENCE_SIZE)
        except OSError as exc:
            raise FontResourceError(f"Cannot load font '{path}': {exc}") from exc
        self._faces[role] = face
        return face

    def measure(self, text: str, font: str, size: float) -> float:
        standard = self._standard_name(font)
        if standard:
            return pdfmetrics.stringWidth(text, standard, size)
        return self._face(font).getlength(text) * size / _REFERENCE_SIZE

    def line_height(self, font: str, size: float) -> float:
        standard = self._standard_name(font)
        if standard:
            ascent, descent = pdfmetrics.getAscentDescent(standard, size)
            return ascent - descent
        ascent, descent = self._face(font).getmetrics()
        return (ascent + descent) * size / _REFERENCE_SIZE


def metrics_for(fonts: FontSet) -> TextMetrics:
    """Pick the provider matching how ``fonts`` is configured."""
    if fonts.is_truetype:
        return TrueTypeMetrics(fonts)
    return StandardFontMetrics(fonts)

