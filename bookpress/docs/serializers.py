"""Serializer interface and backend lookup."""

from __future__ import annotations

from typing import Optional, Protocol

from bookpress.errors import ConfigurationError

from .docx_io import DocxSerializer
from .model import Document, FontSet
from .pdf_io import PdfSerializer
from .raster import RasterPdfSerializer


class DocumentSerializer(Protocol):
    extension: str
    media_type: str

    def serialize(self, document: Document) -> bytes:
        ...


def get_serializer(
    name: str = "pdf",
    fonts: Optional[FontSet] = None,
    author: Optional[str] = None,
    dpi: int = 150,
) -> DocumentSerializer:
    key = (name or "pdf").strip().lower()
    if key == "pdf":
        return PdfSerializer(fonts=fonts, author=author)
    if key == "raster":
        return RasterPdfSerializer(fonts=fonts, dpi=dpi)
    if key == "docx":
        return DocxSerializer(author=author)
    raise ConfigurationError(f"Unknown serializer '{name}'. Allowed values: pdf, raster, docx.")
