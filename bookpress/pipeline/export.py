"""High-level export: layout → serialize ∥ plain text → metadata → ZIP.

`export_book` is the single entry point the UI layer calls with a finished
title, body and metadata record. It returns the archive bytes and the file
name to save them under; writing to disk is left to the caller.
"""

from __future__ import annotations

import base64
import binascii
import io
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from bookpress.archive.builder import ArchiveBuilder, EntrySpec, Failed
from bookpress.archive.naming import archive_filename, entry_filename
from bookpress.config import ExportConfig
from bookpress.docs.metadata import BookMetadata, metadata_to_bytes
from bookpress.docs.model import Document
from bookpress.docs.pdf_io import PdfSerializer
from bookpress.docs.serializers import DocumentSerializer, get_serializer
from bookpress.docs.txt import body_to_bytes
from bookpress.errors import FatalInputError
from bookpress.layout.engine import DocumentLayoutEngine
from bookpress.log import get_logger
from bookpress.render.metrics import TextMetrics, metrics_for

logger = get_logger(__name__)

COVER_NAME = "cover.png"

CoverImage = Union[bytes, str]


@dataclass(frozen=True)
class ExportResult:
    filename: str
    data: bytes
    entry_names: Tuple[str, ...]
    failed: Tuple[Failed, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.failed)


def decode_cover(cover: CoverImage) -> bytes:
    """Return cover image bytes from raw bytes or a ``data:image/...;base64,`` URL."""
    if isinstance(cover, (bytes, bytearray)):
        return bytes(cover)
    text = str(cover).strip()
    if text.startswith("data:"):
        header, _, payload = text.partition(",")
        if ";base64" not in header:
            raise ValueError("Cover data URL must be base64 encoded")
        text = payload
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Cover image is not valid base64: {e}") from e


def cover_to_png(cover: CoverImage) -> bytes:
    raw = decode_cover(cover)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            if img.mode not in ("RGB", "RGBA", "L", "LA"):
                img = img.convert("RGBA")
            buf = io.BytesIO()
            img.save(buf, format="PNG")
    except UnidentifiedImageError as e:
        raise ValueError(f"Cover image format not recognised: {e}") from e
    return buf.getvalue()


def build_document(
    title: Optional[str],
    body: Optional[str],
    config: Optional[ExportConfig] = None,
    metrics: Optional[TextMetrics] = None,
) -> Document:
    config = config or ExportConfig()
    engine = DocumentLayoutEngine(
        metrics=metrics or metrics_for(config.fonts),
        geometry=config.geometry,
        style=config.style,
    )
    return engine.layout(title, body)


def export_pdf_bytes(
    title: Optional[str],
    body: Optional[str],
    config: Optional[ExportConfig] = None,
    metrics: Optional[TextMetrics] = None,
    author: Optional[str] = None,
) -> bytes:
    """Lay out and render the PDF alone, without bundling."""
    config = config or ExportConfig()
    document = build_document(title, body, config, metrics)
    return PdfSerializer(fonts=config.fonts, author=author).serialize(document)


def export_txt_bytes(body: Optional[str]) -> bytes:
    return body_to_bytes(body)


def export_book(
    title: Optional[str],
    body: Optional[str],
    metadata: Union[BookMetadata, Mapping[str, Any]],
    config: Optional[ExportConfig] = None,
    cover_image: Optional[CoverImage] = None,
    serializer: Optional[DocumentSerializer] = None,
    metrics: Optional[TextMetrics] = None,
    today: Optional[date] = None,
) -> ExportResult:
    """Produce the downloadable archive for one book.

    Doxygen:
    - @param title: Book title; empty falls back to "book" in file names.
    - @param body: Newline-delimited body with ``#``-marked headers.
    - @param metadata: BookMetadata or a flat mapping accepted by BookMetadata.from_mapping.
    - @param config: Page geometry, style and fonts; defaults when omitted.
    - @param cover_image: Optional cover as bytes or a base64 data URL.
    - @param serializer: Document backend; chosen from config when omitted.
    - @param metrics: Text metrics; chosen from the configured fonts when omitted.
    - @param today: Date stamp for file names; defaults to the metadata date.
    - @return: ExportResult with archive bytes, file name and entry names.
    - @throws FatalInputError: If the plain-text or metadata entry cannot be produced.
    """
    if body is None:
        raise FatalInputError("Book body is missing; nothing to export")

    config = (config or ExportConfig()).validate()
    meta = metadata if isinstance(metadata, BookMetadata) else BookMetadata.from_mapping(metadata)
    day = today or meta.generated_at.date()
    backend = serializer or get_serializer(config.serializer, fonts=config.fonts, author=meta.author, dpi=config.dpi)

    def produce_document() -> bytes:
        document = build_document(title, body, config, metrics)
        return backend.serialize(document)

    specs = [
        EntrySpec(entry_filename(title, "txt", day), lambda: body_to_bytes(body), essential=True),
        EntrySpec(entry_filename(title, backend.extension, day), produce_document),
        EntrySpec(entry_filename(title, "metadata.txt", day), lambda: metadata_to_bytes(meta), essential=True),
    ]
    if cover_image is not None:
        specs.append(EntrySpec(COVER_NAME, lambda: cover_to_png(cover_image)))

    builder = ArchiveBuilder(timestamp=meta.generated_at)
    results = builder.collect(specs)
    entries = builder.resolve(results)
    data = builder.write(entries)

    failed = tuple(r for r in results if isinstance(r, Failed))
    name = archive_filename(title, day, config.product_tag)
    logger.info("Exported '%s' (%d bytes, %d degraded entries)", name, len(data), len(failed))
    return ExportResult(
        filename=name,
        data=data,
        entry_names=tuple(n for n, _ in entries),
        failed=failed,
    )
