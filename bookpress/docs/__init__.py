"""Document model and output formats (TXT, PDF, raster PDF, DOCX).

Exposes:
- Data model: LogicalLine, StyledRun, Page, Document, PageGeometry, StyleTable, FontSet
- Body parsing: parse_body, header_depth, strip_header
- Serializers: PdfSerializer, RasterPdfSerializer, DocxSerializer, get_serializer
- Metadata: BookMetadata, PlanTier, chapter_count_from_outline, metadata_to_text
"""

from .model import (
    BOLD,
    REGULAR,
    Document,
    FontSet,
    LogicalLine,
    Page,
    PageGeometry,
    StyledRun,
    StyleTable,
    header_depth,
    parse_body,
    strip_header,
)
from .metadata import BookMetadata, PlanTier, chapter_count_from_outline, metadata_to_bytes, metadata_to_text
from .serializers import DocumentSerializer, get_serializer
from .pdf_io import PdfSerializer
from .raster import RasterPdfSerializer
from .docx_io import DocxSerializer
from .txt import body_to_bytes

__all__ = [
    "BOLD",
    "REGULAR",
    "Document",
    "FontSet",
    "LogicalLine",
    "Page",
    "PageGeometry",
    "StyledRun",
    "StyleTable",
    "header_depth",
    "parse_body",
    "strip_header",
    "BookMetadata",
    "PlanTier",
    "chapter_count_from_outline",
    "metadata_to_bytes",
    "metadata_to_text",
    "DocumentSerializer",
    "get_serializer",
    "PdfSerializer",
    "RasterPdfSerializer",
    "DocxSerializer",
    "body_to_bytes",
]
