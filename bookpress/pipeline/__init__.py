"""High-level export orchestration."""

from .export import (
    ExportResult,
    build_document,
    export_book,
    export_pdf_bytes,
    export_txt_bytes,
)

__all__ = [
    "ExportResult",
    "build_document",
    "export_book",
    "export_pdf_bytes",
    "export_txt_bytes",
]
