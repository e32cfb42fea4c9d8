"""Page layout: cursor and the document layout engine."""

from .cursor import PageCursor
from .engine import DocumentLayoutEngine, layout_document, resolve_title

__all__ = [
    "PageCursor",
    "DocumentLayoutEngine",
    "layout_document",
    "resolve_title",
]
