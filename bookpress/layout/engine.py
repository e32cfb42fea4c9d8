"""Lay out a title and a structured body into fixed-size pages.

The engine is a pure function of its inputs: measurement comes from an
injected ``TextMetrics`` provider and every call builds its own cursor and
page list.
"""

from __future__ import annotations

from typing import List, Optional

from bookpress.docs.model import (
    BOLD,
    REGULAR,
    Document,
    Page,
    PageGeometry,
    StyledRun,
    StyleTable,
    parse_body,
)
from bookpress.errors import ConfigurationError
from bookpress.layout.cursor import PageCursor
from bookpress.log import get_logger
from bookpress.render.metrics import StandardFontMetrics, TextMetrics
from bookpress.render.wrap import iter_wrapped

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled"


def resolve_title(title: Optional[str], body: Optional[str], style: StyleTable) -> str:
    """Use ``title`` or, when it is empty, the first non-blank body line."""
    if title and title.strip():
        return title.strip()
    for line in parse_body(body or "", style.marker):
        if not line.is_blank and line.text:
            return line.text
    return DEFAULT_TITLE


class DocumentLayoutEngine:
    def __init__(
        self,
        metrics: Optional[TextMetrics] = None,
        geometry: Optional[PageGeometry] = None,
        style: Optional[StyleTable] = None,
    ) -> None:
        self.metrics = metrics or StandardFontMetrics()
        self.geometry = geometry or PageGeometry()
        self.style = style or StyleTable()
        self._check_fits()

    def _check_fits(self) -> None:
        if self.geometry.usable_width <= 0:
            raise ConfigurationError(
                f"Margins leave no horizontal room: width={self.geometry.width}, margin={self.geometry.margin}"
            )
        tallest = max(
            self.metrics.line_height(BOLD, self.style.largest_size),
            self.metrics.line_height(REGULAR, self.style.base_size),
        )
        if tallest > self.geometry.usable_height:
            raise ConfigurationError(
                f"Page cannot fit one line: line height {tallest:.1f}pt exceeds "
                f"usable height {self.geometry.usable_height:.1f}pt"
            )

    def layout(self, title: Optional[str], body: Optional[str]) -> Document:
        style = self.style
        cursor = PageCursor(self.geometry, line_gap=style.line_gap)
        pages: List[List[StyledRun]] = [[]]

        def place(text: str, font: str, size: float) -> None:
            line_height = self.metrics.line_height(font, size)
            for line in self._fit(text, font, size):
                page_index, y = cursor.advance(line_height)
                while len(pages) <= page_index:
                    pages.append([])
                pages[page_index].append(
                    StyledRun(text=line, x=self.geometry.margin, y=y, font=font, size=size, color=style.color)
                )

        doc_title = resolve_title(title, body, style)
        place(doc_title, BOLD, style.title_size)
        cursor.skip(style.title_gap)

        for line in parse_body(body or "", style.marker):
            if line.is_blank or not line.text:
                cursor.skip(style.base_size)
            elif line.depth:
                place(line.text, BOLD, style.header_size(line.depth))
            else:
                place(line.text, REGULAR, style.base_size)

        frozen = tuple(Page(index=i, runs=tuple(runs)) for i, runs in enumerate(pages))
        logger.debug("Laid out '%s' into %d page(s)", doc_title, len(frozen))
        return Document(title=doc_title, pages=frozen, geometry=self.geometry)

    def _fit(self, text: str, font: str, size: float) -> List[str]:
        """Split ``text`` into lines that fit the usable width.

        Headers and the title usually come back as a single line; they are only
        broken when they would run past the right margin.
        """
        return list(iter_wrapped(text, font, size, self.geometry.usable_width, self.metrics.measure))


def layout_document(
    title: Optional[str],
    body: Optional[str],
    metrics: Optional[TextMetrics] = None,
    geometry: Optional[PageGeometry] = None,
    style: Optional[StyleTable] = None,
) -> Document:
    return DocumentLayoutEngine(metrics=metrics, geometry=geometry, style=style).layout(title, body)
