from __future__ import annotations

from typing import Tuple

from bookpress.docs.model import PageGeometry


class PageCursor:
    """Vertical write position across pages.

    ``y`` is a PDF baseline coordinate: it starts at ``height - margin`` and
    decreases as lines are placed.
    """

    def __init__(self, geometry: PageGeometry, line_gap: float = 0.0) -> None:
        self.geometry = geometry
        self.line_gap = line_gap
        self.page_index = 0
        self.y = geometry.top

    @property
    def page_count(self) -> int:
        return self.page_index + 1

    def new_page(self) -> None:
        self.page_index += 1
        self.y = self.geometry.top

    def advance(self, line_height: float) -> Tuple[int, float]:
        """Reserve room for one line and return ``(page_index, baseline_y)``.

        Starts a new page first when the line would cross the bottom margin.
        """
        if self.y - line_height < self.geometry.bottom:
            self.new_page()
        placed = (self.page_index, self.y)
        self.y -= line_height + self.line_gap
        return placed

    def skip(self, amount: float) -> None:
        """Consume vertical space without placing anything; never breaks a page."""
        self.y -= amount
