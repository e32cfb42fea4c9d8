from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

REGULAR = "regular"
BOLD = "bold"
FONT_ROLES = (REGULAR, BOLD)

HEADER_MARKER = "#"

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class LogicalLine:
    text: str
    depth: int = 0
    is_blank: bool = False


def header_depth(line: str, marker: str = HEADER_MARKER) -> int:
    """Length of the contiguous run of ``marker`` characters at the start of ``line``."""
    depth = 0
    for ch in line:
        if ch != marker:
            break
        depth += 1
    return depth


def strip_header(line: str, marker: str = HEADER_MARKER) -> str:
    """Return header text with the marker run and surrounding whitespace removed.

    Any markers directly following the run (``"## # Title"``) are dropped too,
    so classifying the result again always yields depth 0.
    """
    depth = header_depth(line, marker)
    return re.sub(rf"^[\s{re.escape(marker)}]+", "", line[depth:]).strip()


def parse_body(body: str, marker: str = HEADER_MARKER) -> List[LogicalLine]:
    lines: List[LogicalLine] = []
    for raw in (body or "").splitlines():
        if raw.strip() == "":
            lines.append(LogicalLine(text="", depth=0, is_blank=True))
            continue
        depth = header_depth(raw, marker)
        if depth:
            lines.append(LogicalLine(text=strip_header(raw, marker), depth=depth))
        else:
            lines.append(LogicalLine(text=raw.strip(), depth=0))
    return lines


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margin in PDF points. Defaults to A4 with a 50pt margin."""

    width: float = 595.28
    height: float = 841.89
    margin: float = 50.0

    @property
    def usable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        return self.height - 2 * self.margin

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def bottom(self) -> float:
        return self.margin


@dataclass(frozen=True)
class StyleTable:
    title_size: float = 24.0
    title_gap: float = 20.0
    base_size: float = 12.0
    header_base: float = 26.0
    header_step: float = 4.0
    header_floor: float = 12.0
    line_gap: float = 5.0
    color: Color = (0.18, 0.23, 0.35)
    marker: str = HEADER_MARKER

    def header_size(self, depth: int) -> float:
        """Font size for a header of the given depth; shrinks with depth down to the floor."""
        return max(self.header_floor, self.header_base - self.header_step * depth)

    @property
    def largest_size(self) -> float:
        return max(self.title_size, self.base_size, self.header_size(1))


@dataclass(frozen=True)
class FontSet:
    """Concrete fonts behind the ``regular``/``bold`` roles.

    ``regular``/``bold`` are PDF base-14 names unless a TTF path is given, in
    which case the name prefixes the one the face is registered under.
    """

    regular: str = "Times-Roman"
    bold: str = "Times-Bold"
    regular_path: Optional[str] = None
    bold_path: Optional[str] = None

    def name_for(self, role: str) -> str:
        if role == BOLD:
            return self.bold
        if role == REGULAR:
            return self.regular
        raise ValueError(f"Unknown font role: {role!r}")

    def path_for(self, role: str) -> Optional[str]:
        if role == BOLD:
            return self.bold_path
        if role == REGULAR:
            return self.regular_path
        raise ValueError(f"Unknown font role: {role!r}")

    @property
    def is_truetype(self) -> bool:
        return bool(self.regular_path or self.bold_path)


@dataclass(frozen=True)
class StyledRun:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: Color = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Page:
    index: int
    runs: Tuple[StyledRun, ...] = ()


@dataclass(frozen=True)
class Document:
    title: str
    pages: Tuple[Page, ...] = field(default_factory=tuple)
    geometry: PageGeometry = field(default_factory=PageGeometry)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def iter_runs(self) -> Iterator[StyledRun]:
        for page in self.pages:
            yield from page.runs
