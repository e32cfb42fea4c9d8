from __future__ import annotations

import io
from typing import Optional

from docx import Document as DocxDocument
from docx.shared import Pt, RGBColor

from .model import BOLD, Document


class DocxSerializer:
    """Write a laid out Document as DOCX, one paragraph per run and a break per page.

    Word reflows text on its own, so only the page split and run styling are
    carried over, not the exact positions.
    """

    extension = "docx"
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def __init__(self, font_family: str = "Times New Roman", author: Optional[str] = None) -> None:
        self.font_family = font_family
        self.author = author

    def serialize(self, document: Document) -> bytes:
        d = DocxDocument()
        geometry = document.geometry
        section = d.sections[0]
        section.page_width = Pt(geometry.width)
        section.page_height = Pt(geometry.height)
        section.left_margin = section.right_margin = Pt(geometry.margin)
        section.top_margin = section.bottom_margin = Pt(geometry.margin)
        d.core_properties.title = document.title
        if self.author:
            d.core_properties.author = self.author

        for i, page in enumerate(document.pages):
            if i:
                d.add_page_break()
            for item in page.runs:
                p = d.add_paragraph()
                p.paragraph_format.space_after = Pt(0)
                run = p.add_run(item.text)
                run.bold = item.font == BOLD
                run.font.size = Pt(item.size)
                run.font.name = self.font_family
                run.font.color.rgb = RGBColor(*(int(round(c * 255)) for c in item.color))

        buf = io.BytesIO()
        d.save(buf)
        return buf.getvalue()
