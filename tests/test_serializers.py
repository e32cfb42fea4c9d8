import io
import logging
import os
import zipfile

import pytest
import reportlab
from docx import Document as DocxDocument
from pypdf import PdfReader

from bookpress.docs.docx_io import DocxSerializer
from bookpress.docs.model import FontSet, PageGeometry
from bookpress.docs.pdf_io import PdfSerializer, register_fonts, registered_font_name
from bookpress.docs.raster import RasterPdfSerializer
from bookpress.docs.serializers import get_serializer
from bookpress.errors import ConfigurationError, DegradedArtifactError, FontResourceError, SerializationError
from bookpress.layout.engine import layout_document
from bookpress.render.metrics import StandardFontMetrics

BODY = "# Intro\n" + "\n".join(["The senate met at dawn to debate the grain supply."] * 120)


@pytest.fixture
def document():
    return layout_document("Roman History", BODY, metrics=StandardFontMetrics())


def test_pdf_pages_match_layout(document):
    data = PdfSerializer(author="Livy").serialize(document)
    assert data.startswith(b"%PDF")
    reader = PdfReader(io.BytesIO(data))
    assert len(reader.pages) == document.page_count
    first = reader.pages[0].extract_text()
    assert "Roman History" in first
    assert "Intro" in first
    assert reader.metadata.title == "Roman History"
    assert reader.metadata.author == "Livy"


def test_pdf_page_size_follows_geometry():
    doc = layout_document("Small", "text", metrics=StandardFontMetrics(),
                          geometry=PageGeometry(width=300, height=400, margin=30))
    reader = PdfReader(io.BytesIO(PdfSerializer().serialize(doc)))
    box = reader.pages[0].mediabox
    assert float(box.width) == pytest.approx(300)
    assert float(box.height) == pytest.approx(400)


def test_pdf_output_is_deterministic(document):
    assert PdfSerializer().serialize(document) == PdfSerializer().serialize(document)


def test_pdf_unsupported_character_is_degraded_error():
    doc = layout_document("Книга", "текст", metrics=StandardFontMetrics())
    with pytest.raises(SerializationError) as info:
        PdfSerializer().serialize(doc)
    assert isinstance(info.value, DegradedArtifactError)


def test_pdf_missing_font_file_is_font_error(document):
    fonts = FontSet(regular="Missing", regular_path="/nonexistent/missing.ttf")
    with pytest.raises(FontResourceError):
        PdfSerializer(fonts=fonts).serialize(document)


def test_registered_font_name_is_distinct_per_file():
    a = registered_font_name("Body", "/fonts/a/Body.ttf")
    assert a == registered_font_name("Body", "/fonts/a/Body.ttf")
    assert a != registered_font_name("Body", "/fonts/b/Body.ttf")
    assert a.startswith("Body-")


def test_same_face_name_with_different_files_registers_separately():
    font_dir = os.path.join(os.path.dirname(reportlab.__file__), "fonts")
    vera, vera_bold = (os.path.join(font_dir, f) for f in ("Vera.ttf", "VeraBd.ttf"))
    if not (os.path.exists(vera) and os.path.exists(vera_bold)):
        pytest.skip("reportlab bundled fonts not available")
    first = register_fonts(FontSet(regular="Body", regular_path=vera))
    second = register_fonts(FontSet(regular="Body", regular_path=vera_bold))
    assert first["regular"] != second["regular"]
    assert first["bold"] == second["bold"] == "Times-Bold"


def test_raster_pdf_has_one_image_page_per_layout_page(document):
    data = RasterPdfSerializer(dpi=30, pages_per_strip=2).serialize(document)
    reader = PdfReader(io.BytesIO(data))
    assert len(reader.pages) == document.page_count


def test_raster_pages_contain_ink():
    doc = layout_document("Ink", "some visible words", metrics=StandardFontMetrics())
    images = RasterPdfSerializer(dpi=40).render_pages(doc)
    assert len(images) == 1
    gray = images[0].convert("L")
    assert gray.getextrema()[0] < 200


def test_raster_warns_when_drawing_base14_roles_with_default_font(caplog):
    doc = layout_document("Ink", "# Head\nsome visible words", metrics=StandardFontMetrics())
    with caplog.at_level(logging.WARNING, logger="bookpress"):
        RasterPdfSerializer(dpi=30).render_pages(doc)
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "bold (Times-Bold)" in warnings[0].getMessage()
    assert "regular (Times-Roman)" in warnings[0].getMessage()


def test_docx_keeps_run_text_and_styles(document):
    data = DocxSerializer(author="Livy").serialize(document)
    assert zipfile.is_zipfile(io.BytesIO(data))
    d = DocxDocument(io.BytesIO(data))
    texts = [p.text for p in d.paragraphs if p.text.strip()]
    assert texts == [run.text for run in document.iter_runs()]
    assert d.paragraphs[0].runs[0].bold is True
    assert d.core_properties.author == "Livy"


def test_get_serializer_backends():
    assert isinstance(get_serializer("pdf"), PdfSerializer)
    assert isinstance(get_serializer("RASTER"), RasterPdfSerializer)
    assert get_serializer("docx").extension == "docx"
    with pytest.raises(ConfigurationError):
        get_serializer("epub")
