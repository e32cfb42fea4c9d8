import pytest

from bookpress.docs.model import FontSet
from bookpress.errors import FontResourceError
from bookpress.render.metrics import StandardFontMetrics, TrueTypeMetrics, metrics_for


def test_standard_metrics_widths():
    m = StandardFontMetrics()
    assert m.measure("", "regular", 12) == 0
    assert m.measure("Hello", "regular", 24) == pytest.approx(2 * m.measure("Hello", "regular", 12))
    assert m.measure("Hello", "bold", 12) > m.measure("Hello", "regular", 12)


def test_standard_metrics_line_height_scales_with_size():
    m = StandardFontMetrics()
    assert 0 < m.line_height("regular", 12) < m.line_height("regular", 24)


def test_standard_metrics_reject_unknown_font():
    with pytest.raises(FontResourceError):
        StandardFontMetrics(FontSet(regular="NoSuchFont"))


def test_metrics_for_picks_truetype_when_paths_configured():
    assert isinstance(metrics_for(FontSet()), StandardFontMetrics)
    fonts = FontSet(regular="Custom", regular_path="/nonexistent/custom.ttf")
    assert isinstance(metrics_for(fonts), TrueTypeMetrics)


def test_truetype_metrics_missing_file_is_font_error():
    m = TrueTypeMetrics(FontSet(regular="Custom", regular_path="/nonexistent/custom.ttf"))
    with pytest.raises(FontResourceError):
        m.measure("x", "regular", 12)
    with pytest.raises(FontResourceError):
        m.line_height("regular", 12)


def test_truetype_metrics_use_afm_for_standard_role_without_file():
    m = TrueTypeMetrics(FontSet(regular="Custom", regular_path="/nonexistent/custom.ttf"))
    assert m.measure("Hello", "bold", 12) == pytest.approx(StandardFontMetrics().measure("Hello", "bold", 12))
    assert m.line_height("bold", 12) > 0
