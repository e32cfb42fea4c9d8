from bookpress.docs.model import PageGeometry
from bookpress.layout.cursor import PageCursor


def test_cursor_starts_at_top_margin():
    cursor = PageCursor(PageGeometry(width=200, height=300, margin=20))
    assert cursor.advance(10) == (0, 280)
    assert cursor.y == 270


def test_cursor_breaks_before_crossing_bottom_margin():
    geometry = PageGeometry(width=200, height=100, margin=10)
    cursor = PageCursor(geometry, line_gap=0)
    placed = [cursor.advance(20) for _ in range(5)]
    # 90, 70, 50, 30 fit (30 - 20 >= 10); the fifth line starts page 1
    assert placed == [(0, 90), (0, 70), (0, 50), (0, 30), (1, 90)]
    assert cursor.page_count == 2


def test_line_gap_is_added_after_each_line():
    cursor = PageCursor(PageGeometry(width=200, height=300, margin=20), line_gap=5)
    cursor.advance(10)
    assert cursor.advance(10) == (0, 265)


def test_skip_never_breaks_page():
    geometry = PageGeometry(width=200, height=100, margin=10)
    cursor = PageCursor(geometry)
    cursor.skip(500)
    assert cursor.page_count == 1
    # the next placed line notices the exhausted page
    assert cursor.advance(5) == (1, 90)
