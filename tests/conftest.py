import pytest

from bookpress.docs.model import PageGeometry, StyleTable


class FixedPitchMetrics:
    """Every character is half the point size wide; a line is exactly ``size`` tall."""

    def measure(self, text, font, size):
        return len(text) * size * 0.5

    def line_height(self, font, size):
        return float(size)


@pytest.fixture
def metrics():
    return FixedPitchMetrics()


@pytest.fixture
def narrow_geometry():
    # usable width 200pt -> 33 characters at 12pt
    return PageGeometry(width=300, height=600, margin=50)


@pytest.fixture
def style():
    return StyleTable()
