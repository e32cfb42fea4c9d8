"""Text measurement and line wrapping."""

from .metrics import StandardFontMetrics, TextMetrics, TrueTypeMetrics, metrics_for
from .wrap import iter_wrapped, wrap_text

__all__ = [
    "StandardFontMetrics",
    "TextMetrics",
    "TrueTypeMetrics",
    "metrics_for",
    "iter_wrapped",
    "wrap_text",
]
