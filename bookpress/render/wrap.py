"""Greedy word wrapping against a measured width."""

from __future__ import annotations

from typing import Callable, Iterator, List

Measure = Callable[[str, str, float], float]


def iter_wrapped(text: str, font: str, size: float, max_width: float, measure: Measure) -> Iterator[str]:
    """Yield wrapped lines of ``text``, each narrower than ``max_width``.

    Words are accumulated greedily. A word that does not fit on a line of its
    own is yielded alone and overflows; it is never split or dropped.

    Doxygen:
    - @param text: Paragraph text; split on any whitespace.
    - @param font: Font role passed through to ``measure``.
    - @param size: Point size passed through to ``measure``.
    - @param max_width: Available width, must be positive.
    - @param measure: ``measure(text, font, size) -> width``.
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")
    cur = ""
    for word in str(text).split():
        candidate = (cur + " " + word) if cur else word
        if measure(candidate, font, size) < max_width:
            cur = candidate
        elif cur:
            yield cur
            cur = word
        else:
            # oversize word on an empty line
            cur = candidate
    if cur:
        yield cur


def wrap_text(text: str, font: str, size: float, max_width: float, measure: Measure) -> List[str]:
    return list(iter_wrapped(text, font, size, max_width, measure))
