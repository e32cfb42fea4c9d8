"""Deterministic file names for exported artifacts.

Names are unique per title per day only: two exports of the same title on
the same date get the same names.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Union

DEFAULT_STEM = "book"
DEFAULT_PRODUCT_TAG = "BookMind.ai"

_NON_ALNUM = re.compile(r"[\W_]+", re.UNICODE)

DateLike = Union[date, datetime]


def sanitize_filename(name: Optional[str]) -> str:
    """Case-fold ``name`` and collapse every non-alphanumeric run to one ``_``.

    Idempotent: sanitizing an already sanitized name returns it unchanged.
    """
    stem = _NON_ALNUM.sub("_", (name or "").casefold()).strip("_")
    return stem or DEFAULT_STEM


def date_stamp(day: Optional[DateLike] = None) -> str:
    day = day or date.today()
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def entry_filename(title: Optional[str], ext: str, day: Optional[DateLike] = None) -> str:
    return f"{sanitize_filename(title)}_{date_stamp(day)}.{ext.lstrip('.')}"


def archive_filename(
    title: Optional[str],
    day: Optional[DateLike] = None,
    product_tag: str = DEFAULT_PRODUCT_TAG,
) -> str:
    return f"{product_tag}_{entry_filename(title, 'zip', day)}"
