from __future__ import annotations

from typing import Optional

from bookpress.errors import FatalInputError


def body_to_bytes(body: Optional[str]) -> bytes:
    """Encode the body exactly as given; the plain-text copy has no fallback."""
    if body is None:
        raise FatalInputError("Book body is missing; nothing to export")
    try:
        return body.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FatalInputError(f"Book body is not encodable as UTF-8: {e}") from e


def write_bytes(data: bytes, out_path: str) -> str:
    with open(out_path, "wb") as f:
        f.write(data)
    return out_path
