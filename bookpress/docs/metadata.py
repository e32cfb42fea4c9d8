"""Book metadata record and its flat ``key=value`` text form."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple


class PlanTier(str, Enum):
    FREE = "Free"
    PRO = "Pro"
    CREATOR = "Creator"

    @classmethod
    def parse(cls, value: Any) -> "PlanTier":
        if isinstance(value, cls):
            return value
        norm = str(value or "").strip().lower()
        for tier in cls:
            if tier.value.lower() == norm:
                return tier
        allowed = ", ".join(t.value for t in cls)
        raise ValueError(f"Unknown plan tier '{value}'. Allowed values: {allowed}.")


def chapter_count_from_outline(outline: Optional[str]) -> int:
    """Number of non-empty lines in a chapter outline."""
    return sum(1 for line in (outline or "").splitlines() if line.strip())


@dataclass(frozen=True)
class BookMetadata:
    title: str
    language: str
    plan_tier: PlanTier
    chapter_count: int
    generated_at: datetime
    author: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BookMetadata":
        generated = data.get("generatedAt") or data.get("generated_at")
        if generated is None:
            generated = datetime.now(timezone.utc)
        elif isinstance(generated, str):
            if generated.endswith(("Z", "z")):
                generated = generated[:-1] + "+00:00"
            generated = datetime.fromisoformat(generated)
        return cls(
            title=str(data.get("title") or ""),
            language=str(data.get("language") or ""),
            plan_tier=PlanTier.parse(data.get("planTier") or data.get("plan_tier") or PlanTier.FREE),
            chapter_count=int(data.get("chapterCount") or data.get("chapter_count") or 0),
            generated_at=generated,
            author=data.get("author") or None,
        )

    def items(self) -> List[Tuple[str, str]]:
        pairs = [("title", self.title)]
        if self.author:
            pairs.append(("author", self.author))
        pairs.extend([
            ("language", self.language),
            ("planTier", self.plan_tier.value),
            ("chapterCount", str(self.chapter_count)),
            ("generatedAt", self.generated_at.isoformat()),
        ])
        return pairs


def _flatten(value: str) -> str:
    return " ".join(str(value).split())


def metadata_to_text(meta: BookMetadata) -> str:
    """One ``key=value`` pair per line; values are collapsed onto a single line."""
    return "".join(f"{key}={_flatten(value)}\n" for key, value in meta.items())


def metadata_to_bytes(meta: BookMetadata) -> bytes:
    return metadata_to_text(meta).encode("utf-8")
