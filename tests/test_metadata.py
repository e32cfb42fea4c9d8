from datetime import datetime, timezone

import pytest

from bookpress.docs.metadata import BookMetadata, PlanTier, chapter_count_from_outline, metadata_to_text

WHEN = datetime(2024, 3, 9, 10, 0, tzinfo=timezone.utc)


def test_chapter_count_ignores_blank_lines():
    assert chapter_count_from_outline("1. Rise\n\n2. Empire\n  \n3. Fall\n") == 3
    assert chapter_count_from_outline(None) == 0


def test_plan_tier_parse():
    assert PlanTier.parse("pro") is PlanTier.PRO
    assert PlanTier.parse(PlanTier.CREATOR) is PlanTier.CREATOR
    with pytest.raises(ValueError):
        PlanTier.parse("Enterprise")


def test_metadata_text_is_flat_key_value():
    meta = BookMetadata(
        title="Roman\nHistory",
        language="English",
        plan_tier=PlanTier.PRO,
        chapter_count=12,
        generated_at=WHEN,
        author="Livy",
    )
    assert metadata_to_text(meta) == (
        "title=Roman History\n"
        "author=Livy\n"
        "language=English\n"
        "planTier=Pro\n"
        "chapterCount=12\n"
        "generatedAt=2024-03-09T10:00:00+00:00\n"
    )


def test_metadata_without_author_omits_key():
    meta = BookMetadata("T", "Español", PlanTier.FREE, 3, WHEN)
    assert "author=" not in metadata_to_text(meta)


def test_from_mapping_accepts_camel_case():
    meta = BookMetadata.from_mapping({
        "title": "T",
        "language": "English",
        "planTier": "Creator",
        "chapterCount": "4",
        "generatedAt": "2024-03-09T10:00:00+00:00",
    })
    assert meta.plan_tier is PlanTier.CREATOR
    assert meta.chapter_count == 4
    assert meta.generated_at == WHEN
    assert meta.author is None


@pytest.mark.parametrize("stamp", ["2024-03-09T10:00:00Z", "2024-03-09T10:00:00.000Z"])
def test_from_mapping_accepts_utc_z_suffix(stamp):
    meta = BookMetadata.from_mapping({"title": "T", "generatedAt": stamp})
    assert meta.generated_at == WHEN
    assert meta.generated_at.utcoffset().total_seconds() == 0
