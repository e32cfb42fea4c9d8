"""
Entry point and facade for the book layout → document → archive export.

Packages:
- bookpress.render: text metrics and greedy line wrapping
- bookpress.layout: page cursor and layout engine
- bookpress.docs: document model, metadata, PDF/raster/DOCX serializers
- bookpress.archive: ZIP bundling with diagnostic notes for failed entries
- bookpress.pipeline: high-level orchestration (`export_book`)
"""

from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime, timezone

from bookpress.archive import archive_filename, sanitize_filename
from bookpress.config import load_config
from bookpress.docs.metadata import BookMetadata, PlanTier, chapter_count_from_outline
from bookpress.docs.txt import write_bytes
from bookpress.errors import ConfigurationError, FatalInputError
from bookpress.layout import layout_document
from bookpress.pipeline import export_book, export_pdf_bytes, export_txt_bytes

__all__ = [
    "archive_filename",
    "sanitize_filename",
    "layout_document",
    "export_book",
    "export_pdf_bytes",
    "export_txt_bytes",
    "BookMetadata",
    "PlanTier",
    "chapter_count_from_outline",
]


def _read_text(path: str | None) -> str | None:
    if not path:
        return None
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _cli() -> None:
    """CLI for exporting a finished book as a ZIP archive.

    --title: Book title (default: first line of the body)
    --body-file / -b: UTF-8 text file with the book body ('#' marks headers)
    --outline-file: Chapter outline, one chapter per line (used for chapterCount)
    --author, --language, --plan: Metadata fields
    --cover: Cover image file (optional)
    --format: Document backend pdf|raster|docx (default: from config)
    --config: Path to export config JSON (default: config/export.json)
    --out-dir / -o: Directory to write the archive into (default: current dir)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Lay out a book body into pages and bundle it into a ZIP archive.")
    parser.add_argument("--title", type=str, default="", help="Book title")
    parser.add_argument("--body-file", "-b", type=str, required=True, help="Path to UTF-8 body text")
    parser.add_argument("--outline-file", type=str, help="Path to chapter outline (one chapter per line)")
    parser.add_argument("--author", type=str, default=None, help="Author name")
    parser.add_argument("--language", type=str, default="English", help="Book language (default: English)")
    parser.add_argument("--plan", type=str, default="Free", choices=[t.value for t in PlanTier], help="Plan tier (default: Free)")
    parser.add_argument("--cover", type=str, help="Path to a cover image")
    parser.add_argument("--format", type=str, choices=["pdf", "raster", "docx"], help="Document backend (default: from config)")
    parser.add_argument("--config", type=str, help="Path to export config JSON")
    parser.add_argument("--out-dir", "-o", type=str, default=".", help="Output directory (default: current directory)")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if args.format:
            config = replace(config, serializer=args.format).validate()
        body = _read_text(args.body_file)
        outline = _read_text(args.outline_file)
        cover = None
        if args.cover:
            with open(args.cover, "rb") as f:
                cover = f.read()

        metadata = BookMetadata(
            title=args.title,
            author=args.author,
            language=args.language,
            plan_tier=PlanTier.parse(args.plan),
            chapter_count=chapter_count_from_outline(outline),
            generated_at=datetime.now(timezone.utc),
        )
        result = export_book(args.title, body, metadata, config=config, cover_image=cover)
    except (FatalInputError, ConfigurationError) as e:
        print(f"Export failed: {e}")
        raise SystemExit(2)

    os.makedirs(args.out_dir, exist_ok=True)
    out_path = write_bytes(result.data, os.path.join(args.out_dir, result.filename))
    print(f"Saved archive to: {out_path}")
    for name in result.entry_names:
        print(f"  {name}")
    for failed in result.failed:
        print(f"Warning: {failed.name} replaced by a diagnostic note ({failed.message})")


if __name__ == "__main__":
    _cli()
