"""Archive bundling and artifact naming."""

from .builder import (
    ERROR_NOTE_NAME,
    ArchiveBuilder,
    EntryResult,
    EntrySpec,
    Failed,
    Produced,
    run_producer,
)
from .naming import archive_filename, entry_filename, sanitize_filename

__all__ = [
    "ERROR_NOTE_NAME",
    "ArchiveBuilder",
    "EntryResult",
    "EntrySpec",
    "Failed",
    "Produced",
    "run_producer",
    "archive_filename",
    "entry_filename",
    "sanitize_filename",
]
