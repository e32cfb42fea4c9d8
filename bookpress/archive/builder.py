"""ZIP bundling with per-entry failure isolation.

Each entry is produced by a zero-argument callable. Producers run
independently and their outcomes are collected as explicit results:
``Produced`` carries bytes, ``Failed`` carries a message. The builder then
applies one policy in one place:

- a failed essential entry rejects the whole archive (FatalInputError);
- a failed non-essential entry is replaced by a diagnostic text note, so the
  archive keeps the same number of entries.
"""

from __future__ import annotations

import io
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from bookpress.errors import FatalInputError
from bookpress.log import get_logger

logger = get_logger(__name__)

ERROR_NOTE_NAME = "ERROR.txt"

Producer = Callable[[], bytes]


@dataclass(frozen=True)
class EntrySpec:
    name: str
    producer: Producer
    essential: bool = False


@dataclass(frozen=True)
class Produced:
    name: str
    data: bytes


@dataclass(frozen=True)
class Failed:
    name: str
    message: str
    essential: bool = False


EntryResult = Union[Produced, Failed]


def describe_error(exc: BaseException) -> str:
    """Exception class and message, without traceback."""
    text = str(exc).strip()
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def run_producer(spec: EntrySpec) -> EntryResult:
    try:
        data = spec.producer()
    except Exception as e:
        return Failed(name=spec.name, message=describe_error(e), essential=spec.essential)
    if not isinstance(data, (bytes, bytearray)):
        return Failed(
            name=spec.name,
            message=f"TypeError: producer returned {type(data).__name__}, expected bytes",
            essential=spec.essential,
        )
    return Produced(name=spec.name, data=bytes(data))


def diagnostic_note(failed: Failed) -> bytes:
    lines = [
        f"The file '{failed.name}' could not be generated for this export.",
        "",
        f"Reason: {failed.message}",
        "",
        "The other files in this archive are complete.",
        "",
    ]
    return "\n".join(lines).encode("utf-8")


class ArchiveBuilder:
    """Join point for entry producers; writes the resulting ZIP in memory."""

    def __init__(self, max_workers: Optional[int] = None, timestamp: Optional[datetime] = None) -> None:
        self.max_workers = max_workers
        self.timestamp = timestamp

    def collect(self, specs: Sequence[EntrySpec]) -> List[EntryResult]:
        """Run every producer and return results in ``specs`` order."""
        if not specs:
            return []
        workers = self.max_workers or len(specs)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(run_producer, spec) for spec in specs]
            return [f.result() for f in futures]

    def resolve(self, results: Iterable[EntryResult]) -> List[Tuple[str, bytes]]:
        """Apply the failure policy to ``results``.

        Raises FatalInputError if an essential entry failed.
        """
        results = list(results)
        fatal = [r for r in results if isinstance(r, Failed) and r.essential]
        if fatal:
            reasons = "; ".join(f"{r.name}: {r.message}" for r in fatal)
            raise FatalInputError(f"Cannot build archive, essential entries failed: {reasons}")

        taken = {r.name for r in results if isinstance(r, Produced)}
        entries: List[Tuple[str, bytes]] = []
        for result in results:
            if isinstance(result, Produced):
                entries.append((result.name, result.data))
                continue
            logger.warning("Entry '%s' failed, adding diagnostic note: %s", result.name, result.message)
            note_name = ERROR_NOTE_NAME if ERROR_NOTE_NAME not in taken else f"{result.name}.error.txt"
            taken.add(note_name)
            entries.append((note_name, diagnostic_note(result)))
        return entries

    def write(self, entries: Iterable[Tuple[str, bytes]]) -> bytes:
        # a mapping, so a repeated name keeps the last payload
        archive: Dict[str, bytes] = {}
        for name, data in entries:
            archive[name] = data

        stamp = self.timestamp or datetime.now()
        date_time = (max(stamp.year, 1980), stamp.month, stamp.day, stamp.hour, stamp.minute, stamp.second)
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in archive.items():
                info = zipfile.ZipInfo(name, date_time=date_time)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                zf.writestr(info, data)
        return buf.getvalue()

    def build(self, specs: Sequence[EntrySpec]) -> bytes:
        entries = self.resolve(self.collect(specs))
        logger.info("Writing archive with %d entries", len(entries))
        return self.write(entries)
