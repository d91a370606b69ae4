from __future__ import annotations

"""Classification table for the enneagram quiz.

Rows are read once from a delimited source, normalized with the same helpers
that normalize user answers, and indexed by composite key. The table is
read-only after loading and reports readiness so callers can reject requests
until the background load has finished.
"""

import csv
import hashlib
import io
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .normalizer import BOM, composite_key, normalize_ordered_triple, normalize_single_digit

logger = logging.getLogger("enneagram.table")

KEY1_COLUMN = "Q1-1"
KEY2_COLUMN = "Q1-2"
KEY3_COLUMN = "Q2-1"
TRIPLE_COLUMN = "Q3_order"
TYPE_COLUMN = "Basic_Type"
TYPE_FALLBACK_COLUMN = "Result"


class TableNotReadyError(RuntimeError):
    """Raised when the table is queried before loading has completed."""


@dataclass(frozen=True)
class ClassificationRow:
    """One accepted source row: normalized answer key and its personality type."""
    key1: str
    key2: str
    key3: str
    triple_key: str
    personality_type: str

    @property
    def key(self) -> str:
        return composite_key(self.key1, self.key2, self.key3, self.triple_key)


@dataclass
class TableMeta:
    """Metadata describing the loaded source file for logging and diagnostics."""
    file_name: str
    updated_at: str
    sha256: str
    row_count: int
    discarded: int


def _clean_header(name: str) -> str:
    return str(name).lstrip(BOM).strip()


def _clean_record(record: Mapping[Optional[str], object]) -> Dict[str, object]:
    """Purpose: Strip BOM/whitespace from header names and whitespace from values.
    Inputs/Outputs: Input is a raw csv.DictReader record; output is a cleaned dict.
    Side Effects / State: None.
    Failure Modes: Overflow cells (stored under a None key by csv) are dropped.
    Testing Notes: A "\\ufeff Q1-1 " header must resolve to "Q1-1".
    """
    cleaned: Dict[str, object] = {}
    for key, value in record.items():
        if key is None:
            continue
        cleaned[_clean_header(key)] = value.strip() if isinstance(value, str) else value
    return cleaned


def row_from_record(record: Mapping[Optional[str], object]) -> Optional[ClassificationRow]:
    """Purpose: Normalize one source record into a ClassificationRow.
    Inputs/Outputs: Input is a raw record keyed by column header; output is a row or
        None when any key field or the type field is empty after normalization.
    Side Effects / State: None.
    Dependencies: normalize_single_digit, normalize_ordered_triple.
    Failure Modes: Never raises for malformed content; rejected rows return None.
    Testing Notes: A row missing Q3_order digits or Basic_Type must return None.
    """
    clean = _clean_record(record)
    key1 = normalize_single_digit(clean.get(KEY1_COLUMN))
    key2 = normalize_single_digit(clean.get(KEY2_COLUMN))
    key3 = normalize_single_digit(clean.get(KEY3_COLUMN))
    triple_key = normalize_ordered_triple(clean.get(TRIPLE_COLUMN))

    # The fallback column only applies when the primary column is absent.
    type_value = clean.get(TYPE_COLUMN)
    if type_value is None:
        type_value = clean.get(TYPE_FALLBACK_COLUMN)
    personality_type = str(type_value if type_value is not None else "").lstrip(BOM).strip()

    if not (key1 and key2 and key3 and triple_key and personality_type):
        return None
    return ClassificationRow(
        key1=key1,
        key2=key2,
        key3=key3,
        triple_key=triple_key,
        personality_type=personality_type,
    )


class ClassificationTable:
    """Ordered, first-wins index from composite answer key to personality type."""

    def __init__(self) -> None:
        self._rows: List[ClassificationRow] = []
        self._index: Dict[str, List[ClassificationRow]] = {}
        self._discarded = 0
        self._ready = threading.Event()
        self.meta: Optional[TableMeta] = None

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    @property
    def rows(self) -> List[ClassificationRow]:
        return list(self._rows)

    @property
    def discarded(self) -> int:
        return self._discarded

    def __len__(self) -> int:
        return len(self._rows)

    def load_rows(self, records: Iterable[Mapping[Optional[str], object]]) -> int:
        """Purpose: Accept records in source order and mark the table ready.
        Inputs/Outputs: Input is an iterable of raw records; returns accepted row count.
        Side Effects / State: Appends to the ordered row list and the key index; sets
            the ready flag once every record has been consumed.
        Dependencies: row_from_record for normalization and acceptance.
        Failure Modes: Invalid rows are discarded silently (logged at DEBUG). Errors from
            the iterable propagate and leave the table not ready.
        Testing Notes: Load duplicates and verify only the first is returned by lookup.
        """
        if self.is_ready:
            raise RuntimeError("classification table is already loaded")
        for position, record in enumerate(records, start=1):
            row = row_from_record(record)
            if row is None:
                self._discarded += 1
                logger.debug("table row=%s discarded", position)
                continue
            self._rows.append(row)
            self._index.setdefault(row.key, []).append(row)
        self._ready.set()
        logger.info("table ready rows=%s discarded=%s", len(self._rows), self._discarded)
        return len(self._rows)

    def load_file(self, path: Path, delimiter: str = "\t") -> TableMeta:
        """Purpose: Read a delimited source file into the table.
        Inputs/Outputs: Inputs are a file path and field delimiter; returns TableMeta.
        Side Effects / State: Reads the file; populates rows; sets ready on success.
        Dependencies: csv.DictReader, hashlib for the source fingerprint.
        Failure Modes: Missing file or decode errors raise to the caller (the loader
            logs them); the table then stays not ready.
        Testing Notes: Write a temporary TSV with a BOM header and load it.
        """
        # Fingerprint the source for the load log.
        raw_bytes = path.read_bytes()
        sha256 = hashlib.sha256(raw_bytes).hexdigest()
        updated_at = datetime.fromtimestamp(path.stat().st_mtime).isoformat()
        logger.info("table loading file=%s sha256=%s", path.name, sha256[:12])

        text = raw_bytes.decode("utf-8-sig")
        reader = csv.DictReader(io.StringIO(text, newline=""), delimiter=delimiter)
        self.load_rows(reader)

        self.meta = TableMeta(
            file_name=path.name,
            updated_at=updated_at,
            sha256=sha256,
            row_count=len(self._rows),
            discarded=self._discarded,
        )
        return self.meta

    def has_key(self, key: str) -> bool:
        return key in self._index

    def lookup(self, key1: str, key2: str, key3: str, triple_key: str) -> Optional[ClassificationRow]:
        """Purpose: Resolve a normalized answer combination to its classification row.
        Inputs/Outputs: Inputs are the four normalized fields; output is the first
            loaded row for that key or None when no row matches.
        Side Effects / State: None; the table is read-only once ready.
        Failure Modes: Raises TableNotReadyError while loading is still in progress.
        Testing Notes: Repeated calls with the same key return the same row.
        """
        if not self.is_ready:
            raise TableNotReadyError("classification table is still loading")
        matches = self._index.get(composite_key(key1, key2, key3, triple_key))
        if not matches:
            return None
        return matches[0]


class TableLoader:
    """One-shot background loader that fills a ClassificationTable."""

    def __init__(self, table: ClassificationTable, path: Path, delimiter: str = "\t") -> None:
        self._table = table
        self._path = path
        self._delimiter = delimiter
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None

    @property
    def table(self) -> ClassificationTable:
        return self._table

    def start(self) -> Future:
        """Purpose: Schedule the table load on a background thread exactly once.
        Inputs/Outputs: No inputs; returns the Future of the load.
        Side Effects / State: Creates a single-worker executor on first call.
        Failure Modes: Load errors are logged by the done callback and never retried.
        Testing Notes: Call start() twice and verify the same Future is returned.
        """
        if self._future is not None:
            return self._future
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="table-loader")
        self._future = self._executor.submit(self._load)
        self._future.add_done_callback(self._log_outcome)
        return self._future

    def _load(self) -> TableMeta:
        if not self._path.exists():
            raise FileNotFoundError(f"classification source not found: {self._path}")
        return self._table.load_file(self._path, delimiter=self._delimiter)

    def _log_outcome(self, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error("table load failed path=%s error=%s", self._path, error)
            return
        meta = future.result()
        logger.info(
            "table loaded file=%s rows=%s discarded=%s updated_at=%s",
            meta.file_name,
            meta.row_count,
            meta.discarded,
            meta.updated_at,
        )

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the load has finished; returns True when the table is ready."""
        if self._future is None:
            return self._table.is_ready
        try:
            self._future.exception(timeout=timeout)
        except FutureTimeoutError:
            return False
        return self._table.is_ready

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
