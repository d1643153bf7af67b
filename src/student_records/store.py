"""RecordStore: fixed-size hash table of student records with chaining.

Each of the ``M`` buckets holds an optional head :class:`_Node`; every node
holds its successor.  A record with identifier ``k`` lives in the chain at
``k mod M`` and new records are linked at the head of their chain, so a
bucket lists its most recently inserted record first.

Duplicate identifiers and missing records are ordinary outcomes reported
through :class:`~student_records.models.StoreResult`, never raised.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, List, Optional, Tuple

from .audit_logger import get_audit_logger
from .config import StoreConfig
from .models import DUPLICATE_ID, NOT_FOUND, OK, StoreResult, StudentRecord

_log = get_audit_logger()


class _Node:
    """Chain link owning one record and the rest of its chain."""

    __slots__ = ("record", "next")

    def __init__(self, record: StudentRecord, next: Optional["_Node"] = None) -> None:  # noqa: A002
        self.record = record
        self.next = next


def _check_id(student_id: int) -> int:
    if isinstance(student_id, bool) or not isinstance(student_id, int):
        raise TypeError(f"student_id must be an int, got {type(student_id).__name__}")
    return student_id


class RecordStore:
    """In-memory student record store with separate chaining.

    Every public operation holds the store's lock for its full duration,
    so a store shared between threads never exposes a half-relinked chain.

    Parameters
    ----------
    config : StoreConfig, optional
        Table size and field widths.  Defaults to 50 buckets, 49-character
        names and 4-character grades.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self._config = (config or StoreConfig()).validate()
        self._table_size = self._config.table_size
        self._name_max = self._config.name_max_length
        self._grade_max = self._config.grade_max_length
        self._buckets: List[Optional[_Node]] = [None] * self._table_size
        self._size = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------

    def hash_index(self, student_id: int) -> int:
        """Return the bucket index for *student_id*, always in ``[0, M)``."""
        return _check_id(student_id) % self._table_size

    def _scan(self, index: int, student_id: int) -> Tuple[Optional[_Node], Optional[_Node]]:
        """Return ``(previous, match)`` for *student_id* in bucket *index*."""
        prev: Optional[_Node] = None
        current = self._buckets[index]
        while current is not None:
            if current.record.student_id == student_id:
                return prev, current
            prev = current
            current = current.next
        return prev, None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(
        self,
        student_id: int,
        name: str,
        grade: str,
        operation_id: Optional[str] = None,
    ) -> StoreResult:
        """Add a record unless *student_id* is already present.

        *name* and *grade* are truncated to the configured widths.  On a
        duplicate the existing record is left untouched and the result
        status is ``"duplicate_id"``.
        """
        index = self.hash_index(student_id)
        record = StudentRecord(
            student_id=student_id,
            name=str(name)[: self._name_max],
            grade=str(grade)[: self._grade_max],
        )

        with self._lock:
            _, existing = self._scan(index, student_id)
            if existing is not None:
                _log.log_event(
                    "record_duplicate",
                    operation_id=operation_id,
                    level=logging.WARNING,
                    student_id=student_id,
                    bucket=index,
                )
                return StoreResult(DUPLICATE_ID, student_id, reason="insert:duplicate_id")

            self._buckets[index] = _Node(record, self._buckets[index])
            self._size += 1

        _log.log_event(
            "record_inserted",
            operation_id=operation_id,
            student_id=student_id,
            bucket=index,
        )
        return StoreResult(OK, student_id, record, reason="insert:ok")

    def find(self, student_id: int, operation_id: Optional[str] = None) -> StoreResult:
        """Look up *student_id*; status ``"ok"`` with the record or ``"not_found"``."""
        index = self.hash_index(student_id)
        with self._lock:
            _, match = self._scan(index, student_id)
            record = match.record if match is not None else None

        if record is None:
            _log.log_event(
                "record_not_found",
                operation_id=operation_id,
                level=logging.WARNING,
                student_id=student_id,
                bucket=index,
            )
            return StoreResult(NOT_FOUND, student_id, reason="find:not_found")

        _log.log_event(
            "record_found",
            operation_id=operation_id,
            level=logging.DEBUG,
            student_id=student_id,
            bucket=index,
        )
        return StoreResult(OK, student_id, record, reason="find:ok")

    def delete(self, student_id: int, operation_id: Optional[str] = None) -> StoreResult:
        """Unlink *student_id* from its chain.

        A head match repoints the bucket; any other match has its
        predecessor skip over it.  The removed record is returned in the
        result.
        """
        index = self.hash_index(student_id)
        with self._lock:
            prev, match = self._scan(index, student_id)
            if match is not None:
                if prev is None:
                    self._buckets[index] = match.next
                else:
                    prev.next = match.next
                match.next = None
                self._size -= 1

        if match is None:
            _log.log_event(
                "record_not_found",
                operation_id=operation_id,
                level=logging.WARNING,
                student_id=student_id,
                bucket=index,
            )
            return StoreResult(NOT_FOUND, student_id, reason="delete:not_found")

        _log.log_event(
            "record_deleted",
            operation_id=operation_id,
            student_id=student_id,
            bucket=index,
        )
        return StoreResult(OK, student_id, match.record, reason="delete:ok")

    def list_all(self, operation_id: Optional[str] = None) -> List[StudentRecord]:
        """Return every record, bucket by bucket, in chain order.

        An empty list means the store holds no records.  The order is
        deterministic for a given history of operations but is not sorted
        by identifier.
        """
        with self._lock:
            records = list(self._iter_chains())

        _log.log_event(
            "store_listed",
            operation_id=operation_id,
            level=logging.DEBUG,
            count=len(records),
        )
        return records

    def teardown(self, operation_id: Optional[str] = None) -> int:
        """Release every record and reset all buckets; return how many were released."""
        with self._lock:
            released = self._size
            for index, head in enumerate(self._buckets):
                current = head
                while current is not None:
                    nxt = current.next
                    current.next = None
                    current = nxt
                self._buckets[index] = None
            self._size = 0

        _log.log_event("store_torn_down", operation_id=operation_id, released=released)
        return released

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------

    def _iter_chains(self) -> Iterator[StudentRecord]:
        for head in self._buckets:
            current = head
            while current is not None:
                yield current.record
                current = current.next

    def chain_lengths(self) -> List[int]:
        """Return the number of records in each bucket, by index."""
        with self._lock:
            lengths = []
            for head in self._buckets:
                count = 0
                current = head
                while current is not None:
                    count += 1
                    current = current.next
                lengths.append(count)
        return lengths

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def table_size(self) -> int:
        return self._table_size

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def __contains__(self, student_id: object) -> bool:
        if isinstance(student_id, bool) or not isinstance(student_id, int):
            return False
        index = student_id % self._table_size
        with self._lock:
            return self._scan(index, student_id)[1] is not None
