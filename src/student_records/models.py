"""Data models for the student record store."""

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Outcome statuses carried by StoreResult.
OK = "ok"
DUPLICATE_ID = "duplicate_id"
NOT_FOUND = "not_found"

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str) -> Optional[int]:
    """Parse a plain, optionally signed decimal integer; ``None`` otherwise.

    Rejects forms :func:`int` would accept but a C ``%d`` would not, such
    as ``"1_0"`` or non-ASCII digits.
    """
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    return int(text)


@dataclass(frozen=True)
class StudentRecord:
    """Read-only view of a stored student entry.

    Parameters
    ----------
    student_id : int
        Unique identifier; also the hash key.
    name : str
        Student name, already truncated to the store's maximum width.
    grade : str
        Grade label (e.g. ``"A"``, ``"B+"``), already truncated.
    """

    student_id: int
    name: str
    grade: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a single store operation.

    Parameters
    ----------
    status : str
        One of ``"ok"``, ``"duplicate_id"`` or ``"not_found"``.
    student_id : int
        Identifier the operation was called with.
    record : StudentRecord, optional
        The inserted, found or removed record when *status* is ``"ok"``.
    reason : str
        Reason code of the form ``"<operation>:<status>"``.
    """

    status: str
    student_id: int
    record: Optional[StudentRecord] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OK

    @property
    def duplicate(self) -> bool:
        return self.status == DUPLICATE_ID

    @property
    def not_found(self) -> bool:
        return self.status == NOT_FOUND

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "student_id": self.student_id,
            "record": self.record.to_dict() if self.record is not None else None,
            "reason": self.reason,
        }
