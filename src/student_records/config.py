"""Configuration for the record store."""

from __future__ import annotations

from dataclasses import dataclass

# Widths of the legacy fixed-size name/grade fields (buffer size minus one).
DEFAULT_TABLE_SIZE = 50
DEFAULT_NAME_MAX_LENGTH = 49
DEFAULT_GRADE_MAX_LENGTH = 4


@dataclass(frozen=True)
class StoreConfig:
    """Configuration knobs for :class:`~student_records.store.RecordStore`.

    Frozen: a store reads these once at construction.

    Parameters
    ----------
    table_size : int
        Number of buckets (``M``).  Fixed for the lifetime of a store.
    name_max_length : int
        Names longer than this are truncated on insert.
    grade_max_length : int
        Grade labels longer than this are truncated on insert.
    """

    table_size: int = DEFAULT_TABLE_SIZE
    name_max_length: int = DEFAULT_NAME_MAX_LENGTH
    grade_max_length: int = DEFAULT_GRADE_MAX_LENGTH

    def validate(self) -> "StoreConfig":
        """Raise :class:`ValueError` if any knob is out of range."""
        if isinstance(self.table_size, bool) or not isinstance(self.table_size, int):
            raise ValueError(f"table_size must be an integer, got {self.table_size!r}")
        if self.table_size < 1:
            raise ValueError(f"table_size must be at least 1, got {self.table_size}")
        if self.name_max_length < 0:
            raise ValueError(f"name_max_length must be >= 0, got {self.name_max_length}")
        if self.grade_max_length < 0:
            raise ValueError(f"grade_max_length must be >= 0, got {self.grade_max_length}")
        return self
