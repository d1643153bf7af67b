"""student-records: in-memory student record store backed by a chained hash table."""

from .audit_logger import AuditLogger, get_audit_logger
from .config import StoreConfig
from .models import DUPLICATE_ID, NOT_FOUND, OK, StoreResult, StudentRecord
from .store import RecordStore

__version__ = "0.1.0"
__all__ = [
    "AuditLogger",
    "DUPLICATE_ID",
    "NOT_FOUND",
    "OK",
    "RecordStore",
    "StoreConfig",
    "StoreResult",
    "StudentRecord",
    "get_audit_logger",
]
