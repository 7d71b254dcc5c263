# /app/services/audit_service.py

"""
The audit recorder and the admin audit-log query.

Recording is best-effort by contract. `AuditRecorder.observe` runs after the
response has been sent and hands the write to a detached task; the task's
result is never awaited by the request, and a failing write is logged and
counted but never raised. Audit rows are therefore not transactional with the
primary write they describe.
"""

import asyncio
import logging
import math
import threading
from typing import Any, Callable, Dict, Optional, Set

from sqlalchemy.orm import sessionmaker

from app.core.principal import Principal
from app.models.audit_model import AuditLogPage, AuditLogRecord, Pagination
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
SENSITIVE_KEYS = frozenset({"password", "token", "accessToken", "refreshToken", "authorization"})
REDACTED = "***"
API_PREFIX = "/api/"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# --- Pure Helpers ---

def is_auditable_request(method: str, path: str) -> bool:
    return method.upper() in MUTATING_METHODS and path.startswith(API_PREFIX)


def should_record(method: str, path: str, status_code: int) -> bool:
    """Mutating API requests that finished below the server-error range."""
    return is_auditable_request(method, path) and 200 <= status_code < 500


def redact(value: Any) -> Any:
    """
    Masks sensitive keys at any depth. Lists are redacted element-wise and
    every other value is returned unchanged, so the structure is preserved.
    """
    if isinstance(value, list):
        return [redact(item) for item in value]
    if not isinstance(value, dict):
        return value
    return {key: (REDACTED if key in SENSITIVE_KEYS else redact(item)) for key, item in value.items()}


# --- Recorder ---

class AuditRecorder:
    def __init__(self, sink: Callable[[Dict[str, Any]], Any]):
        """
        Args:
            sink: Persists a single audit entry dictionary. Called on a worker
                thread; it may raise, the recorder absorbs the failure.
        """
        self._sink = sink
        self._pending: Set[asyncio.Task] = set()
        self.failures = 0
        self._failures_lock = threading.Lock()

    def observe(
        self,
        principal: Optional[Principal],
        method: str,
        path: str,
        status_code: int,
        ip: Optional[str],
        user_agent: Optional[str],
        request_body: Any,
    ) -> Optional[asyncio.Task]:
        """
        Schedules the audit write for a finished request and returns the
        detached task, or None when the request does not qualify. Must be
        called from a running event loop.
        """
        if not should_record(method, path, status_code):
            return None

        entry = {
            "user_id": principal.id if principal is not None else None,
            "method": method.upper(),
            "path": path,
            "status_code": status_code,
            "ip": ip,
            "user_agent": user_agent,
            "request_body": redact(request_body),
        }
        task = asyncio.get_running_loop().create_task(asyncio.to_thread(self._persist, entry))
        # Keep a reference so the task is not garbage collected mid-flight.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _persist(self, entry: Dict[str, Any]) -> None:
        try:
            self._sink(entry)
        except Exception:
            # Audit failures never reach the client.
            with self._failures_lock:
                self.failures += 1
            logger.warning(
                "Audit write failed for %s %s (failures so far: %d)",
                entry["method"], entry["path"], self.failures, exc_info=True,
            )


def persist_entry(session_factory: sessionmaker, entry: Dict[str, Any]) -> None:
    """Default recorder sink: writes one row in its own short-lived session."""
    with session_factory() as session:
        DatabaseService(session).add_audit_entry(entry)


# --- Admin Query ---

def _clamp_page(page: Optional[int]) -> int:
    return max(1, page or 1)


def _clamp_page_size(page_size: Optional[int]) -> int:
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(1, page_size))


def _parse_user_id(user_id: Optional[str]) -> Optional[int]:
    if user_id is None:
        return None
    try:
        return int(user_id.strip())
    except ValueError:
        return None


def list_audit_logs(
    db: DatabaseService,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    method: Optional[str] = None,
    path: Optional[str] = None,
    user_id: Optional[str] = None,
) -> AuditLogPage:
    """
    Returns one page of audit entries, newest first.

    Out-of-range paging values are clamped rather than rejected, the method
    filter is case-insensitive, and a non-numeric `user_id` filter is ignored.
    """
    page = _clamp_page(page)
    page_size = _clamp_page_size(page_size)
    method_filter = method.upper() if method else None
    user_filter = _parse_user_id(user_id)

    items, total = db.get_audit_entries(page, page_size, method=method_filter, path=path or None, user_id=user_filter)

    return AuditLogPage(
        data=[AuditLogRecord.model_validate(item) for item in items],
        pagination=Pagination(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=max(1, math.ceil(total / page_size)),
        ),
    )
