# /tests/test_audit_service.py

import asyncio
import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.core.principal import Principal, Role
from app.services import audit_service
from app.services.audit_service import AuditRecorder, redact, should_record

ADMIN = Principal(id=1, role=Role.ADMIN)


# --- Redaction ---

def test_redact_masks_nested_sensitive_keys():
    body = {"user": {"password": "x", "name": "a"}, "items": [{"token": "t"}]}
    assert redact(body) == {"user": {"password": "***", "name": "a"}, "items": [{"token": "***"}]}


def test_redact_is_idempotent():
    body = {"password": "x", "refreshToken": "r", "nested": [{"accessToken": "a", "keep": 1}]}
    once = redact(body)
    assert redact(once) == once


def test_redact_leaves_scalars_and_original_untouched():
    body = {"authorization": "Bearer x", "score": 90}
    assert redact(body) == {"authorization": "***", "score": 90}
    assert body["authorization"] == "Bearer x"
    assert redact("plain") == "plain"
    assert redact(None) is None


# --- Recording rule ---

@pytest.mark.parametrize("method,path,status_code,expected", [
    ("POST", "/api/grades", 201, True),
    ("DELETE", "/api/payments/3", 204, True),
    ("PUT", "/api/grades/1", 403, True),
    ("PATCH", "/api/students/1", 404, True),
    ("POST", "/api/grades", 500, False),
    ("GET", "/api/grades", 200, False),
    ("POST", "/health", 200, False),
    ("post", "/api/grades", 201, True),
])
def test_should_record(method, path, status_code, expected):
    assert should_record(method, path, status_code) is expected


# --- Recorder ---

@pytest.mark.asyncio
async def test_observe_persists_redacted_entry():
    sink = MagicMock()
    recorder = AuditRecorder(sink=sink)

    task = recorder.observe(ADMIN, "POST", "/api/auth/something", 201, "127.0.0.1", "pytest", {"password": "p", "a": 1})
    await task

    sink.assert_called_once()
    entry = sink.call_args.args[0]
    assert entry["user_id"] == 1
    assert entry["method"] == "POST"
    assert entry["status_code"] == 201
    assert entry["request_body"] == {"password": "***", "a": 1}
    assert recorder.failures == 0


@pytest.mark.asyncio
async def test_observe_skips_reads_and_server_errors():
    sink = MagicMock()
    recorder = AuditRecorder(sink=sink)
    assert recorder.observe(ADMIN, "GET", "/api/grades", 200, None, None, None) is None
    assert recorder.observe(ADMIN, "POST", "/api/grades", 503, None, None, None) is None
    sink.assert_not_called()


@pytest.mark.asyncio
async def test_failing_sink_is_counted_and_logged_not_raised(caplog):
    def broken_sink(entry):
        raise RuntimeError("database is locked")

    recorder = AuditRecorder(sink=broken_sink)
    with caplog.at_level(logging.WARNING, logger="app.services.audit_service"):
        task = recorder.observe(ADMIN, "DELETE", "/api/grades/1", 204, None, None, None)
        await task

    assert task.exception() is None
    assert recorder.failures == 1
    assert "Audit write failed" in caplog.text


@pytest.mark.asyncio
async def test_observe_returns_before_slow_sink_finishes():
    release = asyncio.Event()
    loop = asyncio.get_running_loop()
    written = []

    def slow_sink(entry):
        asyncio.run_coroutine_threadsafe(release.wait(), loop).result(timeout=5)
        written.append(entry)

    recorder = AuditRecorder(sink=slow_sink)
    task = recorder.observe(ADMIN, "POST", "/api/payments", 201, None, None, None)
    await asyncio.sleep(0)
    assert written == []
    release.set()
    await task
    assert len(written) == 1


# --- Admin query ---

def _page_db(items=None, total=0):
    db = MagicMock()
    db.get_audit_entries.return_value = (items or [], total)
    return db


def test_list_audit_logs_clamps_paging():
    db = _page_db(total=0)
    page = audit_service.list_audit_logs(db, page=-3, page_size=1000)
    assert page.pagination.page == 1
    assert page.pagination.page_size == 100
    assert page.pagination.total_pages == 1
    db.get_audit_entries.assert_called_once_with(1, 100, method=None, path=None, user_id=None)


def test_list_audit_logs_normalizes_filters():
    db = _page_db(total=45)
    page = audit_service.list_audit_logs(db, page=2, page_size=None, method="delete", path="/api/grades", user_id="abc")
    db.get_audit_entries.assert_called_once_with(2, 20, method="DELETE", path="/api/grades", user_id=None)
    assert page.pagination.total_pages == 3


@pytest.mark.parametrize("raw,expected", [
    ("--5", None),
    ("²", None),
    ("", None),
    ("12abc", None),
    (" 7 ", 7),
    ("-3", -3),
])
def test_list_audit_logs_user_filter_parsing(raw, expected):
    db = _page_db()
    audit_service.list_audit_logs(db, user_id=raw)
    assert db.get_audit_entries.call_args.kwargs["user_id"] == expected


def test_list_audit_logs_numeric_user_filter_and_items():
    row = SimpleNamespace(
        id=5, user_id=2, user=SimpleNamespace(id=2, username="ms.ana", role="TEACHER"),
        method="POST", path="/api/grades", status_code=201, ip="10.0.0.1",
        user_agent="curl", request_body={"score": 90}, created_at=None,
    )
    db = _page_db(items=[row], total=1)
    page = audit_service.list_audit_logs(db, user_id="2")
    assert db.get_audit_entries.call_args.kwargs["user_id"] == 2
    assert page.data[0].user.username == "ms.ana"
    body = page.model_dump(by_alias=True)
    assert body["pagination"] == {"page": 1, "pageSize": 20, "total": 1, "totalPages": 1}
