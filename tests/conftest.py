from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.approval_workflow.approval_workflow.approval.service import ApprovalService
from src.approval_workflow.approval_workflow.audit.model import AuditLogEntry
from src.approval_workflow.approval_workflow.core.enums import RequestStatus, RequestType
from src.approval_workflow.approval_workflow.core.exceptions import StoreError
from src.approval_workflow.approval_workflow.principals.model import Principal
from src.approval_workflow.approval_workflow.principals.resolver import PrincipalResolver
from src.approval_workflow.approval_workflow.requests.mapping import request_from_row, stored_status_values

LEAVE_ID = "leave-0001"
GATE_PASS_ID = "gate-0001"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 9, 30, 0)


@pytest.fixture
def leave_id() -> str:
    return LEAVE_ID


@pytest.fixture
def gate_pass_id() -> str:
    return GATE_PASS_ID


class InMemoryPrincipals:
    def __init__(self, principals: list[Principal]):
        self._principals = list(principals)
        self.calls: list[tuple[str, str]] = []

    def _first(self, attr: str, value: str) -> Optional[Principal]:
        self.calls.append((attr, value))
        return next((p for p in self._principals if getattr(p, attr) == value), None)

    def get_by_full_name(self, full_name: str) -> Optional[Principal]:
        return self._first("full_name", full_name)

    def get_by_emp_id(self, emp_id: str) -> Optional[Principal]:
        return self._first("emp_id", emp_id)

    def get_by_id(self, principal_id: str) -> Optional[Principal]:
        return self._first("principal_id", principal_id)

    def find_hr_contact(self) -> Optional[Principal]:
        hr = [p for p in self._principals if p.department == "HR"]
        hr.sort(key=lambda p: not p.is_hod)
        return hr[0] if hr else None


class InMemoryRequests:
    """Stores raw rows like the DB does, so reads go through the real row mapping."""

    def __init__(self):
        self.rows: dict[tuple[RequestType, str], dict] = {}
        self.writes = 0

    def add(self, request_type: RequestType, row: dict) -> None:
        self.rows[(request_type, row["id"])] = dict(row)

    def get_request(self, request_type, request_id):
        row = self.rows.get((request_type, str(request_id)))
        return request_from_row(request_type, row) if row else None

    def apply_transition(self, request_type, request_id, *, expected_status, fields):
        row = self.rows.get((request_type, str(request_id)))
        if not row or row["status"] not in stored_status_values(expected_status):
            return False
        row.update(fields)
        self.writes += 1
        return True


class InMemoryAuditLogs:
    def __init__(self):
        self.rows: dict[tuple[str, RequestType], dict] = {}
        self.fail_with: Optional[Exception] = None

    def add(self, request_id: str, request_type: RequestType) -> None:
        self.rows[(request_id, request_type)] = {"status": RequestStatus.PENDING_HOD.value}

    def get_entry(self, request_id, request_type):
        row = self.rows.get((request_id, request_type))
        if row is None:
            return None
        fields = {k: v for k, v in row.items() if k != "status"}
        return AuditLogEntry(
            request_id=request_id, request_type=request_type, status=RequestStatus.parse(row["status"]), **fields
        )

    def update_entry(self, request_id, request_type, fields):
        if self.fail_with is not None:
            raise self.fail_with
        row = self.rows.get((request_id, request_type))
        if row is None:
            return False
        row.update(fields)
        return True


@pytest.fixture
def hod() -> Principal:
    return Principal(principal_id="u-1", emp_id="EMP001", full_name="Priya Sharma", department="Production", is_hod=True)


@pytest.fixture
def hr_head() -> Principal:
    return Principal(
        principal_id="u-2", emp_id="EMP002", full_name="Rahul Mehta", department="HR", is_hod=True, phone_number="9000000002"
    )


@pytest.fixture
def hr_staff() -> Principal:
    return Principal(principal_id="u-4", emp_id="EMP004", full_name="Meera Iyer", department="HR")


@pytest.fixture
def employee() -> Principal:
    return Principal(principal_id="u-3", emp_id="EMP003", full_name="Anil Kumar", department="Sales")


@pytest.fixture
def admin() -> Principal:
    return Principal(principal_id="u-5", emp_id="EMP005", full_name="Site Admin", department="IT", role="admin")


@pytest.fixture
def principals_repo(hod, hr_head, hr_staff, employee, admin) -> InMemoryPrincipals:
    return InMemoryPrincipals([hod, hr_head, hr_staff, employee, admin])


def _leave_row(status: str = "Pending HOD", **extra) -> dict:
    row = {
        "id": LEAVE_ID,
        "employee_name": "Anil Kumar",
        "leave_type": "Casual Leave",
        "leave_date_start": date(2026, 11, 2),
        "leave_date_end": date(2026, 11, 4),
        "remarks": "Family function",
        "status": status,
        "created_at": datetime(2026, 10, 18, 8, 0, 0),
    }
    row.update(extra)
    return row


def _gate_pass_row(status: str = "Pending HOD", **extra) -> dict:
    row = {
        "id": GATE_PASS_ID,
        "emp_name": "Anil Kumar",
        "departure_from_plant": datetime(2026, 11, 2, 14, 0),
        "arrival_at_plant": None,
        "place_reason_to_visit": "Bank visit",
        "status": status,
    }
    row.update(extra)
    return row


@pytest.fixture
def leave_row():
    return _leave_row


@pytest.fixture
def gate_pass_row():
    return _gate_pass_row


@pytest.fixture
def requests_repo() -> InMemoryRequests:
    repo = InMemoryRequests()
    repo.add(RequestType.LEAVE, _leave_row())
    repo.add(RequestType.GATE_PASS, _gate_pass_row())
    return repo


@pytest.fixture
def audit_repo() -> InMemoryAuditLogs:
    repo = InMemoryAuditLogs()
    repo.add(LEAVE_ID, RequestType.LEAVE)
    repo.add(GATE_PASS_ID, RequestType.GATE_PASS)
    return repo


@pytest.fixture
def service(requests_repo, audit_repo, principals_repo, fixed_now) -> ApprovalService:
    return ApprovalService(
        requests_repo,
        audit_repo,
        PrincipalResolver(principals_repo),
        clock=lambda: fixed_now,
    )


@pytest.fixture
def store_error() -> StoreError:
    return StoreError("Database operation failed: connection lost")


class RecordingCursor:
    def __init__(self, db: "RecordingDatabase"):
        self._db = db
        self.rowcount = -1

    def execute(self, sql: str, params=None) -> None:
        # whitespace-normalized so tests can compare whole statements
        self._db.executed.append((" ".join(sql.split()), params))
        self.rowcount = self._db.rowcount

    def fetchone(self):
        return self._db.results.pop(0) if self._db.results else None

    def close(self) -> None:
        pass


class RecordingConnection:
    def __init__(self, db: "RecordingDatabase"):
        self._db = db

    def cursor(self, dictionary=True):
        return RecordingCursor(self._db)

    def commit(self) -> None:
        self._db.commits += 1

    def rollback(self) -> None:
        pass

    def close(self) -> None:
        pass


class RecordingDatabase:
    """Stands in for DatabaseConnection: records every statement, replays queued rows."""

    def __init__(self):
        self.executed: list[tuple[str, Optional[tuple]]] = []
        self.results: list[Optional[dict]] = []
        self.rowcount = 1
        self.commits = 0

    def connect(self) -> RecordingConnection:
        return RecordingConnection(self)


@pytest.fixture
def recording_db() -> RecordingDatabase:
    return RecordingDatabase()
