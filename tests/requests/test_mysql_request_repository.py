from __future__ import annotations

from datetime import date

import pytest

from src.approval_workflow.approval_workflow.core.enums import RequestStatus, RequestType
from src.approval_workflow.approval_workflow.core.exceptions import InvalidStateError, ValidationError
from src.approval_workflow.approval_workflow.requests.model import GatePassRequest, LeaveRequest
from src.approval_workflow.approval_workflow.requests.mysql_request_repository import MySQLRequestRepository

HOD_FIELDS = {"status": "Pending HR", "hod_remarks": "ok", "hod_id": "EMP001", "hod_name": "Priya Sharma"}


def test_hod_stage_update_is_guarded_on_both_pending_spellings(recording_db, leave_id):
    repo = MySQLRequestRepository(recording_db)

    applied = repo.apply_transition(
        RequestType.LEAVE, leave_id, expected_status=RequestStatus.PENDING_HOD, fields=HOD_FIELDS
    )

    assert applied is True
    assert recording_db.executed == [
        (
            "UPDATE leave_management SET status=%s, hod_remarks=%s, hod_id=%s, hod_name=%s "
            "WHERE id=%s AND status IN (%s,%s)",
            ("Pending HR", "ok", "EMP001", "Priya Sharma", leave_id, "Pending HOD", "Pending"),
        )
    ]
    assert recording_db.commits == 1


def test_hr_stage_update_targets_gate_pass_table(recording_db, gate_pass_id):
    repo = MySQLRequestRepository(recording_db)

    repo.apply_transition(
        RequestType.GATE_PASS, gate_pass_id, expected_status=RequestStatus.PENDING_HR, fields={"status": "Approved"}
    )

    sql, params = recording_db.executed[0]
    assert sql == "UPDATE gate_pass SET status=%s WHERE id=%s AND status IN (%s)"
    assert params == ("Approved", gate_pass_id, "Pending HR")


def test_no_matching_row_reports_lost_race(recording_db, leave_id):
    recording_db.rowcount = 0

    applied = MySQLRequestRepository(recording_db).apply_transition(
        RequestType.LEAVE, leave_id, expected_status=RequestStatus.PENDING_HOD, fields=HOD_FIELDS
    )

    assert applied is False


def test_get_leave(recording_db, leave_row, leave_id):
    recording_db.results.append(leave_row(hod_id="EMP001", hod_name="Priya Sharma"))

    req = MySQLRequestRepository(recording_db).get_request(RequestType.LEAVE, leave_id)

    sql, params = recording_db.executed[0]
    assert sql.startswith("SELECT id, employee_name, leave_type")
    assert sql.endswith("FROM leave_management WHERE id=%s")
    assert params == (leave_id,)
    assert isinstance(req, LeaveRequest)
    assert req.start_date == date(2026, 11, 2)
    assert req.hod_decision.approver_name == "Priya Sharma"


def test_get_gate_pass_joins_requester(recording_db, gate_pass_row, gate_pass_id):
    recording_db.results.append(gate_pass_row(employee_name="Anil K."))

    req = MySQLRequestRepository(recording_db).get_request(RequestType.GATE_PASS, gate_pass_id)

    sql, params = recording_db.executed[0]
    assert "FROM gate_pass g LEFT JOIN users u ON u.id = g.user_id WHERE g.id=%s" in sql
    assert "u.full_name AS employee_name" in sql
    assert params == (gate_pass_id,)
    assert isinstance(req, GatePassRequest)
    assert req.requester_name == "Anil K."


def test_get_missing_request(recording_db):
    assert MySQLRequestRepository(recording_db).get_request(RequestType.LEAVE, "missing") is None


def test_unknown_stored_status_is_invalid_state(recording_db, leave_row, leave_id):
    recording_db.results.append(leave_row(status="Escalated"))

    with pytest.raises(InvalidStateError):
        MySQLRequestRepository(recording_db).get_request(RequestType.LEAVE, leave_id)


def test_joining_has_no_table(recording_db):
    with pytest.raises(ValidationError):
        MySQLRequestRepository(recording_db).get_request(RequestType.JOINING, "j-1")
    assert recording_db.executed == []
