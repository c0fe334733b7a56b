"""Row <-> model mapping for the request tables.

Kept free of any driver import so in-memory repositories can share it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.enums import RequestStatus, RequestType
from ..core.exceptions import InvalidStateError, ValidationError
from ..common.datetime_utils import parse_datetime
from .model import Decision, GatePassRequest, LeaveRequest, WorkflowRequest

REQUEST_TABLES: dict[RequestType, str] = {
    RequestType.LEAVE: "leave_management",
    RequestType.GATE_PASS: "gate_pass",
}


def table_for(request_type: RequestType) -> str:
    try:
        return REQUEST_TABLES[request_type]
    except KeyError:
        raise ValidationError(f"{request_type.value} records do not carry approval state")


def stored_status_values(status: RequestStatus) -> tuple[str, ...]:
    """Every stored spelling that reads back as `status`."""
    if status == RequestStatus.PENDING_HOD:
        return (RequestStatus.PENDING_HOD.value, "Pending")
    return (status.value,)


def parse_stored_status(value: Optional[str]) -> RequestStatus:
    try:
        return RequestStatus.parse(value)
    except ValueError:
        raise InvalidStateError("Action already taken or invalid status.")


def decision_from_row(row: Mapping[str, Any], prefix: str) -> Optional[Decision]:
    approver_id = row.get(f"{prefix}_id")
    approver_name = row.get(f"{prefix}_name")
    if not approver_id and not approver_name:
        return None
    return Decision(
        remarks=row.get(f"{prefix}_remarks") or "",
        approver_id=str(approver_id or ""),
        approver_name=approver_name or "",
    )


def _common(row: Mapping[str, Any]) -> dict:
    return dict(
        request_id=str(row["id"]),
        status=parse_stored_status(row.get("status")),
        hod_decision=decision_from_row(row, "hod"),
        hr_decision=decision_from_row(row, "hr"),
        created_at=parse_datetime(row.get("created_at")),
    )


def leave_from_row(row: Mapping[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_type=RequestType.LEAVE,
        requester_name=row.get("employee_name") or "",
        leave_type=row.get("leave_type"),
        start_date=row.get("leave_date_start"),
        end_date=row.get("leave_date_end"),
        reason=row.get("remarks"),
        **_common(row),
    )


def gate_pass_from_row(row: Mapping[str, Any]) -> GatePassRequest:
    return GatePassRequest(
        request_type=RequestType.GATE_PASS,
        requester_name=row.get("employee_name") or row.get("emp_name") or "Employee",
        departure_at=parse_datetime(row.get("departure_from_plant")),
        arrival_at=parse_datetime(row.get("arrival_at_plant")),
        place_reason_to_visit=row.get("place_reason_to_visit"),
        attachment_url=row.get("image_gate_pass"),
        whatsapp_number=row.get("employee_whatsapp_number"),
        **_common(row),
    )


def request_from_row(request_type: RequestType, row: Mapping[str, Any]) -> WorkflowRequest:
    if request_type == RequestType.LEAVE:
        return leave_from_row(row)
    if request_type == RequestType.GATE_PASS:
        return gate_pass_from_row(row)
    raise ValidationError(f"{request_type.value} records do not carry approval state")
