from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_day_count
from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class Decision:
    """One approver's decision on one stage.

    decided_at is only known from the audit log; the request tables keep the
    remarks and approver identity.
    """

    remarks: str
    approver_id: str
    approver_name: str
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class WorkflowRequest:
    request_id: str
    request_type: RequestType
    status: RequestStatus
    requester_name: str
    hod_decision: Optional[Decision] = None
    hr_decision: Optional[Decision] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveRequest(WorkflowRequest):
    leave_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None

    @property
    def day_count(self) -> int:
        return inclusive_day_count(self.start_date, self.end_date)


@dataclass(frozen=True)
class GatePassRequest(WorkflowRequest):
    departure_at: Optional[datetime] = None
    arrival_at: Optional[datetime] = None
    place_reason_to_visit: Optional[str] = None
    attachment_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
