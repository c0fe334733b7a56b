from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class AuditLogEntry:
    """One row of the logs table, keyed by (request_id, request_type)."""

    request_id: str
    request_type: RequestType
    status: Optional[RequestStatus] = None
    updated_at: Optional[datetime] = None

    hod_action: Optional[str] = None
    hod_approval_time: Optional[datetime] = None
    hod_remarks: Optional[str] = None
    hod_id: Optional[str] = None
    hod_name: Optional[str] = None

    hr_action: Optional[str] = None
    hr_approval_time: Optional[datetime] = None
    hr_remarks: Optional[str] = None
    hr_id: Optional[str] = None
    hr_name: Optional[str] = None
