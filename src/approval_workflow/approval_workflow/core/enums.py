from __future__ import annotations

from enum import Enum

from .constants import LOG_ACTION_APPROVED, LOG_ACTION_REJECTED


class Role(str, Enum):
    """Principal roles stored in the users table."""

    ADMIN = "admin"
    STAFF = "staff"


class RequestType(str, Enum):
    """Request kinds; the value is what the logs table stores in request_type."""

    LEAVE = "Leave"
    GATE_PASS = "Gate Pass"
    JOINING = "Joining"


class RequestStatus(str, Enum):
    """Approval status of a workflow request."""

    PENDING_HOD = "Pending HOD"
    PENDING_HR = "Pending HR"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: str) -> "RequestStatus":
        """Read a stored status, accepting the legacy spellings.

        Older rows carry plain "Pending" for the HOD stage and free-form
        variants such as "Rejected by HOD".
        """
        v = (value or "").strip()
        if v == "Pending":
            return cls.PENDING_HOD
        if "Rejected" in v:
            return cls.REJECTED
        return cls(v)

    @property
    def is_pending(self) -> bool:
        return self in (RequestStatus.PENDING_HOD, RequestStatus.PENDING_HR)

    @property
    def is_terminal(self) -> bool:
        return not self.is_pending


class ApprovalStage(str, Enum):
    HOD = "HOD"
    HR = "HR"


class ApprovalAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def log_label(self) -> str:
        return LOG_ACTION_APPROVED if self is ApprovalAction.APPROVE else LOG_ACTION_REJECTED
