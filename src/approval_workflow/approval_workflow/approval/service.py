from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..audit.repository import AuditLogRepository
from ..common.datetime_utils import format_display_date, now_local
from ..core.constants import DEFAULT_HR_CONTACT_NAME
from ..core.enums import ApprovalAction, RequestStatus, RequestType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, StoreError
from ..principals.model import Principal
from ..principals.resolver import PrincipalResolver
from ..requests.model import Decision, GatePassRequest, LeaveRequest, WorkflowRequest
from ..requests.repository import RequestRepository
from .state_machine import ApprovalStateMachine
from .transition import Transition

logger = logging.getLogger(__name__)


def _decision_dict(decision: Optional[Decision]) -> Optional[dict]:
    if decision is None:
        return None
    return {
        "remarks": decision.remarks,
        "approver_id": decision.approver_id,
        "approver_name": decision.approver_name,
    }


def request_to_dict(request: WorkflowRequest) -> dict:
    out = {
        "request_id": request.request_id,
        "request_type": request.request_type.value,
        "status": request.status.value,
        "requester_name": request.requester_name,
        "hod_decision": _decision_dict(request.hod_decision),
        "hr_decision": _decision_dict(request.hr_decision),
    }
    if isinstance(request, LeaveRequest):
        out.update(
            leave_type=request.leave_type,
            start_date=format_display_date(request.start_date),
            end_date=format_display_date(request.end_date),
            day_count=request.day_count,
            reason=request.reason or "No specific reason provided.",
        )
    elif isinstance(request, GatePassRequest):
        out.update(
            departure_at=format_display_date(request.departure_at),
            arrival_at=format_display_date(request.arrival_at) if request.arrival_at else "Not specified",
            place_reason_to_visit=request.place_reason_to_visit,
            attachment_url=request.attachment_url,
            whatsapp_number=request.whatsapp_number,
        )
    return out


@dataclass(frozen=True)
class ApprovalView:
    """What an approval page needs to render: state plus whether to enable actions."""

    request: WorkflowRequest
    principal: Optional[Principal]
    not_actionable_reason: Optional[str]
    hr_contact_name: str = DEFAULT_HR_CONTACT_NAME
    hr_contact_phone: Optional[str] = None

    @property
    def is_actionable(self) -> bool:
        return self.not_actionable_reason is None

    def to_dict(self) -> dict:
        return {
            "request": request_to_dict(self.request),
            "approver": (
                {"name": self.principal.full_name, "first_name": self.principal.first_name}
                if self.principal
                else None
            ),
            "is_actionable": self.is_actionable,
            "not_actionable_reason": self.not_actionable_reason,
            "hr_contact": {"name": self.hr_contact_name, "phone": self.hr_contact_phone},
        }


@dataclass(frozen=True)
class ApprovalOutcome:
    request: WorkflowRequest
    transition: Transition
    log_written: bool

    @property
    def status(self) -> RequestStatus:
        return self.transition.new_status

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "action": self.transition.action.log_label,
            "processed_by": self.transition.acting_role.value,
            "summary": self.transition.summary(),
            "request": request_to_dict(self.request),
        }


class ApprovalService:
    """Use case: act on an approval link (view, approve, reject).

    Orchestrates resolver -> state machine -> stores. The primary write must
    succeed; the log write is best-effort.
    """

    def __init__(
        self,
        requests: RequestRepository,
        audit_logs: AuditLogRepository,
        resolver: PrincipalResolver,
        *,
        state_machine: Optional[ApprovalStateMachine] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._requests = requests
        self._audit_logs = audit_logs
        self._resolver = resolver
        self._machine = state_machine or ApprovalStateMachine()
        self._clock = clock

    def _load(self, request_type: RequestType, request_id: str) -> WorkflowRequest:
        req = self._requests.get_request(request_type, str(request_id))
        if req is None:
            raise NotFoundError("Request not found")
        return req

    def view(self, request_type: RequestType, request_id: str, approver_identifier: str) -> ApprovalView:
        req = self._load(request_type, request_id)
        principal = self._resolver.find(approver_identifier)
        if principal is None:
            logger.warning("Approver not found for identifier %r", approver_identifier)

        hr = self._resolver.hr_contact()
        return ApprovalView(
            request=req,
            principal=principal,
            not_actionable_reason=self._machine.not_actionable_reason(req, principal),
            hr_contact_name=hr.full_name if hr else DEFAULT_HR_CONTACT_NAME,
            hr_contact_phone=hr.phone_number if hr else None,
        )

    def act(
        self,
        request_type: RequestType,
        request_id: str,
        approver_identifier: str,
        action: ApprovalAction,
        remarks: Optional[str] = "",
    ) -> ApprovalOutcome:
        req = self._load(request_type, request_id)
        principal = self._resolver.resolve(approver_identifier)

        try:
            transition = self._machine.decide(req, principal, action, remarks, decided_at=self._clock())
        except AuthorizationError as e:
            logger.warning(
                "%s %s: %s denied %s at %s stage",
                request_type.value, req.request_id, principal.emp_id, action.value, e.stage.value if e.stage else "?",
            )
            raise

        applied = self._requests.apply_transition(
            request_type,
            req.request_id,
            expected_status=transition.from_status,
            fields=transition.request_fields(),
        )
        if not applied:
            current = self._requests.get_request(request_type, req.request_id)
            if current is None:
                raise NotFoundError("Request not found")
            raise ConflictError(
                f"Request status changed to {current.status.value} while you were reviewing it. Reload and try again."
            )

        logger.info(
            "%s %s: %s -> %s (%s)",
            request_type.value, req.request_id, transition.from_status.value, transition.new_status.value,
            transition.summary(),
        )

        return ApprovalOutcome(
            request=transition.apply_to(req),
            transition=transition,
            log_written=self._write_log(request_type, req.request_id, transition),
        )

    def approve(self, request_type: RequestType, request_id: str, approver_identifier: str, remarks: str = "") -> ApprovalOutcome:
        return self.act(request_type, request_id, approver_identifier, ApprovalAction.APPROVE, remarks)

    def reject(self, request_type: RequestType, request_id: str, approver_identifier: str, remarks: str = "") -> ApprovalOutcome:
        return self.act(request_type, request_id, approver_identifier, ApprovalAction.REJECT, remarks)

    def _write_log(self, request_type: RequestType, request_id: str, transition: Transition) -> bool:
        # Runs after the primary write has committed. Failures are logged, never raised.
        try:
            updated = self._audit_logs.update_entry(request_id, request_type, transition.log_fields())
        except StoreError:
            logger.error("Log update failed for %s %s", request_type.value, request_id, exc_info=True)
            return False

        if not updated:
            logger.warning("No log row for %s %s; log not updated", request_type.value, request_id)
        return updated
