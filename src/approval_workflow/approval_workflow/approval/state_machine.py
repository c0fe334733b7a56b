from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.validators import normalize_remarks
from ..core.constants import HR_DEPARTMENT
from ..core.enums import ApprovalAction, ApprovalStage, RequestStatus
from ..core.exceptions import AuthorizationError, InvalidStateError
from ..principals.model import Principal
from ..requests.model import Decision, WorkflowRequest
from .factory import AuthorizationPolicyFactory
from .transition import FastPathTransition, HodTransition, HrTransition, Transition

_STAGES = {
    RequestStatus.PENDING_HOD: ApprovalStage.HOD,
    RequestStatus.PENDING_HR: ApprovalStage.HR,
}


class ApprovalStateMachine:
    """Decide approve/reject transitions for HOD -> HR approval.

    Pure: everything it needs is passed in and nothing is read or written.
    Callers persist the returned Transition.
    """

    def __init__(self, policy_factory: Optional[AuthorizationPolicyFactory] = None):
        self._policies = policy_factory or AuthorizationPolicyFactory()

    @staticmethod
    def stage_for(status: RequestStatus) -> Optional[ApprovalStage]:
        return _STAGES.get(status)

    def decide(
        self,
        request: WorkflowRequest,
        principal: Principal,
        action: ApprovalAction,
        remarks: Optional[str] = "",
        *,
        decided_at: datetime,
    ) -> Transition:
        stage = self.stage_for(request.status)
        if stage is None:
            raise InvalidStateError("Action already taken or invalid status.")

        policy = self._policies.for_request_type(request.request_type)
        if not policy.is_authorized(principal=principal, stage=stage):
            raise AuthorizationError(policy.denial_reason(stage), stage=stage)

        decision = Decision(
            remarks=normalize_remarks(remarks),
            approver_id=principal.emp_id,
            approver_name=principal.full_name,
            decided_at=decided_at,
        )
        common = dict(from_status=request.status, action=action, decided_at=decided_at)

        if action == ApprovalAction.REJECT:
            if stage == ApprovalStage.HOD:
                return HodTransition(new_status=RequestStatus.REJECTED, hod=decision, **common)
            return HrTransition(new_status=RequestStatus.REJECTED, hr=decision, **common)

        if stage == ApprovalStage.HR:
            return HrTransition(new_status=RequestStatus.APPROVED, hr=decision, **common)

        if principal.department == HR_DEPARTMENT:
            return FastPathTransition(new_status=RequestStatus.APPROVED, hod=decision, hr=decision, **common)
        return HodTransition(new_status=RequestStatus.PENDING_HR, hod=decision, **common)

    def not_actionable_reason(self, request: WorkflowRequest, principal: Optional[Principal]) -> Optional[str]:
        """None when `principal` may act on `request` now, else why not."""
        if principal is None:
            return "Approver identification failed. Cannot process action."

        stage = self.stage_for(request.status)
        if stage is None:
            return f"This request has already been {request.status.value.lower()}."

        policy = self._policies.for_request_type(request.request_type)
        if not policy.is_authorized(principal=principal, stage=stage):
            return "You are not authorized to approve this request at this stage."
        return None
