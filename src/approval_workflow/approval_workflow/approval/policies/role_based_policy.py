from __future__ import annotations

from ...core.constants import HR_DEPARTMENT
from ...core.enums import ApprovalStage, Role
from ...principals.model import Principal
from .base import AuthorizationPolicy


class RoleBasedPolicy(AuthorizationPolicy):
    """HOD stage: a head of department, an HR member or an admin.
    HR stage: HR members only."""

    def is_authorized(self, *, principal: Principal, stage: ApprovalStage) -> bool:
        if stage == ApprovalStage.HOD:
            return principal.is_hod or principal.department == HR_DEPARTMENT or principal.role == Role.ADMIN
        return principal.department == HR_DEPARTMENT
