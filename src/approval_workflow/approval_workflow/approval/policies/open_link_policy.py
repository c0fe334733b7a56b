from __future__ import annotations

from ...core.enums import ApprovalStage
from ...principals.model import Principal
from .base import AuthorizationPolicy


class OpenLinkPolicy(AuthorizationPolicy):
    """Any resolved principal holding the approval link may act, at any stage."""

    def is_authorized(self, *, principal: Principal, stage: ApprovalStage) -> bool:
        return True
