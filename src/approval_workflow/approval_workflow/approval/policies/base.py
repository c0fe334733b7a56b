from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import ApprovalStage
from ...principals.model import Principal


class AuthorizationPolicy(ABC):
    """Strategy Pattern: who may act on a request at a given stage."""

    @abstractmethod
    def is_authorized(self, *, principal: Principal, stage: ApprovalStage) -> bool:
        raise NotImplementedError

    def denial_reason(self, stage: ApprovalStage) -> str:
        return f"You do not have {stage.value} permissions."
