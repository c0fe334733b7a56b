from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from ..core.enums import ApprovalAction, ApprovalStage, RequestStatus
from ..requests.model import Decision, WorkflowRequest


def _decision_columns(prefix: str, decision: Decision) -> dict[str, Any]:
    return {
        f"{prefix}_remarks": decision.remarks,
        f"{prefix}_id": decision.approver_id,
        f"{prefix}_name": decision.approver_name,
    }


@dataclass(frozen=True)
class Transition(ABC):
    """A computed, not yet persisted, move out of a pending status.

    Concrete variants carry exactly the decisions of the stage(s) that fired:
    HodTransition, HrTransition or FastPathTransition (both at once).
    """

    from_status: RequestStatus
    new_status: RequestStatus
    action: ApprovalAction
    decided_at: datetime

    @abstractmethod
    def decisions(self) -> dict[ApprovalStage, Decision]:
        raise NotImplementedError

    @property
    def acting_role(self) -> ApprovalStage:
        """Role shown to the user as having processed the request."""
        return ApprovalStage.HR if ApprovalStage.HR in self.decisions() else ApprovalStage.HOD

    @property
    def approver_name(self) -> str:
        return next(iter(self.decisions().values())).approver_name

    def request_fields(self) -> dict[str, Any]:
        """Columns to write on the primary request row."""
        fields: dict[str, Any] = {"status": self.new_status.value}
        for stage, decision in self.decisions().items():
            fields.update(_decision_columns(stage.value.lower(), decision))
        return fields

    def log_fields(self) -> dict[str, Any]:
        """Columns to write on the matching logs row."""
        fields: dict[str, Any] = {"status": self.new_status.value, "updated_at": self.decided_at}
        for stage, decision in self.decisions().items():
            prefix = stage.value.lower()
            fields[f"{prefix}_action"] = self.action.log_label
            fields[f"{prefix}_approval_time"] = self.decided_at
            fields.update(_decision_columns(prefix, decision))
        return fields

    def apply_to(self, request: WorkflowRequest) -> WorkflowRequest:
        changes: dict[str, Any] = {"status": self.new_status}
        for stage, decision in self.decisions().items():
            changes[f"{stage.value.lower()}_decision"] = decision
        return replace(request, **changes)

    def summary(self) -> str:
        return f"{self.action.log_label} by {self.acting_role.value}: {self.approver_name}"


@dataclass(frozen=True)
class HodTransition(Transition):
    hod: Decision

    def decisions(self) -> dict[ApprovalStage, Decision]:
        return {ApprovalStage.HOD: self.hod}


@dataclass(frozen=True)
class HrTransition(Transition):
    hr: Decision

    def decisions(self) -> dict[ApprovalStage, Decision]:
        return {ApprovalStage.HR: self.hr}


@dataclass(frozen=True)
class FastPathTransition(Transition):
    """HOD-stage approval by an HR member: both stages satisfied at once."""

    hod: Decision
    hr: Decision

    def decisions(self) -> dict[ApprovalStage, Decision]:
        return {ApprovalStage.HOD: self.hod, ApprovalStage.HR: self.hr}
