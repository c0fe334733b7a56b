from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import RequestType
from ..core.exceptions import ValidationError
from .policies.base import AuthorizationPolicy
from .policies.open_link_policy import OpenLinkPolicy
from .policies.role_based_policy import RoleBasedPolicy


def default_policies() -> dict[RequestType, AuthorizationPolicy]:
    # TODO: gate passes accept anyone holding the link; switch to RoleBasedPolicy
    # once product confirms gate passes need the same role checks as leave.
    return {
        RequestType.LEAVE: RoleBasedPolicy(),
        RequestType.GATE_PASS: OpenLinkPolicy(),
    }


@dataclass
class AuthorizationPolicyFactory:
    """Factory Pattern: choose the authorization policy for a request type."""

    policies: dict[RequestType, AuthorizationPolicy] = field(default_factory=default_policies)

    def for_request_type(self, request_type: RequestType) -> AuthorizationPolicy:
        policy = self.policies.get(request_type)
        if policy is None:
            raise ValidationError(f"{request_type.value} requests have no approval workflow")
        return policy
