from __future__ import annotations

from typing import Any, Optional, Protocol

from ..core.enums import RequestStatus, RequestType
from .model import WorkflowRequest


class RequestRepository(Protocol):
    """Primary record store for requests that carry approval state."""

    def get_request(self, request_type: RequestType, request_id: str) -> Optional[WorkflowRequest]:
        raise NotImplementedError

    def apply_transition(
        self,
        request_type: RequestType,
        request_id: str,
        *,
        expected_status: RequestStatus,
        fields: dict[str, Any],
    ) -> bool:
        """Write status/decision columns only if the row still has `expected_status`.

        Returns False when no row matched (missing or status moved).
        """

        raise NotImplementedError
