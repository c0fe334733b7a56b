from __future__ import annotations

from typing import Any, Optional, Protocol

from ..core.enums import RequestType
from .model import AuditLogEntry


class AuditLogRepository(Protocol):
    """Secondary log store. Rows are inserted by the submission flow; this
    core only updates them."""

    def get_entry(self, request_id: str, request_type: RequestType) -> Optional[AuditLogEntry]:
        raise NotImplementedError

    def update_entry(self, request_id: str, request_type: RequestType, fields: dict[str, Any]) -> bool:
        """Returns False when no row matches (request_id, request_type)."""

        raise NotImplementedError
