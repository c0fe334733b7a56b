from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_datetime
from ..core.enums import RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchone
from ..requests.mapping import parse_stored_status
from .model import AuditLogEntry
from .repository import AuditLogRepository


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_entry(self, request_id: str, request_type: RequestType) -> Optional[AuditLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, request_type, status, updated_at,
                       hod_action, hod_approval_time, hod_remarks, hod_id, hod_name,
                       hr_action, hr_approval_time, hr_remarks, hr_id, hr_name
                FROM logs
                WHERE request_id=%s AND request_type=%s
                """,
                (str(request_id), request_type.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AuditLogEntry(
                request_id=str(r["request_id"]),
                request_type=RequestType(r["request_type"]),
                status=parse_stored_status(r["status"]) if r.get("status") else None,
                updated_at=parse_datetime(r.get("updated_at")),
                hod_action=r.get("hod_action"),
                hod_approval_time=parse_datetime(r.get("hod_approval_time")),
                hod_remarks=r.get("hod_remarks"),
                hod_id=r.get("hod_id"),
                hod_name=r.get("hod_name"),
                hr_action=r.get("hr_action"),
                hr_approval_time=parse_datetime(r.get("hr_approval_time")),
                hr_remarks=r.get("hr_remarks"),
                hr_id=r.get("hr_id"),
                hr_name=r.get("hr_name"),
            )

    def update_entry(self, request_id: str, request_type: RequestType, fields: dict[str, Any]) -> bool:
        set_clause, params = build_set_clause(fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE logs
                SET {set_clause}
                WHERE request_id=%s AND request_type=%s
                """,
                tuple(params + [str(request_id), request_type.value]),
            )
            return cur.rowcount > 0
