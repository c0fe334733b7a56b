from __future__ import annotations

from typing import Any, Optional

from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchone
from .mapping import request_from_row, stored_status_values, table_for
from .model import WorkflowRequest
from .repository import RequestRepository

_SELECTS: dict[RequestType, str] = {
    RequestType.LEAVE: """
        SELECT id, employee_name, leave_type, leave_date_start, leave_date_end, remarks,
               status, created_at,
               hod_remarks, hod_id, hod_name, hr_remarks, hr_id, hr_name
        FROM leave_management
        WHERE id=%s
    """,
    RequestType.GATE_PASS: """
        SELECT g.id, g.emp_name, u.full_name AS employee_name,
               g.departure_from_plant, g.arrival_at_plant, g.place_reason_to_visit,
               g.image_gate_pass, g.employee_whatsapp_number,
               g.status, g.created_at,
               g.hod_remarks, g.hod_id, g.hod_name, g.hr_remarks, g.hr_id, g.hr_name
        FROM gate_pass g
        LEFT JOIN users u ON u.id = g.user_id
        WHERE g.id=%s
    """,
}


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_request(self, request_type: RequestType, request_id: str) -> Optional[WorkflowRequest]:
        table_for(request_type)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECTS[request_type], (str(request_id),))
            row = fetchone(cur)
            if not row:
                return None
            return request_from_row(request_type, row)

    def apply_transition(
        self,
        request_type: RequestType,
        request_id: str,
        *,
        expected_status: RequestStatus,
        fields: dict[str, Any],
    ) -> bool:
        table = table_for(request_type)
        set_clause, params = build_set_clause(fields)
        statuses = stored_status_values(expected_status)
        placeholders = ",".join(["%s"] * len(statuses))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {table}
                SET {set_clause}
                WHERE id=%s AND status IN ({placeholders})
                """,
                tuple(params + [str(request_id), *statuses]),
            )
            return cur.rowcount > 0
