from __future__ import annotations

from typing import Optional

from ..core.constants import HR_DEPARTMENT
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Principal
from .repository import PrincipalRepository

_COLUMNS = "id, emp_id, full_name, department, is_hod, role, phone_number"


def _row_to_principal(row: dict) -> Principal:
    return Principal(
        principal_id=str(row["id"]),
        emp_id=str(row.get("emp_id") or ""),
        full_name=row.get("full_name") or "",
        department=row.get("department") or "",
        is_hod=bool(row.get("is_hod")),
        role=row.get("role") or Role.STAFF.value,
        phone_number=row.get("phone_number"),
    )


class MySQLPrincipalRepository(PrincipalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Principal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {column}=%s LIMIT 1", (value,))
            row = fetchone(cur)
            return _row_to_principal(row) if row else None

    def get_by_full_name(self, full_name: str) -> Optional[Principal]:
        return self._get_one("full_name", full_name)

    def get_by_emp_id(self, emp_id: str) -> Optional[Principal]:
        return self._get_one("emp_id", emp_id)

    def get_by_id(self, principal_id: str) -> Optional[Principal]:
        return self._get_one("id", principal_id)

    def find_hr_contact(self) -> Optional[Principal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE department=%s
                ORDER BY is_hod DESC
                LIMIT 1
                """,
                (HR_DEPARTMENT,),
            )
            row = fetchone(cur)
            return _row_to_principal(row) if row else None
