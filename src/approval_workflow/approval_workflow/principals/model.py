from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """Domain entity: a person who can act on approval links.

    Note: Plain data object, looked up from the users table and never mutated
    by the approval core.
    """

    principal_id: str
    emp_id: str
    full_name: str
    department: str
    is_hod: bool = False
    role: str = Role.STAFF.value
    phone_number: Optional[str] = None

    @property
    def first_name(self) -> str:
        parts = (self.full_name or "").split()
        return parts[0] if parts else "Approver"
