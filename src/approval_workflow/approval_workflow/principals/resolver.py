from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..core.exceptions import NotFoundError
from .model import Principal
from .repository import PrincipalRepository

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Optional[Principal]]


class PrincipalResolver:
    """Resolve an opaque approver identifier to a Principal.

    Approval links embed a display name, an employee code or an internal id
    depending on which flow generated them, so the identifier is tried against
    each lookup in order and the first match wins.
    """

    def __init__(self, principals: PrincipalRepository, *, chain: Optional[Sequence[Lookup]] = None):
        self._principals = principals
        self._chain: tuple[Lookup, ...] = tuple(chain) if chain is not None else (
            principals.get_by_full_name,
            principals.get_by_emp_id,
            principals.get_by_id,
        )

    def find(self, identifier: str) -> Optional[Principal]:
        key = (identifier or "").strip()
        if not key:
            return None
        for lookup in self._chain:
            principal = lookup(key)
            if principal is not None:
                return principal
        return None

    def resolve(self, identifier: str) -> Principal:
        principal = self.find(identifier)
        if principal is None:
            logger.warning("Approver not found for identifier %r", identifier)
            raise NotFoundError("Approver identification failed. Cannot process action.")
        return principal

    def hr_contact(self) -> Optional[Principal]:
        return self._principals.find_hr_contact()
