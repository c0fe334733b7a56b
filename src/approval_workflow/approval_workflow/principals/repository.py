from __future__ import annotations

from typing import Optional, Protocol

from .model import Principal


class PrincipalRepository(Protocol):
    """Principal directory interface.

    Each lookup is a distinct exact-match query; the resolver decides the order.
    """

    def get_by_full_name(self, full_name: str) -> Optional[Principal]:
        raise NotImplementedError

    def get_by_emp_id(self, emp_id: str) -> Optional[Principal]:
        raise NotImplementedError

    def get_by_id(self, principal_id: str) -> Optional[Principal]:
        raise NotImplementedError

    def find_hr_contact(self) -> Optional[Principal]:
        """HR department member shown as the HR contact, HODs first."""

        raise NotImplementedError
