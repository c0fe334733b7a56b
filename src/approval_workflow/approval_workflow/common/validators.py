from __future__ import annotations

from typing import Optional

from ..core.enums import ApprovalAction, RequestType
from ..core.exceptions import ValidationError


def normalize_remarks(value: Optional[str]) -> str:
    return (value or "").strip()


def parse_action(value: str) -> ApprovalAction:
    try:
        return ApprovalAction((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown action: {value!r}")


def parse_request_type(value: str) -> RequestType:
    try:
        return RequestType(value)
    except ValueError:
        raise ValidationError(f"Unknown request type: {value!r}")
