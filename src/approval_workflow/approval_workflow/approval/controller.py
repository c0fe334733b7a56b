from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import parse_action
from ..core.enums import RequestType
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# URL prefixes used by the links sent to approvers
FLOWS = {
    "leave-form": RequestType.LEAVE,
    "gatepass-approve": RequestType.GATE_PASS,
}

_STATUS_CODES = (
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (InvalidStateError, 409),
    (ConflictError, 409),
    (ValidationError, 400),
    (StoreError, 503),
)


def _error(e: DomainError):
    for exc_type, code in _STATUS_CODES:
        if isinstance(e, exc_type):
            body = {"error": str(e), "kind": exc_type.__name__, "retryable": exc_type is StoreError}
            if isinstance(e, AuthorizationError) and e.stage:
                body["stage"] = e.stage.value
            return jsonify(body), code
    return jsonify({"error": str(e), "kind": "DomainError", "retryable": False}), 400


def _remarks() -> str:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    return request.form.get("remarks") or payload.get("remarks") or ""


def register(app: Flask, container) -> None:
    service = container.approval_service
    flow_rule = "<any(" + ", ".join(f'"{f}"' for f in FLOWS) + "):flow>"

    @app.route(f"/{flow_rule}/<approver_id>/<request_id>", methods=["GET"], endpoint="approval_view")
    def approval_view(flow: str, approver_id: str, request_id: str):
        try:
            view = service.view(FLOWS[flow], request_id, approver_id)
            return jsonify(view.to_dict())
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Failed to load %s %s", flow, request_id)
            return jsonify({"error": "Failed to load request", "retryable": True}), 500

    @app.route(
        f"/{flow_rule}/<approver_id>/<request_id>/<any(approve, reject):verb>",
        methods=["POST"],
        endpoint="approval_action",
    )
    def approval_action(flow: str, approver_id: str, request_id: str, verb: str):
        try:
            outcome = service.act(FLOWS[flow], request_id, approver_id, parse_action(verb), _remarks())
            body = outcome.to_dict()
            body["message"] = f"Request {outcome.transition.action.log_label} Successfully"
            return jsonify(body)
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Failed to process %s on %s %s", verb, flow, request_id)
            return jsonify({"error": "Failed to process action", "retryable": True}), 500
