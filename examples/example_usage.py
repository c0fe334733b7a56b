"""Example: approve a leave request through the service layer (no Flask).

Run scripts/init_db.py and scripts/seed_db.py first.
"""

import importlib

from config import get_settings_module

from src.approval_workflow.approval_workflow.common.logger import setup_logger
from src.approval_workflow.approval_workflow.container import build_container
from src.approval_workflow.approval_workflow.core.enums import RequestType

LEAVE_ID = "b3a1e0f2-0000-4000-8000-000000000101"


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logger(level="INFO")
    container = build_container(db_config=settings.DB_CONFIG)
    service = container.approval_service

    print(service.view(RequestType.LEAVE, LEAVE_ID, "EMP001").to_dict())
    outcome = service.approve(RequestType.LEAVE, LEAVE_ID, "Priya Sharma", remarks="ok")
    print(outcome.transition.summary(), "->", outcome.status.value)


if __name__ == "__main__":
    main()
