from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from src.approval_workflow.approval_workflow.common.datetime_utils import (
    format_display_date,
    inclusive_day_count,
    parse_datetime,
)
from src.approval_workflow.approval_workflow.common.logger import setup_logger
from src.approval_workflow.approval_workflow.common.validators import parse_action, parse_request_type
from src.approval_workflow.approval_workflow.core.enums import ApprovalAction, RequestType
from src.approval_workflow.approval_workflow.core.exceptions import ValidationError


def test_inclusive_day_count():
    assert inclusive_day_count(date(2026, 11, 2), date(2026, 11, 2)) == 1
    assert inclusive_day_count(date(2026, 11, 2), date(2026, 11, 4)) == 3
    assert inclusive_day_count(None, date(2026, 11, 4)) == 0


def test_format_display_date():
    assert format_display_date(None) == "-"
    assert format_display_date(date(2026, 1, 5)) == "05/01/2026"
    assert format_display_date(datetime(2026, 1, 5, 14, 30)) == "05/01/2026 14:30"


def test_parse_datetime():
    assert parse_datetime(None) is None
    assert parse_datetime("") is None
    assert parse_datetime("2026-01-05T14:30:00").hour == 14
    with pytest.raises(TypeError):
        parse_datetime(12)


def test_parse_action():
    assert parse_action("Approve") == ApprovalAction.APPROVE
    with pytest.raises(ValidationError):
        parse_action("escalate")


def test_parse_request_type():
    assert parse_request_type("Gate Pass") == RequestType.GATE_PASS
    with pytest.raises(ValidationError):
        parse_request_type("Expense")


def test_setup_logger_is_idempotent(tmp_path):
    name = "approval_workflow.tests.logger"
    logger = setup_logger(name, level="debug", log_dir=str(tmp_path))
    again = setup_logger(name, level="info")

    assert logger is again
    assert len(logger.handlers) == 2
    assert logger.level == logging.INFO
    assert (tmp_path / f"{name}.log").exists()

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def test_setup_logger_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logger("approval_workflow.tests.bad", level="LOUD")


def test_module_loggers_reach_package_handlers():
    from src.approval_workflow.approval_workflow.approval import service as approval_service

    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    package_logger = setup_logger(level="INFO")
    collector = _Collect()
    package_logger.addHandler(collector)
    try:
        assert approval_service.logger.name.startswith(package_logger.name + ".")
        approval_service.logger.info("Leave leave-0001: Pending HOD -> Pending HR")
        assert [r.getMessage() for r in records] == ["Leave leave-0001: Pending HOD -> Pending HR"]
    finally:
        for h in list(package_logger.handlers):
            package_logger.removeHandler(h)
        package_logger.setLevel(logging.NOTSET)
