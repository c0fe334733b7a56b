from __future__ import annotations

from dataclasses import dataclass

from .approval.factory import AuthorizationPolicyFactory
from .approval.service import ApprovalService
from .approval.state_machine import ApprovalStateMachine
from .audit.mysql_audit_log_repository import MySQLAuditLogRepository
from .database.connection import DBConfig, DatabaseConnection
from .principals.mysql_principal_repository import MySQLPrincipalRepository
from .principals.resolver import PrincipalResolver
from .requests.mysql_request_repository import MySQLRequestRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    principals_repo: MySQLPrincipalRepository
    requests_repo: MySQLRequestRepository
    audit_repo: MySQLAuditLogRepository

    principal_resolver: PrincipalResolver
    state_machine: ApprovalStateMachine
    approval_service: ApprovalService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    principals_repo = MySQLPrincipalRepository(conn)
    requests_repo = MySQLRequestRepository(conn)
    audit_repo = MySQLAuditLogRepository(conn)

    principal_resolver = PrincipalResolver(principals_repo)
    state_machine = ApprovalStateMachine(AuthorizationPolicyFactory())
    approval_service = ApprovalService(
        requests_repo,
        audit_repo,
        principal_resolver,
        state_machine=state_machine,
    )

    return Container(
        conn=conn,
        principals_repo=principals_repo,
        requests_repo=requests_repo,
        audit_repo=audit_repo,
        principal_resolver=principal_resolver,
        state_machine=state_machine,
        approval_service=approval_service,
    )
