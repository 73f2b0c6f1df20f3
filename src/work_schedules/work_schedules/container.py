from __future__ import annotations

from dataclasses import dataclass

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.service import AssignmentService
from .audit.mysql_audit_repository import MySQLAuditSink
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .resolver.service import ScheduleResolver
from .sites.mysql_site_repository import MySQLSiteRepository
from .templates.mysql_template_repository import MySQLTemplateRepository
from .templates.service import TemplateService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    sites_repo: MySQLSiteRepository
    employees_repo: MySQLEmployeeDirectory
    templates_repo: MySQLTemplateRepository
    assignments_repo: MySQLAssignmentRepository
    audit_sink: MySQLAuditSink

    template_service: TemplateService
    assignment_service: AssignmentService
    schedule_resolver: ScheduleResolver


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    sites_repo = MySQLSiteRepository(conn)
    employees_repo = MySQLEmployeeDirectory(conn)
    templates_repo = MySQLTemplateRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    audit_sink = MySQLAuditSink(conn)

    template_service = TemplateService(templates_repo, assignments_repo, sites_repo, audit_sink)
    assignment_service = AssignmentService(assignments_repo, templates_repo, employees_repo, audit_sink)
    schedule_resolver = ScheduleResolver(assignments_repo, templates_repo)

    return Container(
        conn=conn,
        sites_repo=sites_repo,
        employees_repo=employees_repo,
        templates_repo=templates_repo,
        assignments_repo=assignments_repo,
        audit_sink=audit_sink,
        template_service=template_service,
        assignment_service=assignment_service,
        schedule_resolver=schedule_resolver,
    )
