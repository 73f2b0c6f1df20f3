from __future__ import annotations

from dataclasses import dataclass

import pytest

from src.work_schedules.work_schedules.assignments.service import AssignmentService
from src.work_schedules.work_schedules.core.principal import Principal
from src.work_schedules.work_schedules.resolver.service import ScheduleResolver
from src.work_schedules.work_schedules.sites.model import Site
from src.work_schedules.work_schedules.templates.service import TemplateService

from tests.fakes import InMemoryAssignments, InMemoryEmployees, InMemorySites, InMemoryTemplates, RecordingAudit


@dataclass
class Engine:
    sites: InMemorySites
    employees: InMemoryEmployees
    templates: InMemoryTemplates
    assignments: InMemoryAssignments
    audit: RecordingAudit
    template_service: TemplateService
    assignment_service: AssignmentService
    resolver: ScheduleResolver


@pytest.fixture
def engine() -> Engine:
    sites = InMemorySites({1: Site(site_id=1, name="Bogotá Centro"), 2: Site(site_id=2, name="Medellín")})
    employees = InMemoryEmployees({10, 11})
    templates = InMemoryTemplates(sites)
    assignments = InMemoryAssignments()
    audit = RecordingAudit()
    return Engine(
        sites=sites,
        employees=employees,
        templates=templates,
        assignments=assignments,
        audit=audit,
        template_service=TemplateService(templates, assignments, sites, audit),
        assignment_service=AssignmentService(assignments, templates, employees, audit),
        resolver=ScheduleResolver(assignments, templates),
    )


@pytest.fixture
def super_admin() -> Principal:
    return Principal(user_id=1, is_super_admin=True)


@pytest.fixture
def site_admin() -> Principal:
    return Principal(user_id=2, is_super_admin=False, site_id=1)
