from __future__ import annotations

from datetime import date

import pytest

from src.work_schedules.work_schedules.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.work_schedules.work_schedules.templates.model import SiteScope


@pytest.fixture
def template_id(engine, super_admin) -> int:
    return engine.template_service.create_template(super_admin, name="Global").template_id


def test_assign_open_ended(engine, super_admin, template_id):
    a = engine.assignment_service.assign(
        super_admin, employee_id=10, template_id=template_id, effective_from="2024-01-01"
    )

    assert a.effective_from == date(2024, 1, 1)
    assert a.effective_to is None
    assert a.covers(date(2099, 12, 31))
    assert engine.audit.actions[-1] == "assignment.create"
    assert engine.audit.records[-1].entity_type == "Assignment"


def test_overlapping_assignments_are_allowed(engine, super_admin, template_id):
    engine.assignment_service.assign(super_admin, employee_id=10, template_id=template_id, effective_from=date(2024, 1, 1))
    engine.assignment_service.assign(
        super_admin,
        employee_id=10,
        template_id=template_id,
        effective_from=date(2024, 1, 10),
        effective_to=date(2024, 1, 20),
    )

    assert len(engine.assignment_service.list_for_employee(10)) == 2


def test_from_after_to_rejected(engine, super_admin, template_id):
    with pytest.raises(ValidationError):
        engine.assignment_service.assign(
            super_admin,
            employee_id=10,
            template_id=template_id,
            effective_from=date(2024, 2, 1),
            effective_to=date(2024, 1, 31),
        )


def test_single_day_assignment_is_valid(engine, super_admin, template_id):
    a = engine.assignment_service.assign(
        super_admin, employee_id=10, template_id=template_id, effective_from="2024-03-05", effective_to="2024-03-05"
    )
    assert a.covers(date(2024, 3, 5))
    assert not a.covers(date(2024, 3, 6))


def test_unknown_employee_or_template(engine, super_admin, template_id):
    with pytest.raises(NotFoundError):
        engine.assignment_service.assign(super_admin, employee_id=999, template_id=template_id, effective_from="2024-01-01")
    with pytest.raises(NotFoundError):
        engine.assignment_service.assign(super_admin, employee_id=10, template_id=999, effective_from="2024-01-01")


@pytest.mark.parametrize("employee_id", [0, -3, "abc", None])
def test_invalid_employee_id(engine, super_admin, template_id, employee_id):
    with pytest.raises(ValidationError):
        engine.assignment_service.assign(super_admin, employee_id=employee_id, template_id=template_id, effective_from="2024-01-01")


def test_malformed_date_rejected(engine, super_admin, template_id):
    with pytest.raises(ValidationError):
        engine.assignment_service.assign(super_admin, employee_id=10, template_id=template_id, effective_from="01/02/2024")


def test_site_admin_cannot_assign_other_site_template(engine, super_admin, site_admin):
    other = engine.template_service.create_template(super_admin, name="Other", scope=SiteScope(2))

    with pytest.raises(AuthorizationError):
        engine.assignment_service.assign(site_admin, employee_id=10, template_id=other.template_id, effective_from="2024-01-01")


def test_site_admin_may_assign_global_template(engine, site_admin, template_id):
    a = engine.assignment_service.assign(site_admin, employee_id=11, template_id=template_id, effective_from="2024-01-01")
    assert a.employee_id == 11


def test_list_effective_filters_and_orders(engine, super_admin, template_id):
    svc = engine.assignment_service
    svc.assign(super_admin, employee_id=10, template_id=template_id, effective_from="2024-03-01")
    svc.assign(super_admin, employee_id=10, template_id=template_id, effective_from="2023-01-01", effective_to="2023-12-31")
    svc.assign(super_admin, employee_id=10, template_id=template_id, effective_from="2024-01-01", effective_to="2024-01-31")
    svc.assign(super_admin, employee_id=11, template_id=template_id, effective_from="2024-01-01")

    items = svc.list_effective(10, "2024-01-15", "2024-03-10")

    assert [a.effective_from for a in items] == [date(2024, 1, 1), date(2024, 3, 1)]


def test_list_effective_inverted_range(engine):
    with pytest.raises(ValidationError):
        engine.assignment_service.list_effective(10, "2024-02-01", "2024-01-01")


@pytest.mark.parametrize("field", ["effective_from", "effective_to"])
def test_numeric_date_rejected(engine, super_admin, template_id, field):
    kwargs = {"effective_from": "2024-01-01", field: 20240101}
    with pytest.raises(ValidationError):
        engine.assignment_service.assign(super_admin, employee_id=10, template_id=template_id, **kwargs)
