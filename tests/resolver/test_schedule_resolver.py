from __future__ import annotations

from datetime import date, time

import pytest

from src.work_schedules.work_schedules.assignments.model import Assignment
from src.work_schedules.work_schedules.core.exceptions import ValidationError
from src.work_schedules.work_schedules.resolver.service import pick_assignment
from src.work_schedules.work_schedules.templates.model import DayRuleDraft, SiteScope


def _template_with_rules(engine, principal, name, drafts, scope=None) -> int:
    t = engine.template_service.create_template(principal, name=name, scope=scope)
    engine.template_service.replace_day_rules(principal, t.template_id, drafts)
    return t.template_id


def _assign(engine, principal, employee_id, template_id, start, end=None):
    engine.assignment_service.assign(
        principal, employee_id=employee_id, template_id=template_id, effective_from=start, effective_to=end
    )


def test_no_assignments_returns_empty(engine):
    assert engine.resolver.resolve_week(10, "2024-01-01", "2024-01-31") == []
    assert engine.resolver.resolve_week(10, "2024-05-05", "2024-05-05") == []


def test_single_monday_rule_resolves_one_day(engine, super_admin):
    tid = _template_with_rules(
        engine, super_admin, "Oficina", [DayRuleDraft(weekday=1, working=True, entry_time=time(8, 0), exit_time=time(17, 0))]
    )
    _assign(engine, super_admin, 10, tid, "2024-01-01")

    items = engine.resolver.resolve_week(10, "2024-01-01", "2024-01-07")

    assert len(items) == 1
    out = items[0].to_dict()
    assert out["date"] == "2024-01-01"
    assert out["entryTime"] == "08:00:00"
    assert out["exitTime"] == "17:00:00"
    assert out["templateName"] == "Oficina"
    assert out["siteName"] is None


def test_earliest_start_wins_on_overlap(engine, super_admin):
    monday = [DayRuleDraft(weekday=1, working=True, entry_time=time(8, 0), exit_time=time(17, 0))]
    late = [DayRuleDraft(weekday=1, working=True, entry_time=time(14, 0), exit_time=time(22, 0))]
    a = _template_with_rules(engine, super_admin, "A", monday)
    b = _template_with_rules(engine, super_admin, "B", late)
    # Created in reverse order so id order does not decide the winner.
    _assign(engine, super_admin, 10, b, "2024-01-10")
    _assign(engine, super_admin, 10, a, "2024-01-01")

    items = engine.resolver.resolve_week(10, "2024-01-15", "2024-01-15")

    assert [i.template_name for i in items] == ["A"]


def test_later_assignment_applies_once_earlier_one_ends(engine, super_admin):
    every_day = lambda entry: [  # noqa: E731
        DayRuleDraft(weekday=d, working=True, entry_time=entry, exit_time=time(18, 0)) for d in range(1, 8)
    ]
    a = _template_with_rules(engine, super_admin, "A", every_day(time(8, 0)))
    b = _template_with_rules(engine, super_admin, "B", every_day(time(10, 0)))
    _assign(engine, super_admin, 10, a, "2024-01-01", "2024-01-03")
    _assign(engine, super_admin, 10, b, "2024-01-02")

    items = engine.resolver.resolve_week(10, "2024-01-01", "2024-01-05")

    assert [(i.date.day, i.template_name) for i in items] == [(1, "A"), (2, "A"), (3, "A"), (4, "B"), (5, "B")]


def test_days_outside_assignments_and_non_working_days_are_skipped(engine, super_admin):
    drafts = [
        DayRuleDraft(weekday=1, working=True, entry_time=time(8, 0), exit_time=time(17, 0)),
        DayRuleDraft(weekday=2, working=False, entry_time=time(8, 0), exit_time=time(17, 0)),
        DayRuleDraft(weekday=3, working=True, entry_time=time(8, 0), exit_time=time(12, 0), tolerance_minutes=10, break_minutes=15),
    ]
    tid = _template_with_rules(engine, super_admin, "Parcial", drafts, scope=SiteScope(1))
    _assign(engine, super_admin, 10, tid, "2024-01-03", "2024-01-10")

    items = engine.resolver.resolve_week(10, "2024-01-01", "2024-01-14")

    # 01-01 Mon is before the assignment; 01-09 Tue is non-working; 01-10 Wed is the last covered day.
    assert [i.date for i in items] == [date(2024, 1, 3), date(2024, 1, 8), date(2024, 1, 10)]
    wednesday = items[0].to_dict()
    assert wednesday["siteName"] == "Bogotá Centro"
    assert wednesday["toleranceMinutes"] == 10
    assert wednesday["breakMinutes"] == 15


def test_output_is_ordered_and_recomputed_per_call(engine, super_admin):
    tid = _template_with_rules(
        engine,
        super_admin,
        "Semana",
        [DayRuleDraft(weekday=d, working=True, entry_time=time(7, 0), exit_time=time(15, 0)) for d in range(1, 6)],
    )
    _assign(engine, super_admin, 10, tid, "2024-01-01")

    first = engine.resolver.resolve_week(10, "2024-01-01", "2024-01-14")
    assert [i.date for i in first] == sorted(i.date for i in first)
    assert len(first) == 10

    engine.template_service.replace_day_rules(
        super_admin, tid, [DayRuleDraft(weekday=1, working=True, entry_time=time(7, 0), exit_time=time(15, 0))]
    )
    assert len(engine.resolver.resolve_week(10, "2024-01-01", "2024-01-14")) == 2


def test_accepts_iso_timestamps(engine, super_admin):
    tid = _template_with_rules(
        engine, super_admin, "Oficina", [DayRuleDraft(weekday=1, working=True, entry_time=time(8, 0), exit_time=time(17, 0))]
    )
    _assign(engine, super_admin, 10, tid, "2024-01-01")

    items = engine.resolver.resolve_week(10, "2024-01-01T00:00:00Z", "2024-01-07T23:59:59.000-05:00")

    assert [i.date for i in items] == [date(2024, 1, 1)]


@pytest.mark.parametrize("start, end", [("not-a-date", "2024-01-07"), ("2024-01-01", "2024-13-01"), ("", "2024-01-01")])
def test_malformed_dates_raise(engine, start, end):
    with pytest.raises(ValidationError):
        engine.resolver.resolve_week(10, start, end)


def test_inverted_range_raises(engine):
    with pytest.raises(ValidationError):
        engine.resolver.resolve_week(10, "2024-01-07", "2024-01-01")


def test_pick_assignment_tie_break_by_id():
    day = date(2024, 1, 5)
    a1 = Assignment(assignment_id=7, employee_id=1, template_id=1, effective_from=date(2024, 1, 1))
    a2 = Assignment(assignment_id=3, employee_id=1, template_id=2, effective_from=date(2024, 1, 1))
    expired = Assignment(assignment_id=1, employee_id=1, template_id=3, effective_from=date(2023, 1, 1), effective_to=date(2023, 12, 31))

    assert pick_assignment([a1, a2, expired], day) is a2
    assert pick_assignment([expired], day) is None


def test_resolved_day_id_is_day_number(engine, super_admin):
    tid = _template_with_rules(
        engine, super_admin, "Oficina", [DayRuleDraft(weekday=1, working=True, entry_time=time(8, 0), exit_time=time(17, 0))]
    )
    _assign(engine, super_admin, 10, tid, "2024-01-01")

    out = engine.resolver.resolve_week(10, "2024-01-01", "2024-01-01")[0].to_dict()

    assert out["id"] == date(2024, 1, 1).toordinal() - 1


def test_range_ending_on_last_representable_date(engine, super_admin):
    tid = _template_with_rules(
        engine,
        super_admin,
        "Siempre",
        [DayRuleDraft(weekday=d, working=True, entry_time=time(8, 0), exit_time=time(17, 0)) for d in range(1, 8)],
    )
    _assign(engine, super_admin, 10, tid, "9999-12-01")

    items = engine.resolver.resolve_week(10, "9999-12-29", "9999-12-31")

    assert [i.date for i in items] == [date(9999, 12, 29), date(9999, 12, 30), date(9999, 12, 31)]


@pytest.mark.parametrize("start, end", [(20240101, "2024-01-07"), ("2024-01-01", 20240107)])
def test_non_string_dates_raise(engine, start, end):
    with pytest.raises(ValidationError):
        engine.resolver.resolve_week(10, start, end)
